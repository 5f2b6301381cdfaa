"""Basic project scaffolding tests."""

import importlib


def test_package_importable() -> None:
    """Verify the top-level package is importable."""
    import naval  # noqa: F401  (import used to ensure availability)

    assert naval is not None


def test_submodules_exist() -> None:
    modules = [
        "naval.engine.errors",
        "naval.engine.vessel",
        "naval.engine.grid",
        "naval.engine.fleet",
        "naval.engine.match",
        "naval.combatants",
        "naval.telemetry",
        "naval.config",
        "naval.cli",
    ]

    for module in modules:
        assert importlib.import_module(module) is not None
