"""Telemetry configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Dict

from pydantic import BaseModel, Field


def _env_flag(*names: str) -> bool | None:
    for name in names:
        value = os.getenv(name)
        if value is not None:
            return value.strip().lower() in {"1", "true", "yes", "on"}
    return None


def _signal_endpoint(base: str | None, signal: str) -> str | None:
    if not base:
        return None
    return f"{base.rstrip('/')}/v1/{signal}"


class TelemetryConfig(BaseModel):
    """Runtime configuration for logging and the OTLP exporters."""

    enable_tracing: bool = False
    enable_metrics: bool = False
    enable_logging: bool = False
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    otlp_traces_endpoint: str | None = None
    otlp_metrics_endpoint: str | None = None
    otlp_logs_endpoint: str | None = None
    service_name: str = "naval"
    service_namespace: str = "game"
    resource_attributes: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_env(cls, **overrides: Any) -> "TelemetryConfig":
        """Build config from ``NAVAL_*`` and standard ``OTEL_*`` variables."""

        data: Dict[str, Any] = cls().model_dump()

        flags = {
            "enable_tracing": ("NAVAL_ENABLE_TRACING", "OTEL_TRACES_ENABLED"),
            "enable_metrics": ("NAVAL_ENABLE_METRICS", "OTEL_METRICS_ENABLED"),
            "enable_logging": ("NAVAL_ENABLE_LOGGING", "OTEL_LOGS_ENABLED"),
        }
        for field_name, env_names in flags.items():
            flag = _env_flag(*env_names)
            if flag is not None:
                data[field_name] = flag

        log_level = os.getenv("NAVAL_LOG_LEVEL")
        if log_level:
            data["log_level"] = log_level.strip().upper()

        base_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
        for signal in ("traces", "metrics", "logs"):
            specific = os.getenv(f"OTEL_EXPORTER_OTLP_{signal.upper()}_ENDPOINT")
            endpoint = specific or _signal_endpoint(base_endpoint, signal)
            if endpoint:
                data[f"otlp_{signal}_endpoint"] = endpoint

        service_name = os.getenv("OTEL_SERVICE_NAME")
        if service_name:
            data["service_name"] = service_name
        service_namespace = os.getenv("OTEL_SERVICE_NAMESPACE")
        if service_namespace:
            data["service_namespace"] = service_namespace

        resource_env = os.getenv("OTEL_RESOURCE_ATTRIBUTES")
        if resource_env:
            attrs = dict(data["resource_attributes"])
            for part in resource_env.split(","):
                if "=" not in part:
                    continue
                key, value = part.split("=", 1)
                attrs[key.strip()] = value.strip()
            data["resource_attributes"] = attrs

        # A configured endpoint turns its exporter on.
        for signal, flag_name in (
            ("traces", "enable_tracing"),
            ("metrics", "enable_metrics"),
            ("logs", "enable_logging"),
        ):
            if data.get(f"otlp_{signal}_endpoint"):
                data[flag_name] = True

        data.update(overrides)
        return cls(**data)

    def resource_dict(self) -> dict[str, str]:
        attributes = {
            "service.name": self.service_name,
            "service.namespace": self.service_namespace,
        }
        attributes.update(self.resource_attributes)
        return attributes


@lru_cache(maxsize=1)
def load_telemetry_config() -> TelemetryConfig:
    """Load and cache telemetry config from the environment."""

    return TelemetryConfig.from_env()


def init_telemetry(config: TelemetryConfig | None = None) -> TelemetryConfig:
    """Configure logging and whichever exporters the config enables."""

    from .logger import init_logging
    from .metrics import init_metrics
    from .tracer import init_tracing

    resolved = config or load_telemetry_config()

    init_logging(resolved)
    if resolved.enable_tracing:
        init_tracing(resolved)
    if resolved.enable_metrics:
        init_metrics(resolved)
    return resolved
