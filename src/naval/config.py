"""Match settings, overridable through ``NAVAL_*`` environment variables."""

from __future__ import annotations

import os
from typing import Any, Dict

from pydantic import BaseModel, Field

_ENV_FIELDS = {
    "board_size": "NAVAL_BOARD_SIZE",
    "seed": "NAVAL_SEED",
    "player_name": "NAVAL_PLAYER_NAME",
    "computer_name": "NAVAL_COMPUTER_NAME",
    "log_level": "NAVAL_LOG_LEVEL",
}


class MatchSettings(BaseModel):
    """Parameters for a single human-versus-computer match."""

    board_size: int = Field(default=10, ge=5)
    seed: int | None = None
    player_name: str = "Player 1"
    computer_name: str = "Computer"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, **overrides: Any) -> "MatchSettings":
        """Read settings from the environment; explicit overrides win.

        ``None`` overrides are ignored so unset CLI flags fall through to the
        environment.
        """
        data: Dict[str, Any] = {}
        for field_name, env_name in _ENV_FIELDS.items():
            value = os.getenv(env_name)
            if value is not None and value.strip():
                data[field_name] = value.strip()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)
