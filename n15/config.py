"""
Server configuration.

Values come from (lowest to highest priority):
1. Defaults below
2. N15_* environment variables
3. Command-line flags
"""

from __future__ import annotations
import logging
import os
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .session.game_loop import BANNER


ENV_PREFIX = "N15_"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ServerConfig(BaseModel):
    """Settings for the game server and the status API."""
    host: str = Field("127.0.0.1", description="Address the game server listens on")
    port: int = Field(10015, ge=0, le=65535, description="Game server TCP port")
    policy: Literal["heuristic", "random"] = Field(
        "heuristic", description="How the machine picks its moves"
    )
    seed: Optional[int] = Field(None, description="Seed for reproducible games")
    banner: str = Field(BANNER, description="Version line sent on connect")
    log_level: str = Field("INFO", description="Root log level")

    api_enabled: bool = Field(False, description="Serve the HTTP status API")
    api_host: str = Field("127.0.0.1", description="Status API address")
    api_port: int = Field(8015, ge=0, le=65535, description="Status API port")

    model_config = {"extra": "forbid"}

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {value!r}")
        return value

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None, **overrides) -> ServerConfig:
        """
        Build a config from N15_* environment variables.

        Keyword overrides win over the environment; None values are ignored.
        """
        environ = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in environ:
                values[name] = environ[key]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(values)


def configure_logging(level: str = "INFO"):
    """Send all log records to stderr in one plain format."""
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
