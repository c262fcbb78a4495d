"""
Configuration - Settings read from environment variables.

    MARSROVER_ENV                 development | production (default: development)
    MARSROVER_LOG_LEVEL           logging level name (default: INFO)
    MARSROVER_ROVER_NAME_PREFIX   prefix for parsed rover names (default: ROVER_)
    ALLOWED_ORIGINS               comma-separated CORS origins (default: *)
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field

from .services.context import ROVER_NAME_PREFIX


@dataclass(frozen=True)
class Settings:
    env: str = "development"
    log_level: str = "INFO"
    rover_name_prefix: str = ROVER_NAME_PREFIX
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            env=os.getenv("MARSROVER_ENV", "development"),
            log_level=os.getenv("MARSROVER_LOG_LEVEL", "INFO").upper(),
            rover_name_prefix=os.getenv("MARSROVER_ROVER_NAME_PREFIX", ROVER_NAME_PREFIX),
            allowed_origins=[
                origin.strip()
                for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
                if origin.strip()
            ],
        )


def configure_logging(settings: Settings) -> None:
    """Set up root logging for CLI and server entry points."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
