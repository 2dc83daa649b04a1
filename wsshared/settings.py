from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass
class Settings:
    """Shared baseline settings (the server config builds on top)."""

    server_host: str = "0.0.0.0"
    server_port: int = 3000
    log_level: str = "INFO"


SETTINGS = Settings()


def load_settings(env_path: str = ".env") -> Settings:
    """Load shared settings from env/.env."""
    if Path(env_path).exists():
        load_dotenv(env_path)
    SETTINGS.server_host = os.getenv("WS_SERVER_HOST", SETTINGS.server_host)
    SETTINGS.server_port = int(os.getenv("WS_SERVER_PORT", SETTINGS.server_port))
    SETTINGS.log_level = os.getenv("WS_LOG_LEVEL", SETTINGS.log_level)
    return SETTINGS


__all__ = ["Settings", "SETTINGS", "load_settings"]
