from __future__ import annotations

import os
from typing import Any, Dict

from wsshared.settings import load_settings

DEFAULT_SERVER_CONFIG: Dict[str, Any] = {
    "host": "0.0.0.0",
    "port": 3000,
    "log_level": "INFO",
    "stats_interval": 1.0,
    "max_request_head": 64 * 1024,
    "read_chunk_size": 4096,
}

SERVER_CONFIG = DEFAULT_SERVER_CONFIG.copy()


def load_server_config(env_path: str = ".env") -> Dict[str, Any]:
    """Overlay SERVER_* env vars on top of the shared WS_* settings."""
    settings = load_settings(env_path)
    SERVER_CONFIG["host"] = os.getenv("SERVER_HOST", settings.server_host)
    SERVER_CONFIG["port"] = int(os.getenv("SERVER_PORT", settings.server_port))
    SERVER_CONFIG["log_level"] = os.getenv("SERVER_LOG_LEVEL", settings.log_level)
    SERVER_CONFIG["stats_interval"] = float(
        os.getenv("SERVER_STATS_INTERVAL", DEFAULT_SERVER_CONFIG["stats_interval"])
    )
    SERVER_CONFIG["max_request_head"] = int(
        os.getenv("SERVER_MAX_REQUEST_HEAD", DEFAULT_SERVER_CONFIG["max_request_head"])
    )
    SERVER_CONFIG["read_chunk_size"] = int(
        os.getenv("SERVER_READ_CHUNK_SIZE", DEFAULT_SERVER_CONFIG["read_chunk_size"])
    )
    return SERVER_CONFIG


__all__ = ["DEFAULT_SERVER_CONFIG", "SERVER_CONFIG", "load_server_config"]
