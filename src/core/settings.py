from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from .constraint import DEFAULT_CONFIG_PATH, ENV_PREFIX


@dataclass(frozen=True, slots=True)
class Settings:
    """Application runtime settings sourced from environment variables."""

    config_path: Path = DEFAULT_CONFIG_PATH
    port: int | None = None
    log_file: Path | None = None
    log_level: str | None = None


def _parse_port(value: str | None) -> int | None:
    if value is None:
        return None
    normalized = value.strip()
    if not normalized.isdigit():
        return None
    port = int(normalized)
    if not 0 < port < 65536:
        return None
    return port


def _read_settings() -> Settings:
    config_env = os.getenv(f"{ENV_PREFIX}CONFIG_PATH")
    log_file_env = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    log_level_env = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
    config_path = Path(config_env) if config_env else DEFAULT_CONFIG_PATH
    return Settings(
        config_path=config_path,
        port=_parse_port(os.getenv("PORT")),
        log_file=Path(log_file_env) if log_file_env else None,
        log_level=log_level_env.strip().upper() if log_level_env else None,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return _read_settings()


__all__ = ["Settings", "get_settings"]
