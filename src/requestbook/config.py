"""Application settings and configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "REQUESTBOOK_"


@dataclass
class Settings:
    """Runtime settings, read from the environment (and a .env file if present)."""

    timeout: float = 20.0
    log_level: str = "INFO"
    export_dir: str = "exports"
    default_content_type: str = "application/json"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            timeout=_read_float(f"{ENV_PREFIX}TIMEOUT", 20.0),
            log_level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO"),
            export_dir=os.getenv(f"{ENV_PREFIX}EXPORT_DIR", "exports"),
            default_content_type=os.getenv(
                f"{ENV_PREFIX}DEFAULT_CONTENT_TYPE", "application/json"
            ),
        )


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


_settings: Settings | None = None


def load_env_file(path: str | Path | None = None) -> bool:
    env_path = Path(path) if path is not None else Path.cwd() / ".env"
    if not env_path.exists():
        return False
    return load_dotenv(env_path)


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        load_env_file()
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
