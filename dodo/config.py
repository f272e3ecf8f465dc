"""Settings loaded from environment variables (+ optional .env)."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "DODO"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env_str(name: str) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip()


def _env_path(name: str) -> Optional[Path]:
    raw = _env_str(name)
    return Path(raw).expanduser() if raw else None


def _env_log_level(name: str, default: int) -> int:
    raw = _env_str(name)
    if raw is None:
        return default
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    # None means "resolve the platform default" (see storage.default_data_dir)
    data_dir: Optional[Path]
    # None means click's own $VISUAL / $EDITOR lookup
    editor: Optional[str]
    log_level: int

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            data_dir=_env_path(_k("DATA_DIR")),
            editor=_env_str(_k("EDITOR")),
            log_level=_env_log_level(_k("LOG_LEVEL"), logging.WARNING),
        )
