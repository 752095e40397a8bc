"""Settings for todo-mastery, read from environment variables.

- TODO_DB_PATH: path of the JSON key-value store (default: todos.json)
- TODO_LOG_LEVEL: console log level name (default: WARNING)
- TODO_LOG_FILE: optional file that receives full debug logs
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "TODO"
DEFAULT_DB_PATH = "todos.json"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env_path(name: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_level(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    """Resolved application settings.

    Attributes:
        db_path: File backing the key-value store
        log_level: Level for the console log handler
        log_file: Optional debug log file
    """

    db_path: Path
    log_level: int = logging.WARNING
    log_file: Optional[Path] = None


def load_settings() -> Settings:
    """Build Settings from the current environment."""
    return Settings(
        db_path=_env_path(_k("DB_PATH"), Path(DEFAULT_DB_PATH)),
        log_level=_env_level(_k("LOG_LEVEL"), logging.WARNING),
        log_file=_env_path(_k("LOG_FILE"), None),
    )
