from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from task_manager.core.paths import env_file_candidates

DEFAULT_API_URL = "http://138.197.15.79/task"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_LOG_LEVEL = "WARNING"

_TRUTHY = {"1", "true", "yes", "y", "on"}


def load_local_env(cwd: Optional[Path] = None) -> None:
    """Load .env.local if present.

    Real environment variables always win over file values.
    """

    for env_path in env_file_candidates(cwd):
        if env_path.exists():
            load_dotenv(env_path, override=False)


def get_env_var(name: str, required: bool = True) -> Optional[str]:
    value = os.getenv(name)
    if required and not value:
        raise SystemExit(f"Missing required environment variable: {name}")
    return value


def _env_float(name: str, default: float) -> float:
    raw = get_env_var(name, required=False)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _env_bool(name: str, default: bool) -> bool:
    raw = get_env_var(name, required=False)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_level(name: str, default: str) -> int:
    raw = (get_env_var(name, required=False) or default).strip().upper()
    level = logging.getLevelName(raw)
    if isinstance(level, int):
        return level
    return logging.getLevelName(default)


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    log_level: int = logging.WARNING
    log_dir: Optional[Path] = None
    strict_exit: bool = False


def load_settings() -> Settings:
    api_url = get_env_var("TASK_MANAGER_API_URL", required=False) or DEFAULT_API_URL
    log_dir = get_env_var("TASK_MANAGER_LOG_DIR", required=False)

    return Settings(
        api_url=api_url.rstrip("/"),
        timeout=_env_float("TASK_MANAGER_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
        log_level=_env_level("TASK_MANAGER_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        log_dir=Path(log_dir).expanduser() if log_dir else None,
        strict_exit=_env_bool("TASK_MANAGER_STRICT_EXIT", False),
    )
