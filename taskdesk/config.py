"""TaskDesk runtime configuration.

Env-first with safe local defaults, so a plain ``streamlit run app.py`` works
without any setup.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def env_str(name: str, default: str, *, strip: bool = True) -> str:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip() if strip else value


def env_optional_str(name: str, default: Optional[str] = None, *, strip: bool = True) -> Optional[str]:
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip() if strip else value
    return value or default


def env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in {"1", "true", "yes", "y", "on"}:
        return True
    if raw in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


PRIORITY_VALUES = ("high", "medium", "low")


@dataclass(frozen=True)
class TaskDeskConfig:
    """Configuration for the TaskDesk app.

    Environment variables:
    - TASKDESK_DATABASE_URL: TaskDesk-specific DB URL (preferred)
    - DATABASE_URL: shared DB URL
    - If neither is set, defaults to local SQLite at data/taskdesk.db
    - TASKDESK_LOG_DIR: directory for taskdesk.log (default: .local/taskdesk)
    - TASKDESK_LOG_LEVEL: console log level name (default: INFO)
    - TASKDESK_LOG_TO_FILE: also write the full log to a file (default: true)
    - TASKDESK_DEFAULT_PRIORITY: priority of the first batch row (default: medium)
    - TASKDESK_SEED_SAMPLE: create a sample project on first run (default: false)
    """

    database_url: str
    log_dir: str
    log_level: str
    log_to_file: bool
    default_priority: str
    seed_sample: bool

    @classmethod
    def from_env(cls) -> "TaskDeskConfig":
        db_url = env_optional_str("TASKDESK_DATABASE_URL") or env_optional_str("DATABASE_URL")
        if not db_url:
            data_dir = _repo_root() / "data"
            data_dir.mkdir(parents=True, exist_ok=True)
            db_url = f"sqlite:///{(data_dir / 'taskdesk.db').as_posix()}"

        priority = env_str("TASKDESK_DEFAULT_PRIORITY", "medium").lower()
        if priority not in PRIORITY_VALUES:
            priority = "medium"

        return cls(
            database_url=db_url,
            log_dir=env_str("TASKDESK_LOG_DIR", ".local/taskdesk"),
            log_level=env_str("TASKDESK_LOG_LEVEL", "INFO").upper(),
            log_to_file=env_bool("TASKDESK_LOG_TO_FILE", True),
            default_priority=priority,
            seed_sample=env_bool("TASKDESK_SEED_SAMPLE", False),
        )


_config: Optional[TaskDeskConfig] = None


def get_config() -> TaskDeskConfig:
    """Get the TaskDesk configuration (cached)."""
    global _config
    if _config is None:
        _config = TaskDeskConfig.from_env()
    return _config


def reset_config() -> None:
    global _config
    _config = None
