"""Environment and settings for the shared logger."""
from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from sharedlog.errors import LogSetupError

load_dotenv()

LOG_DIR: str = "logs"
CWD_KEY: str = "cwd"
CONFIG_KEY: str = "SHAREDLOG_CONFIG"

DIR_MODE: int = 0o755
FILE_MODE: int = 0o644

DEFAULT_SETTINGS: dict[str, Any] = {
    "log_dir_name": LOG_DIR,
    "date_format": "%Y-%m-%d",
    "quote_empty_fields": False,
}


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def load_settings(path: str | Path | None = None) -> dict[str, Any]:
    """Defaults merged with the YAML file at `path` (or $SHAREDLOG_CONFIG)."""
    settings = dict(DEFAULT_SETTINGS)
    if path is None:
        path = get_env(CONFIG_KEY) or None
    if path is None:
        return settings

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise LogSetupError(f"Can't read settings '{path}': {exc}") from exc

    if not isinstance(data, dict):
        raise LogSetupError(f"Settings '{path}' must be a mapping, got {type(data).__name__}")

    unknown = set(data) - set(DEFAULT_SETTINGS)
    if unknown:
        raise LogSetupError(f"Unknown settings in '{path}': {', '.join(sorted(unknown))}")

    settings.update(data)
    return settings


def resolve_log_dir(base: str | Path | None = None, dir_name: str = LOG_DIR) -> Path:
    """`<base>/logs`, where base defaults to $cwd and then to the working directory."""
    if base is None:
        base = os.environ.get(CWD_KEY)
    if base is None:
        base = "."
    return Path(base) / dir_name


def log_filename(day: date, date_format: str = "%Y-%m-%d") -> str:
    return f"{day.strftime(date_format)}.log"
