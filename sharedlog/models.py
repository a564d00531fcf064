"""Severity levels and the log entry model."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

TRACE = 5
DEBUG = logging.DEBUG
INFO = logging.INFO
WARNING = logging.WARNING
ERROR = logging.ERROR
FATAL = logging.CRITICAL
PANIC = 60

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(PANIC, "PANIC")

LEVEL_NAMES: dict[int, str] = {
    TRACE: "trace",
    DEBUG: "debug",
    INFO: "info",
    WARNING: "warning",
    ERROR: "error",
    FATAL: "fatal",
    PANIC: "panic",
}

ALL_LEVELS: frozenset[int] = frozenset(LEVEL_NAMES)


def level_name(levelno: int) -> str:
    """Lower-case name for a level; unregistered numbers fall back to stdlib's name."""
    if levelno in LEVEL_NAMES:
        return LEVEL_NAMES[levelno]
    return logging.getLevelName(levelno).lower()


@dataclass(frozen=True)
class LogEntry:
    time: datetime
    level: int
    message: str
    function: str
    file: str
    line: int
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def level_name(self) -> str:
        return level_name(self.level)
