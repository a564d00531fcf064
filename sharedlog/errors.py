"""Exceptions raised by the shared logger."""
from __future__ import annotations

from typing import Any


class LogSetupError(RuntimeError):
    """The log directory or file could not be prepared. Not recoverable."""


class SinkWriteError(OSError):
    def __init__(self, sink: Any, cause: BaseException) -> None:
        super().__init__(f"Failed to write log entry to {sink!r}: {cause}")
        self.sink = sink
        self.cause = cause


class PanicError(RuntimeError):
    """Raised after a panic-level entry has been written."""

    def __init__(self, message: str, fields: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.fields = dict(fields or {})
