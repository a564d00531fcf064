"""Process-wide shared logger: daily file + console, every level."""
from __future__ import annotations

import logging
import os
import sys
import threading
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from sharedlog.config import DIR_MODE, load_settings, log_filename, resolve_log_dir
from sharedlog.errors import LogSetupError, PanicError
from sharedlog.formatter import TextFormatter
from sharedlog.hook import OutputHook
from sharedlog.models import DEBUG, ERROR, FATAL, INFO, PANIC, TRACE, WARNING
from sharedlog.sinks import ConsoleSink, FileSink, Sink

# SharedLogger method -> _log -> Logger.log
_STACKLEVEL = 3


def hard_exit(code: int) -> None:
    """Flush the standard streams, then leave without unwinding any thread."""
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError):
            pass
    os._exit(code)


class SharedLogger:
    """Handle over one configured logger plus the fields attached to it.

    Handles are cheap and immutable: `with_field` returns a new handle that
    shares the logger but carries one more field.
    """

    def __init__(
        self,
        logger: logging.Logger,
        fields: Mapping[str, Any] | None = None,
        exit_func: Callable[[int], Any] = hard_exit,
    ) -> None:
        self._logger = logger
        self._fields: dict[str, Any] = dict(fields or {})
        self._exit = exit_func

    @property
    def fields(self) -> Mapping[str, Any]:
        return MappingProxyType(self._fields)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def with_field(self, key: str, value: Any) -> SharedLogger:
        return SharedLogger(self._logger, {**self._fields, key: value}, self._exit)

    def with_fields(self, fields: Mapping[str, Any]) -> SharedLogger:
        return SharedLogger(self._logger, {**self._fields, **fields}, self._exit)

    def with_error(self, exc: BaseException) -> SharedLogger:
        return self.with_field("error", exc)

    def _log(self, level: int, msg: str, args: tuple, fields: Mapping[str, Any] | None) -> dict[str, Any]:
        merged = {**self._fields, **(fields or {})}
        self._logger.log(level, msg, *args, extra={"fields": merged}, stacklevel=_STACKLEVEL)
        return merged

    def log(self, level: int, msg: str, *args: Any, fields: Mapping[str, Any] | None = None) -> None:
        self._log(level, msg, args, fields)

    def trace(self, msg: str, *args: Any, fields: Mapping[str, Any] | None = None) -> None:
        self._log(TRACE, msg, args, fields)

    def debug(self, msg: str, *args: Any, fields: Mapping[str, Any] | None = None) -> None:
        self._log(DEBUG, msg, args, fields)

    def info(self, msg: str, *args: Any, fields: Mapping[str, Any] | None = None) -> None:
        self._log(INFO, msg, args, fields)

    def warning(self, msg: str, *args: Any, fields: Mapping[str, Any] | None = None) -> None:
        self._log(WARNING, msg, args, fields)

    warn = warning

    def error(self, msg: str, *args: Any, fields: Mapping[str, Any] | None = None) -> None:
        self._log(ERROR, msg, args, fields)

    def fatal(self, msg: str, *args: Any, fields: Mapping[str, Any] | None = None) -> None:
        """Log, then end the process with status 1, whichever thread calls it."""
        self._log(FATAL, msg, args, fields)
        for handler in list(self._logger.handlers):
            handler.flush()
            handler.close()
        self._exit(1)

    def panic(self, msg: str, *args: Any, fields: Mapping[str, Any] | None = None) -> None:
        """Log, then raise PanicError."""
        merged = self._log(PANIC, msg, args, fields)
        raise PanicError(msg % args if args else msg, merged)

    def __repr__(self) -> str:
        return f"SharedLogger({self._logger.name!r}, fields={self._fields!r})"


class LoggingFacility:
    """Opens today's log file and wires the fan-out hook to a fresh logger.

    `sinks` replaces the console sink; the day's file is always first.
    `clock` picks the date used for the file name. `exit_func` ends the
    process after a fatal entry.
    """

    def __init__(
        self,
        base_dir: str | Path | None = None,
        *,
        sinks: Iterable[Sink] | None = None,
        clock: Callable[[], datetime] = datetime.now,
        settings: Mapping[str, Any] | None = None,
        exit_func: Callable[[int], Any] = hard_exit,
    ) -> None:
        self.settings = dict(settings) if settings is not None else load_settings()
        self.log_dir = resolve_log_dir(base_dir, self.settings["log_dir_name"])

        try:
            self.log_dir.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise LogSetupError(f"Can't create dir '{self.log_dir}': {exc}") from exc

        self.log_path = self.log_dir / log_filename(clock().date(), self.settings["date_format"])
        try:
            self.file_sink = FileSink(self.log_path)
        except OSError as exc:
            raise LogSetupError(f"Failed to open file '{self.log_path}': {exc}") from exc

        extra = list(sinks) if sinks is not None else [ConsoleSink()]
        self.hook = OutputHook([self.file_sink, *extra])
        self.hook.setFormatter(TextFormatter(quote_empty_fields=self.settings["quote_empty_fields"]))

        # Not registered with logging.getLogger: no parents, no root handlers.
        # The hook is the only output.
        underlying = logging.Logger(f"sharedlog.{self.log_path.stem}", level=TRACE)
        underlying.propagate = False
        underlying.addHandler(self.hook)
        self.logger = SharedLogger(underlying, exit_func=exit_func)

    def close(self) -> None:
        self.logger.logger.removeHandler(self.hook)
        self.hook.close()


_shared: LoggingFacility | None = None
_shared_lock = threading.Lock()
_shared_error: LogSetupError | None = None


def get_facility() -> LoggingFacility:
    """The process-wide facility, built on first call.

    A setup failure is remembered and raised again on every later call.
    """
    global _shared, _shared_error
    if _shared is None:
        with _shared_lock:
            if _shared_error is not None:
                raise _shared_error
            if _shared is None:
                try:
                    _shared = LoggingFacility()
                except LogSetupError as exc:
                    _shared_error = exc
                    raise
    return _shared


def get_shared_logger() -> SharedLogger:
    return get_facility().logger
