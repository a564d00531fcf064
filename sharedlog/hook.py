"""Fan-out handler: one rendered line, written to every sink in order."""
from __future__ import annotations

import logging
from typing import Iterable

from sharedlog.errors import SinkWriteError
from sharedlog.models import ALL_LEVELS
from sharedlog.sinks import Sink


class OutputHook(logging.Handler):
    """Fires for every level in `levels`.

    `logging.Handler.handle` holds the handler lock around `emit`, so a line
    is formatted and written to all sinks before the next entry starts.
    A failing sink stops the fan-out for that entry; the error goes through
    `handleError` and the log call returns normally.
    """

    def __init__(self, sinks: Iterable[Sink], levels: Iterable[int] = ALL_LEVELS) -> None:
        super().__init__(level=logging.NOTSET)
        self.sinks: list[Sink] = list(sinks)
        self.levels: frozenset[int] = frozenset(levels)

    def fire(self, record: logging.LogRecord) -> None:
        line = self.format(record)
        for sink in self.sinks:
            try:
                sink.write(line)
            except (OSError, ValueError) as exc:
                raise SinkWriteError(sink, exc) from exc

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno not in self.levels:
            return
        try:
            self.fire(record)
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        self.acquire()
        try:
            for sink in self.sinks:
                sink.close()
        finally:
            self.release()
        super().close()
