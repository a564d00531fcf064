"""Destinations that accept rendered log lines."""
from __future__ import annotations

import os
import sys
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO

from sharedlog.config import FILE_MODE


class Sink(ABC):
    @abstractmethod
    def write(self, text: str) -> None:
        pass

    def close(self) -> None:
        pass


class FileSink(Sink):
    """Append-only text file, created with FILE_MODE if absent."""

    def __init__(self, path: str | Path, mode: int = FILE_MODE) -> None:
        self.path = Path(path)
        fd = os.open(self.path, os.O_CREAT | os.O_WRONLY | os.O_APPEND, mode)
        self._fh: IO[str] = os.fdopen(fd, "a", encoding="utf-8")

    def write(self, text: str) -> None:
        self._fh.write(text)
        self._fh.flush()

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.close()

    def __repr__(self) -> str:
        return f"FileSink({str(self.path)!r})"


class ConsoleSink(Sink):
    """Standard output, looked up on every write so redirections apply."""

    def write(self, text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    def __repr__(self) -> str:
        return "ConsoleSink()"


class MemorySink(Sink):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._lines: list[str] = []

    def write(self, text: str) -> None:
        with self._lock:
            self._lines.append(text)

    @property
    def lines(self) -> list[str]:
        with self._lock:
            return list(self._lines)

    def getvalue(self) -> str:
        return "".join(self.lines)

    def __repr__(self) -> str:
        return f"MemorySink({len(self._lines)} lines)"
