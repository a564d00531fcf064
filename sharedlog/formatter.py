"""Render log records as a single `key=value` text line."""
from __future__ import annotations

import json
import logging
import os
import re
from datetime import datetime
from typing import Any

from sharedlog.models import LogEntry

FIELD_TIME = "time"
FIELD_LEVEL = "level"
FIELD_MSG = "msg"
FIELD_FUNC = "func"
FIELD_FILE = "file"
FIXED_KEYS = (FIELD_TIME, FIELD_LEVEL, FIELD_MSG, FIELD_FUNC, FIELD_FILE)

_BARE_VALUE = re.compile(r"[A-Za-z0-9\-._/@^+]+")


def needs_quoting(text: str, quote_empty: bool = False) -> bool:
    if not text:
        return quote_empty
    return _BARE_VALUE.fullmatch(text) is None


def rfc3339(ts: datetime) -> str:
    """ISO-8601 to the second; UTC is written as `Z`."""
    text = ts.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        return text[:-6] + "Z"
    return text


def _prefix_clashes(fields: dict[str, Any]) -> dict[str, Any]:
    """Move user fields named like a fixed key to `fields.<name>`."""
    out = dict(fields)
    for key in FIXED_KEYS:
        if key in out:
            out["fields." + key] = out.pop(key)
    return out


class TextFormatter(logging.Formatter):
    """time, level, msg, func, file, then the record's fields sorted by key."""

    def __init__(self, quote_empty_fields: bool = False) -> None:
        super().__init__()
        self.quote_empty_fields = quote_empty_fields

    def to_entry(self, record: logging.LogRecord) -> LogEntry:
        return LogEntry(
            time=datetime.fromtimestamp(record.created).astimezone(),
            level=record.levelno,
            message=record.getMessage(),
            function=f"{record.module}.{record.funcName}()",
            file=os.path.basename(record.pathname),
            line=record.lineno,
            fields=dict(getattr(record, "fields", None) or {}),
        )

    def format(self, record: logging.LogRecord) -> str:
        return self.render(self.to_entry(record))

    def render(self, entry: LogEntry) -> str:
        pairs: list[tuple[str, Any]] = [
            (FIELD_TIME, rfc3339(entry.time)),
            (FIELD_LEVEL, entry.level_name),
        ]
        if entry.message:
            pairs.append((FIELD_MSG, entry.message))
        if entry.function:
            pairs.append((FIELD_FUNC, entry.function))
        if entry.file:
            pairs.append((FIELD_FILE, f"{entry.file}:{entry.line}"))

        fields = _prefix_clashes(entry.fields)
        pairs.extend((key, fields[key]) for key in sorted(fields))

        return " ".join(f"{k}={self._value(v)}" for k, v in pairs) + "\n"

    def _value(self, value: Any) -> str:
        text = value if isinstance(value, str) else str(value)
        if needs_quoting(text, self.quote_empty_fields):
            return json.dumps(text, ensure_ascii=False)
        return text
