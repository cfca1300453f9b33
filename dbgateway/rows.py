"""Result-row rendering — every column value becomes a string (or None)."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

ResultRow = dict[str, str | None]


def _render_time(value: timedelta) -> str:
    """MySQL TIME text: ``[-]HH:MM:SS[.ffffff]``, hours not wrapped at 24."""
    sign = "-" if value < timedelta(0) else ""
    value = abs(value)
    minutes, seconds = divmod(value.days * 86400 + value.seconds, 60)
    hours, minutes = divmod(minutes, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"
    if value.microseconds:
        text += f".{value.microseconds:06d}"
    return text


def render_value(value: Any) -> str | None:
    """Render a driver value the way it reads back as text.

    SQL NULL stays ``None`` so it remains distinguishable from ``""``.
    """
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, timedelta):
        return _render_time(value)
    return str(value)


def rows_from_cursor(cursor: Any) -> list[ResultRow]:
    """Fetch all rows of an executed DB-API cursor as name → text mappings."""
    if not cursor.description:
        return []
    columns = [d[0] for d in cursor.description]
    return [
        {name: render_value(value) for name, value in zip(columns, row)}
        for row in cursor.fetchall()
    ]
