"""go test -json record decoding.

One JSON object per line. Field names match case-insensitively, unknown
fields are ignored and ``null`` leaves a field at its zero value, mirroring
how the Go JSON decoder fills ``test2json`` events.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Iterator
from datetime import datetime, timezone
from typing import Any

from gotestreport.core.errors import DecodeError
from gotestreport.report.models import TestEvent

_STRING_FIELDS = ("action", "test", "package", "output")

# RFC 3339 with up to nanosecond precision; Python keeps microseconds.
_FRACTION = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp as written by go test -json."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(r"\1", text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _fold_keys(record: dict[str, Any]) -> dict[str, Any]:
    folded: dict[str, Any] = {}
    for key, value in record.items():
        folded[key.lower()] = value
    return folded


def decode_event(line: str | bytes, line_number: int) -> TestEvent:
    """Decode one line into a TestEvent.

    Raises:
        DecodeError: Invalid JSON, a non-object record, or a field of the wrong type.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError.invalid_record(line_number, f"invalid UTF-8: {e}") from e
    line = line.rstrip("\r\n")

    try:
        record = json.loads(line)
    except json.JSONDecodeError as e:
        raise DecodeError.invalid_record(line_number, e.msg) from e

    if not isinstance(record, dict):
        raise DecodeError.invalid_record(
            line_number, f"expected a JSON object, got {type(record).__name__}"
        )

    fields = _fold_keys(record)
    values: dict[str, Any] = {}

    for name in _STRING_FIELDS:
        value = fields.get(name)
        if value is None:
            continue
        if not isinstance(value, str):
            raise DecodeError.invalid_record(
                line_number, f"field '{name}' must be a string, got {type(value).__name__}"
            )
        values[name] = value

    elapsed = fields.get("elapsed")
    if elapsed is not None:
        if isinstance(elapsed, bool) or not isinstance(elapsed, int | float):
            raise DecodeError.invalid_record(
                line_number, f"field 'elapsed' must be a number, got {type(elapsed).__name__}"
            )
        values["elapsed"] = float(elapsed)

    timestamp = fields.get("time")
    if timestamp is not None:
        if not isinstance(timestamp, str):
            raise DecodeError.invalid_record(
                line_number, f"field 'time' must be a string, got {type(timestamp).__name__}"
            )
        try:
            values["time"] = parse_timestamp(timestamp)
        except ValueError as e:
            raise DecodeError.invalid_record(
                line_number, f"invalid timestamp {timestamp!r}"
            ) from e

    return TestEvent(action=values.pop("action", ""), **values)


def iter_events(lines: Iterable[str | bytes]) -> Iterator[TestEvent]:
    """Lazily decode a stream of lines. Line numbers are 1-based."""
    for line_number, line in enumerate(lines, start=1):
        yield decode_event(line, line_number)
