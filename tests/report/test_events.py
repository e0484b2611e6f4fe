"""Tests for go test -json record decoding."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from gotestreport.core.errors import DecodeError, ErrorCode
from gotestreport.report.events import decode_event, iter_events, parse_timestamp


class TestParseTimestamp:
    """RFC 3339 timestamp parsing."""

    def test_parses_utc_z_suffix(self) -> None:
        result = parse_timestamp("2024-01-01T12:00:00Z")
        assert result == datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def test_truncates_nanoseconds(self) -> None:
        result = parse_timestamp("2024-01-01T12:00:00.123456789Z")
        assert result.microsecond == 123456

    def test_keeps_offset(self) -> None:
        result = parse_timestamp("2024-01-01T12:00:00.5-05:00")
        assert result.utcoffset() == timedelta(hours=-5)
        assert result.microsecond == 500000

    def test_naive_timestamp_assumed_utc(self) -> None:
        result = parse_timestamp("2024-01-01T12:00:00")
        assert result.tzinfo == timezone.utc

    def test_rejects_garbage(self) -> None:
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")


class TestDecodeEvent:
    """Single-line decoding."""

    def test_decodes_full_record(self) -> None:
        line = (
            '{"Time":"2024-01-01T00:00:01Z","Action":"pass","Package":"example.com/pkg",'
            '"Test":"TestFoo","Elapsed":0.5}'
        )
        event = decode_event(line, 1)

        assert event.action == "pass"
        assert event.test == "TestFoo"
        assert event.package == "example.com/pkg"
        assert event.elapsed == 0.5
        assert event.time == datetime(2024, 1, 1, 0, 0, 1, tzinfo=timezone.utc)

    def test_field_names_are_case_insensitive(self) -> None:
        event = decode_event('{"action":"run","test":"T","PACKAGE":"pkg"}', 1)

        assert event.action == "run"
        assert event.test == "T"
        assert event.package == "pkg"

    def test_missing_fields_default_to_zero_values(self) -> None:
        event = decode_event('{"Action":"output"}', 1)

        assert event.test == ""
        assert event.output == ""
        assert event.elapsed == 0.0
        assert event.time is None
        assert event.is_package_event

    def test_null_fields_default_to_zero_values(self) -> None:
        event = decode_event('{"Action":"pass","Test":null,"Elapsed":null,"Time":null}', 1)

        assert event.test == ""
        assert event.elapsed == 0.0
        assert event.time is None

    def test_integer_elapsed_becomes_float(self) -> None:
        event = decode_event('{"Action":"pass","Test":"T","Elapsed":2}', 1)
        assert event.elapsed == 2.0
        assert isinstance(event.elapsed, float)

    def test_unknown_fields_ignored(self) -> None:
        event = decode_event('{"Action":"start","Package":"pkg","FailedBuild":"x"}', 1)
        assert event.action == "start"

    def test_accepts_bytes_with_line_ending(self) -> None:
        event = decode_event(b'{"Action":"output","Test":"T","Output":"hi\\n"}\r\n', 1)
        assert event.output == "hi\n"

    @pytest.mark.parametrize(
        ("line", "fragment"),
        [
            ("not valid json", "Expecting value"),
            ("", "Expecting value"),
            ("[1, 2]", "expected a JSON object, got list"),
            ('"run"', "expected a JSON object, got str"),
            ('{"Action": 3}', "field 'action' must be a string"),
            ('{"Action":"pass","Elapsed":"1.5"}', "field 'elapsed' must be a number"),
            ('{"Action":"pass","Elapsed":true}', "field 'elapsed' must be a number"),
            ('{"Action":"run","Time":12}', "field 'time' must be a string"),
            ('{"Action":"run","Time":"noon"}', "invalid timestamp"),
        ],
    )
    def test_invalid_records_raise_decode_error(self, line: str, fragment: str) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_event(line, 7)

        error = exc_info.value
        assert error.code == ErrorCode.INPUT_DECODE_ERROR
        assert error.line_number == 7
        assert fragment in error.reason

    def test_invalid_utf8_raises_decode_error(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_event(b'{"Action":"\xff"}', 3)
        assert exc_info.value.line_number == 3


class TestIterEvents:
    """Streaming decode."""

    def test_line_numbers_are_one_based(self) -> None:
        lines = ['{"Action":"run","Test":"A"}', "oops"]

        events = iter_events(lines)
        assert next(events).test == "A"
        with pytest.raises(DecodeError) as exc_info:
            next(events)
        assert exc_info.value.line_number == 2

    def test_is_lazy(self) -> None:
        def source():
            yield '{"Action":"run","Test":"A"}'
            raise AssertionError("consumed too far")

        events = iter_events(source())
        assert next(events).test == "A"
