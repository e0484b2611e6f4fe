"""gotest-report error types with typed error codes.

Error code ranges:
- 1xxx: Input
- 2xxx: Config
- 3xxx: Output
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Input (1xxx)
    INPUT_DECODE_ERROR = 1001

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Output (3xxx)
    OUTPUT_WRITE_ERROR = 3001


@dataclass(frozen=True, slots=True)
class GoTestReportError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'INPUT_DECODE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class DecodeError(GoTestReportError):
    """A line of the event stream is not a valid test event record.

    Fatal for the whole aggregation; no partial report is produced.
    """

    @classmethod
    def invalid_record(cls, line_number: int, reason: str) -> "DecodeError":
        return cls(
            code=ErrorCode.INPUT_DECODE_ERROR,
            message=f"Invalid test event on line {line_number}: {reason}",
            details={"line": line_number, "reason": reason},
        )

    @property
    def line_number(self) -> int:
        return int(self.details["line"])

    @property
    def reason(self) -> str:
        return str(self.details["reason"])


class ConfigError(GoTestReportError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class OutputError(GoTestReportError):
    """Report could not be written."""

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "OutputError":
        return cls(
            code=ErrorCode.OUTPUT_WRITE_ERROR,
            message=f"Failed to write report to {path}: {reason}",
            details={"path": path, "reason": reason},
        )

