"""Core module exports."""

from gotestreport.core.errors import (
    ConfigError,
    DecodeError,
    ErrorCode,
    GoTestReportError,
    OutputError,
)
from gotestreport.core.logging import configure_logging, get_logger
from gotestreport.core.progress import print_counts, status

__all__ = [
    # Errors
    "ConfigError",
    "DecodeError",
    "ErrorCode",
    "GoTestReportError",
    "OutputError",
    # Logging
    "configure_logging",
    "get_logger",
    # Progress
    "print_counts",
    "status",
]
