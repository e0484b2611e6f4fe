"""Config module exports."""

from gotestreport.config.loader import load_config
from gotestreport.config.models import (
    GoTestReportConfig,
    LoggingConfig,
    LogOutputConfig,
    ReportConfig,
)

__all__ = [
    "load_config",
    "GoTestReportConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ReportConfig",
]
