"""Tests for config/models.py module.

Covers:
- LogOutputConfig model
- LoggingConfig model
- ReportConfig model
- GoTestReportConfig root model
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gotestreport.config.models import (
    GoTestReportConfig,
    LoggingConfig,
    LogOutputConfig,
    ReportConfig,
)


class TestLogOutputConfig:
    """Tests for LogOutputConfig model."""

    def test_defaults(self) -> None:
        """Default values."""
        config = LogOutputConfig()
        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    def test_stdout_destination(self) -> None:
        """stdout is valid destination."""
        config = LogOutputConfig(destination="stdout")
        assert config.destination == "stdout"

    def test_absolute_file_destination(self) -> None:
        """Absolute file paths are accepted."""
        config = LogOutputConfig(destination="/var/log/gotest-report.log")
        assert config.destination == "/var/log/gotest-report.log"

    def test_relative_file_destination_rejected(self) -> None:
        """Relative file paths are rejected."""
        with pytest.raises(ValidationError, match="absolute path"):
            LogOutputConfig(destination="logs/run.log")

    def test_invalid_format_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LogOutputConfig(format="xml")  # type: ignore[arg-type]


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "WARNING"
        assert len(config.outputs) == 1
        assert config.outputs[0].destination == "stderr"

    def test_invalid_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")  # type: ignore[arg-type]


class TestReportConfig:
    """Tests for ReportConfig model."""

    def test_defaults(self) -> None:
        config = ReportConfig()

        assert config.output_file == "test-report.md"
        assert config.job_name is None
        assert config.summary_only is False
        assert config.fail_on_failure is False
        assert config.top_durations == 15
        assert config.bar_width == 25
        assert config.failure_keywords == ["FAIL", "Error", "panic:", "--- FAIL"]
        assert config.separator == "/"

    @pytest.mark.parametrize("field", ["top_durations", "bar_width"])
    def test_non_positive_sizes_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError, match="at least 1"):
            ReportConfig(**{field: 0})

    def test_empty_separator_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must not be empty"):
            ReportConfig(separator="")

    def test_keyword_lists_are_independent(self) -> None:
        first = ReportConfig()
        first.failure_keywords.append("oops")
        assert "oops" not in ReportConfig().failure_keywords


class TestGoTestReportConfig:
    """Tests for the root model."""

    def test_sections_default(self) -> None:
        config = GoTestReportConfig()
        assert isinstance(config.logging, LoggingConfig)
        assert isinstance(config.report, ReportConfig)

    def test_from_nested_dict(self) -> None:
        config = GoTestReportConfig.model_validate(
            {"report": {"job_name": "lint"}, "logging": {"level": "DEBUG"}}
        )
        assert config.report.job_name == "lint"
        assert config.logging.level == "DEBUG"
