"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config() (CLI flags)
2. Environment variables (GOTESTREPORT__SECTION__KEY)
3. YAML config (--config PATH, else ./.gotest-report.yaml)
4. Built-in defaults (this file)

Environment Variable Format:
    GOTESTREPORT__<SECTION>__<KEY>=<VALUE>

Examples:
    GOTESTREPORT__LOGGING__LEVEL=DEBUG
    GOTESTREPORT__REPORT__OUTPUT_FILE=reports/go.md
    GOTESTREPORT__REPORT__TOP_DURATIONS=25
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        GOTESTREPORT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. CI logs stay quiet unless something looks off.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ReportConfig(BaseModel):
    """Report generation configuration.

    Env vars:
        GOTESTREPORT__REPORT__OUTPUT_FILE: Markdown file to write
        GOTESTREPORT__REPORT__JOB_NAME: Job name used in the report title
        GOTESTREPORT__REPORT__SUMMARY_ONLY: Render only the summary sections
        GOTESTREPORT__REPORT__FAIL_ON_FAILURE: Exit non-zero when tests failed
        GOTESTREPORT__REPORT__TOP_DURATIONS: Rows in the duration ranking
    """

    output_file: str = Field(
        default="test-report.md",
        description="Path of the generated Markdown report.",
    )
    job_name: str | None = Field(
        default=None,
        description="Job name for multi-job reports. Replaces the default title.",
    )
    summary_only: bool = Field(
        default=False,
        description="Render only title, summary and status badge.",
    )
    fail_on_failure: bool = Field(
        default=False,
        description="Exit with status 1 after writing the report if any test failed.",
    )
    top_durations: int = Field(
        default=15,
        description="Number of results shown in the duration ranking and timeline.",
    )
    bar_width: int = Field(
        default=25,
        description="Width in characters of the longest duration bar.",
    )
    failure_keywords: list[str] = Field(
        default_factory=lambda: ["FAIL", "Error", "panic:", "--- FAIL"],
        description="Output lines containing any of these are quoted in failure details.",
    )
    separator: str = Field(
        default="/",
        description="Subtest nesting separator in test names.",
    )

    @field_validator("top_durations", "bar_width")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Must be at least 1, got {v}")
        return v

    @field_validator("separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        if not v:
            raise ValueError("Separator must not be empty")
        return v


class GoTestReportConfig(BaseModel):
    """Root configuration for gotest-report.

    All settings can be configured via:
    1. Environment variables: GOTESTREPORT__SECTION__KEY
    2. YAML config file
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
