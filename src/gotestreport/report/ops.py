"""Report operations: stream in, Markdown out."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import structlog

from gotestreport.config.models import ReportConfig
from gotestreport.core.errors import OutputError
from gotestreport.report.aggregator import aggregate
from gotestreport.report.markdown import render_markdown
from gotestreport.report.models import ReportData

logger = structlog.get_logger()


@dataclass(frozen=True)
class GeneratedReport:
    """Aggregated data together with its rendering."""

    data: ReportData
    markdown: str


def generate_report(
    lines: Iterable[str | bytes],
    options: ReportConfig | None = None,
    *,
    now: datetime | None = None,
) -> GeneratedReport:
    """Aggregate an event stream and render it.

    Raises:
        DecodeError: On the first malformed line.
    """
    options = options or ReportConfig()
    data = aggregate(lines, separator=options.separator)
    logger.info(
        "report_aggregated",
        total=data.total_tests,
        passed=data.passed_tests,
        failed=data.failed_tests,
        skipped=data.skipped_tests,
    )
    return GeneratedReport(data=data, markdown=render_markdown(data, options, now=now))


def write_report(path: Path, markdown: str) -> None:
    """Write the report, creating parent directories.

    Raises:
        OutputError: When the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(markdown, encoding="utf-8")
    except OSError as e:
        raise OutputError.write_failed(str(path), e.strerror or str(e)) from e
    logger.info("report_written", path=str(path), size=len(markdown))
