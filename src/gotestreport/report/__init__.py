"""Report module - aggregation and Markdown rendering of go test -json output."""

from gotestreport.report.aggregator import TestEventAggregator, aggregate
from gotestreport.report.events import decode_event, iter_events
from gotestreport.report.markdown import render_markdown
from gotestreport.report.models import ReportData, TestEvent, TestResult, TestStatus
from gotestreport.report.ops import GeneratedReport, generate_report, write_report

__all__ = [
    "aggregate",
    "decode_event",
    "generate_report",
    "iter_events",
    "render_markdown",
    "write_report",
    "GeneratedReport",
    "ReportData",
    "TestEvent",
    "TestEventAggregator",
    "TestResult",
    "TestStatus",
]
