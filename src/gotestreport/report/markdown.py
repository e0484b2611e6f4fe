"""Markdown rendering of an aggregated report.

A pure function of ReportData and ReportConfig (plus the clock for the
footer). Output is GitHub-flavoured Markdown with inline HTML for the
summary cards, coloured statuses and collapsible sections.
"""

from __future__ import annotations

from datetime import datetime

from gotestreport.config.models import ReportConfig
from gotestreport.core.formatting import format_percentage, format_seconds, truncate_start
from gotestreport.report.models import ReportData, TestResult, TestStatus

PASS_COLOR = "#2cbe4e"
FAIL_COLOR = "#cb2431"
SKIP_COLOR = "#eea236"
NEUTRAL_COLOR = "#6a737d"

_STATUS_STYLE: dict[TestStatus, tuple[str, str]] = {
    TestStatus.PASS: ("✅", PASS_COLOR),
    TestStatus.FAIL: ("❌", FAIL_COLOR),
    TestStatus.SKIP: ("⏭️", SKIP_COLOR),
    TestStatus.UNKNOWN: ("⏺️", NEUTRAL_COLOR),
}

_BADGES = {
    "FAILED": "![Status](https://img.shields.io/badge/Status-FAILED-red)",
    "SKIPPED": "![Status](https://img.shields.io/badge/Status-SKIPPED-yellow)",
    "PASSED": "![Status](https://img.shields.io/badge/Status-PASSED-brightgreen)",
}

_CARD_STYLE = (
    "flex: 1; padding: 10px; border: 1px solid #ddd; border-radius: 5px; text-align: center;"
)

# Longest result is rescaled against the runner-up beyond this ratio.
_OUTLIER_RATIO = 3.0
_OUTLIER_SCALE = 1.5
_TIMELINE_NAME_LEN = 30
_TIMELINE_OFFSET = 0.2


def duration_color(duration: float, max_duration: float) -> str:
    """Green to yellow to red hex colour for ``duration`` relative to ``max_duration``."""
    ratio = duration / max_duration if max_duration > 0 else 0.0
    ratio = min(ratio, 1.0)
    red = int(255 * min(1.0, ratio * 2))
    green = int(255 * min(1.0, 2 - ratio * 2))
    return f"#{red:02x}{green:02x}00"


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|")


def _status_span(status: TestStatus) -> str:
    emoji, color = _STATUS_STYLE[status]
    return f'<span style="color: {color}">{emoji} {status.value}</span>'


def _render_cards(data: ReportData) -> list[str]:
    rate = data.pass_rate or 0.0
    if rate < 80:
        rate_color = FAIL_COLOR
    elif rate < 100:
        rate_color = SKIP_COLOR
    else:
        rate_color = PASS_COLOR

    cards = [
        (str(data.total_tests), "", "Total Tests"),
        (f"{rate:.1f}%", f" color: {rate_color};", "Success Rate"),
        (f"{data.total_duration:.2f}s", "", "Total Duration"),
    ]
    lines = ['<div style="display: flex; gap: 20px; margin-bottom: 20px;">']
    for value, extra_style, label in cards:
        lines.append(f'<div style="{_CARD_STYLE}">')
        lines.append(f'<div style="font-size: 24px; font-weight: bold;{extra_style}">{value}</div>')
        lines.append(f'<div style="font-size: 12px; color: #666;">{label}</div>')
        lines.append("</div>")
    lines.append("</div>")
    lines.append("")
    return lines


def _render_summary(data: ReportData) -> list[str]:
    return [
        "## Summary",
        "",
        f"- **Total Tests:** {data.total_tests}",
        f"- **Passed:** {data.passed_tests} ({format_percentage(data.pass_rate)})",
        f"- **Failed:** {data.failed_tests}",
        f"- **Skipped:** {data.skipped_tests}",
        f"- **Total Duration:** {data.total_duration:.2f}s",
        "",
        "## Test Status",
        "",
        _BADGES[data.overall_status],
        "",
    ]


def _render_subtests(data: ReportData, result: TestResult) -> str:
    children = data.children(result)
    if not children:
        return "-"
    rows = "".join(
        f"<tr><td>{_escape_cell(child.leaf_name(data.separator))}</td>"
        f"<td>{_status_span(child.status)}</td>"
        f"<td>{format_seconds(child.duration)}</td></tr>"
        for child in children
    )
    return (
        f"<details><summary>{len(children)} subtests</summary>"
        "<table><tr><th>Subtest</th><th>Status</th><th>Duration</th></tr>"
        f"{rows}</table></details>"
    )


def _render_packages(data: ReportData) -> list[str]:
    lines = ["## Test Results by Package", ""]
    for package, names in data.package_groups.items():
        lines.append("<details>")
        lines.append(
            f"<summary>Package: <strong>{package}</strong> ({len(names)} tests)</summary>"
        )
        lines.append("")
        lines.append("| Test | Status | Duration | Details |")
        lines.append("| ---- | ------ | -------- | ------- |")
        for name in names:
            result = data.results[name]
            lines.append(
                f"| **{_escape_cell(result.name)}** | {_status_span(result.status)} "
                f"| {format_seconds(result.duration)} | {_render_subtests(data, result)} |"
            )
        lines.append("")
        lines.append("</details>")
        lines.append("")
    return lines


def _failure_excerpt(result: TestResult, keywords: list[str]) -> list[str]:
    lines = ["```go"]
    lines.extend(
        line for line in result.output_lines if any(keyword in line for keyword in keywords)
    )
    lines.append("```")
    lines.append("")
    return lines


def _render_failures(data: ReportData, options: ReportConfig) -> list[str]:
    failed = data.failed_tests_with_children()
    if data.failed_tests == 0 or not failed:
        return []

    lines = [
        "## Failed Tests Details",
        "",
        "<details>",
        "<summary>Click to expand failed test details</summary>",
        "",
    ]
    for result in failed:
        lines.append(
            f'<div style="margin-bottom: 20px; padding: 10px; '
            f'border-left: 4px solid {FAIL_COLOR}; background-color: #ffeef0">'
        )
        lines.append(f"<h3>{result.name}</h3>")
        lines.append("")
        if result.status is TestStatus.FAIL and result.output_lines:
            lines.extend(_failure_excerpt(result, options.failure_keywords))
        for child in data.children(result):
            if child.status is not TestStatus.FAIL:
                continue
            lines.append(f"<h4>{child.leaf_name(data.separator)}</h4>")
            lines.append("")
            if child.output_lines:
                lines.extend(_failure_excerpt(child, options.failure_keywords))
        lines.append("</div>")
        lines.append("")
    lines.append("</details>")
    lines.append("")
    return lines


def _scale_max(ranked: list[TestResult]) -> float:
    if not ranked:
        return 0.0
    longest = ranked[0].duration
    if len(ranked) > 1:
        runner_up = ranked[1].duration
        if runner_up > 0 and longest > runner_up * _OUTLIER_RATIO:
            return runner_up * _OUTLIER_SCALE
    return longest


def _render_durations(data: ReportData, options: ReportConfig) -> list[str]:
    ranked = data.results_by_duration()
    max_duration = _scale_max(ranked)

    lines = [
        "## Test Durations",
        "",
        "<details>",
        "<summary>Click to expand test durations</summary>",
        "",
        "| Test | Duration |",
        "| ---- | -------- |",
    ]
    for result in ranked[: options.top_durations]:
        if result.is_subtest:
            display_name = "↳ " + result.leaf_name(data.separator)
        else:
            display_name = result.name
        if max_duration > 0:
            bar_length = max(int(result.duration * options.bar_width / max_duration), 1)
        else:
            bar_length = 1
        color = duration_color(result.duration, max_duration)
        lines.append(
            f"| {_escape_cell(display_name)} | {format_seconds(result.duration)} "
            f'<span style="color: {color}">{"█" * bar_length}</span> |'
        )
    lines.append("")
    lines.append("</details>")
    lines.append("")
    return lines


def _timeline_label(name: str) -> str:
    label = truncate_start(name, _TIMELINE_NAME_LEN)
    return label.replace(":", " -").replace("/", "-")


def _render_timeline(data: ReportData, options: ReportConfig) -> list[str]:
    lines = [
        "## Test Timeline",
        "",
        "<details>",
        "<summary>Click to expand test execution timeline</summary>",
        "",
        "```mermaid",
        "gantt",
        "    title Test Execution Timeline",
        "    dateFormat X",
        "    axisFormat %S.%L",
        "",
    ]
    start = 0.0
    for result in data.results_by_duration()[: options.top_durations]:
        lines.append(
            f"    {_timeline_label(result.name)}: {start:f}, {start + result.duration:f}"
        )
        start += result.duration * _TIMELINE_OFFSET
    lines.append("```")
    lines.append("</details>")
    lines.append("")
    return lines


def _render_footer(now: datetime) -> list[str]:
    return [
        "",
        "---",
        "",
        f"📆 **Report Date:** {now:%B} {now.day}, {now:%Y}  ",
        f"⏰ **Report Time:** {now:%H:%M:%S %Z}  ",
        f"🖥 **Generated On:** {now:%A at %H:%M}",
    ]


def render_markdown(
    data: ReportData,
    options: ReportConfig | None = None,
    *,
    now: datetime | None = None,
) -> str:
    """Render the full Markdown report.

    Args:
        data: Finalized aggregation.
        options: Rendering options; defaults apply when omitted.
        now: Timestamp for the footer (default: current local time).

    Returns:
        The report text, newline-terminated.
    """
    options = options or ReportConfig()
    title = f"# {options.job_name} Test Results" if options.job_name else "# Test Summary Report"

    lines = [title, ""]
    if options.summary_only:
        lines.extend(_render_summary(data))
        return "\n".join(lines) + "\n"

    lines.extend(_render_cards(data))
    lines.extend(_render_summary(data))
    lines.extend(_render_packages(data))
    lines.extend(_render_failures(data, options))
    lines.extend(_render_durations(data, options))
    lines.extend(_render_timeline(data, options))
    lines.extend(_render_footer(now or datetime.now().astimezone()))
    return "\n".join(lines) + "\n"
