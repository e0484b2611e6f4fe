"""Event aggregation: a flat go test -json stream into a tree of results.

Two phases. ``add`` folds events into per-name results in arrival order;
``finalize`` attaches buffered output and computes root ordering, package
groups and counters. Subtest nesting is derived once, when a name is first
seen, from the separator in the name; missing ancestors are synthesized as
UNKNOWN placeholders.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

import structlog

from gotestreport.report.events import iter_events
from gotestreport.report.models import (
    LIFECYCLE_ACTIONS,
    UNKNOWN_PACKAGE,
    ReportData,
    TestEvent,
    TestResult,
    TestStatus,
)

logger = structlog.get_logger()

_TERMINAL_STATUS = {
    "pass": TestStatus.PASS,
    "fail": TestStatus.FAIL,
    "skip": TestStatus.SKIP,
}


class TestEventAggregator:
    """Accumulates events for a single stream.

    Not reusable: call ``finalize`` once after the last ``add``.
    """

    __test__ = False

    def __init__(self, separator: str = "/") -> None:
        self._separator = separator
        self._results: dict[str, TestResult] = {}
        self._start_times: dict[str, datetime] = {}
        self._output: dict[str, list[str]] = {}
        self._event_count = 0
        self._finalized = False

    def add(self, event: TestEvent) -> None:
        if self._finalized:
            raise RuntimeError("aggregator already finalized")
        self._event_count += 1

        name = event.test
        if not name:
            return

        if event.action in LIFECYCLE_ACTIONS:
            result = self._ensure_result(name, event.package)
        else:
            result = self._results.get(name)

        if event.action == "run":
            if event.time is not None:
                self._start_times[name] = event.time
        elif event.action in ("pass", "fail"):
            assert result is not None
            self._set_status(result, _TERMINAL_STATUS[event.action])
            result.duration = self._resolve_duration(name, event, result.duration)
        elif event.action == "skip":
            assert result is not None
            self._set_status(result, TestStatus.SKIP)
        elif event.action == "output":
            self._buffer_output(name, event.output)

    def _ensure_result(self, name: str, package: str) -> TestResult:
        """Return the result for ``name``, creating it and any missing ancestors."""
        result = self._results.get(name)
        if result is not None:
            return result

        is_subtest = self._separator in name
        result = TestResult(name=name, package=package, is_subtest=is_subtest)
        self._results[name] = result

        if is_subtest:
            result.parent_name = name.rsplit(self._separator, 1)[0]
            parent = self._ensure_result(result.parent_name, package)
            parent.child_names.append(name)
        return result

    def _set_status(self, result: TestResult, status: TestStatus) -> None:
        # Last terminal event wins; a second one is unusual enough to report.
        if result.status.is_terminal:
            logger.warning(
                "duplicate_terminal_event",
                test=result.name,
                previous=result.status.value,
                new=status.value,
            )
        result.status = status

    def _resolve_duration(self, name: str, event: TestEvent, current: float) -> float:
        if event.elapsed > 0:
            return event.elapsed
        start = self._start_times.get(name)
        if start is not None and event.time is not None:
            return max(0.0, (event.time - start).total_seconds())
        return current

    def _buffer_output(self, name: str, text: str) -> None:
        if text.endswith("\n"):
            text = text[:-1]
        if text:
            self._output.setdefault(name, []).append(text)

    def finalize(self) -> ReportData:
        """Attach buffered output and compute the root-level summary."""
        if self._finalized:
            raise RuntimeError("aggregator already finalized")
        self._finalized = True

        for name, lines in self._output.items():
            result = self._results.get(name)
            if result is None:
                logger.debug("orphan_output_dropped", test=name, lines=len(lines))
                continue
            result.output_lines.extend(lines)

        root_names: list[str] = []
        package_groups: dict[str, list[str]] = {}
        passed = failed = skipped = 0
        total_duration = 0.0

        for name, result in self._results.items():
            if result.is_subtest:
                continue
            root_names.append(name)
            package_groups.setdefault(result.package or UNKNOWN_PACKAGE, []).append(name)
            total_duration += result.duration
            if result.status is TestStatus.PASS:
                passed += 1
            elif result.status is TestStatus.FAIL:
                failed += 1
            elif result.status is TestStatus.SKIP:
                skipped += 1

        root_names.sort()
        for names in package_groups.values():
            names.sort()

        logger.debug(
            "events_aggregated",
            events=self._event_count,
            results=len(self._results),
            root_tests=len(root_names),
        )

        return ReportData(
            results=self._results,
            sorted_test_names=root_names,
            package_groups=dict(sorted(package_groups.items())),
            total_tests=len(root_names),
            passed_tests=passed,
            failed_tests=failed,
            skipped_tests=skipped,
            total_duration=total_duration,
            separator=self._separator,
        )


def aggregate(lines: Iterable[str | bytes], *, separator: str = "/") -> ReportData:
    """Aggregate a go test -json stream in a single forward pass.

    Raises:
        DecodeError: On the first malformed line. No partial report is returned.
    """
    aggregator = TestEventAggregator(separator=separator)
    for event in iter_events(lines):
        aggregator.add(event)
    return aggregator.finalize()
