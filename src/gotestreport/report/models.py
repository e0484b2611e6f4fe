"""Report core models.

Canonical data structures for the event stream and the aggregated report.
The aggregator produces a ReportData; the Markdown renderer only reads it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Literal

# =============================================================================
# Events - one per line of go test -json output
# =============================================================================

EventAction = Literal["run", "pause", "cont", "pass", "bench", "fail", "skip", "output"]
"""Actions emitted by go test -json.

Other action strings still decode; the aggregator ignores them.
"""

LIFECYCLE_ACTIONS: frozenset[str] = frozenset({"run", "pass", "fail", "skip"})
"""Actions that create a result entry on first sight of a test name."""

UNKNOWN_PACKAGE = "unknown"


@dataclass(frozen=True)
class TestEvent:
    """A single decoded event."""

    __test__ = False  # not a pytest class

    action: str
    test: str = ""
    package: str = ""
    output: str = ""
    elapsed: float = 0.0
    time: datetime | None = None

    @property
    def is_package_event(self) -> bool:
        return self.test == ""


# =============================================================================
# Results - aggregated per test name
# =============================================================================


class TestStatus(str, Enum):
    """Terminal state of a test. UNKNOWN until a pass/fail/skip event arrives."""

    __test__ = False

    UNKNOWN = "UNKNOWN"
    PASS = "PASS"
    FAIL = "FAIL"
    SKIP = "SKIP"

    @property
    def is_terminal(self) -> bool:
        return self is not TestStatus.UNKNOWN


@dataclass
class TestResult:
    """Aggregated result for one fully-qualified test name.

    ``parent_name`` is set only for subtests. ``child_names`` lists direct
    children in discovery order.
    """

    __test__ = False

    name: str
    package: str = ""
    status: TestStatus = TestStatus.UNKNOWN
    duration: float = 0.0
    output_lines: list[str] = field(default_factory=list)
    is_subtest: bool = False
    parent_name: str | None = None
    child_names: list[str] = field(default_factory=list)

    def leaf_name(self, separator: str = "/") -> str:
        """Last separator-delimited segment of the name."""
        return self.name.rsplit(separator, 1)[-1]


# =============================================================================
# Report - the finalized model handed to the renderer
# =============================================================================


@dataclass(frozen=True)
class ReportData:
    """Finalized aggregation of one event stream.

    Counters and ``total_duration`` cover root tests only.
    """

    results: dict[str, TestResult]
    sorted_test_names: list[str]
    package_groups: dict[str, list[str]]
    total_tests: int = 0
    passed_tests: int = 0
    failed_tests: int = 0
    skipped_tests: int = 0
    total_duration: float = 0.0
    separator: str = "/"

    @property
    def unknown_tests(self) -> int:
        """Root tests that never reached a terminal status."""
        return self.total_tests - self.passed_tests - self.failed_tests - self.skipped_tests

    @property
    def pass_rate(self) -> float | None:
        """Percentage of root tests that passed, or None with no tests."""
        if self.total_tests == 0:
            return None
        return self.passed_tests / self.total_tests * 100

    @property
    def overall_status(self) -> Literal["FAILED", "SKIPPED", "PASSED"]:
        if self.failed_tests > 0:
            return "FAILED"
        if self.skipped_tests == self.total_tests:
            return "SKIPPED"
        return "PASSED"

    def root_results(self) -> Iterator[TestResult]:
        """Root results in name order."""
        for name in self.sorted_test_names:
            yield self.results[name]

    def children(self, result: TestResult) -> list[TestResult]:
        """Direct children of ``result`` sorted by name."""
        return [self.results[name] for name in sorted(result.child_names)]

    def failed_tests_with_children(self) -> list[TestResult]:
        """Root tests that failed themselves or have a failed direct child."""
        return [
            result
            for result in self.root_results()
            if result.status is TestStatus.FAIL
            or any(child.status is TestStatus.FAIL for child in self.children(result))
        ]

    def results_by_duration(self) -> list[TestResult]:
        """All results, roots and subtests, longest first (ties by name)."""
        return sorted(self.results.values(), key=lambda r: (-r.duration, r.name))
