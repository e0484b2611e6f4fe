"""Summary formatting utilities shared by the report and the CLI.

Design principles:
- Durations always carry a unit ("1.500s")
- Grammatically correct (1 test vs 2 tests)
- Long names are shortened from the front, keeping the distinctive tail
"""

from __future__ import annotations


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return grammatically correct singular/plural form.

    Args:
        count: The number of items
        singular: Singular form (e.g., "test")
        plural: Plural form (default: singular + "s")

    Returns:
        Formatted string like "1 test" or "3 tests"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


def format_seconds(seconds: float, precision: int = 3) -> str:
    """Format a duration in seconds, e.g. ``format_seconds(1.5) -> "1.500s"``."""
    return f"{seconds:.{precision}f}s"


def format_percentage(value: float | None) -> str:
    """Format a percentage with one decimal, or ``N/A`` when undefined."""
    if value is None:
        return "N/A"
    return f"{value:.1f}%"


def truncate_start(text: str, max_len: int = 30, prefix: str = "...") -> str:
    """Truncate text from the front so the tail stays readable.

    Examples:
        "TestVeryLongName/with_a_subtest_case" -> "...ongName/with_a_subtest_case"
    """
    if len(text) <= max_len:
        return text
    keep = max_len - len(prefix)
    if keep <= 0:
        return prefix[:max_len]
    return prefix + text[-keep:]
