"""User-facing status output for the CLI.

Design principles:
- Status goes to stderr so stdout stays usable in pipes
- Single line per message, no spam
- Graceful degradation in non-TTY (CI logs)

Usage::

    from gotestreport.core.progress import status, print_counts

    status("Report generated successfully: test-report.md", style="success")
    status("3 tests failed", style="error")
    print_counts(total=3, passed=2, failed=1, skipped=0, duration=1.2)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

# Console for output
_console = Console(stderr=True)

# Style prefixes
_STYLES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
    "none": "",
}


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from gotestreport.core.logging import get_logger

    return get_logger("progress")


def get_console() -> Console:
    """Get the shared Rich console instance."""
    return _console


def set_console(console: Console) -> Console:
    """Swap the shared console (tests capture output this way). Returns the previous one."""
    global _console
    previous = _console
    _console = console
    return previous


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stderr."""
    prefix = _STYLES.get(style, "")
    padding = " " * indent
    _console.print(f"{padding}{prefix}{message}", highlight=False)

    # Log at DEBUG for observability (lazy to respect runtime config)
    _get_logger().debug("status", message=message, style=style)


def print_counts(*, total: int, passed: int, failed: int, skipped: int, duration: float) -> None:
    """Print root-test counters as a compact table."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red" if failed else "dim")
    table.add_column("Skipped", justify="right", style="yellow" if skipped else "dim")
    table.add_column("Duration", justify="right")
    table.add_row(str(total), str(passed), str(failed), str(skipped), f"{duration:.2f}s")
    _console.print(table)
