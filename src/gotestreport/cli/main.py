"""gotest-report CLI - render go test -json output as a Markdown report."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Any

import click

from gotestreport import __version__
from gotestreport.config.loader import load_config
from gotestreport.core.errors import ConfigError, DecodeError, OutputError
from gotestreport.core.formatting import pluralize
from gotestreport.core.logging import configure_logging, get_log_file_path
from gotestreport.core.progress import print_counts, status
from gotestreport.report.ops import generate_report, write_report


def _build_overrides(
    output_file: Path | None,
    job_name: str | None,
    summary_only: bool,
    fail_on_failure: bool,
    verbose: bool,
) -> dict[str, Any]:
    """Map explicitly given flags onto config sections."""
    report: dict[str, Any] = {}
    if output_file is not None:
        report["output_file"] = str(output_file)
    if job_name:
        report["job_name"] = job_name
    if summary_only:
        report["summary_only"] = True
    if fail_on_failure:
        report["fail_on_failure"] = True

    overrides: dict[str, Any] = {}
    if report:
        overrides["report"] = report
    if verbose:
        overrides["logging"] = {"level": "DEBUG"}
    return overrides


def _fail(message: str) -> click.ClickException:
    if log_path := get_log_file_path():
        message = f"{message}\nSee log: {log_path}"
    return click.ClickException(message)


@click.command()
@click.version_option(version=__version__, prog_name="gotest-report")
@click.option(
    "-i",
    "--input",
    "input_file",
    type=click.File("rb"),
    default="-",
    help="go test -json output file (default: stdin)",
)
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output Markdown file (default: test-report.md)",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (default: ./.gotest-report.yaml if present)",
)
@click.option("--job-name", default=None, help="Job name for the report title")
@click.option("--summary-only", is_flag=True, help="Render only the summary sections")
@click.option("--fail-on-failure", is_flag=True, help="Exit with status 1 if any test failed")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    input_file: IO[bytes],
    output_file: Path | None,
    config_path: Path | None,
    job_name: str | None,
    summary_only: bool,
    fail_on_failure: bool,
    verbose: bool,
) -> None:
    """Generate a Markdown test report from go test -json output."""
    configure_logging(level="DEBUG" if verbose else "WARNING")

    overrides = _build_overrides(output_file, job_name, summary_only, fail_on_failure, verbose)
    try:
        config = load_config(config_path, **overrides)
    except ConfigError as e:
        raise _fail(str(e)) from e
    configure_logging(config=config.logging)

    try:
        report = generate_report(input_file, config.report)
    except DecodeError as e:
        raise _fail(f"Error processing test events: {e}") from e

    output_path = Path(config.report.output_file)
    try:
        write_report(output_path, report.markdown)
    except OutputError as e:
        raise _fail(str(e)) from e

    data = report.data
    status(f"Report generated successfully: {output_path}", style="success")
    print_counts(
        total=data.total_tests,
        passed=data.passed_tests,
        failed=data.failed_tests,
        skipped=data.skipped_tests,
        duration=data.total_duration,
    )

    if config.report.fail_on_failure and data.failed_tests > 0:
        status(f"{pluralize(data.failed_tests, 'test')} failed", style="error")
        ctx.exit(1)


if __name__ == "__main__":
    cli()
