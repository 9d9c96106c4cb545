from __future__ import annotations

import logging
from dataclasses import replace
from typing import Literal

import typer

from apicompat.compare import CompareOptions, ComparisonResult, compare_apis
from apicompat.config import CompareConfigError, load_compare_options
from apicompat.io import load_description_file
from apicompat.model import Description, DescriptionError
from apicompat.report import ComparisonReport, build_error_report, build_report

app = typer.Typer(help="API compatibility comparison CLI")

logger = logging.getLogger(__name__)


@app.callback()
def _root() -> None:
    """Compare exported instrumentation APIs."""


def _load_description(path: str) -> Description:
    return load_description_file(path)


@app.command()
def compare(  # noqa: PLR0913
    reference: str,
    proposed: str,
    breaking: bool | None = typer.Option(
        None,
        "--breaking/--no-breaking",
        help="Report changes that break clients built against the reference",
    ),
    designed: bool | None = typer.Option(
        None,
        "--designed/--no-designed",
        help="Report deviations from designed subtrees",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="YAML comparison profile",
    ),
    format: Literal["text", "json"] = typer.Option(
        "text",
        "--format",
        help="Output format: text|json",
        show_default=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Compare a proposed API against a reference API."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        options = load_compare_options(config) if config is not None else CompareOptions()
        options = _apply_toggles(options, breaking=breaking, designed=designed)
        reference_description = _load_description(reference)
        proposed_description = _load_description(proposed)
        result = compare_apis(reference_description, proposed_description, options)
    except (CompareConfigError, DescriptionError) as exc:
        logger.debug("comparison failed", exc_info=True)
        _emit_error(reference=reference, proposed=proposed, exc=exc, output_format=format)
        raise typer.Exit(code=2) from exc
    except AssertionError as exc:
        # A type registry missing an entry is malformed input, not an API break.
        logger.debug("type registry is incomplete", exc_info=True)
        _emit_error(reference=reference, proposed=proposed, exc=exc, output_format=format)
        raise typer.Exit(code=2) from exc

    report = build_report(reference=reference, proposed=proposed, result=result)
    _emit_report(report=report, result=result, output_format=format)
    raise typer.Exit(code=report.exit_code)


def _apply_toggles(
    options: CompareOptions, *, breaking: bool | None, designed: bool | None
) -> CompareOptions:
    if breaking is not None:
        options = replace(options, compare_breaking=breaking)
    if designed is not None:
        options = replace(options, compare_designed=designed)
    return options


def _emit_report(
    *,
    report: ComparisonReport,
    result: ComparisonResult,
    output_format: Literal["text", "json"],
) -> None:
    if output_format == "json":
        typer.echo(report.model_dump_json(exclude_none=True))
        return
    for message in result.breaking:
        typer.echo(f"BREAKING message={message}")
    for message in result.designed:
        typer.echo(f"DESIGNED message={message}")
    typer.echo(
        "SUMMARY"
        f" status={report.status}"
        f" breaking={len(result.breaking)}"
        f" designed={len(result.designed)}"
    )


def _emit_error(
    *,
    reference: str,
    proposed: str,
    exc: Exception,
    output_format: Literal["text", "json"],
) -> None:
    message = _exception_message(exc)
    if output_format == "json":
        report = build_error_report(reference=reference, proposed=proposed, error=message)
        typer.echo(report.model_dump_json(exclude_none=True))
        return
    typer.echo(f"LOAD error={message}")


def _exception_message(exc: Exception) -> str:
    message = str(exc).strip()
    if message:
        return message
    return type(exc).__name__


def main() -> None:
    app()
