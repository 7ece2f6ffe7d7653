"""Output handling for the stockcut CLI.

Renders packing results as text reports or JSON and sends them to stdout
or a file.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

import typer

from stockcut.domain.services import (
    LinearPackingResult,
    PlatePackingResult,
    RingPatternResult,
)
from stockcut.infrastructure import (
    LinearResultFormatter,
    PlateResultFormatter,
    ResultJsonExporter,
    RingPatternReportFormatter,
)
from stockcut.infrastructure.exporters import ResultType

__all__ = [
    "OutputFormat",
    "emit",
    "emit_result",
    "emit_results",
    "render_text",
]


class OutputFormat(str, Enum):
    """Report formats accepted by ``--format``."""

    TEXT = "text"
    JSON = "json"


def render_text(result: ResultType) -> str:
    """Format a result with the matching text formatter."""
    if isinstance(result, RingPatternResult):
        return RingPatternReportFormatter().format(result)
    if isinstance(result, LinearPackingResult):
        return LinearResultFormatter().format(result)
    if isinstance(result, PlatePackingResult):
        return PlateResultFormatter().format(result)
    raise TypeError(f"Cannot format {type(result).__name__}")


def emit(text: str, output_file: Path | None) -> None:
    """Write text to a file, or echo it when no file is given."""
    if output_file is None:
        typer.echo(text)
        return
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: cannot write {output_file}: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Report written to {output_file}")


def emit_result(
    result: ResultType,
    output_format: OutputFormat,
    output_file: Path | None = None,
) -> None:
    """Render one result and emit it."""
    if output_format is OutputFormat.JSON:
        emit(ResultJsonExporter().export(result), output_file)
    else:
        emit(render_text(result), output_file)


def emit_results(
    results: Mapping[str, ResultType],
    output_format: OutputFormat,
    output_file: Path | None = None,
) -> None:
    """Render the results of a job file, keyed by section name.

    JSON output is one document with a key per section; text output is
    the section reports one after another.
    """
    if output_format is OutputFormat.JSON:
        exporter = ResultJsonExporter()
        document: dict[str, Any] = {
            name: exporter.to_dict(result) for name, result in results.items()
        }
        emit(json.dumps(document, indent=exporter.indent), output_file)
    else:
        emit("\n\n".join(render_text(result) for result in results.values()), output_file)
