"""Typer CLI for cutting stock optimization."""

import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from stockcut.application import (
    LinearJobInput,
    OptimizeLinearCommand,
    OptimizePlateCommand,
    OptimizeRingPatternCommand,
    PlateJobInput,
    RingJobInput,
)
from stockcut.application.config import (
    ConfigError,
    config_to_linear_job,
    config_to_plate_job,
    config_to_ring_job,
    load_config,
    validate_config,
)
from stockcut.cli.commands import validate_command
from stockcut.cli.commands.output_handlers import OutputFormat, emit, emit_result, emit_results
from stockcut.cli.commands.validate import display_load_error, display_validation_result
from stockcut.domain import (
    CuttingError,
    InvalidInputError,
    LinearHeuristic,
    LinearItemSpec,
    PlateHeuristic,
    RectItemSpec,
)
from stockcut.domain.services import (
    DEFAULT_RING_MATERIAL_LENGTH,
    RingPatternParams,
    estimate_bars_required,
    validate_ring_params,
)
from stockcut.infrastructure import ResultJsonExporter
from stockcut.infrastructure.exporters import ResultType

app = typer.Typer(
    name="stockcut",
    help="Plan cuts of bars and plates with as little waste as possible.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log packing decisions to stderr"),
    ] = False,
) -> None:
    """Plan cuts of bars and plates with as little waste as possible."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


# =============================================================================
# Argument parsing
# =============================================================================


def _number(text: str, raw: str, kind: type = float) -> float:
    try:
        return kind(text)
    except ValueError:
        raise typer.BadParameter(f"'{text}' is not a valid number in '{raw}'") from None


def parse_linear_item(raw: str) -> LinearItemSpec:
    """Parse ``ID:LENGTH[:QTY]``, e.g. ``A:1000:2``."""
    parts = raw.split(":")
    if len(parts) not in (2, 3) or not parts[0]:
        raise typer.BadParameter(f"Expected ID:LENGTH[:QTY], got '{raw}'")
    quantity = int(_number(parts[2], raw, int)) if len(parts) == 3 else 1
    return LinearItemSpec(id=parts[0], length=_number(parts[1], raw), quantity=quantity)


def parse_rect_item(raw: str) -> RectItemSpec:
    """Parse ``ID:WIDTHxHEIGHT[:QTY][:norotate]``, e.g. ``P:500x300:2``."""
    parts = raw.split(":")
    can_rotate = True
    if parts and parts[-1].lower() == "norotate":
        can_rotate = False
        parts = parts[:-1]
    if len(parts) not in (2, 3) or not parts[0]:
        raise typer.BadParameter(f"Expected ID:WxH[:QTY][:norotate], got '{raw}'")

    size = parts[1].lower().split("x")
    if len(size) != 2:
        raise typer.BadParameter(f"Expected WIDTHxHEIGHT in '{raw}'")

    quantity = int(_number(parts[2], raw, int)) if len(parts) == 3 else 1
    return RectItemSpec(
        id=parts[0],
        width=_number(size[0], raw),
        height=_number(size[1], raw),
        quantity=quantity,
        can_rotate=can_rotate,
    )


def _fail(error: CuttingError) -> NoReturn:
    messages = error.errors if isinstance(error, InvalidInputError) else [str(error)]
    for message in messages:
        typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


FormatOption = Annotated[
    OutputFormat,
    typer.Option("--format", "-f", help="Report format: text or json"),
]
OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Write the report to this file"),
]
KerfOption = Annotated[
    float,
    typer.Option("--kerf", "-k", help="Saw kerf added to each piece"),
]


# =============================================================================
# Commands
# =============================================================================


@app.command()
def linear(
    material_length: Annotated[
        float,
        typer.Option("--length", "-l", help="Bar length"),
    ],
    items: Annotated[
        list[str],
        typer.Option("--item", "-i", help="Piece as ID:LENGTH[:QTY]; repeat for more"),
    ],
    algorithm: Annotated[
        LinearHeuristic,
        typer.Option("--algorithm", "-a", help="Bar selection heuristic"),
    ] = LinearHeuristic.FIRST_FIT,
    kerf: KerfOption = 0.0,
    output_format: FormatOption = OutputFormat.TEXT,
    output_file: OutputOption = None,
) -> None:
    """Cut pieces from bars of a fixed length."""
    job = LinearJobInput(
        items=[parse_linear_item(raw) for raw in items],
        material_length=material_length,
        algorithm=algorithm.value,
        kerf=kerf,
    )
    try:
        result = OptimizeLinearCommand().execute(job)
    except CuttingError as e:
        _fail(e)
    emit_result(result, output_format, output_file)


@app.command()
def plate(
    plate_width: Annotated[
        float,
        typer.Option("--width", "-w", help="Plate width"),
    ],
    plate_height: Annotated[
        float,
        typer.Option("--height", "-h", help="Plate height"),
    ],
    items: Annotated[
        list[str],
        typer.Option(
            "--item", "-i", help="Piece as ID:WxH[:QTY][:norotate]; repeat for more"
        ),
    ],
    algorithm: Annotated[
        PlateHeuristic,
        typer.Option("--algorithm", "-a", help="Placement heuristic"),
    ] = PlateHeuristic.SIMPLE,
    kerf: KerfOption = 0.0,
    output_format: FormatOption = OutputFormat.TEXT,
    output_file: OutputOption = None,
) -> None:
    """Cut rectangular pieces from plates of a fixed size."""
    job = PlateJobInput(
        items=[parse_rect_item(raw) for raw in items],
        plate_width=plate_width,
        plate_height=plate_height,
        algorithm=algorithm.value,
        kerf=kerf,
    )
    try:
        result = OptimizePlateCommand().execute(job)
    except CuttingError as e:
        _fail(e)
    if result.unplaced:
        typer.echo(f"Warning: {result.unplaced_items} piece(s) could not be placed", err=True)
    emit_result(result, output_format, output_file)


@app.command()
def rings(
    small_a: Annotated[float, typer.Option("--small-a", help="Pattern A small ring")] = 0.0,
    big_a: Annotated[float, typer.Option("--big-a", help="Pattern A big ring")] = 0.0,
    small_b: Annotated[float, typer.Option("--small-b", help="Pattern B small ring")] = 0.0,
    big_b: Annotated[float, typer.Option("--big-b", help="Pattern B big ring")] = 0.0,
    multiplier: Annotated[int, typer.Option("--multiplier", "-m", help="Number of sets")] = 1,
    kerf: KerfOption = 0.0,
    material_length: Annotated[
        float,
        typer.Option("--length", "-l", help="Bar length"),
    ] = DEFAULT_RING_MATERIAL_LENGTH,
    algorithm: Annotated[
        LinearHeuristic,
        typer.Option("--algorithm", "-a", help="Bar selection heuristic"),
    ] = LinearHeuristic.FIRST_FIT,
    estimate: Annotated[
        bool,
        typer.Option("--estimate", help="Only print the quick bar estimate"),
    ] = False,
    output_format: FormatOption = OutputFormat.TEXT,
    output_file: OutputOption = None,
) -> None:
    """Cut FF-CA-01 ring blanks (patterns A and B) from bars."""
    params = RingPatternParams(
        small_ring_a=small_a,
        big_ring_a=big_a,
        small_ring_b=small_b,
        big_ring_b=big_b,
        multiplier=multiplier,
        kerf_width=kerf,
    )

    if estimate:
        errors = validate_ring_params(params)
        if errors:
            _fail(InvalidInputError(errors))
        try:
            figures = estimate_bars_required(params, material_length)
        except CuttingError as e:
            _fail(e)
        if output_format is OutputFormat.JSON:
            emit(ResultJsonExporter().export(figures), output_file)
            return
        emit(
            "\n".join(
                [
                    f"Set length:            {figures.set_length:g}",
                    f"Total length:          {figures.total_length:g}",
                    f"Estimated bars:        {figures.estimated_bars}",
                    f"Estimated efficiency:  {figures.estimated_efficiency:.1f}%",
                ]
            ),
            output_file,
        )
        return

    job = RingJobInput(
        params=params, material_length=material_length, algorithm=algorithm.value
    )
    try:
        result = OptimizeRingPatternCommand().execute(job)
    except CuttingError as e:
        _fail(e)
    emit_result(result, output_format, output_file)


@app.command()
def run(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON job file"),
    ],
    output_format: Annotated[
        OutputFormat | None,
        typer.Option("--format", "-f", help="Override the job file's report format"),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Override the job file's output file"),
    ] = None,
) -> None:
    """Run every job in a JSON job file."""
    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    validation = validate_config(config)
    if not validation.is_valid:
        display_validation_result(validation)
        raise typer.Exit(code=1)
    for warning in validation.warnings:
        typer.echo(f"Warning: {warning.path}: {warning.message}", err=True)

    results: dict[str, ResultType] = {}
    try:
        linear_job = config_to_linear_job(config)
        if linear_job is not None:
            results["linear"] = OptimizeLinearCommand().execute(linear_job)

        plate_job = config_to_plate_job(config)
        if plate_job is not None:
            results["plate"] = OptimizePlateCommand().execute(plate_job)

        ring_job = config_to_ring_job(config)
        if ring_job is not None:
            results["rings"] = OptimizeRingPatternCommand().execute(ring_job)
    except CuttingError as e:
        _fail(e)

    fmt = output_format or OutputFormat(config.output.format)
    if output_file is None and config.output.output_file:
        output_file = Path(config.output.output_file)
    emit_results(results, fmt, output_file)


if __name__ == "__main__":
    app()
