"""Plain-text report formatters for packing results."""

from __future__ import annotations

from stockcut.domain.entities import Bar, Plate
from stockcut.domain.services import (
    LinearPackingResult,
    PlatePackingResult,
    RingPatternResult,
)
from stockcut.domain.value_objects import UnplacedPiece

WIDTH = 70


def format_number(value: float) -> str:
    """Render whole numbers without decimals and the rest with two."""
    if float(value).is_integer():
        return f"{value:.0f}"
    return f"{value:.2f}"


def _unplaced_lines(unplaced: tuple[UnplacedPiece, ...]) -> list[str]:
    if not unplaced:
        return []
    lines = ["", f"UNPLACED PIECES ({len(unplaced)})", "-" * WIDTH]
    for record in unplaced:
        lines.append(f"{record.instance_id:<16} {record.reason}")
    return lines


def _pieces_by_spec_lines(counts: dict[str, int]) -> list[str]:
    lines = ["", "PIECES BY ITEM", "-" * WIDTH]
    for spec_id, count in sorted(counts.items()):
        lines.append(f"{spec_id:<20} {count}")
    return lines


class LinearResultFormatter:
    """Formats a 1D packing result as a cutting plan."""

    def format(self, result: LinearPackingResult) -> str:
        """Format the result as a summary followed by one block per bar."""
        lines = [
            "LINEAR CUTTING PLAN",
            "=" * WIDTH,
            f"Algorithm:        {result.algorithm}",
            f"Material length:  {format_number(result.material_length)}",
            f"Bars used:        {result.total_bars}",
            f"Pieces placed:    {result.total_items}",
            f"Used length:      {format_number(result.total_used_length)}",
            f"Waste:            {format_number(result.total_waste)} "
            f"({result.waste_percentage:.1f}%)",
            f"Efficiency:       {result.overall_efficiency:.1f}%",
            f"Time:             {result.execution_time:.2f} ms",
        ]

        if not result.bars:
            lines.extend(["", "No bars used."])

        for bar in result.bars:
            lines.extend(self._format_bar(bar))

        if result.bars:
            lines.extend(_pieces_by_spec_lines(result.pieces_by_spec()))
        lines.extend(_unplaced_lines(result.unplaced))
        return "\n".join(lines)

    def _format_bar(self, bar: Bar) -> list[str]:
        lines = [
            "",
            f"{bar.id}  used {format_number(bar.used_length)} / "
            f"{format_number(bar.capacity)}, waste "
            f"{format_number(bar.remaining_length)} ({bar.efficiency:.1f}% efficient)",
            "-" * WIDTH,
            f"{'Piece':<16} {'Position':<12} {'Length':<12} {'Nominal':<12}",
        ]
        for placement in bar.placements:
            lines.append(
                f"{placement.piece.instance_id:<16} "
                f"{format_number(placement.position):<12} "
                f"{format_number(placement.length):<12} "
                f"{format_number(placement.piece.original_length):<12}"
            )
        return lines


class PlateResultFormatter:
    """Formats a 2D packing result as a per-plate placement list."""

    def format(self, result: PlatePackingResult) -> str:
        plate_size = (
            f"{format_number(result.plate_width)} x {format_number(result.plate_height)}"
        )
        lines = [
            "PLATE CUTTING PLAN",
            "=" * WIDTH,
            f"Algorithm:        {result.algorithm}",
            f"Plate size:       {plate_size}",
            f"Plates used:      {result.total_plates}",
            f"Pieces placed:    {result.total_items}",
            f"Used area:        {format_number(result.total_used_area)}",
            f"Waste area:       {format_number(result.total_waste_area)}",
            f"Efficiency:       {result.overall_efficiency:.1f}%",
            f"Time:             {result.execution_time:.2f} ms",
        ]

        if not result.plates:
            lines.extend(["", "No plates used."])

        for plate in result.plates:
            lines.extend(self._format_plate(plate))

        if result.plates:
            lines.extend(_pieces_by_spec_lines(result.pieces_by_spec()))
        lines.extend(_unplaced_lines(result.unplaced))
        return "\n".join(lines)

    def _format_plate(self, plate: Plate) -> list[str]:
        lines = [
            "",
            f"{plate.id}  used {format_number(plate.used_area)} / "
            f"{format_number(plate.total_area)} ({plate.efficiency:.1f}% efficient), "
            f"{len(plate.free_rects)} free regions",
            "-" * WIDTH,
            f"{'Piece':<16} {'X':<10} {'Y':<10} {'Width':<10} {'Height':<10} {'Rotated'}",
        ]
        for placement in plate.placements:
            lines.append(
                f"{placement.piece.instance_id:<16} "
                f"{format_number(placement.x):<10} "
                f"{format_number(placement.y):<10} "
                f"{format_number(placement.width):<10} "
                f"{format_number(placement.height):<10} "
                f"{'yes' if placement.rotated else 'no'}"
            )
        return lines


class RingPatternReportFormatter:
    """Formats an FF-CA-01 run: parameters, generated blanks, per-pattern use."""

    def __init__(self, linear_formatter: LinearResultFormatter | None = None) -> None:
        self.linear_formatter = linear_formatter or LinearResultFormatter()

    def format(self, result: RingPatternResult) -> str:
        params = result.params
        lines = [
            "FF-CA-01 RING PATTERN",
            "=" * WIDTH,
            f"Sets (multiplier): {params.multiplier}",
            f"Kerf:              {format_number(params.kerf_width)}",
            f"Total cuts:        {result.total_cuts}",
            f"Cuts per pattern:  {format_number(result.cuts_per_pattern)}",
            "",
            "GENERATED BLANKS",
            "-" * WIDTH,
            f"{'Item':<12} {'Nominal':<12} {'Cut length':<12} {'Qty':<6}",
        ]
        for item in result.generated_items:
            lines.append(
                f"{item.id:<12} {format_number(item.original_length):<12} "
                f"{format_number(item.length):<12} {item.quantity:<6}"
            )

        lines.extend(
            [
                "",
                "EFFICIENCY BY PATTERN",
                "-" * WIDTH,
                f"{'Pattern':<10} {'Cuts':<8} {'Requested':<12} {'Placed':<12} {'Efficiency'}",
            ]
        )
        for pattern, figures in result.efficiency_by_pattern.items():
            lines.append(
                f"{pattern:<10} {result.cuts_by_pattern.get(pattern, 0):<8} "
                f"{format_number(figures.total_length):<12} "
                f"{format_number(figures.used_length):<12} "
                f"{figures.efficiency:.1f}%"
            )

        lines.extend(["", self.linear_formatter.format(result.packing)])
        return "\n".join(lines)
