"""Result aggregation for packing runs.

The aggregators are pure reductions over the bars or plates a packer
produced. Given the same stock list they return the same figures; only
``execution_time`` depends on the wall clock.
"""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from stockcut.domain.entities import Bar, Plate
from stockcut.domain.value_objects import UnplacedPiece


class Stopwatch:
    """Measures elapsed wall-clock time in milliseconds."""

    def __init__(self) -> None:
        self._start = time.perf_counter()

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._start) * 1000.0


def efficiency_percentage(used: float, allocated: float) -> float:
    """Used material as a percentage of allocated material, 0 when nothing was allocated."""
    if allocated <= 0:
        return 0.0
    return used / allocated * 100


@dataclass(frozen=True)
class LinearPackingResult:
    """Summary of a 1D packing run.

    Attributes:
        bars: Bars in creation order.
        material_length: Capacity of every bar.
        total_bars: Number of bars used.
        total_items: Units placed across all bars.
        total_used_length: Sum of used lengths.
        total_waste: Sum of remaining lengths.
        overall_efficiency: Used length over allocated length, in percent.
        execution_time: Wall-clock time of the optimize call in milliseconds.
        algorithm: Heuristic name used for the run.
        unplaced: Units rejected because they exceed the bar length.
    """

    bars: tuple[Bar, ...]
    material_length: float
    total_bars: int
    total_items: int
    total_used_length: float
    total_waste: float
    overall_efficiency: float
    execution_time: float
    algorithm: str
    unplaced: tuple[UnplacedPiece, ...] = ()

    @property
    def unplaced_items(self) -> int:
        return len(self.unplaced)

    @property
    def waste_percentage(self) -> float:
        """Total waste as a percentage of allocated length."""
        return efficiency_percentage(
            self.total_waste, self.total_bars * self.material_length
        )

    def pieces_by_spec(self) -> dict[str, int]:
        """Placed unit count per original spec id, for display."""
        counts: Counter[str] = Counter()
        for bar in self.bars:
            counts.update(bar.pieces_by_spec())
        return dict(counts)


@dataclass(frozen=True)
class PlatePackingResult:
    """Summary of a 2D packing run.

    Attributes:
        plates: Plates in creation order.
        plate_width: Width of every plate.
        plate_height: Height of every plate.
        total_plates: Number of plates used.
        total_items: Units placed across all plates.
        total_used_area: Sum of placed piece areas.
        total_waste_area: Allocated area not covered by pieces.
        overall_efficiency: Used area over allocated area, in percent.
        execution_time: Wall-clock time of the optimize call in milliseconds.
        algorithm: Heuristic name used for the run.
        unplaced: Units that fit an empty plate in no allowed orientation.
    """

    plates: tuple[Plate, ...]
    plate_width: float
    plate_height: float
    total_plates: int
    total_items: int
    total_used_area: float
    total_waste_area: float
    overall_efficiency: float
    execution_time: float
    algorithm: str
    unplaced: tuple[UnplacedPiece, ...] = ()

    @property
    def unplaced_items(self) -> int:
        return len(self.unplaced)

    def pieces_by_spec(self) -> dict[str, int]:
        counts: Counter[str] = Counter()
        for plate in self.plates:
            counts.update(plate.pieces_by_spec())
        return dict(counts)


def aggregate_linear(
    bars: Sequence[Bar],
    material_length: float,
    algorithm: str,
    execution_time: float,
    unplaced: Sequence[UnplacedPiece] = (),
) -> LinearPackingResult:
    """Reduce a list of bars into a LinearPackingResult.

    Args:
        bars: Bars produced by the packer.
        material_length: Capacity of each bar.
        algorithm: Heuristic name to record.
        execution_time: Elapsed milliseconds to record.
        unplaced: Units rejected before packing.

    Returns:
        Aggregated, read-only result.
    """
    total_used = sum(bar.used_length for bar in bars)
    total_waste = sum(bar.remaining_length for bar in bars)
    return LinearPackingResult(
        bars=tuple(bars),
        material_length=material_length,
        total_bars=len(bars),
        total_items=sum(bar.piece_count for bar in bars),
        total_used_length=total_used,
        total_waste=total_waste,
        overall_efficiency=efficiency_percentage(
            total_used, len(bars) * material_length
        ),
        execution_time=execution_time,
        algorithm=algorithm,
        unplaced=tuple(unplaced),
    )


def aggregate_plates(
    plates: Sequence[Plate],
    plate_width: float,
    plate_height: float,
    algorithm: str,
    execution_time: float,
    unplaced: Sequence[UnplacedPiece] = (),
) -> PlatePackingResult:
    """Reduce a list of plates into a PlatePackingResult."""
    total_area = sum(plate.total_area for plate in plates)
    total_used = sum(plate.used_area for plate in plates)
    return PlatePackingResult(
        plates=tuple(plates),
        plate_width=plate_width,
        plate_height=plate_height,
        total_plates=len(plates),
        total_items=sum(plate.piece_count for plate in plates),
        total_used_area=total_used,
        total_waste_area=total_area - total_used,
        overall_efficiency=efficiency_percentage(total_used, total_area),
        execution_time=execution_time,
        algorithm=algorithm,
        unplaced=tuple(unplaced),
    )
