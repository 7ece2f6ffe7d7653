"""1D cutting stock optimization onto bars of fixed length.

Pieces are expanded into units, sorted longest first and assigned to bars
with one of three classic heuristics:

- First-Fit: the first open bar with enough room.
- Best-Fit: the open bar left with the smallest leftover.
- Worst-Fit: the open bar with the most room before placement.

Ties always go to the bar opened first. Units longer than the bar are
rejected before the placement loop, so a bar is only ever opened for a
unit that goes onto it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from stockcut.domain.entities import Bar
from stockcut.domain.exceptions import InvalidInputError
from stockcut.domain.expansion import expand_linear_items
from stockcut.domain.services.statistics import (
    LinearPackingResult,
    Stopwatch,
    aggregate_linear,
)
from stockcut.domain.value_objects import (
    LinearHeuristic,
    LinearItemSpec,
    LinearPiece,
    PlacedSegment,
    UnplacedPiece,
)

logger = logging.getLogger(__name__)


@dataclass
class _BarState:
    """Working state of a bar while the packer is filling it."""

    id: str
    capacity: float
    used_length: float = 0.0
    placements: list[PlacedSegment] = field(default_factory=list)

    @property
    def remaining_length(self) -> float:
        return self.capacity - self.used_length

    def can_place(self, piece: LinearPiece) -> bool:
        return self.remaining_length >= piece.length

    def place(self, piece: LinearPiece) -> PlacedSegment:
        placement = PlacedSegment(piece=piece, position=self.used_length, bar_id=self.id)
        self.placements.append(placement)
        self.used_length += piece.length
        return placement

    def freeze(self) -> Bar:
        return Bar(id=self.id, capacity=self.capacity, placements=tuple(self.placements))


class LinearCuttingOptimizer:
    """Packs linear pieces onto bars using a greedy decreasing heuristic.

    Attributes:
        heuristic: Bar selection heuristic.
    """

    def __init__(self, algorithm: str | LinearHeuristic = LinearHeuristic.FIRST_FIT) -> None:
        """Initialize the optimizer.

        Args:
            algorithm: ``first-fit``, ``best-fit`` or ``worst-fit``. Unknown
                names fall back to First-Fit.
        """
        self.heuristic = LinearHeuristic.from_name(algorithm)

    def optimize(
        self,
        items: Sequence[LinearItemSpec],
        material_length: float,
    ) -> LinearPackingResult:
        """Cut the requested pieces from as few bars as possible.

        Args:
            items: Requested pieces; invalid specs are skipped.
            material_length: Length of every bar.

        Returns:
            LinearPackingResult with bars, totals and any rejected units.

        Raises:
            InvalidInputError: If material_length is not positive.
        """
        if material_length <= 0:
            raise InvalidInputError("Material length must be greater than 0")

        stopwatch = Stopwatch()
        pieces = expand_linear_items(items)

        placeable: list[LinearPiece] = []
        unplaced: list[UnplacedPiece] = []
        for piece in pieces:
            if piece.length > material_length:
                unplaced.append(
                    UnplacedPiece(
                        piece=piece,
                        reason=(
                            f"Length {piece.length} exceeds material length "
                            f"{material_length}"
                        ),
                    )
                )
            else:
                placeable.append(piece)

        if unplaced:
            logger.warning(
                "%d piece(s) exceed material length %s and were not placed",
                len(unplaced),
                material_length,
            )

        bars = self._pack(self._sort_by_length(placeable), material_length)

        result = aggregate_linear(
            [bar.freeze() for bar in bars],
            material_length=material_length,
            algorithm=self.heuristic.value,
            execution_time=stopwatch.elapsed_ms,
            unplaced=unplaced,
        )
        logger.info(
            "%s: %d pieces on %d bars, %.1f%% efficiency",
            self.heuristic.value,
            result.total_items,
            result.total_bars,
            result.overall_efficiency,
        )
        return result

    def _sort_by_length(self, pieces: list[LinearPiece]) -> list[LinearPiece]:
        """Sort longest first. The sort is stable, so ties keep input order."""
        return sorted(pieces, key=lambda p: p.length, reverse=True)

    def _pack(self, pieces: list[LinearPiece], material_length: float) -> list[_BarState]:
        bars: list[_BarState] = []
        for piece in pieces:
            bar = self._select_bar(bars, piece)
            if bar is None:
                bar = _BarState(id=f"BAR-{len(bars) + 1}", capacity=material_length)
                bars.append(bar)
                logger.debug("Opened %s for '%s'", bar.id, piece.instance_id)
            bar.place(piece)
        return bars

    def _select_bar(self, bars: list[_BarState], piece: LinearPiece) -> _BarState | None:
        """Pick an open bar for a piece according to the heuristic.

        Returns:
            The chosen bar, or None if no open bar has room.
        """
        if self.heuristic is LinearHeuristic.BEST_FIT:
            return self._best_fit(bars, piece)
        if self.heuristic is LinearHeuristic.WORST_FIT:
            return self._worst_fit(bars, piece)
        return self._first_fit(bars, piece)

    def _first_fit(self, bars: list[_BarState], piece: LinearPiece) -> _BarState | None:
        for bar in bars:
            if bar.can_place(piece):
                return bar
        return None

    def _best_fit(self, bars: list[_BarState], piece: LinearPiece) -> _BarState | None:
        best: _BarState | None = None
        best_leftover = 0.0
        for bar in bars:
            if not bar.can_place(piece):
                continue
            leftover = bar.remaining_length - piece.length
            if best is None or leftover < best_leftover:
                best = bar
                best_leftover = leftover
        return best

    def _worst_fit(self, bars: list[_BarState], piece: LinearPiece) -> _BarState | None:
        worst: _BarState | None = None
        for bar in bars:
            if not bar.can_place(piece):
                continue
            if worst is None or bar.remaining_length > worst.remaining_length:
                worst = bar
        return worst


def optimize_1d(
    items: Sequence[LinearItemSpec],
    material_length: float,
    algorithm: str | LinearHeuristic = LinearHeuristic.FIRST_FIT,
) -> LinearPackingResult:
    """Optimize a linear cut list. See LinearCuttingOptimizer.optimize."""
    return LinearCuttingOptimizer(algorithm).optimize(items, material_length)
