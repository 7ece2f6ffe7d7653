"""2D cutting stock optimization onto rectangular plates.

Two placement engines are available:

- Scanline (heuristic name ``simple``): pieces sorted by area, each placed
  at the first collision-free integer position in row-major order, on the
  first open plate that has one. Rotation is tried only when the
  unrotated piece finds no position.
- Free-rectangle best-fit (heuristic names ``guillotine`` and
  ``maxrects``): pieces sorted by their longest side, each placed at the
  origin of the free rectangle that leaves the least spare area, across
  all open plates and both orientations.

Both engines maintain each plate's free rectangles on every placement.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import NamedTuple, Sequence

from stockcut.domain.entities import Plate, placement_fits
from stockcut.domain.exceptions import InvalidInputError
from stockcut.domain.expansion import expand_rect_items
from stockcut.domain.services.free_rectangles import best_free_rect, update_free_rects
from stockcut.domain.services.statistics import (
    PlatePackingResult,
    Stopwatch,
    aggregate_plates,
)
from stockcut.domain.value_objects import (
    PlacedRect,
    PlacementStrategy,
    PlateHeuristic,
    Rect,
    RectItemSpec,
    RectPiece,
    UnplacedPiece,
)

logger = logging.getLogger(__name__)


class _Fit(NamedTuple):
    """Candidate placement found by a strategy."""

    x: float
    y: float
    rotated: bool
    score: float = 0.0


@dataclass
class _PlateState:
    """Working state of a plate while the packer is filling it."""

    id: str
    width: float
    height: float
    placements: list[PlacedRect] = field(default_factory=list)
    free_rects: list[Rect] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.free_rects:
            self.free_rects = [Rect(0, 0, self.width, self.height)]

    def can_place(self, width: float, height: float, x: float, y: float) -> bool:
        return placement_fits(self.placements, self.width, self.height, width, height, x, y)

    def blocker_at(
        self, width: float, height: float, x: float, y: float
    ) -> PlacedRect | None:
        """First placement overlapping a box at (x, y), or None."""
        for placed in self.placements:
            if (
                x < placed.right
                and x + width > placed.x
                and y < placed.top
                and y + height > placed.y
            ):
                return placed
        return None

    def place(self, piece: RectPiece, x: float, y: float, rotated: bool) -> PlacedRect:
        width, height = piece.dimensions(rotated)
        if not self.can_place(width, height, x, y):
            raise ValueError(
                f"'{piece.instance_id}' cannot be placed at ({x}, {y}) on {self.id}"
            )
        placement = PlacedRect(piece=piece, x=x, y=y, plate_id=self.id, rotated=rotated)
        self.placements.append(placement)
        self.free_rects = update_free_rects(self.free_rects, placement.bounds)
        if rotated:
            logger.debug(
                "'%s' placed rotated at (%s, %s) on %s as %sx%s",
                piece.instance_id,
                x,
                y,
                self.id,
                width,
                height,
            )
        return placement

    def freeze(self) -> Plate:
        return Plate(
            id=self.id,
            width=self.width,
            height=self.height,
            placements=tuple(self.placements),
            free_rects=tuple(self.free_rects),
        )


class PlateCuttingOptimizer:
    """Packs rectangular pieces onto plates.

    Attributes:
        heuristic: Heuristic name selected by the caller.
        strategy: Placement engine behind the heuristic name.
    """

    def __init__(self, algorithm: str | PlateHeuristic = PlateHeuristic.SIMPLE) -> None:
        """Initialize the optimizer.

        Args:
            algorithm: ``simple``, ``guillotine`` or ``maxrects``. Unknown
                names fall back to ``simple``.
        """
        self.heuristic = PlateHeuristic.from_name(algorithm)
        self.strategy = self.heuristic.strategy

    def optimize(
        self,
        items: Sequence[RectItemSpec],
        plate_width: float,
        plate_height: float,
    ) -> PlatePackingResult:
        """Place the requested pieces on as few plates as possible.

        Args:
            items: Requested pieces; invalid specs are skipped.
            plate_width: Width of every plate.
            plate_height: Height of every plate.

        Returns:
            PlatePackingResult with plates, totals and unplaced units.

        Raises:
            InvalidInputError: If a plate dimension is not positive.
        """
        if plate_width <= 0 or plate_height <= 0:
            raise InvalidInputError("Plate dimensions must be greater than 0")

        stopwatch = Stopwatch()
        pieces = expand_rect_items(items)

        if self.strategy is PlacementStrategy.FREE_RECT_BEST_FIT:
            plates, unplaced = self._pack_best_fit(pieces, plate_width, plate_height)
        else:
            plates, unplaced = self._pack_scanline(pieces, plate_width, plate_height)

        if unplaced:
            logger.warning(
                "%d piece(s) do not fit a %sx%s plate and were not placed",
                len(unplaced),
                plate_width,
                plate_height,
            )

        result = aggregate_plates(
            [plate.freeze() for plate in plates],
            plate_width=plate_width,
            plate_height=plate_height,
            algorithm=self.heuristic.value,
            execution_time=stopwatch.elapsed_ms,
            unplaced=unplaced,
        )
        logger.info(
            "%s: %d pieces on %d plates, %.1f%% efficiency",
            self.heuristic.value,
            result.total_items,
            result.total_plates,
            result.overall_efficiency,
        )
        return result

    # -------------------------------------------------------------------------
    # Scanline
    # -------------------------------------------------------------------------

    def _pack_scanline(
        self, pieces: list[RectPiece], plate_width: float, plate_height: float
    ) -> tuple[list[_PlateState], list[UnplacedPiece]]:
        ordered = sorted(pieces, key=lambda p: p.area, reverse=True)
        plates: list[_PlateState] = []
        unplaced: list[UnplacedPiece] = []

        for piece in ordered:
            placed = False
            for plate in plates:
                fit = self._find_position_scanline(piece, plate)
                if fit is not None:
                    plate.place(piece, fit.x, fit.y, fit.rotated)
                    placed = True
                    break

            if placed:
                continue

            if not piece.fits_within(plate_width, plate_height):
                unplaced.append(self._too_large(piece, plate_width, plate_height))
                continue

            plate = self._open_plate(plates, plate_width, plate_height)
            fit = self._find_position_scanline(piece, plate)
            if fit is None:
                raise RuntimeError(f"'{piece.instance_id}' does not fit an empty plate")
            plate.place(piece, fit.x, fit.y, fit.rotated)

        return plates, unplaced

    def _find_position_scanline(self, piece: RectPiece, plate: _PlateState) -> _Fit | None:
        """Find the first free position, trying rotation only as a fallback."""
        for rotated in piece.orientations():
            width, height = piece.dimensions(rotated)
            position = self._scan(plate, width, height)
            if position is not None:
                return _Fit(position[0], position[1], rotated)
        return None

    def _scan(
        self, plate: _PlateState, width: float, height: float
    ) -> tuple[int, int] | None:
        """Row-major scan of integer positions for a width x height box.

        Returns the same position as testing every (x, y) in turn. When a
        box collides with a placement, every x up to that placement's right
        edge collides with it too, so the scan jumps there; when a whole row
        is blocked, rows below the lowest blocker top are blocked as well.
        """
        max_x = plate.width - width
        max_y = plate.height - height
        if max_x < 0 or max_y < 0:
            return None

        y = 0
        while y <= max_y:
            x = 0
            next_row = math.inf
            while x <= max_x:
                blocker = plate.blocker_at(width, height, x, y)
                if blocker is None:
                    return x, y
                next_row = min(next_row, blocker.top)
                x = max(x + 1, math.ceil(blocker.right))
            y = max(y + 1, math.ceil(next_row))
        return None

    # -------------------------------------------------------------------------
    # Free-rectangle best fit
    # -------------------------------------------------------------------------

    def _pack_best_fit(
        self, pieces: list[RectPiece], plate_width: float, plate_height: float
    ) -> tuple[list[_PlateState], list[UnplacedPiece]]:
        ordered = sorted(pieces, key=lambda p: p.max_dimension, reverse=True)
        plates: list[_PlateState] = []
        unplaced: list[UnplacedPiece] = []

        for piece in ordered:
            best: tuple[_PlateState, _Fit] | None = None
            for plate in plates:
                fit = self._best_fit_for_plate(piece, plate)
                if fit is not None and (best is None or fit.score < best[1].score):
                    best = (plate, fit)

            if best is not None:
                plate, fit = best
                plate.place(piece, fit.x, fit.y, fit.rotated)
                continue

            if not piece.fits_within(plate_width, plate_height):
                unplaced.append(self._too_large(piece, plate_width, plate_height))
                continue

            plate = self._open_plate(plates, plate_width, plate_height)
            fit = self._best_fit_for_plate(piece, plate)
            if fit is None:
                raise RuntimeError(f"'{piece.instance_id}' does not fit an empty plate")
            plate.place(piece, fit.x, fit.y, fit.rotated)

        return plates, unplaced

    def _best_fit_for_plate(self, piece: RectPiece, plate: _PlateState) -> _Fit | None:
        """Best free rectangle on one plate over the allowed orientations."""
        best: _Fit | None = None
        for rotated in piece.orientations():
            width, height = piece.dimensions(rotated)
            candidate = best_free_rect(plate.free_rects, width, height)
            if candidate is None:
                continue
            rect, score = candidate
            if best is None or score < best.score:
                best = _Fit(rect.x, rect.y, rotated, score)
        return best

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _open_plate(
        self, plates: list[_PlateState], plate_width: float, plate_height: float
    ) -> _PlateState:
        plate = _PlateState(
            id=f"PLATE-{len(plates) + 1}", width=plate_width, height=plate_height
        )
        plates.append(plate)
        logger.debug("Opened %s", plate.id)
        return plate

    def _too_large(
        self, piece: RectPiece, plate_width: float, plate_height: float
    ) -> UnplacedPiece:
        return UnplacedPiece(
            piece=piece,
            reason=(
                f"{piece.width}x{piece.height} does not fit a "
                f"{plate_width}x{plate_height} plate"
            ),
        )


def optimize_2d(
    items: Sequence[RectItemSpec],
    plate_width: float,
    plate_height: float,
    algorithm: str | PlateHeuristic = PlateHeuristic.SIMPLE,
) -> PlatePackingResult:
    """Optimize a rectangular cut list. See PlateCuttingOptimizer.optimize."""
    return PlateCuttingOptimizer(algorithm).optimize(items, plate_width, plate_height)
