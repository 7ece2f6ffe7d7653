"""Stock entities produced by the packers.

Bars and plates are frozen snapshots built once a packing run finishes.
The packers keep their own mutable working state while placing pieces.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from stockcut.domain.value_objects import PlacedRect, PlacedSegment, Rect


def placement_fits(
    placements: Iterable[PlacedRect],
    plate_width: float,
    plate_height: float,
    width: float,
    height: float,
    x: float,
    y: float,
) -> bool:
    """Check whether a width x height box at (x, y) can be placed.

    The box must lie inside the plate and must not overlap the interior
    of any existing placement. Shared edges are allowed.
    """
    if x < 0 or y < 0 or x + width > plate_width or y + height > plate_height:
        return False
    for placed in placements:
        if (
            x < placed.right
            and x + width > placed.x
            and y < placed.top
            and y + height > placed.y
        ):
            return False
    return True


@dataclass(frozen=True)
class Bar:
    """A linear stock bar with its cuts.

    Attributes:
        id: Bar identifier (``BAR-1``, ``BAR-2``, ...).
        capacity: Bar length.
        placements: Pieces cut from this bar, in placement order.
    """

    id: str
    capacity: float
    placements: tuple[PlacedSegment, ...] = ()

    def __post_init__(self) -> None:
        if self.capacity <= 0:
            raise ValueError("Bar capacity must be positive")
        if self.used_length > self.capacity:
            raise ValueError(
                f"Bar '{self.id}' overfilled: {self.used_length} > {self.capacity}"
            )

    @property
    def used_length(self) -> float:
        return sum(p.length for p in self.placements)

    @property
    def remaining_length(self) -> float:
        return self.capacity - self.used_length

    @property
    def efficiency(self) -> float:
        """Used length as a percentage of capacity."""
        return self.used_length / self.capacity * 100

    @property
    def waste_percentage(self) -> float:
        """Remaining length as a percentage of capacity."""
        return self.remaining_length / self.capacity * 100

    @property
    def piece_count(self) -> int:
        return len(self.placements)

    def pieces_by_spec(self) -> dict[str, int]:
        """Count of units on this bar per original spec id."""
        return dict(Counter(p.piece.original_id for p in self.placements))


@dataclass(frozen=True)
class Plate:
    """A rectangular stock plate with its placed pieces.

    Attributes:
        id: Plate identifier (``PLATE-1``, ``PLATE-2``, ...).
        width: Plate width.
        height: Plate height.
        placements: Pieces placed on this plate, in placement order.
        free_rects: Free regions remaining after the last placement.
    """

    id: str
    width: float
    height: float
    placements: tuple[PlacedRect, ...] = ()
    free_rects: tuple[Rect, ...] = ()

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Plate dimensions must be positive")

    @property
    def total_area(self) -> float:
        return self.width * self.height

    @property
    def used_area(self) -> float:
        return sum(p.area for p in self.placements)

    @property
    def waste_area(self) -> float:
        return self.total_area - self.used_area

    @property
    def efficiency(self) -> float:
        return self.used_area / self.total_area * 100

    @property
    def waste_percentage(self) -> float:
        return self.waste_area / self.total_area * 100

    @property
    def piece_count(self) -> int:
        return len(self.placements)

    def can_place(self, width: float, height: float, x: float, y: float) -> bool:
        """Check whether a box would fit at (x, y) on this plate."""
        return placement_fits(
            self.placements, self.width, self.height, width, height, x, y
        )

    def pieces_by_spec(self) -> dict[str, int]:
        """Count of units on this plate per original spec id."""
        return dict(Counter(p.piece.original_id for p in self.placements))
