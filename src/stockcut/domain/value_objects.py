"""Value objects for linear and rectangular cutting.

Item specs describe what the caller asks for and are deliberately lenient:
invalid specs are skipped during expansion rather than rejected on
construction. Pieces, rectangles and placements are the engine's own
records and validate their invariants.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class LinearHeuristic(str, Enum):
    """Bar selection heuristics for the 1D packer."""

    FIRST_FIT = "first-fit"
    BEST_FIT = "best-fit"
    WORST_FIT = "worst-fit"

    @classmethod
    def from_name(cls, name: str | LinearHeuristic) -> LinearHeuristic:
        """Resolve a heuristic name, falling back to First-Fit.

        Args:
            name: Heuristic name in any case, or an enum member.

        Returns:
            Matching heuristic, FIRST_FIT for unknown names.
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            logger.warning("Unknown 1D algorithm '%s', using first-fit", name)
            return cls.FIRST_FIT


class PlacementStrategy(str, Enum):
    """The two distinct 2D placement engines."""

    SCANLINE = "scanline"
    FREE_RECT_BEST_FIT = "free-rect-best-fit"


class PlateHeuristic(str, Enum):
    """Heuristic names accepted by the 2D packer.

    These are display aliases: GUILLOTINE and MAXRECTS both run the
    free-rectangle best-fit engine, SIMPLE runs the scanline engine.
    """

    SIMPLE = "simple"
    GUILLOTINE = "guillotine"
    MAXRECTS = "maxrects"

    @property
    def strategy(self) -> PlacementStrategy:
        """Placement engine behind this heuristic name."""
        if self is PlateHeuristic.SIMPLE:
            return PlacementStrategy.SCANLINE
        return PlacementStrategy.FREE_RECT_BEST_FIT

    @classmethod
    def from_name(cls, name: str | PlateHeuristic) -> PlateHeuristic:
        """Resolve a heuristic name, falling back to SIMPLE."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            logger.warning("Unknown 2D algorithm '%s', using simple", name)
            return cls.SIMPLE


@dataclass(frozen=True)
class LinearItemSpec:
    """A requested linear piece.

    Attributes:
        id: Caller-facing identifier, used to group units after expansion.
        length: Length to pack (kerf already included, if any).
        quantity: Number of physical units required.
        nominal_length: Length before kerf allowance, if it differs.
    """

    id: str
    length: float
    quantity: int = 1
    nominal_length: float | None = None

    @property
    def original_length(self) -> float:
        """Nominal length, or the packed length when none was given."""
        return self.length if self.nominal_length is None else self.nominal_length

    @property
    def is_valid(self) -> bool:
        """True if this spec contributes at least one unit."""
        return (
            self.length > 0
            and self.quantity >= 1
            and float(self.quantity).is_integer()
        )


@dataclass(frozen=True)
class RectItemSpec:
    """A requested rectangular piece.

    Attributes:
        id: Caller-facing identifier.
        width: Width to pack (kerf already included, if any).
        height: Height to pack (kerf already included, if any).
        quantity: Number of physical units required.
        can_rotate: Whether a 90 degree rotation is allowed.
        nominal_width: Width before kerf allowance, if it differs.
        nominal_height: Height before kerf allowance, if it differs.
    """

    id: str
    width: float
    height: float
    quantity: int = 1
    can_rotate: bool = True
    nominal_width: float | None = None
    nominal_height: float | None = None

    @property
    def is_valid(self) -> bool:
        """True if this spec contributes at least one unit."""
        return (
            self.width > 0
            and self.height > 0
            and self.quantity >= 1
            and float(self.quantity).is_integer()
        )


@dataclass(frozen=True)
class LinearPiece:
    """One physical linear unit produced by expansion.

    Identity is the explicit (spec_id, instance_index) pair.
    """

    spec_id: str
    instance_index: int
    length: float
    original_length: float

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError("Piece length must be positive")
        if self.instance_index < 1:
            raise ValueError("Instance index must be at least 1")

    @property
    def instance_id(self) -> str:
        """Stable unit id, e.g. ``A-3``."""
        return f"{self.spec_id}-{self.instance_index}"

    @property
    def original_id(self) -> str:
        """Id of the spec this unit was expanded from."""
        return self.spec_id


@dataclass(frozen=True)
class RectPiece:
    """One physical rectangular unit produced by expansion."""

    spec_id: str
    instance_index: int
    width: float
    height: float
    can_rotate: bool
    original_width: float
    original_height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Piece dimensions must be positive")
        if self.instance_index < 1:
            raise ValueError("Instance index must be at least 1")

    @property
    def instance_id(self) -> str:
        return f"{self.spec_id}-{self.instance_index}"

    @property
    def original_id(self) -> str:
        return self.spec_id

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def max_dimension(self) -> float:
        return max(self.width, self.height)

    def orientations(self) -> tuple[bool, ...]:
        """Rotation flags to try, unrotated first."""
        return (False, True) if self.can_rotate else (False,)

    def dimensions(self, rotated: bool) -> tuple[float, float]:
        """(width, height) in the given orientation."""
        if rotated:
            return self.height, self.width
        return self.width, self.height

    def fits_within(self, width: float, height: float) -> bool:
        """Check whether any allowed orientation fits a width x height area."""
        for rotated in self.orientations():
            w, h = self.dimensions(rotated)
            if w <= width and h <= height:
                return True
        return False


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, origin at the plate's bottom-left corner."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Rectangle origin must be non-negative")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Rectangle dimensions must be positive")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def intersects(self, other: Rect) -> bool:
        """True if the interiors overlap. Touching edges do not count."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.top
            and other.y < self.top
        )

    def contains(self, other: Rect) -> bool:
        """True if ``other`` lies entirely inside this rectangle."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.top <= self.top
        )

    def can_hold(self, width: float, height: float) -> bool:
        return width <= self.width and height <= self.height


@dataclass(frozen=True)
class PlacedSegment:
    """A linear piece placed on a bar.

    Attributes:
        piece: The unit being cut.
        position: Offset from the bar start (bar's used length before placement).
        bar_id: Id of the owning bar.
    """

    piece: LinearPiece
    position: float
    bar_id: str

    def __post_init__(self) -> None:
        if self.position < 0:
            raise ValueError("Position must be non-negative")

    @property
    def length(self) -> float:
        return self.piece.length

    @property
    def end(self) -> float:
        return self.position + self.piece.length


@dataclass(frozen=True)
class PlacedRect:
    """A rectangular piece placed on a plate.

    ``width`` and ``height`` are the post-rotation dimensions; rotation is
    applied exactly once when ``rotated`` is set.
    """

    piece: RectPiece
    x: float
    y: float
    plate_id: str
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def width(self) -> float:
        return self.piece.height if self.rotated else self.piece.width

    @property
    def height(self) -> float:
        return self.piece.width if self.rotated else self.piece.height

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.piece.area

    @property
    def bounds(self) -> Rect:
        """Bounding box of the placed piece."""
        return Rect(self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class UnplacedPiece:
    """A unit that could not be placed on any stock.

    Attributes:
        piece: The rejected unit.
        reason: Why it was rejected.
    """

    piece: LinearPiece | RectPiece
    reason: str

    @property
    def instance_id(self) -> str:
        return self.piece.instance_id

    @property
    def original_id(self) -> str:
        return self.piece.original_id
