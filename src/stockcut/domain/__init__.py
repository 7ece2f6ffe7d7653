"""Domain layer - cutting stock model and optimization engine."""

from .entities import Bar, Plate
from .exceptions import (
    CuttingError,
    EmptyInputError,
    InvalidInputError,
    UnplaceableItemError,
)
from .expansion import expand_linear_items, expand_rect_items
from .value_objects import (
    LinearHeuristic,
    LinearItemSpec,
    LinearPiece,
    PlacedRect,
    PlacedSegment,
    PlacementStrategy,
    PlateHeuristic,
    Rect,
    RectItemSpec,
    RectPiece,
    UnplacedPiece,
)

__all__ = [
    "Bar",
    "CuttingError",
    "EmptyInputError",
    "InvalidInputError",
    "LinearHeuristic",
    "LinearItemSpec",
    "LinearPiece",
    "PlacedRect",
    "PlacedSegment",
    "PlacementStrategy",
    "Plate",
    "PlateHeuristic",
    "Rect",
    "RectItemSpec",
    "RectPiece",
    "UnplaceableItemError",
    "UnplacedPiece",
    "expand_linear_items",
    "expand_rect_items",
]
