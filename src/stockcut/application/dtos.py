"""Data Transfer Objects for the application layer."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from stockcut.domain import LinearItemSpec, RectItemSpec
from stockcut.domain.services import DEFAULT_RING_MATERIAL_LENGTH, RingPatternParams
from stockcut.domain.services.ring_pattern import validate_ring_params

logger = logging.getLogger(__name__)


@dataclass
class LinearJobInput:
    """Input DTO for a 1D cutting job.

    Item lengths are nominal; the kerf is added when the job is handed to
    the packer.
    """

    items: list[LinearItemSpec] = field(default_factory=list)
    material_length: float = 0.0
    algorithm: str = "first-fit"
    kerf: float = 0.0

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if self.material_length <= 0:
            errors.append("Material length must be greater than 0")
        if self.kerf < 0:
            errors.append("Kerf width cannot be negative")
        return errors

    def packing_items(self) -> list[LinearItemSpec]:
        """Valid items with the kerf added to their length.

        Items with a non-positive length or quantity are dropped.
        """
        items: list[LinearItemSpec] = []
        for item in self.items:
            if not item.is_valid:
                logger.debug("Dropping invalid item '%s'", item.id)
                continue
            items.append(
                LinearItemSpec(
                    id=item.id,
                    length=item.length + self.kerf,
                    quantity=item.quantity,
                    nominal_length=item.length,
                )
            )
        return items


@dataclass
class PlateJobInput:
    """Input DTO for a 2D cutting job.

    The kerf is added to both dimensions of every item.
    """

    items: list[RectItemSpec] = field(default_factory=list)
    plate_width: float = 0.0
    plate_height: float = 0.0
    algorithm: str = "simple"
    kerf: float = 0.0

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if self.plate_width <= 0 or self.plate_height <= 0:
            errors.append("Plate dimensions must be greater than 0")
        if self.kerf < 0:
            errors.append("Kerf width cannot be negative")
        return errors

    def packing_items(self) -> list[RectItemSpec]:
        """Valid items with the kerf added to width and height."""
        items: list[RectItemSpec] = []
        for item in self.items:
            if not item.is_valid:
                logger.debug("Dropping invalid item '%s'", item.id)
                continue
            items.append(
                RectItemSpec(
                    id=item.id,
                    width=item.width + self.kerf,
                    height=item.height + self.kerf,
                    quantity=item.quantity,
                    can_rotate=item.can_rotate,
                    nominal_width=item.width,
                    nominal_height=item.height,
                )
            )
        return items


@dataclass
class RingJobInput:
    """Input DTO for an FF-CA-01 ring job."""

    params: RingPatternParams = field(default_factory=RingPatternParams)
    material_length: float = DEFAULT_RING_MATERIAL_LENGTH
    algorithm: str = "first-fit"

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors = validate_ring_params(self.params)
        if self.material_length <= 0:
            errors.append("Material length must be greater than 0")
        return errors
