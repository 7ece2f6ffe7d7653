"""Application commands (use cases) for cutting optimization."""

from __future__ import annotations

import logging

from stockcut.domain import EmptyInputError, InvalidInputError, UnplaceableItemError
from stockcut.domain.services import (
    LinearCuttingOptimizer,
    LinearPackingResult,
    PlateCuttingOptimizer,
    PlatePackingResult,
    RingPatternOptimizer,
    RingPatternResult,
)
from stockcut.domain.value_objects import UnplacedPiece

from .dtos import LinearJobInput, PlateJobInput, RingJobInput

logger = logging.getLogger(__name__)


def _oversized_error(
    unplaced: tuple[UnplacedPiece, ...], kerf: float, material_length: float
) -> UnplaceableItemError:
    """Build one error covering every spec with a unit longer than the bar."""
    seen: dict[str, UnplacedPiece] = {}
    for record in unplaced:
        seen.setdefault(record.original_id, record)

    messages = []
    for spec_id, record in seen.items():
        piece = record.piece
        messages.append(
            f'Item "{spec_id}" ({piece.original_length:g} + {kerf:g} kerf) '
            f"exceeds material length of {material_length:g}"
        )
    return UnplaceableItemError(list(seen), "; ".join(messages))


class OptimizeLinearCommand:
    """Command to optimize a 1D cut list.

    Unlike the packer, which reports oversized units and carries on, this
    command treats them as a caller error.
    """

    def execute(self, job: LinearJobInput) -> LinearPackingResult:
        """Execute the linear optimization.

        Args:
            job: Items, bar length, heuristic and kerf.

        Returns:
            LinearPackingResult for the kerf-adjusted items.

        Raises:
            InvalidInputError: If the job parameters are invalid.
            EmptyInputError: If no valid item remains.
            UnplaceableItemError: If an item plus kerf is longer than the bar.
        """
        errors = job.validate()
        if errors:
            raise InvalidInputError(errors)

        items = job.packing_items()
        if not items:
            raise EmptyInputError("Please add at least one item to optimize")

        result = LinearCuttingOptimizer(job.algorithm).optimize(
            items, job.material_length
        )
        if result.unplaced:
            raise _oversized_error(result.unplaced, job.kerf, job.material_length)
        return result


class OptimizePlateCommand:
    """Command to optimize a 2D cut list.

    Pieces that fit no plate are left in ``result.unplaced``.
    """

    def execute(self, job: PlateJobInput) -> PlatePackingResult:
        """Execute the plate optimization.

        Raises:
            InvalidInputError: If the job parameters are invalid.
            EmptyInputError: If no valid item remains.
        """
        errors = job.validate()
        if errors:
            raise InvalidInputError(errors)

        items = job.packing_items()
        if not items:
            raise EmptyInputError("Please add at least one item to optimize")

        return PlateCuttingOptimizer(job.algorithm).optimize(
            items, job.plate_width, job.plate_height
        )


class OptimizeRingPatternCommand:
    """Command to run the FF-CA-01 ring pattern."""

    def execute(self, job: RingJobInput) -> RingPatternResult:
        """Execute the ring pattern optimization.

        Raises:
            InvalidInputError: If the parameters break the pattern rules.
            UnplaceableItemError: If a ring blank is longer than the bar.
        """
        errors = job.validate()
        if errors:
            raise InvalidInputError(errors)

        result = RingPatternOptimizer(job.algorithm).optimize(
            job.params, job.material_length
        )
        if result.packing.unplaced:
            raise _oversized_error(
                result.packing.unplaced, job.params.kerf_width, job.material_length
            )
        logger.debug("FF-CA-01 run used %d bars", result.total_bars)
        return result
