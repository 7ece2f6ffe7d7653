"""FF-CA-01 ring cutting pattern.

FF-CA-01 cuts paired "small ring" and "big ring" blanks in two variants,
A and B. One set consumes four blanks of every ring size that is defined,
and the caller asks for a number of sets (the multiplier). Each blank is
lengthened by the saw kerf before packing.

The pattern is a producer of linear item specs; packing is delegated to
the 1D optimizer and this module only adds per-pattern statistics.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from stockcut.domain.entities import Bar
from stockcut.domain.exceptions import EmptyInputError, InvalidInputError
from stockcut.domain.services.linear_packer import LinearCuttingOptimizer
from stockcut.domain.services.statistics import LinearPackingResult, Stopwatch
from stockcut.domain.value_objects import LinearHeuristic, LinearItemSpec

logger = logging.getLogger(__name__)

# Bar length used by the FF-CA-01 production line.
DEFAULT_RING_MATERIAL_LENGTH: float = 6000.0

# Blanks of each ring size consumed by one set.
PIECES_PER_SET: int = 4

PATTERNS: tuple[str, ...] = ("A", "B")

MODE_NAME = "ff-ca-01"


@dataclass(frozen=True)
class RingPatternParams:
    """Parameters of an FF-CA-01 run.

    A dimension of 0 means the ring is not used.

    Attributes:
        small_ring_a: Small ring length for pattern A.
        big_ring_a: Big ring length for pattern A.
        small_ring_b: Small ring length for pattern B.
        big_ring_b: Big ring length for pattern B.
        multiplier: Number of sets to cut.
        kerf_width: Saw kerf added to every blank.
    """

    small_ring_a: float = 0.0
    big_ring_a: float = 0.0
    small_ring_b: float = 0.0
    big_ring_b: float = 0.0
    multiplier: int = 1
    kerf_width: float = 0.0

    def rings(self) -> list[tuple[str, str, float]]:
        """(pattern, size, dimension) for every ring slot, in output order."""
        return [
            ("A", "Small", self.small_ring_a),
            ("A", "Big", self.big_ring_a),
            ("B", "Small", self.small_ring_b),
            ("B", "Big", self.big_ring_b),
        ]

    def pattern_rings(self, pattern: str) -> tuple[float, float]:
        """(small, big) dimensions of a pattern."""
        if pattern == "A":
            return self.small_ring_a, self.big_ring_a
        if pattern == "B":
            return self.small_ring_b, self.big_ring_b
        raise ValueError(f"Unknown pattern '{pattern}'")


def validate_ring_params(params: RingPatternParams) -> list[str]:
    """Check FF-CA-01 parameters against the pattern rules.

    Args:
        params: Parameters to check.

    Returns:
        List of error messages, empty if the parameters are usable.
    """
    errors: list[str] = []

    if any(dimension < 0 for _, _, dimension in params.rings()):
        errors.append("Ring dimensions cannot be negative")

    complete = [
        pattern
        for pattern in PATTERNS
        if all(d > 0 for d in params.pattern_rings(pattern))
    ]
    if not complete:
        errors.append(
            "At least one pattern (A or B) must have both Small Ring and Big Ring dimensions"
        )

    for pattern in PATTERNS:
        small, big = params.pattern_rings(pattern)
        if (small > 0) != (big > 0):
            errors.append(
                f"Pattern {pattern} requires both Small Ring and Big Ring dimensions"
            )
        elif small > 0 and small >= big:
            errors.append(
                f"In Pattern {pattern}: Small Ring must be smaller than Big Ring"
            )

    if params.multiplier < 1:
        errors.append("Multiplier must be at least 1")
    elif not float(params.multiplier).is_integer():
        errors.append("Multiplier must be a whole number")

    if params.kerf_width < 0:
        errors.append("Kerf width cannot be negative")

    return errors


def generate_ffca01_items(params: RingPatternParams) -> list[LinearItemSpec]:
    """Expand FF-CA-01 parameters into linear item specs.

    Every non-zero ring becomes one spec with id ``{pattern}-{size}``,
    length ``dimension + kerf`` and quantity ``4 * multiplier`` (a fractional multiplier is truncated). The
    nominal (pre-kerf) length is kept for reporting.

    Example:
        >>> items = generate_ffca01_items(
        ...     RingPatternParams(small_ring_a=100, big_ring_a=200, kerf_width=2)
        ... )
        >>> [(i.id, i.length, i.quantity) for i in items]
        [('A-Small', 102, 4), ('A-Big', 202, 4)]
    """
    quantity = PIECES_PER_SET * int(params.multiplier)
    items: list[LinearItemSpec] = []
    for pattern, size, dimension in params.rings():
        if dimension <= 0:
            continue
        items.append(
            LinearItemSpec(
                id=f"{pattern}-{size}",
                length=dimension + params.kerf_width,
                quantity=quantity,
                nominal_length=dimension,
            )
        )
    return [item for item in items if item.is_valid]


def calculate_set_length(params: RingPatternParams) -> float:
    """Material consumed by one set, kerf included."""
    return sum(
        PIECES_PER_SET * (dimension + params.kerf_width)
        for _, _, dimension in params.rings()
        if dimension > 0
    )


@dataclass(frozen=True)
class BarEstimate:
    """Quick estimate of the bars a run needs, ignoring packing losses."""

    set_length: float
    total_length: float
    estimated_bars: int
    estimated_efficiency: float


def estimate_bars_required(
    params: RingPatternParams,
    material_length: float = DEFAULT_RING_MATERIAL_LENGTH,
) -> BarEstimate:
    """Lower-bound estimate: total length divided by bar length, rounded up.

    Raises:
        InvalidInputError: If material_length is not positive.
    """
    if material_length <= 0:
        raise InvalidInputError("Material length must be greater than 0")
    set_length = calculate_set_length(params)
    total_length = set_length * params.multiplier
    bars = math.ceil(total_length / material_length)
    efficiency = total_length / (bars * material_length) * 100 if bars else 0.0
    return BarEstimate(
        set_length=set_length,
        total_length=total_length,
        estimated_bars=bars,
        estimated_efficiency=efficiency,
    )


@dataclass(frozen=True)
class PatternEfficiency:
    """Material figures for one pattern variant.

    Attributes:
        total_length: Nominal length requested for the pattern.
        used_length: Nominal length of the pattern's placed blanks.
        efficiency: used_length / total_length in percent.
    """

    total_length: float
    used_length: float
    efficiency: float


def calculate_pattern_efficiency(
    bars: Sequence[Bar], items: Sequence[LinearItemSpec]
) -> dict[str, PatternEfficiency]:
    """Break material use down by pattern variant.

    Placed blanks are attributed to a pattern by the first character of
    their original spec id.
    """
    requested = {pattern: 0.0 for pattern in PATTERNS}
    used = {pattern: 0.0 for pattern in PATTERNS}

    for item in items:
        pattern = item.id[:1]
        if pattern in requested:
            requested[pattern] += item.original_length * item.quantity

    for bar in bars:
        for placement in bar.placements:
            pattern = placement.piece.original_id[:1]
            if pattern in used:
                used[pattern] += placement.piece.original_length

    return {
        pattern: PatternEfficiency(
            total_length=requested[pattern],
            used_length=used[pattern],
            efficiency=(
                used[pattern] / requested[pattern] * 100 if requested[pattern] > 0 else 0.0
            ),
        )
        for pattern in PATTERNS
    }


@dataclass(frozen=True)
class RingPatternResult:
    """Outcome of an FF-CA-01 run.

    Attributes:
        packing: The underlying 1D packing result.
        params: Parameters the run was made with.
        generated_items: Specs produced from the parameters.
        material_length: Bar length used.
        total_cuts: Number of blanks requested.
        cuts_by_pattern: Blanks requested per pattern.
        cuts_per_pattern: Average blanks per pattern variant.
        efficiency_by_pattern: Material breakdown per pattern.
        execution_time: Milliseconds for generation and packing together.
        mode: Pattern name.
    """

    packing: LinearPackingResult
    params: RingPatternParams
    generated_items: tuple[LinearItemSpec, ...]
    material_length: float
    total_cuts: int
    cuts_by_pattern: dict[str, int]
    cuts_per_pattern: float
    efficiency_by_pattern: dict[str, PatternEfficiency]
    execution_time: float
    mode: str = MODE_NAME

    @property
    def bars(self) -> tuple[Bar, ...]:
        return self.packing.bars

    @property
    def total_bars(self) -> int:
        return self.packing.total_bars

    @property
    def overall_efficiency(self) -> float:
        return self.packing.overall_efficiency

    @property
    def algorithm(self) -> str:
        return self.packing.algorithm


class RingPatternOptimizer:
    """Runs FF-CA-01 through the 1D optimizer."""

    def __init__(
        self, algorithm: str | LinearHeuristic = LinearHeuristic.FIRST_FIT
    ) -> None:
        self.packer = LinearCuttingOptimizer(algorithm)

    def optimize(
        self,
        params: RingPatternParams,
        material_length: float = DEFAULT_RING_MATERIAL_LENGTH,
    ) -> RingPatternResult:
        """Generate blanks for the parameters and pack them onto bars.

        Args:
            params: FF-CA-01 parameters.
            material_length: Bar length.

        Returns:
            RingPatternResult with packing and per-pattern statistics.

        Raises:
            InvalidInputError: If the parameters break the pattern rules.
            EmptyInputError: If no blanks are generated.
        """
        errors = validate_ring_params(params)
        if errors:
            raise InvalidInputError(errors)

        stopwatch = Stopwatch()
        items = generate_ffca01_items(params)
        if not items:
            raise EmptyInputError("No valid items generated from FF-CA-01 parameters")

        packing = self.packer.optimize(items, material_length)

        cuts_by_pattern = {
            pattern: sum(item.quantity for item in items if item.id.startswith(pattern))
            for pattern in PATTERNS
        }
        total_cuts = sum(item.quantity for item in items)

        logger.debug(
            "FF-CA-01 x%d: %d blanks (%s)", params.multiplier, total_cuts, cuts_by_pattern
        )

        return RingPatternResult(
            packing=packing,
            params=params,
            generated_items=tuple(items),
            material_length=material_length,
            total_cuts=total_cuts,
            cuts_by_pattern=cuts_by_pattern,
            cuts_per_pattern=total_cuts / len(PATTERNS),
            efficiency_by_pattern=calculate_pattern_efficiency(packing.bars, items),
            execution_time=stopwatch.elapsed_ms,
        )
