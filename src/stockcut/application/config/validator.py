"""Validation structures and job file checks.

Pydantic enforces the structure of a job file. The checks here relate
fields to each other: pieces that can never fit their stock, ring
parameters that break the FF-CA-01 rules, and advisories such as
duplicate item ids or an unusually wide kerf.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Sequence

from stockcut.application.config.adapter import ring_config_to_params
from stockcut.application.config.schema import (
    JobConfiguration,
    LinearJobConfig,
    PlateJobConfig,
    RingJobConfig,
)
from stockcut.domain.services.ring_pattern import validate_ring_params

# Kerf above this width (mm) is flagged as a probable unit mix-up
MAX_TYPICAL_KERF: float = 10.0


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "linear.items[0].length")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the job file has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another ValidationResult into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def _check_duplicate_ids(section: str, ids: Sequence[str]) -> ValidationResult:
    result = ValidationResult()
    for item_id, count in Counter(ids).items():
        if count > 1:
            result.add_warning(
                path=f"{section}.items",
                message=f"Item id '{item_id}' is used {count} times",
                suggestion="Give each item a unique id so reports can tell them apart",
            )
    return result


def _check_kerf(path: str, kerf: float) -> ValidationResult:
    result = ValidationResult()
    if kerf > MAX_TYPICAL_KERF:
        result.add_warning(
            path=path,
            message=f"Kerf of {kerf:g} is wider than a typical saw blade",
            suggestion=f"Check units; kerf is usually below {MAX_TYPICAL_KERF:g} mm",
        )
    return result


def check_linear_job(linear: LinearJobConfig) -> ValidationResult:
    """Check a 1D job against its bar length.

    Args:
        linear: The linear section of a job file

    Returns:
        ValidationResult with an error for every item longer than the bar
    """
    result = ValidationResult()

    for i, item in enumerate(linear.items):
        packed = item.length + linear.kerf
        if packed > linear.material_length:
            result.add_error(
                path=f"linear.items[{i}].length",
                message=(
                    f"Item '{item.id}' ({item.length:g} + {linear.kerf:g} kerf) "
                    f"exceeds material length of {linear.material_length:g}"
                ),
                value=item.length,
            )

    result.merge(_check_duplicate_ids("linear", [item.id for item in linear.items]))
    result.merge(_check_kerf("linear.kerf", linear.kerf))
    return result


def check_plate_job(plate: PlateJobConfig) -> ValidationResult:
    """Check a 2D job against its plate size.

    Items that fit the plate in no allowed orientation are errors; items
    that only fit when turned are reported as warnings.
    """
    result = ValidationResult()
    plate_w, plate_h = plate.plate_width, plate.plate_height

    for i, item in enumerate(plate.items):
        w = item.width + plate.kerf
        h = item.height + plate.kerf
        fits_upright = w <= plate_w and h <= plate_h
        fits_turned = h <= plate_w and w <= plate_h

        if fits_upright:
            continue
        if fits_turned and item.can_rotate:
            result.add_warning(
                path=f"plate.items[{i}]",
                message=f"Item '{item.id}' only fits the plate when rotated",
            )
        elif fits_turned:
            result.add_error(
                path=f"plate.items[{i}].can_rotate",
                message=(
                    f"Item '{item.id}' ({w:g}x{h:g}) only fits the "
                    f"{plate_w:g}x{plate_h:g} plate rotated, but rotation is disabled"
                ),
                value=item.can_rotate,
            )
        else:
            result.add_error(
                path=f"plate.items[{i}]",
                message=(
                    f"Item '{item.id}' ({w:g}x{h:g}) is too large for the "
                    f"{plate_w:g}x{plate_h:g} plate"
                ),
            )

    result.merge(_check_duplicate_ids("plate", [item.id for item in plate.items]))
    result.merge(_check_kerf("plate.kerf", plate.kerf))
    return result


def check_ring_job(rings: RingJobConfig) -> ValidationResult:
    """Check FF-CA-01 parameters against the pattern rules and bar length."""
    result = ValidationResult()

    for message in validate_ring_params(ring_config_to_params(rings)):
        result.add_error(path="rings", message=message)

    for name in ("small_ring_a", "big_ring_a", "small_ring_b", "big_ring_b"):
        dimension = getattr(rings, name)
        if dimension > 0 and dimension + rings.kerf > rings.material_length:
            result.add_error(
                path=f"rings.{name}",
                message=(
                    f"Ring blank {dimension:g} + {rings.kerf:g} kerf exceeds "
                    f"material length of {rings.material_length:g}"
                ),
                value=dimension,
            )

    result.merge(_check_kerf("rings.kerf", rings.kerf))
    return result


def validate_config(config: JobConfiguration) -> ValidationResult:
    """Run every semantic check on a job file.

    Args:
        config: A JobConfiguration instance (already validated by pydantic)

    Returns:
        ValidationResult containing any errors or warnings
    """
    result = ValidationResult()
    if config.linear is not None:
        result.merge(check_linear_job(config.linear))
    if config.plate is not None:
        result.merge(check_plate_job(config.plate))
    if config.rings is not None:
        result.merge(check_ring_job(config.rings))
    return result
