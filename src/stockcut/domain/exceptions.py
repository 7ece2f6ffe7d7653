"""Exceptions raised by the cutting optimization engine."""

from __future__ import annotations


class CuttingError(Exception):
    """Base class for all cutting optimization errors."""


class InvalidInputError(CuttingError, ValueError):
    """Raised when optimization inputs are invalid.

    Covers non-positive stock dimensions and parameter combinations that
    violate the documented validation rules. Raised before any packing
    attempt, so no bars or plates exist when it propagates.

    Attributes:
        errors: Individual validation messages.
    """

    def __init__(self, errors: list[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class EmptyInputError(InvalidInputError):
    """Raised when no valid items remain after filtering."""

    def __init__(self, message: str = "No valid items to optimize") -> None:
        super().__init__([message])


class UnplaceableItemError(CuttingError):
    """Raised when pieces can never fit on the stock.

    Attributes:
        item_ids: Spec ids of the offending pieces.
        message: Human-readable description.
    """

    def __init__(self, item_ids: list[str], message: str) -> None:
        self.item_ids = list(item_ids)
        self.message = message
        super().__init__(message)
