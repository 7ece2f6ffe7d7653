"""Expansion of item specs into one record per physical unit."""

from __future__ import annotations

import logging
from typing import Iterable

from stockcut.domain.value_objects import (
    LinearItemSpec,
    LinearPiece,
    RectItemSpec,
    RectPiece,
)

logger = logging.getLogger(__name__)


def expand_linear_items(specs: Iterable[LinearItemSpec]) -> list[LinearPiece]:
    """Expand linear specs into individual units.

    Each spec with quantity N becomes N pieces numbered 1..N; a whole float
    quantity such as 2.0 counts as 2. Specs with a non-positive length or a
    quantity that is not a positive whole number are skipped; upstream
    validation is the caller's job.

    Args:
        specs: Requested pieces in input order.

    Returns:
        Units in input order.
    """
    pieces: list[LinearPiece] = []
    for spec in specs:
        if not spec.is_valid:
            logger.debug(
                "Skipping linear spec '%s' (length=%s, quantity=%s)",
                spec.id,
                spec.length,
                spec.quantity,
            )
            continue
        for index in range(1, int(spec.quantity) + 1):
            pieces.append(
                LinearPiece(
                    spec_id=spec.id,
                    instance_index=index,
                    length=spec.length,
                    original_length=spec.original_length,
                )
            )
    return pieces


def expand_rect_items(specs: Iterable[RectItemSpec]) -> list[RectPiece]:
    """Expand rectangular specs into individual units.

    Args:
        specs: Requested pieces in input order.

    Returns:
        Units in input order, invalid specs skipped.
    """
    pieces: list[RectPiece] = []
    for spec in specs:
        if not spec.is_valid:
            logger.debug(
                "Skipping rect spec '%s' (%sx%s, quantity=%s)",
                spec.id,
                spec.width,
                spec.height,
                spec.quantity,
            )
            continue
        original_width = spec.width if spec.nominal_width is None else spec.nominal_width
        original_height = (
            spec.height if spec.nominal_height is None else spec.nominal_height
        )
        for index in range(1, int(spec.quantity) + 1):
            pieces.append(
                RectPiece(
                    spec_id=spec.id,
                    instance_index=index,
                    width=spec.width,
                    height=spec.height,
                    can_rotate=spec.can_rotate,
                    original_width=original_width,
                    original_height=original_height,
                )
            )
    return pieces
