"""Free-rectangle bookkeeping for plate packing.

A plate's free space is a list of maximal axis-aligned rectangles. Every
placement subtracts the placed box from each free rectangle it overlaps,
leaving up to four residual strips, and then drops any rectangle that is
contained in another one. The list is rebuilt on every update rather than
edited in place.

Residual strips of neighbouring directions may overlap each other; what
is guaranteed is that no free rectangle intersects a placed piece and no
free rectangle is redundant.
"""

from __future__ import annotations

from typing import Sequence

from stockcut.domain.value_objects import Rect


def split_free_rect(free: Rect, used: Rect) -> list[Rect]:
    """Subtract ``used`` from ``free``.

    Args:
        free: A free rectangle.
        used: The bounding box of a newly placed piece.

    Returns:
        ``[free]`` when the two do not overlap, otherwise the left, right,
        below and above residual strips that still have positive area.
    """
    if not free.intersects(used):
        return [free]

    residuals: list[Rect] = []

    if used.x > free.x:
        residuals.append(Rect(free.x, free.y, used.x - free.x, free.height))

    if used.right < free.right:
        residuals.append(Rect(used.right, free.y, free.right - used.right, free.height))

    if used.y > free.y:
        residuals.append(Rect(free.x, free.y, free.width, used.y - free.y))

    if used.top < free.top:
        residuals.append(Rect(free.x, used.top, free.width, free.top - used.top))

    return residuals


def prune_contained(rects: Sequence[Rect]) -> list[Rect]:
    """Drop rectangles that are contained in another rectangle.

    Of several identical rectangles only the first is kept. Order of the
    survivors is preserved.
    """
    kept: list[Rect] = []
    for i, rect in enumerate(rects):
        redundant = False
        for j, other in enumerate(rects):
            if i == j or not other.contains(rect):
                continue
            if other != rect or j < i:
                redundant = True
                break
        if not redundant:
            kept.append(rect)
    return kept


def update_free_rects(rects: Sequence[Rect], used: Rect) -> list[Rect]:
    """Return the free rectangles left after placing ``used``."""
    split: list[Rect] = []
    for free in rects:
        split.extend(split_free_rect(free, used))
    return prune_contained(split)


def best_free_rect(
    rects: Sequence[Rect], width: float, height: float
) -> tuple[Rect, float] | None:
    """Find the free rectangle that leaves the least area around a box.

    Args:
        rects: Candidate free rectangles, in order.
        width: Box width.
        height: Box height.

    Returns:
        ``(rect, score)`` where score is ``rect.area - width * height``,
        or None if no rectangle can hold the box. Ties keep the first
        rectangle.
    """
    best: tuple[Rect, float] | None = None
    area = width * height
    for rect in rects:
        if not rect.can_hold(width, height):
            continue
        score = rect.area - area
        if best is None or score < best[1]:
            best = (rect, score)
    return best
