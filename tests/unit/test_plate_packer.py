"""Tests for the 2D plate packer.

Tests cover:
- Scanline placement order and rotation fallback
- Free-rectangle best-fit scoring and orientation choice
- Unplaceable pieces
- Geometric invariants (bounds, overlap, free rectangles)
"""

from __future__ import annotations

import random

import pytest

from stockcut.domain.exceptions import InvalidInputError
from stockcut.domain.services.plate_packer import PlateCuttingOptimizer, optimize_2d
from stockcut.domain.value_objects import PlacementStrategy, PlateHeuristic, RectItemSpec

SHEET_W = 2440
SHEET_H = 1220


def positions(result) -> list[tuple[str, float, float, bool]]:
    return [
        (p.piece.instance_id, p.x, p.y, p.rotated)
        for plate in result.plates
        for p in plate.placements
    ]


@pytest.fixture
def random_items() -> list[RectItemSpec]:
    rng = random.Random(7)
    return [
        RectItemSpec(
            id=f"R{i}",
            width=rng.randint(100, 900),
            height=rng.randint(100, 600),
            quantity=rng.randint(1, 3),
            can_rotate=rng.random() < 0.7,
        )
        for i in range(15)
    ]


# =============================================================================
# Scanline
# =============================================================================


class TestScanline:
    """Tests for the simple (scanline) heuristic."""

    def test_single_piece_at_origin(self) -> None:
        result = optimize_2d([RectItemSpec(id="P", width=500, height=300)], SHEET_W, SHEET_H)

        assert result.total_plates == 1
        placement = result.plates[0].placements[0]
        assert (placement.x, placement.y, placement.rotated) == (0, 0, False)
        assert result.total_used_area == 150000
        assert result.overall_efficiency == pytest.approx(5.04, abs=0.01)
        assert result.total_waste_area == SHEET_W * SHEET_H - 150000

    def test_row_major_positions(self) -> None:
        """Pieces fill a row left to right before moving up."""
        result = optimize_2d(
            [RectItemSpec(id="P", width=500, height=300, quantity=3)], 1000, 1000
        )
        assert positions(result) == [
            ("P-1", 0, 0, False),
            ("P-2", 500, 0, False),
            ("P-3", 0, 300, False),
        ]

    def test_largest_area_first(self) -> None:
        result = optimize_2d(
            [
                RectItemSpec(id="small", width=100, height=100),
                RectItemSpec(id="big", width=400, height=400),
            ],
            1000,
            1000,
        )
        assert [p[0] for p in positions(result)] == ["big-1", "small-1"]
        assert positions(result)[1][1:3] == (400, 0)

    def test_rotation_used_when_needed(self) -> None:
        """A 500x300 piece fits a 400x600 plate only turned."""
        result = optimize_2d([RectItemSpec(id="P", width=500, height=300)], 400, 600)

        assert result.total_plates == 1
        placement = result.plates[0].placements[0]
        assert placement.rotated
        assert (placement.width, placement.height) == (300, 500)
        assert (placement.x, placement.y) == (0, 0)

    def test_rotation_only_as_fallback(self) -> None:
        result = optimize_2d([RectItemSpec(id="P", width=300, height=500)], 1000, 1000)
        assert not result.plates[0].placements[0].rotated

    def test_new_plate_when_full(self) -> None:
        result = optimize_2d(
            [RectItemSpec(id="Q", width=1220, height=1220, quantity=3)], SHEET_W, SHEET_H
        )
        assert [plate.id for plate in result.plates] == ["PLATE-1", "PLATE-2"]
        assert result.plates[0].efficiency == 100
        assert result.plates[1].efficiency == 50


# =============================================================================
# Free-rectangle best fit
# =============================================================================


class TestFreeRectBestFit:
    """Tests for the guillotine / maxrects heuristics."""

    def test_strategy_selection(self) -> None:
        assert PlateCuttingOptimizer("simple").strategy is PlacementStrategy.SCANLINE
        assert PlateCuttingOptimizer("guillotine").strategy is PlacementStrategy.FREE_RECT_BEST_FIT
        assert PlateCuttingOptimizer("maxrects").strategy is PlacementStrategy.FREE_RECT_BEST_FIT

    def test_second_piece_goes_to_tightest_rect(self) -> None:
        result = optimize_2d(
            [RectItemSpec(id="P", width=500, height=300, quantity=2)],
            SHEET_W,
            SHEET_H,
            "guillotine",
        )
        assert positions(result) == [("P-1", 0, 0, False), ("P-2", 0, 300, False)]

    def test_rotation_chosen_for_exact_fit(self) -> None:
        result = optimize_2d(
            [
                RectItemSpec(id="A", width=600, height=500),
                RectItemSpec(id="B", width=500, height=400),
            ],
            1000,
            500,
            PlateHeuristic.MAXRECTS,
        )
        assert positions(result) == [("A-1", 0, 0, False), ("B-1", 600, 0, True)]
        assert result.overall_efficiency == 100
        assert result.plates[0].free_rects == ()

    def test_guillotine_and_maxrects_place_identically(
        self, random_items: list[RectItemSpec]
    ) -> None:
        guillotine = optimize_2d(random_items, SHEET_W, SHEET_H, "guillotine")
        maxrects = optimize_2d(random_items, SHEET_W, SHEET_H, "maxrects")

        assert positions(guillotine) == positions(maxrects)
        assert guillotine.algorithm == "guillotine"
        assert maxrects.algorithm == "maxrects"


# =============================================================================
# Rejection and errors
# =============================================================================


class TestUnplaceable:
    """Pieces that fit no plate are reported, never packed."""

    @pytest.mark.parametrize("algorithm", ["simple", "guillotine"])
    def test_too_large_piece_unplaced(self, algorithm: str) -> None:
        result = optimize_2d(
            [RectItemSpec(id="L", width=3000, height=100)], SHEET_W, SHEET_H, algorithm
        )
        assert result.total_plates == 0
        assert result.unplaced_items == 1
        assert "does not fit" in result.unplaced[0].reason

    def test_rotation_disabled_piece_unplaced(self) -> None:
        result = optimize_2d(
            [RectItemSpec(id="P", width=500, height=300, can_rotate=False)], 400, 600
        )
        assert result.total_plates == 0
        assert result.unplaced[0].original_id == "P"

    @pytest.mark.parametrize("width,height", [(0, 100), (100, -1)])
    def test_non_positive_plate_rejected(self, width: float, height: float) -> None:
        with pytest.raises(InvalidInputError, match="Plate dimensions"):
            optimize_2d([RectItemSpec(id="P", width=10, height=10)], width, height)


# =============================================================================
# Invariants
# =============================================================================


class TestInvariants:
    """Geometric invariants over a mixed job."""

    @pytest.mark.parametrize("algorithm", ["simple", "guillotine", "maxrects"])
    def test_placements_within_bounds_and_disjoint(
        self, random_items: list[RectItemSpec], algorithm: str
    ) -> None:
        result = optimize_2d(random_items, SHEET_W, SHEET_H, algorithm)

        for plate in result.plates:
            boxes = [p.bounds for p in plate.placements]
            for box in boxes:
                assert box.x >= 0 and box.y >= 0
                assert box.right <= plate.width and box.top <= plate.height
            for i, a in enumerate(boxes):
                for b in boxes[i + 1 :]:
                    assert not a.intersects(b)
            assert plate.used_area == sum(p.width * p.height for p in plate.placements)

    @pytest.mark.parametrize("algorithm", ["simple", "guillotine"])
    def test_free_rects_are_free_and_maximal(
        self, random_items: list[RectItemSpec], algorithm: str
    ) -> None:
        result = optimize_2d(random_items, SHEET_W, SHEET_H, algorithm)

        for plate in result.plates:
            for free in plate.free_rects:
                assert all(not free.intersects(p.bounds) for p in plate.placements)
            for i, a in enumerate(plate.free_rects):
                for j, b in enumerate(plate.free_rects):
                    if i != j:
                        assert not b.contains(a)

    @pytest.mark.parametrize("algorithm", ["simple", "guillotine"])
    def test_every_unit_accounted_for(
        self, random_items: list[RectItemSpec], algorithm: str
    ) -> None:
        result = optimize_2d(random_items, SHEET_W, SHEET_H, algorithm)
        expected = sum(spec.quantity for spec in random_items)
        assert result.total_items + result.unplaced_items == expected
        assert result.unplaced_items == 0

    @pytest.mark.parametrize("algorithm", ["simple", "guillotine", "maxrects"])
    def test_repeat_runs_are_identical(
        self, random_items: list[RectItemSpec], algorithm: str
    ) -> None:
        first = optimize_2d(random_items, SHEET_W, SHEET_H, algorithm)
        second = optimize_2d(random_items, SHEET_W, SHEET_H, algorithm)

        assert first.plates == second.plates
        assert positions(first) == positions(second)
        assert first.overall_efficiency == second.overall_efficiency
