"""Tests for application DTOs and optimize commands."""

from __future__ import annotations

import pytest

from stockcut.application import (
    LinearJobInput,
    OptimizeLinearCommand,
    OptimizePlateCommand,
    OptimizeRingPatternCommand,
    PlateJobInput,
    RingJobInput,
)
from stockcut.domain import (
    EmptyInputError,
    InvalidInputError,
    LinearItemSpec,
    RectItemSpec,
    UnplaceableItemError,
)
from stockcut.domain.services import RingPatternParams


# =============================================================================
# DTOs
# =============================================================================


class TestLinearJobInput:
    """Tests for LinearJobInput."""

    def test_valid_job(self) -> None:
        job = LinearJobInput(items=[LinearItemSpec(id="A", length=1000)], material_length=6000)
        assert job.validate() == []

    def test_job_level_errors(self) -> None:
        errors = LinearJobInput(material_length=0, kerf=-1).validate()
        assert "Material length must be greater than 0" in errors
        assert "Kerf width cannot be negative" in errors

    def test_kerf_added_and_nominal_kept(self) -> None:
        job = LinearJobInput(
            items=[LinearItemSpec(id="A", length=1000, quantity=2)],
            material_length=6000,
            kerf=3,
        )
        (item,) = job.packing_items()
        assert item.length == 1003
        assert item.original_length == 1000
        assert item.quantity == 2

    def test_invalid_items_dropped(self) -> None:
        job = LinearJobInput(
            items=[LinearItemSpec(id="Z", length=0), LinearItemSpec(id="A", length=10)],
            material_length=6000,
        )
        assert [i.id for i in job.packing_items()] == ["A"]


class TestPlateJobInput:
    """Tests for PlateJobInput."""

    def test_kerf_added_to_both_sides(self) -> None:
        job = PlateJobInput(
            items=[RectItemSpec(id="P", width=500, height=300, can_rotate=False)],
            plate_width=2440,
            plate_height=1220,
            kerf=4,
        )
        (item,) = job.packing_items()
        assert (item.width, item.height) == (504, 304)
        assert (item.nominal_width, item.nominal_height) == (500, 300)
        assert item.can_rotate is False

    def test_plate_dimensions_checked(self) -> None:
        assert PlateJobInput(plate_width=0, plate_height=100).validate() == [
            "Plate dimensions must be greater than 0"
        ]


class TestRingJobInput:
    def test_includes_pattern_rules(self) -> None:
        errors = RingJobInput(params=RingPatternParams(), material_length=-1).validate()
        assert any("At least one pattern" in e for e in errors)
        assert "Material length must be greater than 0" in errors


# =============================================================================
# Commands
# =============================================================================


class TestOptimizeLinearCommand:
    """Tests for OptimizeLinearCommand."""

    def test_kerf_applied_before_packing(self) -> None:
        job = LinearJobInput(
            items=[
                LinearItemSpec(id="A", length=1000, quantity=2),
                LinearItemSpec(id="B", length=1500),
            ],
            material_length=6000,
            kerf=5,
        )
        result = OptimizeLinearCommand().execute(job)

        assert result.total_bars == 1
        assert result.total_used_length == 3515
        placement = result.bars[0].placements[0]
        assert placement.piece.instance_id == "B-1"
        assert placement.piece.original_length == 1500

    def test_oversized_item_raises(self) -> None:
        job = LinearJobInput(
            items=[LinearItemSpec(id="L", length=7000)], material_length=6000
        )
        with pytest.raises(UnplaceableItemError) as excinfo:
            OptimizeLinearCommand().execute(job)

        assert excinfo.value.item_ids == ["L"]
        assert "exceeds material length of 6000" in str(excinfo.value)

    def test_kerf_can_make_item_oversized(self) -> None:
        job = LinearJobInput(
            items=[LinearItemSpec(id="E", length=6000, quantity=2)],
            material_length=6000,
            kerf=1,
        )
        with pytest.raises(UnplaceableItemError) as excinfo:
            OptimizeLinearCommand().execute(job)
        assert excinfo.value.item_ids == ["E"]

    def test_no_valid_items(self) -> None:
        job = LinearJobInput(items=[LinearItemSpec(id="Z", length=0)], material_length=6000)
        with pytest.raises(EmptyInputError):
            OptimizeLinearCommand().execute(job)

    def test_invalid_job(self) -> None:
        job = LinearJobInput(items=[LinearItemSpec(id="A", length=10)], material_length=0)
        with pytest.raises(InvalidInputError, match="Material length"):
            OptimizeLinearCommand().execute(job)


class TestOptimizePlateCommand:
    """Tests for OptimizePlateCommand."""

    def test_packs_with_kerf(self) -> None:
        job = PlateJobInput(
            items=[RectItemSpec(id="P", width=500, height=300)],
            plate_width=2440,
            plate_height=1220,
            kerf=2,
        )
        result = OptimizePlateCommand().execute(job)
        assert result.total_used_area == 502 * 302

    def test_unplaced_items_recorded_not_raised(self) -> None:
        job = PlateJobInput(
            items=[
                RectItemSpec(id="P", width=500, height=300),
                RectItemSpec(id="L", width=5000, height=300),
            ],
            plate_width=2440,
            plate_height=1220,
        )
        result = OptimizePlateCommand().execute(job)
        assert result.total_items == 1
        assert result.unplaced_items == 1

    def test_empty_job(self) -> None:
        job = PlateJobInput(items=[], plate_width=2440, plate_height=1220)
        with pytest.raises(EmptyInputError):
            OptimizePlateCommand().execute(job)


class TestOptimizeRingPatternCommand:
    """Tests for OptimizeRingPatternCommand."""

    def test_runs_pattern(self) -> None:
        job = RingJobInput(
            params=RingPatternParams(small_ring_a=100, big_ring_a=200, kerf_width=2)
        )
        result = OptimizeRingPatternCommand().execute(job)
        assert result.total_cuts == 8
        assert result.total_bars == 1

    def test_ring_longer_than_bar(self) -> None:
        job = RingJobInput(
            params=RingPatternParams(small_ring_a=100, big_ring_a=2000),
            material_length=1000,
        )
        with pytest.raises(UnplaceableItemError) as excinfo:
            OptimizeRingPatternCommand().execute(job)
        assert excinfo.value.item_ids == ["A-Big"]

    def test_invalid_params(self) -> None:
        job = RingJobInput(params=RingPatternParams(small_ring_a=100))
        with pytest.raises(InvalidInputError):
            OptimizeRingPatternCommand().execute(job)


class TestLogging:
    def test_dropped_items_logged(self, debug_logs) -> None:
        job = LinearJobInput(
            items=[LinearItemSpec(id="Z", length=0), LinearItemSpec(id="A", length=10)],
            material_length=6000,
        )
        OptimizeLinearCommand().execute(job)
        assert "Dropping invalid item 'Z'" in debug_logs.text

    def test_unknown_algorithm_warns(self, debug_logs) -> None:
        job = LinearJobInput(
            items=[LinearItemSpec(id="A", length=10)],
            material_length=6000,
            algorithm="next-fit",
        )
        result = OptimizeLinearCommand().execute(job)
        assert result.algorithm == "first-fit"
        assert "Unknown 1D algorithm 'next-fit'" in debug_logs.text
