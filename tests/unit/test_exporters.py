"""Tests for JSON export of packing results."""

from __future__ import annotations

import json

import pytest

from stockcut.domain.services import (
    RingPatternOptimizer,
    RingPatternParams,
    estimate_bars_required,
    optimize_1d,
    optimize_2d,
)
from stockcut.domain.value_objects import LinearItemSpec, RectItemSpec
from stockcut.infrastructure import ResultJsonExporter


@pytest.fixture
def exporter() -> ResultJsonExporter:
    return ResultJsonExporter()


class TestLinearExport:
    """Tests for the 1D JSON document."""

    def test_top_level_keys(self, exporter: ResultJsonExporter) -> None:
        result = optimize_1d([LinearItemSpec(id="A", length=1000, quantity=2)], 6000)
        data = exporter.to_dict(result)

        assert data["totalBars"] == 1
        assert data["totalItems"] == 2
        assert data["materialLength"] == 6000
        assert data["algorithm"] == "first-fit"
        assert data["unplacedItems"] == 0
        assert set(data) >= {"totalUsedLength", "totalWaste", "wastePercentage", "executionTime"}

    def test_bar_and_item_records(self, exporter: ResultJsonExporter) -> None:
        result = optimize_1d(
            [LinearItemSpec(id="A", length=1003, quantity=2, nominal_length=1000)], 6000
        )
        bar = exporter.to_dict(result)["bars"][0]

        assert bar["id"] == "BAR-1"
        assert bar["maxLength"] == 6000
        assert bar["usedLength"] == 2006
        assert bar["remainingLength"] == 3994
        assert bar["items"][1] == {
            "id": "A-2",
            "instanceId": "A-2",
            "originalId": "A",
            "length": 1003,
            "originalLength": 1000,
            "position": 1003,
            "barId": "BAR-1",
        }

    def test_unplaced_records(self, exporter: ResultJsonExporter) -> None:
        result = optimize_1d([LinearItemSpec(id="L", length=7000)], 6000)
        (record,) = exporter.to_dict(result)["unplaced"]
        assert record["id"] == "L-1"
        assert record["originalId"] == "L"
        assert "exceeds" in record["reason"]


class TestPlateExport:
    """Tests for the 2D JSON document."""

    def test_plate_records(self, exporter: ResultJsonExporter) -> None:
        result = optimize_2d([RectItemSpec(id="P", width=500, height=300)], 400, 600)
        data = exporter.to_dict(result)

        assert data["totalPlates"] == 1
        assert (data["plateWidth"], data["plateHeight"]) == (400, 600)
        plate = data["plates"][0]
        assert plate["totalArea"] == 240000
        assert plate["usedArea"] == 150000
        item = plate["items"][0]
        assert item["rotated"] is True
        assert (item["width"], item["height"]) == (300, 500)
        assert (item["originalWidth"], item["originalHeight"]) == (500, 300)
        assert item["plateId"] == "PLATE-1"
        assert all(set(r) == {"x", "y", "width", "height"} for r in plate["freeRects"])


class TestRingExport:
    """Tests for the FF-CA-01 JSON document."""

    def test_custom_sections(self, exporter: ResultJsonExporter) -> None:
        result = RingPatternOptimizer().optimize(
            RingPatternParams(small_ring_a=100, big_ring_a=200, kerf_width=2)
        )
        data = exporter.to_dict(result)

        assert data["mode"] == "ff-ca-01"
        assert data["totalBars"] == 1
        assert data["customParams"]["kerfWidth"] == 2
        assert data["customParams"]["smallRingB"] == 0
        assert [item["id"] for item in data["generatedItems"]] == ["A-Small", "A-Big"]
        stats = data["customStats"]
        assert stats["totalCuts"] == 8
        assert stats["totalPatterns"] == {"A": 8, "B": 0}
        assert stats["efficiencyByPattern"]["A"]["totalLength"] == 1200


class TestEstimateExport:
    def test_estimate_keys(self, exporter: ResultJsonExporter) -> None:
        estimate = estimate_bars_required(
            RingPatternParams(small_ring_a=100, big_ring_a=200, kerf_width=2)
        )
        assert exporter.to_dict(estimate) == {
            "setLength": 1216,
            "totalLength": 1216,
            "estimatedBars": 1,
            "estimatedEfficiency": pytest.approx(1216 / 6000 * 100),
        }


class TestExport:
    def test_export_is_json(self, exporter: ResultJsonExporter) -> None:
        result = optimize_1d([LinearItemSpec(id="A", length=10)], 100)
        assert json.loads(exporter.export(result))["totalItems"] == 1

    def test_unsupported_type(self, exporter: ResultJsonExporter) -> None:
        with pytest.raises(TypeError):
            exporter.to_dict("not a result")  # type: ignore[arg-type]
