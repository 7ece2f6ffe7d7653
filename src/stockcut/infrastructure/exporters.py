"""JSON export of packing results.

Results are rendered with camelCase keys so that existing consumers of
the optimizer's data contract (report and diagram front ends) can read
them unchanged.
"""

from __future__ import annotations

import json
from typing import Any

from stockcut.domain.entities import Bar, Plate
from stockcut.domain.services import (
    BarEstimate,
    LinearPackingResult,
    PlatePackingResult,
    RingPatternResult,
)
from stockcut.domain.value_objects import PlacedRect, PlacedSegment, Rect, UnplacedPiece

ResultType = LinearPackingResult | PlatePackingResult | RingPatternResult


class ResultJsonExporter:
    """Exports packing results as JSON documents."""

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def export(self, result: ResultType | BarEstimate) -> str:
        """Export any packing result as a JSON string.

        Raises:
            TypeError: If the result type is not supported.
        """
        return json.dumps(self.to_dict(result), indent=self.indent)

    def to_dict(self, result: ResultType | BarEstimate) -> dict[str, Any]:
        if isinstance(result, BarEstimate):
            return self.estimate_to_dict(result)
        if isinstance(result, RingPatternResult):
            return self.ring_result_to_dict(result)
        if isinstance(result, LinearPackingResult):
            return self.linear_result_to_dict(result)
        if isinstance(result, PlatePackingResult):
            return self.plate_result_to_dict(result)
        raise TypeError(f"Cannot export {type(result).__name__}")

    # -------------------------------------------------------------------------
    # 1D
    # -------------------------------------------------------------------------

    def linear_result_to_dict(self, result: LinearPackingResult) -> dict[str, Any]:
        return {
            "bars": [self._bar(bar) for bar in result.bars],
            "materialLength": result.material_length,
            "totalBars": result.total_bars,
            "totalItems": result.total_items,
            "totalUsedLength": result.total_used_length,
            "totalWaste": result.total_waste,
            "wastePercentage": result.waste_percentage,
            "overallEfficiency": result.overall_efficiency,
            "executionTime": result.execution_time,
            "algorithm": result.algorithm,
            "unplacedItems": result.unplaced_items,
            "unplaced": [self._unplaced(record) for record in result.unplaced],
        }

    def _bar(self, bar: Bar) -> dict[str, Any]:
        return {
            "id": bar.id,
            "maxLength": bar.capacity,
            "usedLength": bar.used_length,
            "remainingLength": bar.remaining_length,
            "efficiency": bar.efficiency,
            "wastePercentage": bar.waste_percentage,
            "items": [self._segment(placement) for placement in bar.placements],
        }

    def _segment(self, placement: PlacedSegment) -> dict[str, Any]:
        piece = placement.piece
        return {
            "id": piece.instance_id,
            "instanceId": piece.instance_id,
            "originalId": piece.original_id,
            "length": piece.length,
            "originalLength": piece.original_length,
            "position": placement.position,
            "barId": placement.bar_id,
        }

    # -------------------------------------------------------------------------
    # 2D
    # -------------------------------------------------------------------------

    def plate_result_to_dict(self, result: PlatePackingResult) -> dict[str, Any]:
        return {
            "plates": [self._plate(plate) for plate in result.plates],
            "plateWidth": result.plate_width,
            "plateHeight": result.plate_height,
            "totalPlates": result.total_plates,
            "totalItems": result.total_items,
            "totalUsedArea": result.total_used_area,
            "totalWasteArea": result.total_waste_area,
            "overallEfficiency": result.overall_efficiency,
            "unplacedItems": result.unplaced_items,
            "unplaced": [self._unplaced(record) for record in result.unplaced],
            "executionTime": result.execution_time,
            "algorithm": result.algorithm,
        }

    def _plate(self, plate: Plate) -> dict[str, Any]:
        return {
            "id": plate.id,
            "width": plate.width,
            "height": plate.height,
            "totalArea": plate.total_area,
            "usedArea": plate.used_area,
            "wasteArea": plate.waste_area,
            "efficiency": plate.efficiency,
            "wastePercentage": plate.waste_percentage,
            "items": [self._rect_placement(placement) for placement in plate.placements],
            "freeRects": [self._rect(rect) for rect in plate.free_rects],
        }

    def _rect_placement(self, placement: PlacedRect) -> dict[str, Any]:
        piece = placement.piece
        return {
            "id": piece.instance_id,
            "instanceId": piece.instance_id,
            "originalId": piece.original_id,
            "x": placement.x,
            "y": placement.y,
            "width": placement.width,
            "height": placement.height,
            "originalWidth": piece.original_width,
            "originalHeight": piece.original_height,
            "rotated": placement.rotated,
            "canRotate": piece.can_rotate,
            "plateId": placement.plate_id,
        }

    def _rect(self, rect: Rect) -> dict[str, float]:
        return {"x": rect.x, "y": rect.y, "width": rect.width, "height": rect.height}

    # -------------------------------------------------------------------------
    # FF-CA-01
    # -------------------------------------------------------------------------

    def ring_result_to_dict(self, result: RingPatternResult) -> dict[str, Any]:
        """The 1D contract plus the pattern parameters and statistics."""
        data = self.linear_result_to_dict(result.packing)
        params = result.params
        data["executionTime"] = result.execution_time
        data.update(
            {
                "mode": result.mode,
                "materialLength": result.material_length,
                "customParams": {
                    "smallRingA": params.small_ring_a,
                    "bigRingA": params.big_ring_a,
                    "smallRingB": params.small_ring_b,
                    "bigRingB": params.big_ring_b,
                    "multiplier": params.multiplier,
                    "kerfWidth": params.kerf_width,
                },
                "generatedItems": [
                    {
                        "id": item.id,
                        "length": item.length,
                        "originalLength": item.original_length,
                        "quantity": item.quantity,
                    }
                    for item in result.generated_items
                ],
                "customStats": {
                    "totalCuts": result.total_cuts,
                    "totalPatterns": dict(result.cuts_by_pattern),
                    "cutsPerPattern": result.cuts_per_pattern,
                    "efficiencyByPattern": {
                        pattern: {
                            "totalLength": figures.total_length,
                            "usedLength": figures.used_length,
                            "efficiency": figures.efficiency,
                        }
                        for pattern, figures in result.efficiency_by_pattern.items()
                    },
                },
            }
        )
        return data

    def estimate_to_dict(self, estimate: BarEstimate) -> dict[str, Any]:
        return {
            "setLength": estimate.set_length,
            "totalLength": estimate.total_length,
            "estimatedBars": estimate.estimated_bars,
            "estimatedEfficiency": estimate.estimated_efficiency,
        }

    def _unplaced(self, record: UnplacedPiece) -> dict[str, Any]:
        return {
            "id": record.instance_id,
            "originalId": record.original_id,
            "reason": record.reason,
        }
