"""Domain services: packers, pattern generator and result aggregation."""

from .free_rectangles import (
    best_free_rect,
    prune_contained,
    split_free_rect,
    update_free_rects,
)
from .linear_packer import LinearCuttingOptimizer, optimize_1d
from .plate_packer import PlateCuttingOptimizer, optimize_2d
from .ring_pattern import (
    DEFAULT_RING_MATERIAL_LENGTH,
    BarEstimate,
    PatternEfficiency,
    RingPatternOptimizer,
    RingPatternParams,
    RingPatternResult,
    calculate_pattern_efficiency,
    calculate_set_length,
    estimate_bars_required,
    generate_ffca01_items,
    validate_ring_params,
)
from .statistics import (
    LinearPackingResult,
    PlatePackingResult,
    aggregate_linear,
    aggregate_plates,
    efficiency_percentage,
)

__all__ = [
    "DEFAULT_RING_MATERIAL_LENGTH",
    "BarEstimate",
    "LinearCuttingOptimizer",
    "LinearPackingResult",
    "PatternEfficiency",
    "PlateCuttingOptimizer",
    "PlatePackingResult",
    "RingPatternOptimizer",
    "RingPatternParams",
    "RingPatternResult",
    "aggregate_linear",
    "aggregate_plates",
    "best_free_rect",
    "calculate_pattern_efficiency",
    "calculate_set_length",
    "efficiency_percentage",
    "estimate_bars_required",
    "generate_ffca01_items",
    "optimize_1d",
    "optimize_2d",
    "prune_contained",
    "split_free_rect",
    "update_free_rects",
    "validate_ring_params",
]
