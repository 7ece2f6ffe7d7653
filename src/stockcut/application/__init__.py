"""Application layer - use cases and orchestration."""

from .commands import (
    OptimizeLinearCommand,
    OptimizePlateCommand,
    OptimizeRingPatternCommand,
)
from .dtos import LinearJobInput, PlateJobInput, RingJobInput

__all__ = [
    "LinearJobInput",
    "OptimizeLinearCommand",
    "OptimizePlateCommand",
    "OptimizeRingPatternCommand",
    "PlateJobInput",
    "RingJobInput",
]
