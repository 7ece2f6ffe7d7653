"""Infrastructure layer - report formatters and exporters."""

from .exporters import ResultJsonExporter
from .formatters import (
    LinearResultFormatter,
    PlateResultFormatter,
    RingPatternReportFormatter,
)

__all__ = [
    "LinearResultFormatter",
    "PlateResultFormatter",
    "ResultJsonExporter",
    "RingPatternReportFormatter",
]
