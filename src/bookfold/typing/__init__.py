"""Typing-centric domain modules."""

from bookfold.typing.enums import DepthMode
from bookfold.typing.models import (
    ColumnScan,
    PatternConfig,
    PatternRequest,
    PatternResult,
    PatternRun,
    Region,
    SheetMark,
    UnlockCredentials,
    WorkingGrid,
)
from bookfold.typing.protocol import ImageSource

__all__ = [
    "ColumnScan",
    "DepthMode",
    "ImageSource",
    "PatternConfig",
    "PatternRequest",
    "PatternResult",
    "PatternRun",
    "Region",
    "SheetMark",
    "UnlockCredentials",
    "WorkingGrid",
]
