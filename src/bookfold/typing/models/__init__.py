"""Core domain model exports."""

from bookfold.typing.models.access import UnlockCredentials
from bookfold.typing.models.config import PatternConfig
from bookfold.typing.models.pattern import (
    ColumnScan,
    PatternResult,
    PatternRun,
    Region,
    SheetMark,
    WorkingGrid,
)
from bookfold.typing.models.request import PatternRequest

__all__ = [
    "ColumnScan",
    "PatternConfig",
    "PatternRequest",
    "PatternResult",
    "PatternRun",
    "Region",
    "SheetMark",
    "UnlockCredentials",
    "WorkingGrid",
]
