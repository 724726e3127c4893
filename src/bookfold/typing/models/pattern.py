"""Working grid and pattern result models."""

from __future__ import annotations

from typing import Self

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bookfold.typing.enums import DepthMode
from bookfold.typing.models.config import PatternConfig


class WorkingGrid(BaseModel):
    """Resampled brightness samples, one column per sheet.

    `pixels` is a read-only `uint8` array indexed `[row, column]`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    pixels: np.ndarray
    mode: DepthMode

    @field_validator("pixels")
    @classmethod
    def _validate_pixels(cls, value: np.ndarray) -> np.ndarray:
        """Ensure the grid is a non-empty 2D `uint8` array and freeze it.

        Args:
            value (np.ndarray): Brightness samples.

        Raises:
            ValueError: If the array shape or dtype is unusable.

        Returns:
            np.ndarray: Read-only samples.
        """
        if value.ndim != 2 or value.shape[0] < 1 or value.shape[1] < 1:  # noqa: PLR2004
            raise ValueError(f"Working grid must be a non-empty 2D array, got shape {value.shape}")  # noqa: TRY003
        if value.dtype != np.uint8:
            raise ValueError(f"Working grid must hold uint8 samples, got {value.dtype}")  # noqa: TRY003
        frozen = value.copy() if value.flags.writeable else value
        frozen.setflags(write=False)
        return frozen

    @property
    def width(self) -> int:
        """Number of columns (sheets)."""
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        """Number of sample rows."""
        return int(self.pixels.shape[0])

    def column(self, index: int) -> np.ndarray:
        """Return the samples of one column, top to bottom."""
        return self.pixels[:, index]


class Region(BaseModel):
    """Contiguous vertical span to cut, in centimeters from the top of the page."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    start_cm: float = Field(ge=0)
    end_cm: float

    @model_validator(mode="after")
    def _validate_span(self) -> Self:
        """Ensure the region is not empty.

        Raises:
            ValueError: If the region does not end after it starts.

        Returns:
            Self: Validated region.
        """
        if self.end_cm <= self.start_cm:
            raise ValueError(f"Region must end after it starts: {self.start_cm} >= {self.end_cm}")  # noqa: TRY003
        return self


class ColumnScan(BaseModel):
    """Regions detected in one working-grid column."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    regions: tuple[Region, ...]
    brightness: float = Field(ge=0, le=255)


class SheetMark(BaseModel):
    """Cut marks and depth for one sheet."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    index: int = Field(ge=0)
    regions: tuple[Region, ...]
    marks: tuple[float, ...]
    depth_mm: float = Field(gt=0)
    brightness: float = Field(ge=0, le=255)

    @property
    def page_range(self) -> tuple[int, int]:
        """The two page numbers printed on this sheet."""
        first = 2 * self.index + 1
        return first, first + 1

    @property
    def page_label(self) -> str:
        """Page range as printed in instructions, e.g. `3-4`."""
        first, second = self.page_range
        return f"{first}-{second}"


class PatternResult(BaseModel):
    """Ordered sheet marks produced by one request."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    book_height_cm: float = Field(gt=0)
    total_pages: int = Field(gt=0)
    padding_cm: float = Field(ge=0)
    mode: DepthMode
    config: PatternConfig
    source_name: str = "image"
    sheets: tuple[SheetMark, ...]

    @model_validator(mode="after")
    def _validate_sheet_count(self) -> Self:
        """Ensure there is exactly one sheet mark per sheet.

        Raises:
            ValueError: If the sheet count does not match the page count.

        Returns:
            Self: Validated result.
        """
        expected = self.total_pages // 2
        if len(self.sheets) != expected:
            raise ValueError(f"Expected {expected} sheets, got {len(self.sheets)}")  # noqa: TRY003
        return self

    @property
    def usable_height_cm(self) -> float:
        """Book height left once top and bottom padding are removed."""
        return self.book_height_cm - 2 * self.padding_cm


class PatternRun(BaseModel):
    """Pattern result together with the working grid it was derived from."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    result: PatternResult
    grid: WorkingGrid
