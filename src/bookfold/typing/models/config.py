"""Pattern tuning constants."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PatternConfig(BaseModel):
    """Named constants driving normalization, scanning and depth mapping.

    Defaults follow the dual-mode variant of the generator: a fixed
    1000-row working grid, binarization at luma 128, a variable-depth cut
    threshold of 180 and a 3-40 mm depth range bent by a 1.8 gamma.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    working_height: int = Field(default=1000, ge=1)
    binarize_threshold: int = Field(default=128, ge=0, le=255)
    cut_threshold: int = Field(default=180, ge=0, le=255)
    min_depth_mm: float = Field(default=3.0, gt=0)
    max_depth_mm: float = Field(default=40.0, gt=0)
    depth_gamma: float = Field(default=1.8, gt=0)
    uniform_depth_mm: float = Field(default=20.0, gt=0)

    @model_validator(mode="after")
    def _validate_depth_range(self) -> PatternConfig:
        """Reject an empty or inverted depth range.

        Raises:
            ValueError: If `min_depth_mm` is not below `max_depth_mm`.

        Returns:
            PatternConfig: Validated config.
        """
        if self.min_depth_mm >= self.max_depth_mm:
            raise ValueError("min_depth_mm must be lower than max_depth_mm")  # noqa: TRY003
        return self
