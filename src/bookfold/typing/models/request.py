"""Pattern request model."""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from bookfold.exceptions import ValidationError
from bookfold.typing.enums import DepthMode


class PatternRequest(BaseModel):
    """Validated inputs for one pattern generation."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    image: bytes = Field(repr=False)
    book_height_cm: float = Field(gt=0)
    total_pages: int = Field(gt=0)
    padding_cm: float = Field(default=0.0, ge=0)
    mode: DepthMode = DepthMode.UNIFORM
    image_name: str = "image"

    @field_validator("image")
    @classmethod
    def _validate_image(cls, value: bytes) -> bytes:
        """Reject a missing image.

        Args:
            value (bytes): Raw image bytes.

        Raises:
            ValueError: If no bytes were supplied.

        Returns:
            bytes: Image bytes.
        """
        if not value:
            raise ValueError("An image is required")  # noqa: TRY003
        return value

    @field_validator("total_pages")
    @classmethod
    def _validate_total_pages(cls, value: int) -> int:
        """Ensure the page count maps onto whole sheets.

        Args:
            value (int): Total page count.

        Raises:
            ValueError: If the page count is odd.

        Returns:
            int: Page count.
        """
        if value % 2 != 0:
            raise ValueError("Total pages must be an even number")  # noqa: TRY003
        return value

    @model_validator(mode="after")
    def _validate_usable_height(self) -> Self:
        """Ensure padding leaves some height to cut into.

        Raises:
            ValueError: If twice the padding reaches the book height.

        Returns:
            Self: Validated request.
        """
        if self.usable_height_cm <= 0:
            raise ValueError("Padding cannot be greater than or equal to half the book height")  # noqa: TRY003
        return self

    @property
    def sheets(self) -> int:
        """Number of physical sheets (two pages each)."""
        return self.total_pages // 2

    @property
    def usable_height_cm(self) -> float:
        """Book height left once top and bottom padding are removed."""
        return self.book_height_cm - 2 * self.padding_cm

    @classmethod
    def build(cls, **values: Any) -> Self:
        """Create a request, translating validation failures into package errors.

        Args:
            **values: Field values.

        Raises:
            ValidationError: If any constraint fails; `field` names the first failing field.

        Returns:
            Self: Validated request.
        """
        try:
            return cls(**values)
        except PydanticValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or None
            message = str(first.get("msg", "Invalid pattern request")).removeprefix("Value error, ")
            raise ValidationError(message=message, field=field) from exc
