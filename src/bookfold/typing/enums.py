"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class DepthMode(_EnumMixin):
    """Cut depth strategy.

    `UNIFORM` binarizes the image and cuts every sheet to the same depth.
    `VARIABLE` keeps grayscale and derives one depth per sheet from the
    column's average brightness.
    """

    UNIFORM = "uniform"
    VARIABLE = "variable"

    @property
    def label(self) -> str:
        """Return the human-readable mode label used in instruction headers."""
        return f"{self.value} depth"
