"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class AsyncExecutionError(PackageError):
    """Raised when an async operation fails in compatibility runner."""

    result: BaseException
    message: str = "Async operation failed"

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.result}"


@dataclass(frozen=True)
class ValidationError(PackageError):
    """Raised when a pattern request has an invalid shape."""

    message: str
    field: str | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.field}: {self.message}" if self.field else self.message


@dataclass(frozen=True)
class ImageDecodeError(PackageError):
    """Raised when image bytes cannot be decoded or resampled."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class InvalidDimensionsError(PackageError):
    """Raised when the working grid dimensions are not usable."""

    sheets: int
    working_height: int

    def __str__(self) -> str:
        """Return error message payload."""
        return (
            f"Working grid needs at least one column and one row, "
            f"got sheets={self.sheets}, working_height={self.working_height}"
        )


@dataclass(frozen=True)
class InternalInvariantError(PackageError):
    """Raised when pipeline output breaks an internal invariant."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class PaymentRequiredError(PackageError):
    """Raised when gated instructions are requested without a plausible unlock."""

    message: str = "Cutting instructions are locked"

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message
