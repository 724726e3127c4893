"""Image source interface."""

from __future__ import annotations

from typing import Protocol


class ImageSource(Protocol):
    """Supplier of raw image bytes consumed by the pattern pipeline."""

    name: str

    async def read_bytes(self) -> bytes:
        """Return the encoded image.

        Returns:
            bytes: Raw, still encoded, image bytes.
        """
