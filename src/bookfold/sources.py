"""Image sources for the async pipeline entry point."""

from __future__ import annotations

import asyncio
from pathlib import Path


class BytesImageSource:
    """Image already held in memory."""

    def __init__(self, data: bytes, name: str = "image") -> None:
        self._data = data
        self.name = name

    async def read_bytes(self) -> bytes:
        """Return the wrapped bytes."""
        return self._data


class FileImageSource:
    """Image read from disk off the event loop."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.name = self.path.name

    async def read_bytes(self) -> bytes:
        """Read the file in a worker thread.

        Returns:
            bytes: File content.
        """
        return await asyncio.to_thread(self.path.read_bytes)
