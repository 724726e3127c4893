"""Pytest marker auto-assignment by folder and shared image fixtures."""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from bookfold import logger

ImageFactory = Callable[..., bytes]
PixelEncoder = Callable[[np.ndarray], bytes]


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = Path(config.rootpath) / "tests" / marker
    target_dir = target_dir.resolve()

    for item in items:
        try:
            path = Path(str(item.fspath)).resolve()
        except Exception:
            logger.warning(
                f"Could not resolve path for test item {item.name!s}; skipping {marker!s} marker assignment",
            )
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")
    _mark_tests_by_directory(config, items, "end2end")


def _encode_png(pixels: np.ndarray) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def encode_png() -> PixelEncoder:
    """Encode an `(h, w, 3)` or `(h, w, 4)` uint8 array as PNG bytes."""
    return _encode_png


@pytest.fixture
def column_image() -> ImageFactory:
    """Build a PNG whose pixel columns each have one solid RGB color."""

    def _build(*colors: tuple[int, int, int], height: int = 10) -> bytes:
        pixels = np.zeros((height, len(colors), 3), dtype=np.uint8)
        for x, color in enumerate(colors):
            pixels[:, x] = color
        return _encode_png(pixels)

    return _build


@pytest.fixture
def half_black_png(column_image: ImageFactory) -> bytes:
    """Left column black, right column white."""
    return column_image((0, 0, 0), (255, 255, 255))
