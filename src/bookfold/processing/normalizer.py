"""Grayscale/threshold normalization of source images into working grids."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image

from bookfold.exceptions import ImageDecodeError, InvalidDimensionsError
from bookfold.logging import get_logger
from bookfold.typing.enums import DepthMode
from bookfold.typing.models import PatternConfig, WorkingGrid

if TYPE_CHECKING:
    from PIL.Image import Image as PILImage

logger = get_logger(__name__)

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)

_DEFAULT_CONFIG = PatternConfig()


def decode_image(data: bytes) -> PILImage:
    """Decode raw bytes into an RGB image, flattening transparency onto white.

    Args:
        data (bytes): Encoded raster image (PNG, JPEG, GIF, BMP, WebP...).

    Raises:
        ImageDecodeError: If the bytes are not a decodable image.

    Returns:
        PILImage: Fully loaded RGB image.
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except Exception as exc:
        raise ImageDecodeError(message=f"Could not decode image: {exc}") from exc
    return _flatten_to_rgb(image)


def _flatten_to_rgb(image: PILImage) -> PILImage:
    """Return an RGB copy of `image`, compositing transparent pixels over white."""
    has_alpha = image.mode in {"RGBA", "LA", "PA"} or "transparency" in image.info
    if not has_alpha:
        return image.convert("RGB")
    rgba = image.convert("RGBA")
    background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
    return Image.alpha_composite(background, rgba).convert("RGB")


def luma(rgb: np.ndarray) -> np.ndarray:
    """Compute rounded luma for an `(..., 3)` RGB array.

    Args:
        rgb (np.ndarray): RGB samples in [0, 255].

    Returns:
        np.ndarray: `uint8` brightness, half values rounded up.
    """
    weighted = rgb.astype(np.float64) @ LUMA_WEIGHTS
    return np.clip(np.floor(weighted + 0.5), 0, 255).astype(np.uint8)


def binarize(brightness: np.ndarray, threshold: int = _DEFAULT_CONFIG.binarize_threshold) -> np.ndarray:
    """Map brightness to pure black (below `threshold`) or pure white."""
    return np.where(brightness < threshold, 0, 255).astype(np.uint8)


def normalize(
    image: bytes | PILImage,
    sheets: int,
    working_height: int,
    mode: DepthMode,
    *,
    threshold: int = _DEFAULT_CONFIG.binarize_threshold,
) -> WorkingGrid:
    """Resample an image to the working grid and reduce it to one brightness channel.

    The image is stretched to exactly `sheets` columns by `working_height`
    rows with bilinear resampling. Uniform mode binarizes the luma at
    `threshold`; variable mode keeps the grayscale value.

    Args:
        image (bytes | PILImage): Encoded bytes or an already decoded image.
        sheets (int): Number of columns, one per sheet.
        working_height (int): Number of rows.
        mode (DepthMode): Depth mode selecting binary or grayscale output.
        threshold (int): Binarization cutpoint for uniform mode.

    Raises:
        InvalidDimensionsError: If either dimension is below 1.
        ImageDecodeError: If the image cannot be decoded or resampled.

    Returns:
        WorkingGrid: Fresh grid; the caller's image is left untouched.
    """
    if sheets < 1 or working_height < 1:
        raise InvalidDimensionsError(sheets=sheets, working_height=working_height)

    rgb = decode_image(image) if isinstance(image, bytes | bytearray) else _from_pil(image)

    try:
        resized = rgb.resize((sheets, working_height), Image.Resampling.BILINEAR)
    except Exception as exc:
        raise ImageDecodeError(message=f"Could not resample image: {exc}") from exc

    brightness = luma(np.asarray(resized))
    if mode == DepthMode.UNIFORM:
        brightness = binarize(brightness, threshold)

    logger.debug(
        "Image normalized",
        extra={"source_size": rgb.size, "grid_shape": brightness.shape, "mode": mode.to_str()},
    )
    return WorkingGrid(pixels=brightness, mode=mode)


def _from_pil(image: PILImage) -> PILImage:
    """Flatten an already decoded image without mutating it."""
    try:
        return _flatten_to_rgb(image)
    except Exception as exc:
        raise ImageDecodeError(message=f"Could not convert image: {exc}") from exc
