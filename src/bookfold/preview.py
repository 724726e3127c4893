"""Raster previews of the processed image and of the folded book."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PIL import Image, ImageDraw

from bookfold.typing.enums import DepthMode

if TYPE_CHECKING:
    from pathlib import Path

    from PIL.Image import Image as PILImage

    from bookfold.typing.models import PatternResult, SheetMark, WorkingGrid

PIXELS_PER_CM = 10
BACKGROUND_SHADE = 229
UNIFORM_FOLD_SHADE = 160
LIGHTEST_FOLD_SHADE = 200
DARKEST_FOLD_SHADE = 60


def render_processed_image(grid: WorkingGrid) -> PILImage:
    """Return the working grid as a grayscale image, one pixel per sample."""
    return Image.fromarray(grid.pixels.copy())


def fold_shade(sheet: SheetMark, result: PatternResult) -> int:
    """Return the gray level drawn for a sheet's folded strips.

    Deeper cuts draw darker. Uniform patterns use one fixed shade.
    """
    if result.mode == DepthMode.UNIFORM:
        return UNIFORM_FOLD_SHADE
    cfg = result.config
    ratio = (sheet.depth_mm - cfg.min_depth_mm) / (cfg.max_depth_mm - cfg.min_depth_mm)
    ratio = min(max(ratio, 0.0), 1.0)
    return round(LIGHTEST_FOLD_SHADE - ratio * (LIGHTEST_FOLD_SHADE - DARKEST_FOLD_SHADE))


def render_fold_preview(result: PatternResult) -> PILImage:
    """Render the projected-fold look of the finished book.

    One pixel column per sheet; the book height is drawn at 10 px per cm.
    The first, third, fifth... region of each sheet is folded and filled.

    Args:
        result (PatternResult): Generated pattern.

    Returns:
        PILImage: Grayscale preview.
    """
    height_px = max(1, round(result.book_height_cm * PIXELS_PER_CM))
    image = Image.new("L", (len(result.sheets), height_px), BACKGROUND_SHADE)
    draw = ImageDraw.Draw(image)
    for sheet in result.sheets:
        shade = fold_shade(sheet, result)
        for region in sheet.regions[::2]:
            top = round(region.start_cm * PIXELS_PER_CM)
            bottom = max(top, round(region.end_cm * PIXELS_PER_CM) - 1)
            draw.line([(sheet.index, top), (sheet.index, bottom)], fill=shade)
    return image


def save_preview(image: PILImage, output_path: Path) -> Path:
    """Save a preview as PNG, creating parent directories."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_path, format="PNG")
    return output_path
