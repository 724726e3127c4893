"""Column scanning: brightness transitions to physical cut regions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from bookfold.exceptions import InternalInvariantError
from bookfold.logging import get_logger
from bookfold.typing.enums import DepthMode
from bookfold.typing.models import ColumnScan, PatternConfig, Region

if TYPE_CHECKING:
    from bookfold.typing.models import WorkingGrid

logger = get_logger(__name__)

_DEFAULT_CONFIG = PatternConfig()


def cut_mask(samples: np.ndarray, mode: DepthMode, config: PatternConfig | None = None) -> np.ndarray:
    """Return which samples fall inside a cut.

    Uniform grids are already binarized, so a sample is cut when it is pure
    black. Variable grids cut every sample darker than `cut_threshold`.

    Args:
        samples (np.ndarray): Brightness samples.
        mode (DepthMode): Depth mode the samples were normalized for.
        config (PatternConfig | None): Threshold constants.

    Returns:
        np.ndarray: Boolean mask of the same shape.
    """
    cfg = config or _DEFAULT_CONFIG
    if mode == DepthMode.UNIFORM:
        return samples == 0
    return samples < cfg.cut_threshold


def row_position(row: int | np.ndarray, rows: int, book_height_cm: float, padding_cm: float) -> float | np.ndarray:
    """Map a sample row index to centimeters from the top of the page."""
    usable_height_cm = book_height_cm - 2 * padding_cm
    return (row / rows) * usable_height_cm + padding_cm


def scan_column(
    samples: np.ndarray,
    *,
    book_height_cm: float,
    padding_cm: float,
    mode: DepthMode,
    config: PatternConfig | None = None,
) -> ColumnScan:
    """Detect cut regions in one column, walking rows top to bottom.

    A region opens on the first cut row after a non-cut row (or on row 0)
    and closes on the next non-cut row. A region still open at the last row
    closes at the bottom of the usable height.

    Args:
        samples (np.ndarray): Column brightness, top row first.
        book_height_cm (float): Page height.
        padding_cm (float): Top and bottom margin.
        mode (DepthMode): Depth mode.
        config (PatternConfig | None): Threshold constants.

    Raises:
        InternalInvariantError: If transition bookkeeping goes out of step.

    Returns:
        ColumnScan: Ordered regions and the column's average brightness.
    """
    rows = int(samples.shape[0])
    cut = cut_mask(samples, mode, config).astype(np.int8)
    steps = np.diff(cut, prepend=np.int8(0), append=np.int8(0))
    starts = np.flatnonzero(steps == 1)
    ends = np.flatnonzero(steps == -1)
    if starts.size != ends.size:
        raise InternalInvariantError(message="Unbalanced cut transitions in column scan")

    bottom_cm = book_height_cm - padding_cm
    regions: list[Region] = []
    for start_row, end_row in zip(starts.tolist(), ends.tolist(), strict=True):
        start_cm = float(row_position(start_row, rows, book_height_cm, padding_cm))
        end_cm = bottom_cm if end_row >= rows else float(row_position(end_row, rows, book_height_cm, padding_cm))
        regions.append(Region(start_cm=start_cm, end_cm=end_cm))

    return ColumnScan(regions=tuple(regions), brightness=float(samples.mean()))


def scan(
    grid: WorkingGrid,
    book_height_cm: float,
    padding_cm: float,
    mode: DepthMode,
    *,
    config: PatternConfig | None = None,
) -> list[ColumnScan]:
    """Scan every working-grid column, left to right.

    Args:
        grid (WorkingGrid): Normalized brightness grid.
        book_height_cm (float): Page height.
        padding_cm (float): Top and bottom margin; usable height must be positive.
        mode (DepthMode): Depth mode.
        config (PatternConfig | None): Threshold constants.

    Returns:
        list[ColumnScan]: One entry per sheet.
    """
    scans = [
        scan_column(
            grid.column(x),
            book_height_cm=book_height_cm,
            padding_cm=padding_cm,
            mode=mode,
            config=config,
        )
        for x in range(grid.width)
    ]
    logger.debug(
        "Columns scanned",
        extra={"columns": len(scans), "regions": sum(len(column.regions) for column in scans)},
    )
    return scans


def round_marks(regions: tuple[Region, ...]) -> tuple[float, ...]:
    """Flatten regions into start/end positions rounded to 0.1 cm."""
    return tuple(round(value, 1) for region in regions for value in (region.start_cm, region.end_cm))
