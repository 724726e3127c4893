"""Plain-text cutting instructions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bookfold.exceptions import InternalInvariantError
from bookfold.typing.enums import DepthMode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bookfold.typing.models import PatternResult, SheetMark

PAGE_COLUMN_WIDTH = 12
DEPTH_COLUMN_WIDTH = 10
NO_MARKS = "No marks"
TITLE = "BOOK FOLDING PATTERN - MEASURE, MARK AND CUT"

FOOTER_LINES = (
    "",
    "HOW TO USE",
    "1. Measure each listed position from the top edge of the page and mark it.",
    "2. Cut between consecutive marks to the listed depth, in from the fore-edge.",
    "3. Projected fold: fold the first tab inward, then every other tab.",
    "4. Recessed fold: fold the second tab inward first, then every other tab.",
)

# Tolerance on physical bounds, half of the 0.1 cm print precision.
_BOUNDS_TOLERANCE_CM = 0.05


def disambiguate_marks(marks: Sequence[float]) -> list[float]:
    """Make every printed position on a sheet distinct.

    Positions are compared at 0.1 cm resolution. A position that collides
    with one already taken is pushed down by 0.1 cm until it is free, so a
    dense sheet can drift by a few tenths.

    Args:
        marks (Sequence[float]): Positions in print order.

    Returns:
        list[float]: Positions rounded to 0.1 cm, all distinct.
    """
    used: set[int] = set()
    adjusted: list[float] = []
    for mark in marks:
        tenths = round(mark * 10)
        while tenths in used:
            tenths += 1
        used.add(tenths)
        adjusted.append(tenths / 10)
    return adjusted


def _check_sheet(sheet: SheetMark, expected_index: int, result: PatternResult) -> None:
    """Reject sheet data that would print misleading measurements.

    Raises:
        InternalInvariantError: If ordering, bounds or mark bookkeeping is broken.
    """
    if sheet.index != expected_index:
        raise InternalInvariantError(
            message=f"Sheet {sheet.index} found at position {expected_index}",
        )
    if len(sheet.marks) != 2 * len(sheet.regions):
        raise InternalInvariantError(
            message=f"Sheet {sheet.page_label} has {len(sheet.marks)} marks for {len(sheet.regions)} regions",
        )

    top = result.padding_cm - _BOUNDS_TOLERANCE_CM
    bottom = result.book_height_cm - result.padding_cm + _BOUNDS_TOLERANCE_CM
    previous_end: float | None = None
    for region in sheet.regions:
        if region.start_cm >= region.end_cm:
            raise InternalInvariantError(
                message=f"Sheet {sheet.page_label} has an empty region at {region.start_cm} cm",
            )
        if region.start_cm < top or region.end_cm > bottom:
            raise InternalInvariantError(
                message=f"Sheet {sheet.page_label} has a region outside the usable height",
            )
        if previous_end is not None and region.start_cm < previous_end:
            raise InternalInvariantError(message=f"Sheet {sheet.page_label} has overlapping regions")
        previous_end = region.end_cm


def _header_lines(result: PatternResult, mode: DepthMode) -> list[str]:
    if mode == DepthMode.UNIFORM:
        mode_line = f"Mode: {mode.label} - cut every sheet {result.config.uniform_depth_mm:.1f} mm deep"
        columns = f"{'PAGES':<{PAGE_COLUMN_WIDTH}}MEASUREMENTS"
    else:
        mode_line = f"Mode: {mode.label} - cut depth listed per sheet in mm"
        columns = f"{'PAGES':<{PAGE_COLUMN_WIDTH}}{'DEPTH':<{DEPTH_COLUMN_WIDTH}}MEASUREMENTS"
    return [
        TITLE,
        mode_line,
        (
            f"Book height: {result.book_height_cm:.1f} cm | Pages: {result.total_pages} | "
            f"Sheets: {len(result.sheets)} | Padding: {result.padding_cm:.1f} cm"
        ),
        "All measurements are in cm from the top of the page.",
        "",
        columns,
    ]


def format_sheet_line(sheet: SheetMark, mode: DepthMode) -> str:
    """Render one sheet as a fixed-width instruction line."""
    if sheet.marks:
        measurements = ", ".join(f"{mark:.1f}" for mark in disambiguate_marks(sheet.marks))
    else:
        measurements = NO_MARKS

    line = f"{sheet.page_label:<{PAGE_COLUMN_WIDTH}}"
    if mode == DepthMode.VARIABLE:
        depth = f"{sheet.depth_mm:.1f} mm"
        line += f"{depth:<{DEPTH_COLUMN_WIDTH}}"
    return line + measurements


def format_instructions(result: PatternResult, mode: DepthMode) -> str:
    """Render a pattern as a plain-text instruction sheet.

    Args:
        result (PatternResult): Generated pattern.
        mode (DepthMode): Layout mode; must be the mode the pattern was generated in.

    Raises:
        InternalInvariantError: If the pattern is malformed or was generated in another mode.

    Returns:
        str: Instruction text, one line per sheet between a header and a footer.
    """
    if mode != result.mode:
        raise InternalInvariantError(
            message=f"Pattern generated in {result.mode.to_str()} mode cannot be formatted as {mode.to_str()}",
        )

    lines = _header_lines(result, mode)
    for expected_index, sheet in enumerate(result.sheets):
        _check_sheet(sheet, expected_index, result)
        lines.append(format_sheet_line(sheet, mode))
    lines.extend(FOOTER_LINES)
    return "\n".join(lines) + "\n"
