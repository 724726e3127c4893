from __future__ import annotations

import pytest

from bookfold.exceptions import InternalInvariantError
from bookfold.formatter import FOOTER_LINES, NO_MARKS, disambiguate_marks, format_instructions, format_sheet_line
from bookfold.typing.enums import DepthMode
from bookfold.typing.models import PatternConfig, PatternResult, Region, SheetMark


def _sheet(
    index: int,
    spans: list[tuple[float, float]],
    *,
    depth_mm: float = 20.0,
    marks: tuple[float, ...] | None = None,
) -> SheetMark:
    regions = tuple(Region(start_cm=start, end_cm=end) for start, end in spans)
    if marks is None:
        marks = tuple(round(value, 1) for span in spans for value in span)
    return SheetMark(index=index, regions=regions, marks=marks, depth_mm=depth_mm, brightness=128.0)


def _result(*sheets: SheetMark, mode: DepthMode = DepthMode.UNIFORM) -> PatternResult:
    return PatternResult(
        book_height_cm=20.0,
        total_pages=2 * len(sheets),
        padding_cm=1.0,
        mode=mode,
        config=PatternConfig(),
        sheets=sheets,
    )


def test_disambiguate_marks_pushes_collisions_down_by_tenths() -> None:
    assert disambiguate_marks([5.0, 5.0, 5.0, 5.1]) == [5.0, 5.1, 5.2, 5.3]


def test_disambiguate_marks_keeps_distinct_marks() -> None:
    assert disambiguate_marks([1.0, 4.6, 11.8, 19.0]) == [1.0, 4.6, 11.8, 19.0]


def test_uniform_layout_states_depth_once() -> None:
    text = format_instructions(_result(_sheet(0, [(1.0, 19.0)]), _sheet(1, [])), DepthMode.UNIFORM)
    lines = text.splitlines()

    assert "cut every sheet 20.0 mm deep" in lines[1]
    assert "Book height: 20.0 cm | Pages: 4 | Sheets: 2 | Padding: 1.0 cm" in lines
    assert "PAGES       MEASUREMENTS" in lines
    assert "1-2         1.0, 19.0" in lines
    assert f"3-4         {NO_MARKS}" in lines


def test_variable_layout_lists_depth_per_sheet() -> None:
    result = _result(
        _sheet(0, [(1.0, 19.0)], depth_mm=40.0),
        _sheet(1, [], depth_mm=3.0),
        mode=DepthMode.VARIABLE,
    )

    lines = format_instructions(result, DepthMode.VARIABLE).splitlines()

    assert "PAGES       DEPTH     MEASUREMENTS" in lines
    assert "1-2         40.0 mm   1.0, 19.0" in lines
    assert "3-4         3.0 mm    No marks" in lines


def test_colliding_marks_print_distinct_values() -> None:
    sheet = _sheet(0, [(5.0, 5.01), (5.02, 5.04)])

    assert sheet.marks == (5.0, 5.0, 5.0, 5.0)
    assert format_sheet_line(sheet, DepthMode.UNIFORM) == "1-2         5.0, 5.1, 5.2, 5.3"


def test_instructions_end_with_footer() -> None:
    text = format_instructions(_result(_sheet(0, [])), DepthMode.UNIFORM)

    assert text.endswith("\n".join(FOOTER_LINES) + "\n")


def test_formatting_is_deterministic() -> None:
    result = _result(_sheet(0, [(2.0, 3.0), (7.5, 12.25)]), _sheet(1, [(1.0, 19.0)]))

    assert format_instructions(result, DepthMode.UNIFORM) == format_instructions(result, DepthMode.UNIFORM)


def test_mode_mismatch_is_rejected() -> None:
    with pytest.raises(InternalInvariantError, match="uniform mode cannot be formatted as variable"):
        format_instructions(_result(_sheet(0, [])), DepthMode.VARIABLE)


def test_marks_out_of_step_with_regions_are_rejected() -> None:
    sheet = _sheet(0, [(2.0, 3.0)], marks=())

    with pytest.raises(InternalInvariantError, match="0 marks for 1 regions"):
        format_instructions(_result(sheet), DepthMode.UNIFORM)


def test_overlapping_regions_are_rejected() -> None:
    sheet = _sheet(0, [(2.0, 6.0), (5.0, 8.0)])

    with pytest.raises(InternalInvariantError, match="overlapping"):
        format_instructions(_result(sheet), DepthMode.UNIFORM)


def test_regions_in_padding_are_rejected() -> None:
    sheet = _sheet(0, [(0.2, 6.0)])

    with pytest.raises(InternalInvariantError, match="outside the usable height"):
        format_instructions(_result(sheet), DepthMode.UNIFORM)


def test_empty_region_is_rejected() -> None:
    broken = Region.model_construct(start_cm=4.0, end_cm=4.0)
    sheet = SheetMark.model_construct(
        index=0,
        regions=(broken,),
        marks=(4.0, 4.0),
        depth_mm=20.0,
        brightness=0.0,
    )

    with pytest.raises(InternalInvariantError, match="empty region"):
        format_instructions(_result(sheet), DepthMode.UNIFORM)


def test_out_of_order_sheets_are_rejected() -> None:
    with pytest.raises(InternalInvariantError, match="Sheet 1 found at position 0"):
        format_instructions(_result(_sheet(1, []), _sheet(0, [])), DepthMode.UNIFORM)
