"""Pattern generation orchestration."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from bookfold.exceptions import PaymentRequiredError
from bookfold.formatter import format_instructions
from bookfold.logging import get_logger
from bookfold.paywall import is_plausible_unlock
from bookfold.processing.depth import depth_for_sheet
from bookfold.processing.normalizer import normalize
from bookfold.processing.scanner import round_marks, scan
from bookfold.typing.enums import DepthMode
from bookfold.typing.models import PatternConfig, PatternRequest, PatternResult, PatternRun, SheetMark

if TYPE_CHECKING:
    from bookfold.typing.models import ColumnScan, UnlockCredentials
    from bookfold.typing.protocol import ImageSource

logger = get_logger(__name__)

EXPORT_SUFFIX = "-pattern.txt"


def _assemble_sheet(index: int, column: ColumnScan, mode: DepthMode, config: PatternConfig) -> SheetMark:
    """Attach rounded marks and a depth to one scanned column.

    Args:
        index (int): Sheet index, 0-based.
        column (ColumnScan): Scan output for the sheet's column.
        mode (DepthMode): Depth mode.
        config (PatternConfig): Depth constants.

    Returns:
        SheetMark: Sheet mark.
    """
    return SheetMark(
        index=index,
        regions=column.regions,
        marks=round_marks(column.regions),
        depth_mm=depth_for_sheet(column.brightness, mode, config),
        brightness=column.brightness,
    )


def run_pattern(request: PatternRequest, *, config: PatternConfig | None = None) -> PatternRun:
    """Run normalization, scanning and depth mapping for a validated request.

    Args:
        request (PatternRequest): Validated request.
        config (PatternConfig | None): Pattern constants, defaults when omitted.

    Raises:
        ImageDecodeError: If the image cannot be decoded.

    Returns:
        PatternRun: Fresh result and the working grid it came from.
    """
    cfg = config or PatternConfig()
    grid = normalize(
        request.image,
        request.sheets,
        cfg.working_height,
        request.mode,
        threshold=cfg.binarize_threshold,
    )
    columns = scan(grid, request.book_height_cm, request.padding_cm, request.mode, config=cfg)
    result = PatternResult(
        book_height_cm=request.book_height_cm,
        total_pages=request.total_pages,
        padding_cm=request.padding_cm,
        mode=request.mode,
        config=cfg,
        source_name=request.image_name,
        sheets=tuple(_assemble_sheet(index, column, request.mode, cfg) for index, column in enumerate(columns)),
    )
    logger.info(
        "Pattern generated",
        extra={
            "source": request.image_name,
            "mode": request.mode.to_str(),
            "sheets": len(result.sheets),
            "grid_shape": (grid.height, grid.width),
        },
    )
    return PatternRun(result=result, grid=grid)


def generate_pattern(
    image: bytes,
    book_height_cm: float,
    total_pages: int,
    padding_cm: float = 0.0,
    mode: DepthMode = DepthMode.UNIFORM,
    *,
    config: PatternConfig | None = None,
    image_name: str = "image",
) -> PatternResult:
    """Validate inputs and derive the cut pattern for an image.

    Args:
        image (bytes): Encoded raster image.
        book_height_cm (float): Page height, > 0.
        total_pages (int): Even, positive page count.
        padding_cm (float): Top and bottom margin, >= 0 and below half the height.
        mode (DepthMode): Uniform or variable depth.
        config (PatternConfig | None): Pattern constants.
        image_name (str): Original file name, kept for export naming.

    Raises:
        ValidationError: If the request is invalid; nothing is processed.
        ImageDecodeError: If the image cannot be decoded.

    Returns:
        PatternResult: One sheet mark per sheet.
    """
    request = PatternRequest.build(
        image=image,
        book_height_cm=book_height_cm,
        total_pages=total_pages,
        padding_cm=padding_cm,
        mode=mode,
        image_name=image_name,
    )
    return run_pattern(request, config=config).result


async def build_request_async(
    source: ImageSource,
    book_height_cm: float,
    total_pages: int,
    padding_cm: float = 0.0,
    mode: DepthMode = DepthMode.UNIFORM,
) -> PatternRequest:
    """Await the image bytes and build a validated request.

    Raises:
        ValidationError: If the request is invalid.
    """
    image = await source.read_bytes()
    return PatternRequest.build(
        image=image,
        book_height_cm=book_height_cm,
        total_pages=total_pages,
        padding_cm=padding_cm,
        mode=mode,
        image_name=source.name,
    )


async def generate_pattern_async(
    source: ImageSource,
    book_height_cm: float,
    total_pages: int,
    padding_cm: float = 0.0,
    mode: DepthMode = DepthMode.UNIFORM,
    *,
    config: PatternConfig | None = None,
) -> PatternResult:
    """Same as `generate_pattern`, awaiting the image bytes from `source` first."""
    request = await build_request_async(source, book_height_cm, total_pages, padding_cm, mode)
    return run_pattern(request, config=config).result


def generate_instructions(
    result: PatternResult,
    mode: DepthMode | None = None,
    *,
    require_payment: bool = False,
    credentials: UnlockCredentials | None = None,
) -> str:
    """Format instructions, optionally behind the unlock check.

    Args:
        result (PatternResult): Generated pattern.
        mode (DepthMode | None): Layout mode, defaults to the pattern's mode.
        require_payment (bool): Whether plausible purchase details are needed.
        credentials (UnlockCredentials | None): Typed-in purchase details.

    Raises:
        PaymentRequiredError: If gated and the credentials are missing or implausible.

    Returns:
        str: Instruction text.
    """
    if require_payment and not is_plausible_unlock(credentials):
        raise PaymentRequiredError
    return format_instructions(result, mode or result.mode)


def export_filename(original_name: str) -> str:
    """Return the export name for instructions derived from `original_name`.

    `portrait.png` becomes `portrait-pattern.txt`; a name without an
    extension is used whole.
    """
    name = Path(original_name).name
    stem = name[: name.rfind(".")] if "." in name else name
    return f"{stem or name}{EXPORT_SUFFIX}"


def persist_instructions(text: str, output_path: Path) -> Path:
    """Write instruction text to disk.

    Args:
        text (str): Instruction text.
        output_path (Path): Destination file.

    Returns:
        Path: Written path.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    return output_path
