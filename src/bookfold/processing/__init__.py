"""Image to pattern processing stages."""

from bookfold.processing.depth import depth_for_brightness, depth_for_sheet
from bookfold.processing.normalizer import binarize, decode_image, luma, normalize
from bookfold.processing.scanner import cut_mask, round_marks, row_position, scan, scan_column

__all__ = [
    "binarize",
    "cut_mask",
    "decode_image",
    "depth_for_brightness",
    "depth_for_sheet",
    "luma",
    "normalize",
    "round_marks",
    "row_position",
    "scan",
    "scan_column",
]
