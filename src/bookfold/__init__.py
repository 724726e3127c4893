"""Book folding pattern generator."""

from bookfold.async_runner import run_async
from bookfold.exceptions import (
    AsyncExecutionError,
    ImageDecodeError,
    InternalInvariantError,
    InvalidDimensionsError,
    PackageError,
    PaymentRequiredError,
    SettingsError,
    ValidationError,
)
from bookfold.formatter import format_instructions
from bookfold.logging import configure_logging, get_logger
from bookfold.pipeline import generate_instructions, generate_pattern, generate_pattern_async
from bookfold.processing.depth import depth_for_brightness
from bookfold.settings import Settings, get_settings
from bookfold.typing.enums import DepthMode

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("bookfold")

__all__ = [
    "AsyncExecutionError",
    "DepthMode",
    "ImageDecodeError",
    "InternalInvariantError",
    "InvalidDimensionsError",
    "PackageError",
    "PaymentRequiredError",
    "Settings",
    "SettingsError",
    "ValidationError",
    "__version__",
    "configure_logging",
    "depth_for_brightness",
    "format_instructions",
    "generate_instructions",
    "generate_pattern",
    "generate_pattern_async",
    "get_logger",
    "get_settings",
    "logger",
    "run_async",
]
