"""Brightness to cut depth mapping."""

from __future__ import annotations

from bookfold.typing.enums import DepthMode
from bookfold.typing.models import PatternConfig

_DEFAULT_CONFIG = PatternConfig()


def depth_for_brightness(brightness: float, config: PatternConfig | None = None) -> float:
    """Map a brightness value to a cut depth in millimeters.

    Darker samples cut deeper: `0` maps to `max_depth_mm` and `255` to
    `min_depth_mm`. In between, `(brightness / 255) ** depth_gamma`
    interpolates downward from the maximum, so a gamma above 1 keeps
    midtones deeper than a linear ramp would.

    Args:
        brightness (float): Brightness, clamped to [0, 255].
        config (PatternConfig | None): Depth constants.

    Returns:
        float: Depth rounded to 0.1 mm.
    """
    cfg = config or _DEFAULT_CONFIG
    clamped = min(max(float(brightness), 0.0), 255.0)
    curved = (clamped / 255.0) ** cfg.depth_gamma
    depth = cfg.max_depth_mm - curved * (cfg.max_depth_mm - cfg.min_depth_mm)
    return round(depth, 1)


def depth_for_sheet(brightness: float, mode: DepthMode, config: PatternConfig | None = None) -> float:
    """Return the single depth of a sheet for the given mode."""
    cfg = config or _DEFAULT_CONFIG
    if mode == DepthMode.UNIFORM:
        return cfg.uniform_depth_mm
    return depth_for_brightness(brightness, cfg)
