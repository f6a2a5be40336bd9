"""Style blending between a source stroke and a target stroke."""

from __future__ import annotations

from typing import Any

from ..config import DEFAULT_COLOR, DEFAULT_TAPER, DEFAULT_WIDTH
from ..domain.stroke import Stroke
from ..utils.color import tween_color


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def blend_style(source: Stroke, target: Stroke, t: float) -> dict[str, Any]:
    """Interpolated style fields for a tween stroke.

    Unset source values take the package defaults; unset target values hold
    the source value. The result is closed when either side is flagged
    closed. A fill is produced only for closed results whose source has a
    fill, so a tween never gains a fill its source lacks.

    Args:
        source: Stroke supplying the style at t = 0.
        target: Stroke supplying the style at t = 1.
        t: Eased progress.

    Returns:
        Keyword arguments for Stroke: color, fill_color, width,
        taper_start, taper_end and closed.
    """
    width_a = source.width if source.width is not None else DEFAULT_WIDTH
    width_b = target.width if target.width is not None else width_a
    taper_start_a = source.taper_start if source.taper_start is not None else DEFAULT_TAPER
    taper_start_b = target.taper_start if target.taper_start is not None else taper_start_a
    taper_end_a = source.taper_end if source.taper_end is not None else DEFAULT_TAPER
    taper_end_b = target.taper_end if target.taper_end is not None else taper_end_a

    closed = source.closed is True or target.closed is True
    color_a = source.color or DEFAULT_COLOR

    fill = None
    if closed and source.has_fill:
        fill = tween_color(source.fill_color, target.fill_color or source.fill_color, t)

    return {
        'color': tween_color(color_a, target.color or color_a, t),
        'fill_color': fill,
        'width': _lerp(width_a, width_b, t),
        'taper_start': _lerp(taper_start_a, taper_start_b, t),
        'taper_end': _lerp(taper_end_a, taper_end_b, t),
        'closed': closed,
    }
