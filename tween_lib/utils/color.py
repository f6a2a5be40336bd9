"""CSS colour parsing and blending.

Stroke and fill colours are stored as CSS strings. Blending works on RGBA
channels: colour channels in 0-255, alpha in 0-1.

Supported inputs: ``#rgb``, ``#rrggbb``, ``#rrggbbaa``, ``rgb(r, g, b)``
and ``rgba(r, g, b, a)``. Anything else resolves to the fallback colour.
"""

from __future__ import annotations

import math
import re
from typing import NamedTuple, Optional

from ..config import DEFAULT_COLOR

_RGB_FUNC = re.compile(r'^rgba?\((.+)\)$', re.IGNORECASE)


class RGBA(NamedTuple):
    r: float
    g: float
    b: float
    a: float


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def _clamp255(v: float) -> int:
    return max(0, min(255, _round_half_up(v)))


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, v))


def parse_color(value: Optional[str], fallback: str = DEFAULT_COLOR) -> RGBA:
    """Parse a CSS colour string.

    Args:
        value: Colour string, or None.
        fallback: Colour used when ``value`` is missing or unparseable.

    Returns:
        RGBA tuple. Falls back to opaque black if the fallback itself
        cannot be parsed.
    """
    text = (value or fallback).strip()

    if text.startswith('#'):
        hex_digits = text[1:]
        try:
            if len(hex_digits) == 3:
                r, g, b = (int(c * 2, 16) for c in hex_digits)
                return RGBA(r, g, b, 1.0)
            if len(hex_digits) in (6, 8):
                r = int(hex_digits[0:2], 16)
                g = int(hex_digits[2:4], 16)
                b = int(hex_digits[4:6], 16)
                a = int(hex_digits[6:8], 16) / 255 if len(hex_digits) == 8 else 1.0
                return RGBA(r, g, b, a)
        except ValueError:
            pass

    match = _RGB_FUNC.match(text)
    if match:
        parts = [s.strip() for s in match.group(1).split(',')]
        if len(parts) >= 3:
            try:
                nums = [float(s) for s in parts[:4]]
            except ValueError:
                nums = []
            if nums and all(math.isfinite(n) for n in nums):
                a = nums[3] if len(nums) == 4 else 1.0
                return RGBA(_clamp255(nums[0]), _clamp255(nums[1]), _clamp255(nums[2]), _clamp01(a))

    if text == fallback.strip():
        return RGBA(0, 0, 0, 1.0)
    return parse_color(fallback, DEFAULT_COLOR)


def to_css_color(color: RGBA) -> str:
    """Format RGBA as ``#rrggbb`` when opaque, ``rgba(...)`` otherwise."""
    a = _clamp01(color.a)
    r, g, b = _clamp255(color.r), _clamp255(color.g), _clamp255(color.b)
    if a >= 0.999:
        return f'#{r:02x}{g:02x}{b:02x}'
    return f'rgba({r}, {g}, {b}, {a:.3f})'


def tween_color(start: Optional[str], end: Optional[str], t: float) -> str:
    """Blend two CSS colours channel-wise, alpha included.

    A missing ``end`` colour holds the ``start`` colour.

    Example:
        >>> tween_color('#ff0000', '#0000ff', 0.5)
        '#800080'
    """
    a = parse_color(start, DEFAULT_COLOR)
    b = parse_color(end, start or DEFAULT_COLOR)
    return to_css_color(RGBA(
        a.r + (b.r - a.r) * t,
        a.g + (b.g - a.g) * t,
        a.b + (b.b - a.b) * t,
        a.a + (b.a - a.a) * t,
    ))
