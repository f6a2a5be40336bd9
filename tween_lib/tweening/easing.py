"""Easing curves applied to the normalized frame position."""

from __future__ import annotations

from typing import Optional, Union

from ..domain.stroke import Easing


def apply_easing(t: float, easing: Optional[Union[Easing, str]] = None) -> float:
    """Remap ``t`` in [0, 1] through an easing curve.

    Args:
        t: Linear progress between two keyframes.
        easing: Easing member or name. None and unknown names are linear.

    Returns:
        Eased progress. All curves fix 0 and 1.

    Example:
        >>> apply_easing(0.5, Easing.EASE_IN)
        0.25
    """
    if not isinstance(easing, Easing):
        easing = Easing.parse(easing)

    if easing is Easing.EASE_IN:
        return t * t
    if easing is Easing.EASE_OUT:
        return t * (2 - t)
    if easing is Easing.EASE_IN_OUT:
        return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t
    return t
