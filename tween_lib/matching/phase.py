"""Closed-loop phase alignment.

Two loops of the same shape whose vertex lists start at different places
interpolate with a visible rotational swirl when matched index-for-index.
align_phase picks the starting vertex of the loop that best lines up with
a reference path.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..config import DEFAULT_CONFIG, TweenConfig
from ..domain.geometry import Point
from ..utils.geometry import (
    as_array,
    from_array,
    resample_array,
    resample_path,
    strip_closing_vertex,
)


def _cost(target: np.ndarray, candidate: np.ndarray, endpoint_weight: float) -> float:
    d = np.hypot(*(target - candidate).T)
    return float(d.sum() + (d[0] + d[-1]) * endpoint_weight)


def align_phase(reference: Sequence[Point], loop: Sequence[Point],
                config: TweenConfig = DEFAULT_CONFIG) -> list[Point]:
    """Rotate a closed loop so it starts where it best matches ``reference``.

    Every vertex of the loop is tried as the new start. Each rotation is
    re-closed, resampled to the reference's point count and scored with the
    index-wise distance cost, endpoints weighted ``endpoint_cost_weight``
    times. The cheapest rotation wins; ties keep the earliest vertex.

    Args:
        reference: Path the loop is being matched against.
        loop: Closed loop, with or without a duplicated closing vertex.
        config: Supplies the seam tolerance and endpoint weight.

    Returns:
        The best rotation, resampled to ``len(reference)`` points. Loops
        with fewer than three points and references with fewer than two are
        returned unchanged.
    """
    if len(loop) < 3 or len(reference) < 2:
        return list(loop)

    n = len(reference)
    clean = strip_closing_vertex(loop, config.loop_seam_tolerance)
    if len(clean) < 3:
        return resample_path(loop, n)

    target = resample_array(as_array(reference), n)
    ring = as_array(clean)

    best_shift = 0
    best_cost = np.inf
    for shift in range(len(ring)):
        rotated = np.roll(ring, -shift, axis=0)
        closed = np.vstack((rotated, rotated[:1]))
        cost = _cost(target, resample_array(closed, n), config.endpoint_cost_weight)
        if cost < best_cost:
            best_cost = cost
            best_shift = shift

    rotated = np.roll(ring, -best_shift, axis=0)
    return from_array(resample_array(np.vstack((rotated, rotated[:1])), n))
