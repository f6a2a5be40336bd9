"""Point interpolation and motion-path guides.

interpolate_paths blends two equal-length paths index by index. A guide
path bends the whole result: the tween's centroid follows the guide
instead of the straight line between the two end centroids, while the
shape itself is blended exactly as without a guide.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..config import DEFAULT_CONFIG, TweenConfig
from ..domain.geometry import Point
from ..domain.stroke import Stroke
from ..utils.geometry import centroid, distance, point_on_path

logger = logging.getLogger(__name__)


def _lerp_optional(a: Optional[Point], b: Optional[Point], t: float,
                   dx: float, dy: float) -> Optional[Point]:
    if a is None or b is None:
        return None
    return Point(a.x + (b.x - a.x) * t + dx, a.y + (b.y - a.y) * t + dy)


def guide_offset(path_a: Sequence[Point], path_b: Sequence[Point], t: float,
                 guide: Optional[Sequence[Point]]) -> tuple[float, float]:
    """Offset moving the linearly blended centroid onto the guide at ``t``.

    Returns (0, 0) when there is no guide or it has fewer than two points.
    """
    if not guide or len(guide) < 2:
        return 0.0, 0.0
    start_c = centroid(path_a)
    end_c = centroid(path_b)
    on_path = point_on_path(guide, t)
    return (on_path.x - (start_c.x + (end_c.x - start_c.x) * t),
            on_path.y - (start_c.y + (end_c.y - start_c.y) * t))


def interpolate_paths(path_a: Sequence[Point], path_b: Sequence[Point], t: float,
                      guide: Optional[Sequence[Point]] = None) -> list[Point]:
    """Blend two paths point by point.

    Anchors are interpolated linearly. A handle is interpolated only when
    both points carry it; otherwise the result has none on that side. The
    guide offset is computed once and added to every anchor and handle.

    Args:
        path_a: Normalized path at t = 0.
        path_b: Normalized path at t = 1.
        t: Eased progress.
        guide: Optional motion path.

    Returns:
        New list of ``min(len(path_a), len(path_b))`` points.
    """
    dx, dy = guide_offset(path_a, path_b, t, guide)
    result = []
    for a, b in zip(path_a, path_b):
        result.append(Point(
            a.x + (b.x - a.x) * t + dx,
            a.y + (b.y - a.y) * t + dy,
            _lerp_optional(a.handle_in, b.handle_in, t, dx, dy),
            _lerp_optional(a.handle_out, b.handle_out, t, dx, dy),
        ))
    return result


def find_motion_path(guides: Iterable[Stroke], start_center: Point, end_center: Point,
                     related_ids: Sequence[str],
                     config: TweenConfig = DEFAULT_CONFIG) -> Optional[Stroke]:
    """Pick the guide that drives a pair, if any.

    A guide linked to any of ``related_ids`` wins. Failing that, the first
    unlinked guide whose first point lies within the snap distance of
    ``start_center`` and whose last point lies within it of ``end_center``
    is used.

    Args:
        guides: Motion paths of the source keyframe.
        start_center: Pair centroid at the source frame.
        end_center: Pair centroid at the target frame.
        related_ids: Source stroke ids of the pair.
        config: Supplies the snap distance.

    Returns:
        The guide stroke, or None.
    """
    guides = [g for g in guides if g.points]
    related = set(related_ids)

    for guide in guides:
        if related.intersection(guide.linked_stroke_ids):
            return guide

    for guide in guides:
        if guide.linked_stroke_ids:
            continue
        if (distance(guide.start, start_center) < config.guide_snap_distance and
                distance(guide.end, end_center) < config.guide_snap_distance):
            logger.debug("Guide %s snapped to pair at %s -> %s", guide.id,
                         start_center.to_tuple(), end_center.to_tuple())
            return guide
    return None
