"""Geometry kernel for tween computation.

This module provides the path operations the matcher and interpolator are
built on. Paths are sequences of domain Points; functions never modify
their input and always return new lists.

The module provides the following functions:
    distance: Euclidean distance between two anchors.
    path_length: Arc length of a polyline.
    centroid: Mean position of a point set.
    is_closed_path: Closure test honouring an explicit flag.
    closed_outline: Append the closing vertex a closed path leaves implicit.
    split_cubic: De Casteljau subdivision of one cubic segment.
    sample_stroke: Flatten bezier segments to a polyline.
    upsample_topology: Bisect longest edges until a point count is reached.
    resample_path: Uniform arc-length resampling to exactly N points.
    point_at_length, point_on_path: Arc-length lookup along a path.
    reverse_points: Reverse drawing order, swapping handles.
    strip_closing_vertex: Drop a loop's duplicated seam vertex.
    path_distance_cost: Index-wise distance with weighted endpoints.
    match_path_direction: Reverse a path when that pairs endpoints better.
    merge_strokes: Chain several paths into one by nearest endpoints.

Example usage:
    Normalizing two paths to the same point count::

        from tween_lib.utils.geometry import upsample_topology

        n = max(len(a), len(b))
        a2 = upsample_topology(a, n)
        b2 = upsample_topology(b, n)

    Resampling for comparison::

        from tween_lib.utils.geometry import resample_path, path_distance_cost

        cost = path_distance_cost(resample_path(a, 50), resample_path(b, 50))
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from ..config import DEFAULT_CONFIG, TweenConfig
from ..domain.geometry import Point


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two anchors."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def as_array(points: Sequence[Point]) -> np.ndarray:
    """Anchor coordinates as an (N, 2) float array."""
    if not points:
        return np.zeros((0, 2), dtype=float)
    return np.array([(p.x, p.y) for p in points], dtype=float)


def from_array(arr: np.ndarray) -> list[Point]:
    return [Point(float(x), float(y)) for x, y in arr]


def path_length(points: Sequence[Point]) -> float:
    """Total arc length of a polyline through the anchors."""
    if len(points) < 2:
        return 0.0
    arr = as_array(points)
    return float(np.hypot(*np.diff(arr, axis=0).T).sum())


def centroid(points: Sequence[Point]) -> Point:
    """Mean anchor position. Returns the origin for an empty set."""
    if not points:
        return Point(0.0, 0.0)
    mean = as_array(points).mean(axis=0)
    return Point(float(mean[0]), float(mean[1]))


def is_closed_path(points: Sequence[Point], closed: Optional[bool] = None,
                   config: TweenConfig = DEFAULT_CONFIG) -> bool:
    """Decide whether a path is a closed loop.

    An explicit flag always wins. Without one, a path of at least three
    points is closed when its endpoint gap is under the absolute threshold
    or under a fraction of its arc length.

    Args:
        points: Path anchors.
        closed: Explicit closure flag, or None to use the heuristic.
        config: Supplies the absolute and relative gap thresholds.

    Returns:
        True if the path should be treated as a loop.
    """
    if closed is not None:
        return closed
    if len(points) < 3:
        return False
    gap = distance(points[0], points[-1])
    if gap < config.closed_gap_threshold:
        return True
    length = path_length(points)
    return length > 0 and (gap / length) < config.closed_gap_ratio


def closed_outline(points: Sequence[Point],
                   config: TweenConfig = DEFAULT_CONFIG) -> list[Point]:
    """Return a closed path with its closing edge made explicit.

    Loops flagged closed are often stored without repeating the first
    vertex. Arc-length operations need the closing edge, so the first
    anchor is appended unless the path already ends on it.
    """
    pts = list(points)
    if len(pts) > 1 and distance(pts[0], pts[-1]) >= config.loop_seam_tolerance:
        pts.append(pts[0].anchor())
    return pts


# ---------------------------------------------------------------------------
# Bezier math
# ---------------------------------------------------------------------------

def _lerp(a: Point, b: Point, t: float) -> Point:
    return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def sample_cubic(p0: Point, c1: Point, c2: Point, p3: Point, t: float) -> Point:
    """Evaluate a cubic bezier at parameter t."""
    inv = 1 - t
    a = inv * inv * inv
    b = 3 * inv * inv * t
    c = 3 * inv * t * t
    d = t * t * t
    return Point(a * p0.x + b * c1.x + c * c2.x + d * p3.x,
                 a * p0.y + b * c1.y + c * c2.y + d * p3.y)


def split_cubic(p0: Point, c1: Point, c2: Point, p3: Point,
                t: float = 0.5) -> tuple[Point, Point, Point]:
    """Split a cubic segment with De Casteljau's construction.

    Args:
        p0: Segment start anchor.
        c1: Outgoing handle of p0.
        c2: Incoming handle of p3.
        p3: Segment end anchor.
        t: Split parameter. Defaults to the midpoint.

    Returns:
        (start, mid, end): start carries the new outgoing handle, mid both
        new handles, end the new incoming handle. The outer handles of the
        original anchors (p0.handle_in, p3.handle_out) are preserved.
    """
    p01 = _lerp(p0, c1, t)
    p12 = _lerp(c1, c2, t)
    p23 = _lerp(c2, p3, t)
    p012 = _lerp(p01, p12, t)
    p123 = _lerp(p12, p23, t)
    mid = _lerp(p012, p123, t)

    start = Point(p0.x, p0.y, p0.handle_in, p01)
    middle = Point(mid.x, mid.y, p012, p123)
    end = Point(p3.x, p3.y, p23, p3.handle_out)
    return start, middle, end


def _is_curved(p0: Point, p1: Point) -> bool:
    return p0.handle_out is not None and p1.handle_in is not None


def sample_stroke(points: Sequence[Point], samples_per_segment: int = 10) -> list[Point]:
    """Flatten a path to a polyline.

    Curved segments are evaluated at ``samples_per_segment`` parameter
    steps; straight ones are subdivided linearly with the same count so the
    output density is uniform per segment.
    """
    if not points:
        return []
    result = [points[0].anchor()]
    for p0, p1 in zip(points, points[1:]):
        for j in range(1, samples_per_segment + 1):
            t = j / samples_per_segment
            if _is_curved(p0, p1):
                result.append(sample_cubic(p0, p0.handle_out, p1.handle_in, p1, t))
            else:
                result.append(_lerp(p0, p1, t))
    return result


# ---------------------------------------------------------------------------
# Point-count normalization
# ---------------------------------------------------------------------------

def upsample_topology(points: Sequence[Point], target_count: int) -> list[Point]:
    """Raise a path's point count by bisecting its longest edges.

    Each step finds the longest edge and splits it at its middle: curved
    edges with De Casteljau at t=0.5 so the curve shape is unchanged,
    straight edges by inserting the midpoint. Original anchors are never
    moved or removed, so authored corners survive normalization.

    Args:
        points: Path anchors.
        target_count: Desired number of points.

    Returns:
        New list with exactly ``target_count`` points, or a copy of the input
        when it already has at least that many. A single point is repeated.

    Example:
        >>> pts = [Point(0, 0), Point(10, 0)]
        >>> [p.x for p in upsample_topology(pts, 3)]
        [0.0, 5.0, 10.0]
    """
    current = list(points)
    if len(current) >= target_count or not current:
        return current
    if len(current) == 1:
        return current * target_count

    while len(current) < target_count:
        lengths = [distance(a, b) for a, b in zip(current, current[1:])]
        i = lengths.index(max(lengths))
        p0, p1 = current[i], current[i + 1]

        if _is_curved(p0, p1):
            start, mid, end = split_cubic(p0, p0.handle_out, p1.handle_in, p1, 0.5)
            current[i:i + 2] = [start, mid, end]
        else:
            current.insert(i + 1, Point((p0.x + p1.x) / 2, (p0.y + p1.y) / 2))
    return current


def resample_path(points: Sequence[Point], num_points: int) -> list[Point]:
    """Resample a path to exactly ``num_points`` evenly spaced points.

    Points are placed at equal arc-length intervals along the polyline
    through the anchors; the first and last anchors are always kept.
    Handles are not carried over.

    Args:
        points: Path anchors.
        num_points: Desired number of output points.

    Returns:
        List of handle-free Points. A zero-length or single-point path
        yields copies of its first anchor.
    """
    if not points or num_points <= 0:
        return []
    return from_array(resample_array(as_array(points), num_points))


def resample_array(arr: np.ndarray, num_points: int) -> np.ndarray:
    """Array form of resample_path for (N, 2) coordinate arrays."""
    if len(arr) == 0 or num_points <= 0:
        return np.zeros((0, 2), dtype=float)
    if len(arr) == 1 or num_points == 1:
        return np.repeat(arr[:1], num_points, axis=0)

    seg = np.hypot(*np.diff(arr, axis=0).T)
    # Drop repeated vertices so the cumulative length is strictly increasing
    keep = np.concatenate(([True], seg > 0))
    pts = arr[keep]
    seg = seg[seg > 0]
    if len(pts) < 2:
        return np.repeat(arr[:1], num_points, axis=0)

    cum = np.concatenate(([0.0], np.cumsum(seg)))
    targets = np.linspace(0.0, cum[-1], num_points)
    xs = np.interp(targets, cum, pts[:, 0])
    ys = np.interp(targets, cum, pts[:, 1])
    return np.column_stack((xs, ys))


def point_at_length(points: Sequence[Point], target_len: float) -> Point:
    """Point at a given arc length from the start, clamped to the ends."""
    if target_len <= 0:
        return points[0]
    walked = 0.0
    for a, b in zip(points, points[1:]):
        d = distance(a, b)
        if d > 0 and walked + d >= target_len:
            return _lerp(a, b, (target_len - walked) / d)
        walked += d
    return points[-1]


def point_on_path(points: Sequence[Point], t: float) -> Point:
    """Point at fraction ``t`` of the path's arc length."""
    if not points:
        return Point(0.0, 0.0)
    if len(points) == 1:
        return points[0]
    return point_at_length(points, path_length(points) * t)


# ---------------------------------------------------------------------------
# Orientation and comparison
# ---------------------------------------------------------------------------

def reverse_points(points: Sequence[Point]) -> list[Point]:
    """Reverse a path, swapping each point's in/out handles."""
    return [p.swapped_handles() for p in reversed(points)]


def strip_closing_vertex(points: Sequence[Point], tolerance: float) -> list[Point]:
    """Drop the last vertex when it duplicates the first."""
    pts = list(points)
    if len(pts) > 1 and distance(pts[0], pts[-1]) < tolerance:
        pts.pop()
    return pts


def path_distance_cost(path_a: Sequence[Point], path_b: Sequence[Point],
                       endpoint_weight: float = DEFAULT_CONFIG.endpoint_cost_weight) -> float:
    """Correspondence cost between two paths.

    Sums the distance between points with the same index (up to the shorter
    length) and adds the start/start and end/end distances again, weighted
    by ``endpoint_weight``.
    """
    if not path_a or not path_b:
        return 0.0
    n = min(len(path_a), len(path_b))
    a = as_array(path_a[:n])
    b = as_array(path_b[:n])
    cost = float(np.hypot(*(a - b).T).sum())
    cost += distance(path_a[0], path_b[0]) * endpoint_weight
    cost += distance(path_a[-1], path_b[-1]) * endpoint_weight
    return cost


def match_path_direction(path_a: Sequence[Point], path_b: Sequence[Point]) -> list[Point]:
    """Orient ``path_b`` to run the same way as ``path_a``.

    Returns ``path_b`` reversed when pairing A's start with B's end and A's
    end with B's start is cheaper than the straight pairing.
    """
    if not path_a or not path_b:
        return list(path_b)
    cost_normal = distance(path_a[0], path_b[0]) + distance(path_a[-1], path_b[-1])
    cost_reverse = distance(path_a[0], path_b[-1]) + distance(path_a[-1], path_b[0])
    if cost_reverse < cost_normal:
        return reverse_points(path_b)
    return list(path_b)


def merge_strokes(paths: Sequence[Sequence[Point]]) -> list[Point]:
    """Chain several paths into a single polyline.

    Starting from the first path, repeatedly appends the remaining path
    whose head or tail is nearest the current end, reversing it when its
    tail is the nearer end. Ties keep the earlier path and prefer heads.
    Empty paths are skipped, so the chain starts at the first non-empty one.
    """
    remaining = [list(p) for p in paths if p]
    if not remaining:
        return []
    result = remaining.pop(0)
    while remaining:
        end = result[-1]
        best_idx, best_d, flip = -1, math.inf, False
        for i, path in enumerate(remaining):
            d_head = distance(end, path[0])
            d_tail = distance(end, path[-1])
            if d_head < best_d:
                best_idx, best_d, flip = i, d_head, False
            if d_tail < best_d:
                best_idx, best_d, flip = i, d_tail, True
        chosen = remaining.pop(best_idx)
        result.extend(reverse_points(chosen) if flip else chosen)
    return result
