"""Topology split/merge solver.

When one stroke is bound to several (a split) or several strokes to one (a
merge), there is no index-wise correspondence to interpolate. The solver
cuts the single stroke into contiguous pieces, one per child, sized by each
child's share of the total child arc length, and picks the cut that puts
every piece closest to its child.

Algorithm Overview:
    1. Resample the single stroke to ``split_resolution`` points. A closed
       single stroke loses its duplicated closing vertex.
    2. Search every assignment order of the children (permutations, bounded
       by ``max_topology_children``), both scan directions of the single
       path, and a set of rotations of its start point: every
       ``closed_offset_stride`` samples when the single path is closed,
       every sample when only a child is closed, and the unrotated start
       otherwise.
    3. Score a candidate by the summed distance between each piece's
       centroid and its child's centroid. The first minimum in search order
       wins.
    4. Align each child against its piece. Closed children are phase
       aligned in both point orders and the cheaper order kept. Open
       children are resampled to the piece length and reversed when that
       pairs their endpoints better.

Piece centroids are computed from prefix sums over the doubled single
path, so a whole batch of permutations and every rotation offset is scored
with a few array operations.

Typical usage:
    try:
        matches = solve_topology_split(square, [tri_a, tri_b], splitting=True)
    except TopologySearchError:
        ...  # fall back to merged polylines
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from itertools import islice, permutations
from typing import Sequence

import numpy as np

from ..config import DEFAULT_CONFIG, TweenConfig
from ..domain.geometry import Point
from ..domain.stroke import Stroke
from ..utils.geometry import (
    as_array,
    centroid,
    closed_outline,
    distance,
    is_closed_path,
    match_path_direction,
    path_distance_cost,
    path_length,
    resample_path,
    reverse_points,
)
from .phase import align_phase

logger = logging.getLogger(__name__)

# Permutations scored per vectorized batch
PERMUTATION_BATCH = 256


class TopologySearchError(Exception):
    """No usable slicing of the single stroke was found."""


@dataclass(frozen=True)
class SplitMatch:
    """One piece of a solved split or merge.

    Attributes:
        start: Normalized path at the source frame.
        end: Normalized path at the target frame, same length as ``start``.
        mapped_stroke_id: Id of the child stroke this piece was assigned to.
        span: Inclusive (first, last) sample indices of the piece along the
            oriented single path. Neighbouring pieces share their boundary
            sample.
    """
    start: tuple[Point, ...]
    end: tuple[Point, ...]
    mapped_stroke_id: str
    span: tuple[int, int]


def stroke_path(stroke: Stroke, config: TweenConfig = DEFAULT_CONFIG) -> list[Point]:
    """Stroke geometry with the closing edge explicit for flagged loops."""
    if stroke.closed:
        return closed_outline(stroke.points, config)
    return list(stroke.points)


def slice_bounds(total_points: int, ratios: Sequence[float], enforce_min: bool = False,
                 min_points: int = DEFAULT_CONFIG.min_segment_points) -> list[tuple[int, int]]:
    """Split ``total_points`` samples into contiguous pieces by ratio.

    Ratios are normalized to sum to one. Each piece but the last takes
    ``floor(ratio * total_points)`` samples (at least ``min_points`` when
    ``enforce_min``), clamped to the end of the path; the last piece takes
    the remainder. Neighbouring pieces share their boundary sample, so the
    spans cover the path with no gaps.

    Returns:
        Inclusive (first, last) index pairs, one per ratio.
    """
    weights = np.asarray(ratios, dtype=float)
    total_ratio = weights.sum()
    normalized = weights / total_ratio if total_ratio > 0 else np.zeros_like(weights)
    starts, ends = _batch_bounds(total_points, normalized[None, :], enforce_min, min_points)
    return [(int(s), int(e)) for s, e in zip(starts[0], ends[0])]


def _batch_bounds(total_points: int, ratios: np.ndarray, enforce_min: bool,
                  min_points: int) -> tuple[np.ndarray, np.ndarray]:
    """Slice bounds for each row of a (B, N) array of normalized ratios."""
    n = ratios.shape[1]
    counts = np.floor(ratios * total_points).astype(int)
    if enforce_min:
        counts = np.maximum(counts, min_points)
    starts = np.zeros_like(counts)
    ends = np.zeros_like(counts)
    current = np.zeros(ratios.shape[0], dtype=int)
    for k in range(n):
        starts[:, k] = current
        if k == n - 1:
            ends[:, k] = total_points - 1
        else:
            ends[:, k] = np.minimum(current + counts[:, k], total_points - 1)
            current = ends[:, k]
    return starts, ends


def _search(parent: np.ndarray, parent_closed: bool, lengths: np.ndarray,
            centers: np.ndarray, robust: bool, config: TweenConfig):
    """Find the cheapest (permutation, direction, offset) cut.

    Returns:
        (cost, permutation, direction, offset) of the first minimum found
        in permutation, direction, offset order.
    """
    n_children = len(lengths)
    size = len(parent)
    total_points = size + 1 if parent_closed else size
    ratios_all = lengths / lengths.sum()

    if robust:
        stride = config.closed_offset_stride if parent_closed else 1
        offsets = np.arange(0, size, stride)
    else:
        offsets = np.array([0])

    # Prefix sums over the doubled path let any rotated piece be read as a
    # contiguous window starting at offset + first.
    prefixes = []
    for oriented in (parent, parent[::-1]):
        doubled = np.vstack((oriented, oriented))
        prefixes.append(np.vstack((np.zeros((1, 2)), np.cumsum(doubled, axis=0))))

    best = (np.inf, None, 1, 0)
    perm_iter = permutations(range(n_children))
    while True:
        batch = list(islice(perm_iter, PERMUTATION_BATCH))
        if not batch:
            break
        perms = np.array(batch)
        starts, ends = _batch_bounds(total_points, ratios_all[perms], robust,
                                     config.min_segment_points)
        counts = (ends - starts + 1)[:, None, :, None]
        first = offsets[None, :, None] + starts[:, None, :]
        last = offsets[None, :, None] + ends[:, None, :] + 1
        child_centers = centers[perms][:, None, :, :]

        costs = []
        for prefix in prefixes:
            piece_centers = (prefix[last] - prefix[first]) / counts
            costs.append(np.hypot(*np.moveaxis(piece_centers - child_centers, -1, 0)).sum(axis=-1))
        # (B, direction, offset) flattened row-major keeps search order
        stacked = np.stack(costs, axis=1)
        flat = int(np.argmin(stacked))
        cost = float(stacked.flat[flat])
        if cost < best[0]:
            b, d, o = np.unravel_index(flat, stacked.shape)
            best = (cost, batch[b], 1 if d == 0 else -1, int(offsets[o]))
    return best


def solve_topology_split(single: Stroke, many: Sequence[Stroke], splitting: bool,
                         config: TweenConfig = DEFAULT_CONFIG) -> list[SplitMatch]:
    """Pair pieces of one stroke with several strokes.

    Args:
        single: The stroke on the single side of the binding.
        many: The strokes on the multiple side, in binding order.
        splitting: True when ``single`` is the source (a split), False when
            it is the target (a merge). Controls which side of each
            SplitMatch is ``start``.
        config: Search bounds and resolutions.

    Returns:
        One SplitMatch per child, in the order the children lie along the
        single stroke.

    Raises:
        TopologySearchError: Too many children to search, zero total child
            length, a degenerate single stroke, or no finite-cost cut.
    """
    if not many:
        raise TopologySearchError("no strokes on the multiple side")
    if len(many) > config.max_topology_children:
        raise TopologySearchError(
            f"{len(many)} children exceeds search bound {config.max_topology_children}")

    lengths = np.array([path_length(stroke_path(s, config)) for s in many])
    if lengths.sum() <= 0:
        raise TopologySearchError("children have zero total length")
    centers = np.array([centroid(s.points).to_tuple() for s in many])
    child_closed = [is_closed_path(s.points, s.closed, config) for s in many]

    parent_closed = is_closed_path(single.points, single.closed, config)
    outline = stroke_path(single, config)
    if path_length(outline) <= 0:
        raise TopologySearchError(f"stroke {single.id} has zero length")
    parent_points = resample_path(outline, config.split_resolution)
    if parent_closed and distance(parent_points[0], parent_points[-1]) < config.loop_seam_tolerance:
        parent_points.pop()

    robust = parent_closed or any(child_closed)
    cost, order, direction, offset = _search(
        as_array(parent_points), parent_closed, lengths, centers, robust, config)
    if order is None or not math.isfinite(cost):
        raise TopologySearchError(f"no finite-cost cut for stroke {single.id}")

    logger.debug("Split %s into %d: order=%s direction=%d offset=%d cost=%.2f",
                 single.id, len(many), order, direction, offset, cost)

    base = parent_points if direction == 1 else parent_points[::-1]
    rotated = base[offset:] + base[:offset]
    sliceable = rotated + [rotated[0]] if parent_closed else rotated
    # Must reproduce the bounds the search scored
    starts, ends = _batch_bounds(len(sliceable), (lengths / lengths.sum())[list(order)][None, :],
                                 robust, config.min_segment_points)
    bounds = [(int(s), int(e)) for s, e in zip(starts[0], ends[0])]

    matches = []
    for k, (first, last) in zip(order, bounds):
        child = many[k]
        segment = sliceable[first:last + 1]
        if child_closed[k]:
            forward = align_phase(segment, child.points, config)
            backward = align_phase(segment, reverse_points(child.points), config)
            w = config.endpoint_cost_weight
            if path_distance_cost(segment, forward, w) <= path_distance_cost(segment, backward, w):
                aligned = forward
            else:
                aligned = backward
        else:
            aligned = match_path_direction(segment, resample_path(stroke_path(child, config), len(segment)))
        if len(aligned) != len(segment):
            aligned = resample_path(aligned, len(segment))

        if splitting:
            start, end = segment, aligned
        else:
            start, end = aligned, segment
        matches.append(SplitMatch(tuple(start), tuple(end), child.id, (first, last)))
    return matches
