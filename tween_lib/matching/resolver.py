"""Correspondence resolution.

Turns the strokes of two keyframes plus the author's bindings into a list
of TweenPairs: equal-length start/end paths ready for interpolation, each
carrying the ids it was built from.

Resolution order:
    1. Explicit groups, in binding order. One source and one target are
       upsampled to a shared point count. One source and several targets
       (a split) or the reverse (a merge) go through the topology solver,
       falling back to the complex mesh when the search fails. Anything
       else is a complex mesh: both sides chained into single polylines.
    2. Strokes no usable group mentions are auto-matched, by declaration
       order (INDEX) or nearest centroid first (SPATIAL).
    3. Source strokes left over pass through unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import numpy as np

from ..config import DEFAULT_CONFIG, TweenConfig
from ..domain.bindings import CorrespondenceGroup
from ..domain.geometry import Point
from ..domain.stroke import MatchStrategy, Stroke
from ..utils.geometry import (
    as_array,
    centroid,
    is_closed_path,
    match_path_direction,
    merge_strokes,
    resample_path,
    upsample_topology,
)
from .phase import align_phase
from .topology import TopologySearchError, solve_topology_split, stroke_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TweenPair:
    """Two normalized paths to interpolate between.

    Attributes:
        pair_id: Id the interpolated stroke will carry.
        start: Path at the source frame.
        end: Path at the target frame, same length as ``start``.
        parents: Source and target stroke ids this pair was built from.
        style_source: Stroke whose style applies at the source frame.
        style_target: Stroke whose style applies at the target frame.
        guide_ids: Source stroke ids a linked motion guide may name.
        start_center: Centroid at the source frame, for guide snapping.
        end_center: Centroid at the target frame, for guide snapping.
    """
    pair_id: str
    start: tuple[Point, ...]
    end: tuple[Point, ...]
    parents: tuple[str, ...]
    style_source: Stroke
    style_target: Stroke
    guide_ids: tuple[str, ...]
    start_center: Point
    end_center: Point


@dataclass
class Resolution:
    """Result of resolve: pairs to tween plus strokes shown unchanged."""
    pairs: list[TweenPair] = field(default_factory=list)
    passthrough: list[Stroke] = field(default_factory=list)


def _unique(ids: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(ids))


def normalize_pair(a: Sequence[Point], b: Sequence[Point]) -> tuple[list[Point], list[Point]]:
    """Upsample the shorter of two paths so both have the same point count.

    An empty side grows out of the other side's first anchor.
    """
    a, b = list(a), list(b)
    if not a and b:
        a = [b[0].anchor()]
    if not b and a:
        b = [a[0].anchor()]
    n = max(len(a), len(b))
    return upsample_topology(a, n), upsample_topology(b, n)


def _one_to_one(pair_id: str, source: Stroke, target: Stroke, flip: bool) -> TweenPair:
    end_points = list(target.points)
    if flip:
        end_points = match_path_direction(source.points, end_points)
    start, end = normalize_pair(source.points, end_points)
    return TweenPair(
        pair_id=pair_id,
        start=tuple(start),
        end=tuple(end),
        parents=(source.id, target.id),
        style_source=source,
        style_target=target,
        guide_ids=(source.id,),
        start_center=centroid(source.points),
        end_center=centroid(target.points),
    )


def _complex_mesh(pair_id: str, sources: Sequence[Stroke], targets: Sequence[Stroke],
                  config: TweenConfig) -> TweenPair:
    """Chain each side into one polyline and pair the two polylines."""
    merged_source = merge_strokes([stroke_path(s, config) for s in sources])
    merged_target = merge_strokes([stroke_path(s, config) for s in targets])

    n = config.resample_resolution
    start = resample_path(merged_source, n)
    end = match_path_direction(start, resample_path(merged_target, n))

    source_closed = is_closed_path(merged_source, sources[0].closed if len(sources) == 1 else None, config)
    target_closed = is_closed_path(merged_target, targets[0].closed if len(targets) == 1 else None, config)
    if source_closed and target_closed:
        end = align_phase(start, end, config)

    parents = tuple(_unique([s.id for s in sources] + [t.id for t in targets]))
    logger.debug("Complex mesh %s: %d source(s) x %d target(s)", pair_id, len(sources), len(targets))
    return TweenPair(
        pair_id=pair_id,
        start=tuple(start),
        end=tuple(end),
        parents=parents,
        style_source=sources[0],
        style_target=targets[0],
        guide_ids=tuple(s.id for s in sources),
        start_center=centroid(start),
        end_center=centroid(end),
    )


def _split_or_merge(pair_id: str, sources: Sequence[Stroke], targets: Sequence[Stroke],
                    config: TweenConfig) -> list[TweenPair]:
    splitting = len(sources) == 1
    single = sources[0] if splitting else targets[0]
    many = targets if splitting else sources
    try:
        matches = solve_topology_split(single, many, splitting, config)
    except TopologySearchError as e:
        logger.debug("Topology search failed for %s (%s), using complex mesh", pair_id, e)
        return [_complex_mesh(pair_id, sources, targets, config)]

    children = {s.id: s for s in many}
    pairs = []
    for k, match in enumerate(matches):
        child = children[match.mapped_stroke_id]
        source, target = (single, child) if splitting else (child, single)
        pairs.append(TweenPair(
            pair_id=f'{pair_id}-{k}',
            start=match.start,
            end=match.end,
            parents=(source.id, target.id),
            style_source=source,
            style_target=target,
            guide_ids=tuple(s.id for s in sources),
            start_center=centroid(match.start),
            end_center=centroid(match.end),
        ))
    return pairs


def resolve_group(group: CorrespondenceGroup, position: int, sources: Sequence[Stroke],
                  targets: Sequence[Stroke], config: TweenConfig = DEFAULT_CONFIG) -> list[TweenPair]:
    """Pairs for one explicit group whose strokes have been looked up."""
    pair_id = f'tween-{group.id or position}'
    if len(sources) == 1 and len(targets) == 1:
        return [_one_to_one(pair_id, sources[0], targets[0], flip=False)]
    if len(sources) == 1 or len(targets) == 1:
        return _split_or_merge(pair_id, sources, targets, config)
    return [_complex_mesh(pair_id, sources, targets, config)]


def auto_match(sources: Sequence[Stroke], targets: Sequence[Stroke],
               strategy: MatchStrategy = MatchStrategy.INDEX) -> list[tuple[int, int]]:
    """Pair unbound strokes.

    INDEX pairs the i-th source with the i-th target. SPATIAL sorts every
    source/target centroid distance ascending and claims pairs greedily,
    skipping strokes already claimed. Equal distances keep row-major
    order.

    Returns:
        (source index, target index) pairs sorted by source index.
    """
    if not sources or not targets:
        return []
    if strategy is not MatchStrategy.SPATIAL:
        return [(i, i) for i in range(min(len(sources), len(targets)))]

    src_centers = as_array([centroid(s.points) for s in sources])
    tgt_centers = as_array([centroid(t.points) for t in targets])
    diff = src_centers[:, None, :] - tgt_centers[None, :, :]
    dist = np.hypot(diff[..., 0], diff[..., 1])

    claimed_src: set[int] = set()
    claimed_tgt: set[int] = set()
    matches = []
    for flat in np.argsort(dist, axis=None, kind='stable'):
        i, j = (int(v) for v in np.unravel_index(flat, dist.shape))
        if i in claimed_src or j in claimed_tgt:
            continue
        claimed_src.add(i)
        claimed_tgt.add(j)
        matches.append((i, j))
        if len(claimed_src) == len(sources) or len(claimed_tgt) == len(targets):
            break
    return sorted(matches)


def resolve(source_strokes: Sequence[Stroke], target_strokes: Sequence[Stroke],
            groups: Iterable[CorrespondenceGroup] = (),
            strategy: MatchStrategy = MatchStrategy.INDEX,
            config: Optional[TweenConfig] = None) -> Resolution:
    """Resolve two keyframes' strokes into pairs of equal-length paths.

    Args:
        source_strokes: Strokes of the earlier keyframe.
        target_strokes: Strokes of the later keyframe.
        groups: Bindings for this frame pair, in binding order.
        strategy: Auto-match strategy for strokes no group mentions.
        config: Tuning values; defaults to DEFAULT_CONFIG.

    Returns:
        Resolution with explicit pairs (binding order), then auto pairs
        (source order), and the unmatched source strokes as passthrough.

    Example:
        >>> res = resolve([square], [moved_square])
        >>> res.pairs[0].parents
        ('sq', 'sq2')
    """
    config = config or DEFAULT_CONFIG
    src_map = {s.id: s for s in source_strokes}
    tgt_map = {s.id: s for s in target_strokes}

    resolution = Resolution()
    bound_sources: set[str] = set()
    bound_targets: set[str] = set()

    for position, group in enumerate(groups):
        sources = [src_map[i] for i in _unique(group.source_stroke_ids) if i in src_map]
        targets = [tgt_map[i] for i in _unique(group.target_stroke_ids) if i in tgt_map]
        if not sources or not targets:
            logger.debug("Skipping group %s: strokes missing from a frame", group.id or position)
            continue
        bound_sources.update(s.id for s in sources)
        bound_targets.update(t.id for t in targets)
        resolution.pairs.extend(resolve_group(group, position, sources, targets, config))

    free_sources = [s for s in source_strokes if s.id not in bound_sources]
    free_targets = [t for t in target_strokes if t.id not in bound_targets]

    matched = set()
    for i, j in auto_match(free_sources, free_targets, strategy):
        source, target = free_sources[i], free_targets[j]
        resolution.pairs.append(_one_to_one(f'auto-{source.id}-{target.id}', source, target, flip=True))
        matched.add(i)

    resolution.passthrough = [s for i, s in enumerate(free_sources) if i not in matched]
    logger.debug("Resolved %d pair(s), %d passthrough", len(resolution.pairs), len(resolution.passthrough))
    return resolution
