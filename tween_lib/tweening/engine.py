"""Tween computation entry point.

compute_tween is a pure function from a frame index, the two keyframes
that bracket it and the author's bindings to the strokes shown on that
frame. It never raises for bad geometry: degenerate input short-circuits
and unexpected numeric failures degrade to showing the source frame.

Example usage:
    Scrubbing between two keys::

        from tween_lib.tweening import compute_tween

        strokes = compute_tween(5, key0, key10, store)
        for stroke in strokes:
            print(stroke.id, stroke.parents, len(stroke.points))
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional, Union

from ..config import DEFAULT_CONFIG, TweenConfig
from ..correspondence.store import BindingStore
from ..domain.bindings import CorrespondenceGroup
from ..domain.stroke import Keyframe, MatchStrategy, Stroke
from ..matching.resolver import TweenPair, resolve
from .easing import apply_easing
from .interpolate import find_motion_path, interpolate_paths
from .style import blend_style

logger = logging.getLogger(__name__)

Bindings = Union[BindingStore, Iterable[CorrespondenceGroup]]


def _groups_for(bindings: Optional[Bindings], prev: Keyframe, next_: Keyframe) -> list[CorrespondenceGroup]:
    if bindings is None:
        return []
    if isinstance(bindings, BindingStore):
        return bindings.for_pair(prev.index, next_.index)
    return [g for g in bindings if g.matches_pair(prev.index, next_.index)]


def _tween_stroke(pair: TweenPair, t: float, prev: Keyframe, config: TweenConfig) -> Stroke:
    guide = find_motion_path(prev.guides, pair.start_center, pair.end_center,
                             pair.guide_ids, config)
    points = interpolate_paths(pair.start, pair.end, t, guide.points if guide else None)
    return Stroke(
        id=pair.pair_id,
        points=tuple(points),
        parents=pair.parents,
        layer_id=pair.style_source.layer_id or pair.style_target.layer_id,
        **blend_style(pair.style_source, pair.style_target, t),
    )


def static_stroke(stroke: Stroke) -> Stroke:
    """Copy of an unmatched source stroke shown as-is."""
    return replace(stroke, id=f'static-{stroke.id}', parents=(stroke.id,))


def compute_tween(frame_index: int, prev: Keyframe, next_: Keyframe,
                  bindings: Optional[Bindings] = None,
                  strategy: MatchStrategy = MatchStrategy.INDEX,
                  config: Optional[TweenConfig] = None) -> list[Stroke]:
    """Strokes shown at ``frame_index`` between two keyframes.

    Args:
        frame_index: Frame to compute.
        prev: Keyframe at or before the frame.
        next_: Keyframe at or after the frame.
        bindings: A BindingStore or an iterable of groups. Only groups for
            the (prev.index, next_.index) pair are used.
        strategy: Auto-match strategy for unbound strokes.
        config: Tuning values; defaults to DEFAULT_CONFIG.

    Returns:
        Explicit tweens in binding order, then auto-matched tweens, then
        static copies of unmatched source strokes. At or before
        ``prev.index`` the source strokes are returned unchanged, at or
        after ``next_.index`` the target strokes. An empty frame on either
        side yields an empty list.
    """
    config = config or DEFAULT_CONFIG

    if prev.id == next_.id or frame_index <= prev.index:
        return list(prev.strokes)
    if frame_index >= next_.index:
        return list(next_.strokes)
    if not prev.strokes or not next_.strokes:
        return []

    raw_t = (frame_index - prev.index) / (next_.index - prev.index)
    t = apply_easing(raw_t, prev.easing)

    try:
        resolution = resolve(prev.strokes, next_.strokes, _groups_for(bindings, prev, next_),
                             strategy, config)
        tweens = [_tween_stroke(pair, t, prev, config) for pair in resolution.pairs]
    except (ValueError, FloatingPointError, IndexError) as e:
        logger.warning("Tween %s -> %s at frame %d failed (%s), holding source frame",
                       prev.id, next_.id, frame_index, e)
        return list(prev.strokes)

    tweens.extend(static_stroke(s) for s in resolution.passthrough)
    return tweens
