"""Timeline helpers around compute_tween.

The keyframe store decides which frames exist; these helpers answer the
questions a host asks of a list of keyframes: which keys bracket a frame,
what a frame shows, and what in-between frames a key pair would generate.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..config import TweenConfig
from ..domain.stroke import Easing, Keyframe, KeyframeKind, MatchStrategy, Stroke
from .engine import Bindings, compute_tween

logger = logging.getLogger(__name__)


def _layer_frames(keyframes: Sequence[Keyframe], layer_id: Optional[str]) -> list[Keyframe]:
    if layer_id is None:
        return list(keyframes)
    return [k for k in keyframes if k.layer_id == layer_id]


def find_bracketing_keyframes(keyframes: Sequence[Keyframe], frame_index: int,
                              layer_id: Optional[str] = None
                              ) -> tuple[Optional[Keyframe], Optional[Keyframe]]:
    """Authored keyframes on either side of a frame.

    GENERATED frames are ignored. Before the first key both sides are the
    first key; after the last key both are the last key. On a key, both
    sides are that key.

    Returns:
        (prev, next), or (None, None) when there are no authored keys.
    """
    keys = sorted((k for k in _layer_frames(keyframes, layer_id)
                   if k.kind is not KeyframeKind.GENERATED), key=lambda k: k.index)
    if not keys:
        return None, None

    prev = keys[0]
    next_ = keys[-1]
    for key in keys:
        if key.index <= frame_index:
            prev = key
        if key.index >= frame_index:
            next_ = key
            break
    return prev, next_


def frame_content(keyframes: Sequence[Keyframe], frame_index: int,
                  bindings: Optional[Bindings] = None,
                  strategy: MatchStrategy = MatchStrategy.INDEX,
                  config: Optional[TweenConfig] = None,
                  layer_id: Optional[str] = None) -> list[Stroke]:
    """Strokes displayed on a frame.

    A keyframe of any kind at exactly ``frame_index`` is shown as stored;
    otherwise the frame is tweened between its bracketing keys.
    """
    frames = _layer_frames(keyframes, layer_id)
    for key in frames:
        if key.index == frame_index:
            return list(key.strokes)

    prev, next_ = find_bracketing_keyframes(frames, frame_index)
    if prev is None or next_ is None:
        return []
    return compute_tween(frame_index, prev, next_, bindings, strategy, config)


def generate_sequence(keyframes: Sequence[Keyframe], frame_index: int,
                      bindings: Optional[Bindings] = None,
                      strategy: MatchStrategy = MatchStrategy.INDEX,
                      config: Optional[TweenConfig] = None,
                      layer_id: Optional[str] = None) -> list[Keyframe]:
    """Bake the in-betweens around ``frame_index`` into GENERATED keyframes.

    Every frame strictly between the bracketing keys that does not already
    hold a keyframe gets one. The input list is not modified.

    Returns:
        The new keyframes in frame order. Empty when the frame is not
        between two distinct keys.
    """
    frames = _layer_frames(keyframes, layer_id)
    prev, next_ = find_bracketing_keyframes(frames, frame_index)
    if prev is None or next_ is None or prev.id == next_.id or next_.index <= prev.index + 1:
        return []

    occupied = {k.index for k in frames}
    generated = []
    for i in range(prev.index + 1, next_.index):
        if i in occupied:
            continue
        generated.append(Keyframe(
            id=f'{prev.id}-gen-{i}',
            index=i,
            strokes=tuple(compute_tween(i, prev, next_, bindings, strategy, config)),
            easing=Easing.LINEAR,
            kind=KeyframeKind.GENERATED,
            layer_id=prev.layer_id,
        ))
    logger.info("Generated %d frame(s) between %s and %s", len(generated), prev.id, next_.id)
    return generated
