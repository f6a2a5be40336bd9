"""Stroke and keyframe value objects.

This module provides the snapshot types the tween engine reads. They are
owned by the external keyframe store; the engine only ever builds new
values from them, so every type here is frozen and uses tuples for its
sequences.

The module provides the following classes:
    Easing: Named easing curves selected per source keyframe.
    MatchStrategy: How unbound strokes are paired (declaration order or
        nearest centroid).
    KeyframeKind: Authored key, hold, or generated in-between frame.
    Stroke: A path of Points plus style, closure flag and provenance.
    Keyframe: A frame index with its strokes and motion guides.

Example usage:
    Building a keyframe::

        from tween_lib.domain import Keyframe, Point, Stroke

        square = Stroke(
            id='sq',
            points=(Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)),
            closed=True,
            color='#ff0000',
        )
        frame = Keyframe(id='k0', index=0, strokes=(square,))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .geometry import Point

logger = logging.getLogger(__name__)


class Easing(Enum):
    """Easing curves over t in [0, 1]."""
    LINEAR = 'LINEAR'
    EASE_IN = 'EASE_IN'
    EASE_OUT = 'EASE_OUT'
    EASE_IN_OUT = 'EASE_IN_OUT'

    @classmethod
    def parse(cls, value: Optional[str]) -> Easing:
        """Look up an easing by name, falling back to LINEAR."""
        if value is None:
            return cls.LINEAR
        try:
            return cls(value.upper())
        except ValueError:
            logger.warning("Unknown easing %r, using LINEAR", value)
            return cls.LINEAR


class MatchStrategy(Enum):
    """Auto-match strategy for strokes without explicit bindings.

    INDEX: pair by declaration order.
    SPATIAL: greedily pair nearest centroids first.
    """
    INDEX = 'INDEX'
    SPATIAL = 'SPATIAL'

    @classmethod
    def parse(cls, value: Optional[str]) -> MatchStrategy:
        """Look up a strategy by name, falling back to INDEX."""
        if value is None:
            return cls.INDEX
        try:
            return cls(value.upper())
        except ValueError:
            logger.warning("Unknown match strategy %r, using INDEX", value)
            return cls.INDEX


class KeyframeKind(Enum):
    KEY = 'KEY'
    HOLD = 'HOLD'
    GENERATED = 'GENERATED'


@dataclass(frozen=True)
class Stroke:
    """A vector path with style and provenance.

    Optional fields are tagged by ``None``: an unset ``closed`` means the
    closure heuristic decides, unset style fields fall back to the defaults
    in ``tween_lib.config`` when blended.

    Attributes:
        id: Stable identifier generated once when the stroke is authored.
        points: Anchor points in drawing order.
        closed: Explicit closure flag, or None when unspecified.
        color: CSS stroke colour.
        fill_color: CSS fill colour; None or 'transparent' means no fill.
        width: Stroke width.
        taper_start: Fraction of length tapered at the start (0-1).
        taper_end: Fraction of length tapered at the end (0-1).
        parents: Ids of the source/target strokes a tween was built from.
        linked_stroke_ids: For guides, the stroke ids this guide drives.
        layer_id: Owning layer, carried through to tweens.
    """
    id: str
    points: Tuple[Point, ...] = ()
    closed: Optional[bool] = None
    color: Optional[str] = None
    fill_color: Optional[str] = None
    width: Optional[float] = None
    taper_start: Optional[float] = None
    taper_end: Optional[float] = None
    parents: Tuple[str, ...] = ()
    linked_stroke_ids: Tuple[str, ...] = ()
    layer_id: Optional[str] = None

    def __post_init__(self):
        # Accept lists from callers but store tuples
        object.__setattr__(self, 'points', tuple(self.points))
        object.__setattr__(self, 'parents', tuple(self.parents))
        object.__setattr__(self, 'linked_stroke_ids', tuple(self.linked_stroke_ids))

    @property
    def start(self) -> Point:
        """First point of stroke."""
        return self.points[0] if self.points else Point(0, 0)

    @property
    def end(self) -> Point:
        """Last point of stroke."""
        return self.points[-1] if self.points else Point(0, 0)

    @property
    def has_fill(self) -> bool:
        return bool(self.fill_color) and self.fill_color != 'transparent'


@dataclass(frozen=True)
class Keyframe:
    """Snapshot of one keyframe of one layer.

    Attributes:
        id: Keyframe identifier.
        index: Frame number on the timeline.
        strokes: Strokes drawn on this frame.
        guides: Motion-path strokes that bend tweens leaving this frame.
        easing: Easing applied to tweens leaving this frame.
        kind: KEY, HOLD or GENERATED.
        layer_id: Owning layer.
        revision: Bumped by the owner whenever the snapshot changes, so
            memoized tweens can be invalidated.
    """
    id: str
    index: int
    strokes: Tuple[Stroke, ...] = ()
    guides: Tuple[Stroke, ...] = ()
    easing: Easing = Easing.LINEAR
    kind: KeyframeKind = KeyframeKind.KEY
    layer_id: Optional[str] = None
    revision: int = field(default=0, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'strokes', tuple(self.strokes))
        object.__setattr__(self, 'guides', tuple(self.guides))

    def stroke_ids(self) -> Tuple[str, ...]:
        return tuple(s.id for s in self.strokes)
