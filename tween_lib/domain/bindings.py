"""Correspondence value objects.

A CorrespondenceGroup is the stored form of an author-declared mapping
between strokes of two keyframes. Multiplicity in its id lists carries
meaning: a source id listed against two target ids is a split, the
reverse is a merge.

Connections are the exploded, single-edge form used while a binding is
being edited. They are regrouped into CorrespondenceGroups afterwards.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class CorrespondenceGroup:
    """Grouped binding between source-frame and target-frame strokes.

    ``id`` is excluded from equality so two groupings with the same content
    compare equal regardless of how their ids were generated.
    """
    source_frame_index: int
    target_frame_index: int
    source_stroke_ids: Tuple[str, ...]
    target_stroke_ids: Tuple[str, ...]
    id: str = field(default='', compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'source_stroke_ids', tuple(self.source_stroke_ids))
        object.__setattr__(self, 'target_stroke_ids', tuple(self.target_stroke_ids))

    def matches_pair(self, source_frame_index: int, target_frame_index: int) -> bool:
        return (self.source_frame_index == source_frame_index and
                self.target_frame_index == target_frame_index)

    @property
    def is_split(self) -> bool:
        return len(set(self.source_stroke_ids)) == 1 and len(self.target_stroke_ids) > 1


@dataclass(frozen=True)
class Connection:
    """A single source -> target edge."""
    source: str
    target: str


@dataclass(frozen=True)
class ConnectionEdit:
    """A user request to (re)connect sources to a target stroke.

    Attributes:
        sources: Source stroke ids being connected.
        new_target: Target stroke id the sources should point at.
        old_targets: Targets the sources currently point at. Edges from a
            source to one of these are moved; a source with none of them is
            given a new edge instead.
        overwrite: Evict other edges already pointing at ``new_target``.
        swap: When moving an edge onto a claimed target, send the displaced
            edges to the vacated old target. Ignored when ``overwrite`` is
            set. With neither flag both edges coexist.
    """
    sources: Tuple[str, ...]
    new_target: str
    old_targets: Tuple[str, ...] = ()
    overwrite: bool = False
    swap: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'sources', tuple(self.sources))
        object.__setattr__(self, 'old_targets', tuple(self.old_targets))
