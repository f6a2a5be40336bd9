"""Domain objects for keyframe tweening.

This module provides the value objects used throughout the package. All of
them are frozen: the tween engine reads snapshots owned by the keyframe
store and only ever builds new values.

Geometry classes:
    Point: Anchor point with optional bezier handles.

Frame classes:
    Stroke: Path plus style, closure flag and provenance ids.
    Keyframe: Frame index, strokes, motion guides and easing.
    Easing, MatchStrategy, KeyframeKind: Enumerations.

Correspondence classes:
    CorrespondenceGroup: Stored author binding between two frames.
    Connection: Single exploded source -> target edge.
    ConnectionEdit: Request to add or move a connection.

Example usage:
    Working with geometry::

        from tween_lib.domain import Point

        p1 = Point(0, 0)
        p2 = Point(3, 4, handle_in=Point(2, 4))
        moved = p2.translated(1, 0)   # handle_in moves to (3, 4)
"""

from .bindings import Connection, ConnectionEdit, CorrespondenceGroup
from .geometry import Point
from .stroke import Easing, Keyframe, KeyframeKind, MatchStrategy, Stroke

__all__ = [
    'Point',
    'Stroke', 'Keyframe', 'Easing', 'MatchStrategy', 'KeyframeKind',
    'CorrespondenceGroup', 'Connection', 'ConnectionEdit',
]
