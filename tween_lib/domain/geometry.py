"""Geometric value objects for vector keyframes."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Point:
    """Immutable 2D anchor point with optional cubic bezier handles.

    Handles are absolute positions. ``handle_in`` controls the curve arriving
    from the previous point, ``handle_out`` the curve leaving towards the
    next one. A segment is only curved when the first point has a
    ``handle_out`` and the second a ``handle_in``; otherwise it is straight.
    """
    x: float
    y: float
    handle_in: Optional[Point] = None
    handle_out: Optional[Point] = None

    @property
    def has_handles(self) -> bool:
        return self.handle_in is not None or self.handle_out is not None

    def anchor(self) -> Point:
        """Copy of this point without handles."""
        return Point(self.x, self.y)

    def translated(self, dx: float, dy: float) -> Point:
        """Move the anchor and any handles by the same offset."""
        return Point(
            self.x + dx,
            self.y + dy,
            self.handle_in.translated(dx, dy) if self.handle_in is not None else None,
            self.handle_out.translated(dx, dy) if self.handle_out is not None else None,
        )

    def swapped_handles(self) -> Point:
        """Point with in/out handles exchanged, used when reversing a path."""
        return Point(self.x, self.y, self.handle_out, self.handle_in)

    def to_tuple(self) -> Tuple[float, float]:
        """Convert anchor to tuple for compatibility."""
        return (self.x, self.y)
