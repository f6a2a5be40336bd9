"""Shared configuration for the tween engine.

This module centralizes the tuning values used by:
    - utils.geometry (closure heuristics, loop seam tolerance)
    - matching (split resolution, permutation bound, rotation stride)
    - tweening (guide snapping, style defaults)
    - api (memo cache size)

Having these values in one place keeps the resolver and the interpolator
consistent with each other and makes it easy to tune them globally. Callers
that need different values build a TweenConfig and pass it to the entry
points instead of editing the constants.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

# Endpoint gap under which an unflagged path is treated as closed
CLOSED_GAP_THRESHOLD = 10.0

# Endpoint gap as a fraction of arc length under which a path is closed
CLOSED_GAP_RATIO = 0.05

# Gap under which the last vertex of a loop duplicates the first
LOOP_SEAM_TOLERANCE = 5.0

# Endpoints count this many times more than interior points in path costs
ENDPOINT_COST_WEIGHT = 5.0

# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

# Samples taken along the single side of a split/merge
SPLIT_RESOLUTION = 300

# Samples used for merged polylines in the many-to-many fallback
RESAMPLE_RESOLUTION = 60

# Largest number of children searched by permutation (N! candidates)
MAX_TOPOLOGY_CHILDREN = 8

# Smallest slice handed to a child when the search runs in robust mode
MIN_SEGMENT_POINTS = 5

# Rotation stride for closed single-side paths in robust mode
CLOSED_OFFSET_STRIDE = 5

# ---------------------------------------------------------------------------
# Tweening
# ---------------------------------------------------------------------------

# Unlinked guides must start/end this close to the pair centroids
GUIDE_SNAP_DISTANCE = 15.0

# Style values assumed when a stroke leaves them unset
DEFAULT_COLOR = '#000000'
DEFAULT_WIDTH = 2.0
DEFAULT_TAPER = 0.0

# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

# Number of memoized frames kept by TweenService
TWEEN_CACHE_SIZE = 256


@dataclass(frozen=True)
class TweenConfig:
    """Tuning parameters for one tween computation.

    Every entry point accepts an optional TweenConfig; when omitted the
    module-level defaults above are used.

    Attributes:
        closed_gap_threshold: Absolute endpoint gap for the closure heuristic.
        closed_gap_ratio: Relative endpoint gap for the closure heuristic.
        loop_seam_tolerance: Gap under which a loop's last vertex is dropped
            as a duplicate of its first.
        endpoint_cost_weight: Multiplier applied to endpoint distances in
            phase alignment costs.
        split_resolution: Samples taken along the single side of a split.
        resample_resolution: Samples for many-to-many merged polylines.
        max_topology_children: Bound on the permutation search. Groups with
            more children fall back to the many-to-many method.
        min_segment_points: Slice floor used in robust mode.
        closed_offset_stride: Rotation stride for closed single-side paths.
        guide_snap_distance: Snap radius for unlinked motion guides.
        cache_size: Frames kept by the service memo.
    """
    closed_gap_threshold: float = CLOSED_GAP_THRESHOLD
    closed_gap_ratio: float = CLOSED_GAP_RATIO
    loop_seam_tolerance: float = LOOP_SEAM_TOLERANCE
    endpoint_cost_weight: float = ENDPOINT_COST_WEIGHT
    split_resolution: int = SPLIT_RESOLUTION
    resample_resolution: int = RESAMPLE_RESOLUTION
    max_topology_children: int = MAX_TOPOLOGY_CHILDREN
    min_segment_points: int = MIN_SEGMENT_POINTS
    closed_offset_stride: int = CLOSED_OFFSET_STRIDE
    guide_snap_distance: float = GUIDE_SNAP_DISTANCE
    cache_size: int = TWEEN_CACHE_SIZE

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> TweenConfig:
        """Create a config from a plain mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})


DEFAULT_CONFIG = TweenConfig()
