"""Correspondence matching.

This module pairs the strokes of two keyframes into equal-length paths.

Functions:
    resolve: Explicit groups, split/merge, complex mesh, auto-match.
    auto_match: INDEX or SPATIAL pairing of unbound strokes.
    solve_topology_split: Slice one stroke among several.
    slice_bounds: Ratio-proportional contiguous spans.
    align_phase: Rotate a closed loop into phase with a reference.

Classes:
    TweenPair: Normalized start/end paths with provenance.
    Resolution: Pairs plus passthrough strokes.
    SplitMatch: One piece of a solved split or merge.
    TopologySearchError: Raised when no usable slicing exists.
"""

from .phase import align_phase
from .resolver import Resolution, TweenPair, auto_match, normalize_pair, resolve
from .topology import SplitMatch, TopologySearchError, slice_bounds, solve_topology_split

__all__ = [
    'resolve', 'auto_match', 'normalize_pair', 'Resolution', 'TweenPair',
    'solve_topology_split', 'slice_bounds', 'SplitMatch', 'TopologySearchError',
    'align_phase',
]
