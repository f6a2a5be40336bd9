"""Utility functions for tween computation.

This module provides the geometry kernel, colour blending and logging setup
used by the matcher and interpolator.

Geometry functions:
    path_length, centroid, resample_path, upsample_topology, is_closed_path,
    closed_outline, split_cubic, sample_stroke, point_on_path,
    reverse_points, path_distance_cost, match_path_direction, merge_strokes.

Colour functions:
    parse_color, to_css_color, tween_color.

Logging:
    configure_logging: Root logger setup for host applications.

Example usage:
    Normalizing a path::

        from tween_lib.utils import resample_path, upsample_topology

        dense = resample_path(points, 100)
        same_shape = upsample_topology(points, 20)
"""

from .color import RGBA, parse_color, to_css_color, tween_color
from .geometry import (
    centroid,
    closed_outline,
    distance,
    is_closed_path,
    match_path_direction,
    merge_strokes,
    path_distance_cost,
    path_length,
    point_on_path,
    resample_path,
    reverse_points,
    sample_stroke,
    split_cubic,
    upsample_topology,
)
from .log_setup import configure_logging

__all__ = [
    # Geometry
    'distance', 'path_length', 'centroid', 'is_closed_path', 'closed_outline',
    'split_cubic', 'sample_stroke', 'upsample_topology', 'resample_path',
    'point_on_path', 'reverse_points', 'path_distance_cost',
    'match_path_direction', 'merge_strokes',
    # Colour
    'RGBA', 'parse_color', 'to_css_color', 'tween_color',
    # Logging
    'configure_logging',
]
