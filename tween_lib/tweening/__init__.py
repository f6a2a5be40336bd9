"""Tween interpolation.

This module turns resolved stroke pairs into the strokes shown between two
keyframes.

Functions:
    compute_tween: Strokes at a frame between two keyframes.
    apply_easing: Easing curves over t in [0, 1].
    interpolate_paths: Index-wise blend with optional guide offset.
    find_motion_path: Linked or snapped motion guide for a pair.
    blend_style: Colour, fill, width and taper blend.
    find_bracketing_keyframes, frame_content, generate_sequence: Timeline
        helpers.
"""

from .easing import apply_easing
from .engine import compute_tween, static_stroke
from .interpolate import find_motion_path, guide_offset, interpolate_paths
from .style import blend_style
from .timeline import find_bracketing_keyframes, frame_content, generate_sequence

__all__ = [
    'compute_tween', 'static_stroke',
    'apply_easing',
    'interpolate_paths', 'guide_offset', 'find_motion_path',
    'blend_style',
    'find_bracketing_keyframes', 'frame_content', 'generate_sequence',
]
