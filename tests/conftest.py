"""Shared pytest fixtures for the tween_lib test suite.

Fixtures:
    square: Closed 100x100 square stroke.
    triangles: Two closed triangles covering the square's left and right
        halves.
    square_split_frames: Keyframes 0 and 10 for splitting the square into
        the triangles.
    store: Empty BindingStore.

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import sys
from pathlib import Path

import pytest

# Add repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tween_lib.correspondence import BindingStore  # noqa: E402
from tween_lib.domain import Keyframe, Point, Stroke  # noqa: E402


# -----------------------------------------------------------------------------
# Pytest Markers
# -----------------------------------------------------------------------------

def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# -----------------------------------------------------------------------------
# Shape Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def square():
    """Return a closed 100x100 square stroke with id 'sq'."""
    return Stroke(
        id='sq',
        points=(Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100)),
        closed=True,
        color='#ff0000',
        width=2.0,
    )


@pytest.fixture
def triangles():
    """Return the left and right triangles of the square, ids 'tri_a' and 'tri_b'."""
    tri_a = Stroke(
        id='tri_a',
        points=(Point(0, 0), Point(50, 50), Point(0, 100)),
        closed=True,
        color='#0000ff',
    )
    tri_b = Stroke(
        id='tri_b',
        points=(Point(100, 0), Point(100, 100), Point(50, 50)),
        closed=True,
        color='#0000ff',
    )
    return [tri_a, tri_b]


@pytest.fixture
def square_split_frames(square, triangles):
    """Return (key0, key10) holding the square and the two triangles."""
    key0 = Keyframe(id='k0', index=0, strokes=(square,))
    key10 = Keyframe(id='k10', index=10, strokes=tuple(triangles))
    return key0, key10


@pytest.fixture
def store():
    """Return an empty BindingStore."""
    return BindingStore()
