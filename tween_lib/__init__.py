"""Vector Tween Package.

Topology-aware interpolation between vector keyframes. Given the strokes
of two keyframes and the author's correspondence bindings, this package
computes the strokes shown on any frame in between, including strokes that
split into several, several that merge into one, and closed loops that
must be rotated into phase so they do not swirl.

Architecture Overview:
    The engine is a pure function of its inputs. Keyframes, strokes and
    bindings are frozen snapshots owned by the host's keyframe store; the
    only mutable object is the caller-owned BindingStore, which is passed
    in rather than held.

    - tween_lib.domain provides the value objects (Point, Stroke, Keyframe,
      CorrespondenceGroup, ...)
    - tween_lib.utils holds the geometry kernel and colour maths
    - tween_lib.correspondence edits bindings as a bipartite edge graph
    - tween_lib.matching resolves bindings into equal-length path pairs
    - tween_lib.tweening interpolates the pairs and blends their style
    - tween_lib.api offers a memoizing service for host applications

The package is organized into the following modules:
    config: Tuning constants and the TweenConfig dataclass.
    domain: Core value objects and enumerations.
    utils: Geometry, colour and logging helpers.
    correspondence: explode / apply edit / regroup and BindingStore.
    matching: Phase alignment, topology split/merge, resolution.
    tweening: Easing, interpolation, style blending, engine, timeline.
    api: TweenService.

Example usage:
    Tweening a square into its translated copy::

        from tween_lib import Keyframe, Point, Stroke, compute_tween

        square = Stroke('sq', [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)],
                        closed=True)
        moved = Stroke('sq2', [p.translated(100, 0) for p in square.points], closed=True)
        strokes = compute_tween(5, Keyframe('k0', 0, [square]), Keyframe('k1', 10, [moved]))

    Binding a split::

        from tween_lib import BindingStore

        store = BindingStore()
        store.add_group(0, 10, ['sq'], ['tri_a', 'tri_b'])
        strokes = compute_tween(5, key0, key10, store)

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .api import TweenService
from .config import DEFAULT_CONFIG, TweenConfig
from .correspondence import (
    BindingStore,
    apply_connection_edit,
    explode_bindings,
    regroup_bindings,
)
from .domain import (
    Connection,
    ConnectionEdit,
    CorrespondenceGroup,
    Easing,
    Keyframe,
    KeyframeKind,
    MatchStrategy,
    Point,
    Stroke,
)
from .matching import resolve
from .tweening import compute_tween

__all__ = [
    # Domain objects
    'Point', 'Stroke', 'Keyframe', 'Easing', 'MatchStrategy', 'KeyframeKind',
    'CorrespondenceGroup', 'Connection', 'ConnectionEdit',
    # Configuration
    'TweenConfig', 'DEFAULT_CONFIG',
    # Correspondence
    'BindingStore', 'explode_bindings', 'apply_connection_edit', 'regroup_bindings',
    # Engine
    'resolve', 'compute_tween',
    # Services
    'TweenService',
]

__version__ = '1.0.0'
