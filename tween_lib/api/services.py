"""Service layer for hosts embedding the tween engine.

The engine functions are pure; TweenService adds the two things an editor
wants on top of them: a memo so scrubbing back and forth over the same
interval does not recompute every frame, and one place where binding
edits are collected, applied and written back to the caller's store.

Example usage:
    Scrubbing and rebinding::

        from tween_lib.api import TweenService
        from tween_lib.correspondence import BindingStore
        from tween_lib.domain import ConnectionEdit

        store = BindingStore()
        service = TweenService(store)

        strokes = service.tween(5, key0, key10)

        edit = ConnectionEdit(sources=('sq',), new_target='tri_b',
                              old_targets=('tri_a',), swap=True)
        service.rebind(key0, key10, edit, tween_strokes=strokes)
        strokes = service.tween(5, key0, key10)   # recomputed
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Hashable, Iterable, List, Optional

from ..config import DEFAULT_CONFIG, TweenConfig
from ..correspondence import graph
from ..correspondence.store import BindingStore
from ..domain.bindings import Connection, ConnectionEdit, CorrespondenceGroup
from ..domain.stroke import Keyframe, MatchStrategy, Stroke
from ..tweening.engine import compute_tween

_logger = logging.getLogger(__name__)


class TweenService:
    """Memoizing facade over compute_tween and the binding editor.

    Memo entries are keyed on both keyframes' id and revision, the frame
    index, the store version and the strategy, so any change to the inputs
    misses the cache. The memo is a bounded LRU.

    Attributes:
        store: Caller-owned bindings.
        config: Tuning values passed to every computation.
        hits: Memo hits since creation or the last clear_cache.
        misses: Memo misses since creation or the last clear_cache.
    """

    def __init__(self, store: Optional[BindingStore] = None,
                 config: Optional[TweenConfig] = None):
        self.store = store if store is not None else BindingStore()
        self.config = config or DEFAULT_CONFIG
        self._cache: OrderedDict[Hashable, tuple[Stroke, ...]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def _key(self, frame_index: int, prev: Keyframe, next_: Keyframe,
             strategy: MatchStrategy) -> Hashable:
        return (prev.id, prev.revision, next_.id, next_.revision,
                frame_index, self.store.version, strategy)

    def tween(self, frame_index: int, prev: Keyframe, next_: Keyframe,
              strategy: MatchStrategy = MatchStrategy.INDEX) -> List[Stroke]:
        """Strokes at ``frame_index``, memoized.

        Args:
            frame_index: Frame to compute.
            prev: Keyframe at or before the frame.
            next_: Keyframe at or after the frame.
            strategy: Auto-match strategy for unbound strokes.

        Returns:
            The tween strokes. On an unexpected failure the source frame's
            strokes are returned and nothing is cached.
        """
        key = self._key(frame_index, prev, next_, strategy)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            self.hits += 1
            return list(cached)

        self.misses += 1
        try:
            strokes = compute_tween(frame_index, prev, next_, self.store, strategy, self.config)
        except Exception as e:
            _logger.error("Unexpected error tweening %s -> %s at frame %d: %s",
                          prev.id, next_.id, frame_index, e, exc_info=True)
            return list(prev.strokes)

        self._cache[key] = tuple(strokes)
        while len(self._cache) > self.config.cache_size:
            self._cache.popitem(last=False)
        return strokes

    def clear_cache(self) -> None:
        self._cache.clear()
        self.hits = 0
        self.misses = 0

    def explode_bindings(self, source_frame_index: int,
                         target_frame_index: int) -> List[Connection]:
        """Stored groups for a frame pair as single edges."""
        return graph.explode_bindings(self.store.for_pair(source_frame_index, target_frame_index))

    @staticmethod
    def apply_connection_edit(connections: Iterable[Connection],
                              edit: ConnectionEdit) -> List[Connection]:
        return graph.apply_connection_edit(list(connections), edit)

    @staticmethod
    def regroup_bindings(connections: Iterable[Connection], source_frame_index: int,
                         target_frame_index: int) -> List[CorrespondenceGroup]:
        return graph.regroup_bindings(list(connections), source_frame_index, target_frame_index)

    def rebind(self, prev: Keyframe, next_: Keyframe, edit: ConnectionEdit,
               tween_strokes: Iterable[Stroke] = ()) -> List[CorrespondenceGroup]:
        """Apply a connection edit and store the regrouped bindings.

        Current correspondences are collected from the stored groups and
        from the parents of ``tween_strokes`` (the auto-matched tweens on
        display), the edit is applied, and the edges are regrouped and
        written back for the frame pair. The store version bump
        invalidates memoized tweens for the pair.

        Args:
            prev: Source keyframe.
            next_: Target keyframe.
            edit: Connection change requested by the author.
            tween_strokes: Strokes currently shown for an in-between frame.

        Returns:
            The groups now stored for the frame pair.
        """
        connections = graph.collect_connections(
            self.store.for_pair(prev.index, next_.index),
            tween_strokes,
            prev.stroke_ids(),
            next_.stroke_ids(),
        )
        connections = graph.apply_connection_edit(connections, edit)
        groups = graph.regroup_bindings(connections, prev.index, next_.index)
        self.store.set_frame_pair(prev.index, next_.index, groups)
        _logger.info("Rebound %s -> %s: %d group(s)", prev.id, next_.id, len(groups))
        return groups
