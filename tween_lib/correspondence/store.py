"""Caller-owned, versioned collection of correspondence groups.

The tween engine holds no binding state of its own: the application keeps
a BindingStore, passes it (or its groups) into every tween call, and bumps
its version on every change so memoized tweens can be invalidated.
"""

from __future__ import annotations

import logging
import uuid
from typing import Iterable, Iterator, Sequence

from ..domain.bindings import CorrespondenceGroup

logger = logging.getLogger(__name__)


class BindingStore:
    """Versioned list of CorrespondenceGroups.

    Attributes:
        version: Incremented on every mutation.

    Example:
        >>> store = BindingStore()
        >>> group = store.add_group(0, 10, ['square'], ['tri_a', 'tri_b'])
        >>> [g.target_stroke_ids for g in store.for_pair(0, 10)]
        [('tri_a', 'tri_b')]
        >>> store.version
        1
    """

    def __init__(self, groups: Iterable[CorrespondenceGroup] = ()):
        self._groups: list[CorrespondenceGroup] = list(groups)
        self.version = 0

    def __iter__(self) -> Iterator[CorrespondenceGroup]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    @property
    def groups(self) -> tuple[CorrespondenceGroup, ...]:
        return tuple(self._groups)

    def for_pair(self, source_frame_index: int,
                 target_frame_index: int) -> list[CorrespondenceGroup]:
        """Groups binding the given source frame to the given target frame."""
        return [g for g in self._groups if g.matches_pair(source_frame_index, target_frame_index)]

    def add_group(self, source_frame_index: int, target_frame_index: int,
                  source_ids: Sequence[str], target_ids: Sequence[str],
                  overwrite: bool = False) -> CorrespondenceGroup:
        """Bind a selection on one frame to a selection on another.

        Args:
            source_frame_index: Frame the source strokes live on.
            target_frame_index: Frame the target strokes live on.
            source_ids: Selected source stroke ids.
            target_ids: Selected target stroke ids.
            overwrite: Drop existing groups of this frame pair that already
                bind any of the selected targets.

        Returns:
            The new group.
        """
        if overwrite:
            claimed = set(target_ids)
            self._groups = [
                g for g in self._groups
                if not (g.matches_pair(source_frame_index, target_frame_index)
                        and claimed.intersection(g.target_stroke_ids))
            ]
        group = CorrespondenceGroup(
            source_frame_index=source_frame_index,
            target_frame_index=target_frame_index,
            source_stroke_ids=tuple(source_ids),
            target_stroke_ids=tuple(target_ids),
            id=str(uuid.uuid4()),
        )
        self._groups.append(group)
        self.version += 1
        logger.debug("Bound frame %d -> %d: %s -> %s", source_frame_index,
                     target_frame_index, list(source_ids), list(target_ids))
        return group

    def set_frame_pair(self, source_frame_index: int, target_frame_index: int,
                       groups: Iterable[CorrespondenceGroup]) -> None:
        """Replace every group of a frame pair with ``groups``."""
        kept = [g for g in self._groups
                if not g.matches_pair(source_frame_index, target_frame_index)]
        self._groups = kept + list(groups)
        self.version += 1

    def clear_pair(self, source_frame_index: int, target_frame_index: int) -> None:
        self.set_frame_pair(source_frame_index, target_frame_index, [])
