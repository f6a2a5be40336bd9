"""Editing correspondence groups as a bipartite edge graph.

Stored bindings are grouped (see CorrespondenceGroup). To edit them the
groups are exploded into single source -> target Connections, the edit is
applied to the edge list, and the edges are regrouped by connected
component. Regrouping preserves split/merge multiplicity:

    - one unique source in a component: keep every target id verbatim,
      duplicates included (split or 1-to-1)
    - one unique target: keep every source id verbatim (merge)
    - otherwise: collapse both sides to unique ids (complex mesh). This is
      lossy for nested split+merge topologies and is a known approximation.

Typical usage:
    connections = explode_bindings(store.for_pair(0, 10))
    edit = ConnectionEdit(sources=('s1',), new_target='t2', old_targets=('t1',), swap=True)
    connections = apply_connection_edit(connections, edit)
    store.set_frame_pair(0, 10, regroup_bindings(connections, 0, 10))
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

import numpy as np
from scipy.sparse import coo_matrix
from scipy.sparse.csgraph import connected_components

from ..domain.bindings import Connection, ConnectionEdit, CorrespondenceGroup
from ..domain.stroke import Stroke

logger = logging.getLogger(__name__)


def _unique(ids: Iterable[str]) -> list[str]:
    """Unique ids in first-seen order."""
    return list(dict.fromkeys(ids))


def explode_bindings(groups: Iterable[CorrespondenceGroup]) -> list[Connection]:
    """Expand grouped bindings into single edges.

    A group with one source fans out to every listed target (duplicates
    kept), a group with one target fans in from every listed source, and a
    many-to-many group connects each unique source to each unique target.
    """
    connections: list[Connection] = []
    for group in groups:
        sources = group.source_stroke_ids
        targets = group.target_stroke_ids
        if len(sources) == 1:
            connections.extend(Connection(sources[0], t) for t in targets)
        elif len(targets) == 1:
            connections.extend(Connection(s, targets[0]) for s in sources)
        else:
            unique_targets = _unique(targets)
            for s in _unique(sources):
                connections.extend(Connection(s, t) for t in unique_targets)
    return connections


def regroup_bindings(connections: Sequence[Connection], source_frame_index: int,
                     target_frame_index: int) -> list[CorrespondenceGroup]:
    """Group edges by connected component of the source/target graph.

    Args:
        connections: Edge list, in the order the edits produced it.
        source_frame_index: Frame index of the source keyframe.
        target_frame_index: Frame index of the target keyframe.

    Returns:
        One CorrespondenceGroup per component, ordered by the first edge
        that touches the component. Ids are derived from the frame pair and
        component position so the result is deterministic.
    """
    if not connections:
        return []

    # Sources and targets live in separate namespaces: the same id may
    # appear on both frames.
    nodes: dict[tuple[str, str], int] = {}
    for c in connections:
        nodes.setdefault(('src', c.source), len(nodes))
        nodes.setdefault(('tgt', c.target), len(nodes))

    rows = np.array([nodes[('src', c.source)] for c in connections])
    cols = np.array([nodes[('tgt', c.target)] for c in connections])
    graph = coo_matrix((np.ones(len(rows)), (rows, cols)), shape=(len(nodes), len(nodes)))
    _, labels = connected_components(graph, directed=False)

    edges_by_label: dict[int, list[Connection]] = {}
    for c in connections:
        edges_by_label.setdefault(int(labels[nodes[('src', c.source)]]), []).append(c)

    groups = []
    for k, edges in enumerate(edges_by_label.values()):
        source_ids = [c.source for c in edges]
        target_ids = [c.target for c in edges]
        unique_sources = _unique(source_ids)
        unique_targets = _unique(target_ids)

        if len(unique_sources) == 1:
            final_sources, final_targets = unique_sources, target_ids
        elif len(unique_targets) == 1:
            final_sources, final_targets = source_ids, unique_targets
        else:
            logger.debug("Component %d is many-to-many (%d x %d), collapsing to unique ids",
                         k, len(unique_sources), len(unique_targets))
            final_sources, final_targets = unique_sources, unique_targets

        groups.append(CorrespondenceGroup(
            source_frame_index=source_frame_index,
            target_frame_index=target_frame_index,
            source_stroke_ids=tuple(final_sources),
            target_stroke_ids=tuple(final_targets),
            id=f'bind-{source_frame_index}-{target_frame_index}-{k}',
        ))
    return groups


def apply_connection_edit(connections: Sequence[Connection],
                          edit: ConnectionEdit) -> list[Connection]:
    """Apply an add or move edit to an edge list.

    For each source in the edit:

    - If it has no edge to any of ``edit.old_targets``, a new edge to
      ``edit.new_target`` is added. With ``overwrite`` every other edge
      already pointing at the new target is removed first.
    - Otherwise each such edge is moved to the new target. If other edges
      already point there, ``overwrite`` removes them and ``swap`` sends
      them to the vacated old target. With neither flag they coexist.

    Returns:
        A new edge list; the input is not modified.
    """
    conns = list(connections)
    new_target = edit.new_target

    for src in edit.sources:
        related = [t for t in _unique(edit.old_targets) if Connection(src, t) in conns]

        if not related:
            if edit.overwrite:
                conns = [c for c in conns if c.target != new_target]
            conns.append(Connection(src, new_target))
            continue

        for old in related:
            moving = Connection(src, old)
            if moving not in conns:
                conns.append(Connection(src, new_target))
                continue
            idx = conns.index(moving)
            conflicts = [i for i, c in enumerate(conns) if i != idx and c.target == new_target]

            if conflicts and edit.overwrite:
                conns = [c for i, c in enumerate(conns) if i == idx or i not in conflicts]
                idx = idx - sum(1 for i in conflicts if i < idx)
            elif conflicts and edit.swap:
                conns = [Connection(c.source, old) if i in conflicts else c
                         for i, c in enumerate(conns)]

            conns[idx] = Connection(src, new_target)
    return conns


def collect_connections(groups: Iterable[CorrespondenceGroup],
                        tween_strokes: Iterable[Stroke],
                        source_ids: Iterable[str],
                        target_ids: Iterable[str]) -> list[Connection]:
    """Gather every current correspondence between two frames as edges.

    Explicit groups are exploded first. Auto-matched tweens on display
    contribute edges through their ``parents`` for sources that are not
    explicitly bound. Edges referring to strokes missing from either frame
    are dropped.

    Args:
        groups: Bindings for the frame pair.
        tween_strokes: Strokes currently displayed for an in-between frame.
        source_ids: Stroke ids of the source keyframe.
        target_ids: Stroke ids of the target keyframe.
    """
    source_set = set(source_ids)
    target_set = set(target_ids)

    connections = explode_bindings(groups)
    bound_sources = {c.source for c in connections}

    for tween in tween_strokes:
        if len(tween.parents) < 2:
            continue
        sources = [p for p in tween.parents if p in source_set]
        targets = [p for p in tween.parents if p in target_set]
        for src in sources:
            if src in bound_sources:
                continue
            connections.extend(Connection(src, tgt) for tgt in targets)

    return [c for c in connections if c.source in source_set and c.target in target_set]


def edit_from_selection(selected_ids: Iterable[str], tween_strokes: Iterable[Stroke],
                        source_ids: Iterable[str], target_ids: Iterable[str],
                        overwrite: bool = False, swap: bool = False) -> Optional[ConnectionEdit]:
    """Translate a correspondence-tool selection into a ConnectionEdit.

    Selected tweens contribute their source parents (and the targets they
    currently reach as old targets); a selected target-frame stroke is the
    new target. When no tween is selected, selected source-frame strokes
    are used directly.

    Returns:
        The edit, or None when the selection lacks a source or a target.
    """
    selected = list(selected_ids)
    source_set = set(source_ids)
    target_set = set(target_ids)
    tweens = {s.id: s for s in tween_strokes}

    sources: list[str] = []
    old_targets: list[str] = []
    new_target = None
    for sid in selected:
        tween = tweens.get(sid)
        if tween is not None and tween.parents:
            tween_sources = [p for p in tween.parents if p in source_set]
            if tween_sources:
                sources.extend(tween_sources)
                old_targets.extend(p for p in tween.parents if p in target_set)
        elif sid in target_set:
            new_target = sid

    if not sources and new_target is not None:
        sources = [sid for sid in selected if sid in source_set]

    if not sources or new_target is None:
        return None
    return ConnectionEdit(sources=tuple(sources), new_target=new_target,
                          old_targets=tuple(old_targets), overwrite=overwrite, swap=swap)
