"""Unit tests for correspondence editing.

Tests tween_lib.correspondence:
    - explode_bindings: fan-out, fan-in and many-to-many expansion
    - regroup_bindings: connected components with multiplicity rules
    - apply_connection_edit: add / move with overwrite and swap policies
    - collect_connections, edit_from_selection: tool-facing helpers
    - BindingStore: versioned group storage
"""

import unittest

from tween_lib.correspondence import (
    BindingStore,
    apply_connection_edit,
    collect_connections,
    edit_from_selection,
    explode_bindings,
    regroup_bindings,
)
from tween_lib.domain import Connection, ConnectionEdit, CorrespondenceGroup, Stroke


def group(sources, targets, s_idx=0, t_idx=10) -> CorrespondenceGroup:
    """Create a group for frames 0 -> 10."""
    return CorrespondenceGroup(s_idx, t_idx, tuple(sources), tuple(targets))


def edges(*pairs) -> list[Connection]:
    return [Connection(s, t) for s, t in pairs]


class TestExplodeBindings(unittest.TestCase):
    """Tests for explode_bindings."""

    def test_split_fans_out(self):
        self.assertEqual(explode_bindings([group(['s'], ['a', 'b'])]),
                         edges(('s', 'a'), ('s', 'b')))

    def test_merge_fans_in(self):
        self.assertEqual(explode_bindings([group(['x', 'y'], ['c'])]),
                         edges(('x', 'c'), ('y', 'c')))

    def test_duplicates_kept_for_single_source(self):
        self.assertEqual(explode_bindings([group(['s'], ['a', 'a'])]),
                         edges(('s', 'a'), ('s', 'a')))

    def test_many_to_many_uses_unique_sets(self):
        result = explode_bindings([group(['s1', 's2', 's1'], ['a', 'b'])])
        self.assertEqual(result, edges(('s1', 'a'), ('s1', 'b'), ('s2', 'a'), ('s2', 'b')))

    def test_empty(self):
        self.assertEqual(explode_bindings([]), [])


class TestRegroupBindings(unittest.TestCase):
    """Tests for regroup_bindings."""

    def test_split_component(self):
        groups = regroup_bindings(edges(('s', 'a'), ('s', 'b')), 0, 10)
        self.assertEqual(groups, [group(['s'], ['a', 'b'])])

    def test_separate_components_in_edge_order(self):
        groups = regroup_bindings(edges(('s2', 'b'), ('s1', 'a')), 0, 10)
        self.assertEqual(groups, [group(['s2'], ['b']), group(['s1'], ['a'])])

    def test_merge_keeps_source_multiplicity(self):
        groups = regroup_bindings(edges(('x', 'c'), ('y', 'c'), ('x', 'c')), 0, 10)
        self.assertEqual(groups, [group(['x', 'y', 'x'], ['c'])])

    def test_many_to_many_collapses(self):
        groups = regroup_bindings(edges(('s1', 'a'), ('s1', 'b'), ('s2', 'a')), 0, 10)
        self.assertEqual(groups, [group(['s1', 's2'], ['a', 'b'])])

    def test_same_id_on_both_frames(self):
        """A stroke id reused on the target frame is a different node."""
        groups = regroup_bindings(edges(('a', 'a'), ('b', 'b')), 0, 10)
        self.assertEqual(len(groups), 2)

    def test_ids_are_deterministic(self):
        groups = regroup_bindings(edges(('s', 'a'), ('t', 'b')), 3, 7)
        self.assertEqual([g.id for g in groups], ['bind-3-7-0', 'bind-3-7-1'])
        self.assertTrue(all(g.matches_pair(3, 7) for g in groups))

    def test_idempotent(self):
        """regroup(explode(regroup(explode(G)))) == regroup(explode(G))."""
        cases = [
            [group(['s'], ['a', 'b'])],
            [group(['x', 'y'], ['c']), group(['s'], ['a'])],
            [group(['s'], ['a', 'a'])],
            [group(['s1', 's2'], ['a', 'b', 'c'])],
            [group(['s'], ['a', 'b']), group(['t'], ['b'])],
        ]
        for groups in cases:
            once = regroup_bindings(explode_bindings(groups), 0, 10)
            twice = regroup_bindings(explode_bindings(once), 0, 10)
            self.assertEqual(once, twice)


class TestApplyConnectionEdit(unittest.TestCase):
    """Tests for apply_connection_edit."""

    def test_add_new_edge(self):
        result = apply_connection_edit([], ConnectionEdit(sources=('s',), new_target='a'))
        self.assertEqual(result, edges(('s', 'a')))

    def test_add_coexists_without_overwrite(self):
        result = apply_connection_edit(edges(('x', 'a')),
                                       ConnectionEdit(sources=('s',), new_target='a'))
        self.assertEqual(result, edges(('x', 'a'), ('s', 'a')))

    def test_add_with_overwrite_evicts(self):
        result = apply_connection_edit(
            edges(('x', 'a'), ('y', 'b')),
            ConnectionEdit(sources=('s',), new_target='a', overwrite=True))
        self.assertEqual(result, edges(('y', 'b'), ('s', 'a')))

    def test_move_edge(self):
        result = apply_connection_edit(
            edges(('s', 'a')),
            ConnectionEdit(sources=('s',), new_target='b', old_targets=('a',)))
        self.assertEqual(result, edges(('s', 'b')))

    def test_move_with_swap(self):
        """The displaced edge takes the vacated target."""
        result = apply_connection_edit(
            edges(('s1', 'a'), ('s2', 'b')),
            ConnectionEdit(sources=('s1',), new_target='b', old_targets=('a',), swap=True))
        self.assertEqual(result, edges(('s1', 'b'), ('s2', 'a')))

    def test_move_with_overwrite(self):
        result = apply_connection_edit(
            edges(('s1', 'a'), ('s2', 'b')),
            ConnectionEdit(sources=('s1',), new_target='b', old_targets=('a',),
                           overwrite=True, swap=True))
        self.assertEqual(result, edges(('s1', 'b')))

    def test_move_conflict_coexists(self):
        result = apply_connection_edit(
            edges(('s1', 'a'), ('s2', 'b')),
            ConnectionEdit(sources=('s1',), new_target='b', old_targets=('a',)))
        self.assertEqual(result, edges(('s1', 'b'), ('s2', 'b')))

    def test_input_not_modified(self):
        original = edges(('s1', 'a'), ('s2', 'b'))
        snapshot = list(original)
        apply_connection_edit(original, ConnectionEdit(sources=('s1',), new_target='b',
                                                       old_targets=('a',), swap=True))
        self.assertEqual(original, snapshot)


class TestToolHelpers(unittest.TestCase):
    """Tests for collect_connections and edit_from_selection."""

    def test_collect_adds_auto_tween_parents(self):
        tweens = [
            Stroke('tween-g', parents=('s1', 'a')),
            Stroke('auto-s2-b', parents=('s2', 'b')),
            Stroke('static-s3', parents=('s3',)),
        ]
        result = collect_connections([group(['s1'], ['a'])], tweens,
                                     ['s1', 's2', 's3'], ['a', 'b'])
        self.assertEqual(result, edges(('s1', 'a'), ('s2', 'b')))

    def test_collect_drops_missing_strokes(self):
        result = collect_connections([group(['gone'], ['a']), group(['s1'], ['b'])], [],
                                     ['s1'], ['a', 'b'])
        self.assertEqual(result, edges(('s1', 'b')))

    def test_edit_from_tween_selection(self):
        tweens = [Stroke('auto-s1-a', parents=('s1', 'a'))]
        edit = edit_from_selection(['auto-s1-a', 'b'], tweens, ['s1'], ['a', 'b'], swap=True)
        self.assertEqual(edit, ConnectionEdit(sources=('s1',), new_target='b',
                                              old_targets=('a',), swap=True))

    def test_edit_from_source_selection(self):
        edit = edit_from_selection(['s1', 'b'], [], ['s1'], ['a', 'b'])
        self.assertEqual(edit, ConnectionEdit(sources=('s1',), new_target='b'))

    def test_edit_needs_target(self):
        tweens = [Stroke('auto-s1-a', parents=('s1', 'a'))]
        self.assertIsNone(edit_from_selection(['auto-s1-a'], tweens, ['s1'], ['a']))


class TestBindingStore(unittest.TestCase):
    """Tests for BindingStore."""

    def test_add_group_bumps_version(self):
        store = BindingStore()
        created = store.add_group(0, 10, ['sq'], ['tri_a', 'tri_b'])

        self.assertEqual(store.version, 1)
        self.assertEqual(len(store), 1)
        self.assertTrue(created.id)
        self.assertTrue(created.is_split)
        self.assertEqual(store.for_pair(0, 10), [created])
        self.assertEqual(store.for_pair(10, 20), [])

    def test_overwrite_drops_groups_sharing_targets(self):
        store = BindingStore()
        store.add_group(0, 10, ['s1'], ['a'])
        store.add_group(0, 10, ['s2'], ['b'])
        store.add_group(10, 20, ['s1'], ['a'])
        store.add_group(0, 10, ['s3'], ['a'], overwrite=True)

        pair = store.for_pair(0, 10)
        self.assertEqual([g.source_stroke_ids for g in pair], [('s2',), ('s3',)])
        self.assertEqual(len(store.for_pair(10, 20)), 1)

    def test_set_frame_pair_replaces_only_that_pair(self):
        store = BindingStore()
        store.add_group(0, 10, ['s1'], ['a'])
        store.add_group(10, 20, ['x'], ['y'])
        version = store.version

        store.set_frame_pair(0, 10, [group(['s9'], ['z'])])

        self.assertEqual(store.version, version + 1)
        self.assertEqual(store.for_pair(0, 10), [group(['s9'], ['z'])])
        self.assertEqual(len(store.for_pair(10, 20)), 1)

    def test_clear_pair(self):
        store = BindingStore([group(['s'], ['a'])])
        store.clear_pair(0, 10)
        self.assertEqual(len(store), 0)
        self.assertEqual(store.version, 1)
