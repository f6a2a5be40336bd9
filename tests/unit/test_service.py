"""Unit tests for TweenService, configuration and logging setup.

Tests:
    - TweenService memo: hits, invalidation by store version and keyframe
      revision, LRU bound, error handling at the service seam
    - TweenService.rebind: collect, edit, regroup and store back
    - TweenConfig.from_dict
    - configure_logging
"""

import logging
import os
import tempfile
import unittest
from dataclasses import replace
from unittest.mock import patch

from tween_lib.api import TweenService
from tween_lib.config import DEFAULT_CONFIG, TweenConfig
from tween_lib.correspondence import BindingStore
from tween_lib.domain import ConnectionEdit, Keyframe, Point, Stroke
from tween_lib.utils.log_setup import configure_logging


def make_line(stroke_id: str, start: tuple, end: tuple) -> Stroke:
    return Stroke(stroke_id, (Point(*start), Point(*end)))


class TestTweenServiceCache(unittest.TestCase):
    """Tests for the TweenService memo."""

    def setUp(self):
        self.key0 = Keyframe('k0', 0, (make_line('a', (0, 0), (10, 0)),))
        self.key10 = Keyframe('k10', 10, (make_line('b', (0, 100), (10, 100)),))
        self.service = TweenService()

    def test_repeat_call_hits(self):
        first = self.service.tween(5, self.key0, self.key10)
        second = self.service.tween(5, self.key0, self.key10)

        self.assertEqual(first, second)
        self.assertEqual((self.service.hits, self.service.misses), (1, 1))

    def test_store_change_invalidates(self):
        self.service.tween(5, self.key0, self.key10)
        self.service.store.add_group(0, 10, ['a'], ['b'])
        strokes = self.service.tween(5, self.key0, self.key10)

        self.assertEqual(self.service.misses, 2)
        self.assertTrue(strokes[0].id.startswith('tween-'))

    def test_revision_change_invalidates(self):
        self.service.tween(5, self.key0, self.key10)
        moved = Stroke('b', (Point(0, 200), Point(10, 200)))
        key10 = replace(self.key10, strokes=(moved,), revision=1)
        strokes = self.service.tween(5, self.key0, key10)

        self.assertEqual(self.service.misses, 2)
        self.assertAlmostEqual(strokes[0].points[0].y, 100.0)

    def test_lru_bound(self):
        service = TweenService(config=TweenConfig(cache_size=2))
        for frame in (1, 2, 3, 1):
            service.tween(frame, self.key0, self.key10)
        self.assertEqual((service.hits, service.misses), (0, 4))

        service.tween(3, self.key0, self.key10)
        self.assertEqual(service.hits, 1)

    def test_clear_cache(self):
        self.service.tween(5, self.key0, self.key10)
        self.service.clear_cache()
        self.service.tween(5, self.key0, self.key10)
        self.assertEqual((self.service.hits, self.service.misses), (0, 1))

    def test_unexpected_error_returns_source_frame(self):
        with patch('tween_lib.api.services.compute_tween', side_effect=RuntimeError('boom')):
            with self.assertLogs('tween_lib.api.services', level='ERROR'):
                strokes = self.service.tween(5, self.key0, self.key10)

        self.assertEqual(strokes, list(self.key0.strokes))
        # Failures are not memoized
        self.service.tween(5, self.key0, self.key10)
        self.assertEqual(self.service.misses, 2)


class TestTweenServiceRebind(unittest.TestCase):
    """Tests for binding edits routed through TweenService."""

    def setUp(self):
        self.key0 = Keyframe('k0', 0, (make_line('s1', (0, 0), (10, 0)),
                                       make_line('s2', (100, 0), (110, 0))))
        self.key10 = Keyframe('k10', 10, (make_line('a', (0, 50), (10, 50)),
                                          make_line('b', (100, 50), (110, 50))))
        self.store = BindingStore()
        self.service = TweenService(self.store)

    def test_swap_auto_matched_targets(self):
        shown = self.service.tween(5, self.key0, self.key10)
        self.assertEqual([s.parents for s in shown], [('s1', 'a'), ('s2', 'b')])

        edit = ConnectionEdit(sources=('s1',), new_target='b', old_targets=('a',), swap=True)
        groups = self.service.rebind(self.key0, self.key10, edit, tween_strokes=shown)

        self.assertEqual([(g.source_stroke_ids, g.target_stroke_ids) for g in groups],
                         [(('s1',), ('b',)), (('s2',), ('a',))])
        self.assertEqual(self.store.for_pair(0, 10), groups)

        retweened = self.service.tween(5, self.key0, self.key10)
        self.assertEqual([s.parents for s in retweened], [('s1', 'b'), ('s2', 'a')])

    def test_explode_and_regroup_round_trip(self):
        self.store.add_group(0, 10, ['s1'], ['a', 'b'])
        connections = self.service.explode_bindings(0, 10)
        regrouped = self.service.regroup_bindings(connections, 0, 10)

        self.assertEqual(regrouped, self.store.for_pair(0, 10))

    def test_apply_connection_edit(self):
        self.store.add_group(0, 10, ['s1'], ['a'])
        connections = self.service.apply_connection_edit(
            self.service.explode_bindings(0, 10),
            ConnectionEdit(sources=('s2',), new_target='a', overwrite=True))
        self.assertEqual([(c.source, c.target) for c in connections], [('s2', 'a')])


class TestTweenConfig(unittest.TestCase):
    """Tests for TweenConfig."""

    def test_from_dict_ignores_unknown_keys(self):
        config = TweenConfig.from_dict({'split_resolution': 100, 'bogus': 1})
        self.assertEqual(config.split_resolution, 100)
        self.assertEqual(config.max_topology_children, DEFAULT_CONFIG.max_topology_children)

    def test_defaults(self):
        self.assertEqual(DEFAULT_CONFIG.guide_snap_distance, 15.0)
        self.assertEqual(DEFAULT_CONFIG.resample_resolution, 60)
        self.assertEqual(DEFAULT_CONFIG.max_topology_children, 8)


class TestConfigureLogging(unittest.TestCase):
    """Tests for configure_logging."""

    def setUp(self):
        """Save original logging state."""
        self.root_logger = logging.getLogger()
        self.original_handlers = self.root_logger.handlers.copy()
        self.original_level = self.root_logger.level

    def tearDown(self):
        """Restore original logging state."""
        for handler in self.root_logger.handlers:
            if handler not in self.original_handlers:
                handler.close()
        self.root_logger.handlers = self.original_handlers
        self.root_logger.setLevel(self.original_level)

    def test_sets_level(self):
        configure_logging(level='DEBUG')
        self.assertEqual(self.root_logger.level, logging.DEBUG)

    def test_quiets_search_logger(self):
        configure_logging(level='DEBUG')
        self.assertEqual(logging.getLogger('tween_lib.matching.topology').level, logging.INFO)

    def test_verbose_search_keeps_debug(self):
        configure_logging(level='DEBUG', verbose_search=True)
        self.assertEqual(logging.getLogger('tween_lib.matching.topology').level, logging.DEBUG)

    def test_search_logger_follows_higher_level(self):
        configure_logging(level='WARNING')
        self.assertEqual(logging.getLogger('tween_lib.matching.topology').level, logging.WARNING)

    def test_with_file(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.log', delete=False) as f:
            log_file = f.name

        try:
            configure_logging(level='INFO', log_file=log_file)
            file_handlers = [h for h in self.root_logger.handlers
                             if isinstance(h, logging.FileHandler)]
            self.assertEqual(len(file_handlers), 1)
        finally:
            for handler in self.root_logger.handlers:
                handler.close()
            os.unlink(log_file)
