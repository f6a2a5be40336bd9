"""Unit tests for colour parsing, style blending and easing.

Tests:
    - parse_color / to_css_color / tween_color (tween_lib.utils.color)
    - blend_style (tween_lib.tweening.style)
    - apply_easing and Easing.parse
"""

import unittest

from tween_lib.domain.stroke import Easing, Stroke
from tween_lib.tweening.easing import apply_easing
from tween_lib.tweening.style import blend_style
from tween_lib.utils.color import RGBA, parse_color, to_css_color, tween_color


class TestParseColor(unittest.TestCase):
    """Tests for parse_color."""

    def test_short_hex(self):
        self.assertEqual(parse_color('#f00'), RGBA(255, 0, 0, 1.0))

    def test_long_hex(self):
        self.assertEqual(parse_color('#00ff80'), RGBA(0, 255, 128, 1.0))

    def test_hex_with_alpha(self):
        color = parse_color('#ff000080')
        self.assertEqual(color[:3], (255, 0, 0))
        self.assertAlmostEqual(color.a, 128 / 255)

    def test_rgba_function(self):
        self.assertEqual(parse_color('rgba(10, 20, 30, 0.5)'), RGBA(10, 20, 30, 0.5))
        self.assertEqual(parse_color('rgb(1,2,3)'), RGBA(1, 2, 3, 1.0))

    def test_invalid_uses_fallback(self):
        self.assertEqual(parse_color('banana'), RGBA(0, 0, 0, 1.0))
        self.assertEqual(parse_color('banana', '#fff'), RGBA(255, 255, 255, 1.0))
        self.assertEqual(parse_color(None, '#00f'), RGBA(0, 0, 255, 1.0))


class TestTweenColor(unittest.TestCase):
    """Tests for to_css_color and tween_color."""

    def test_red_blue_midpoint(self):
        """127.5 rounds half-up to 0x80."""
        self.assertEqual(tween_color('#ff0000', '#0000ff', 0.5), '#800080')

    def test_endpoints(self):
        self.assertEqual(tween_color('#ff0000', '#0000ff', 0.0), '#ff0000')
        self.assertEqual(tween_color('#ff0000', '#0000ff', 1.0), '#0000ff')

    def test_alpha_blend_formats_rgba(self):
        self.assertEqual(tween_color('rgba(0, 0, 0, 0)', '#000000', 0.5),
                         'rgba(0, 0, 0, 0.500)')

    def test_missing_end_holds_start(self):
        self.assertEqual(tween_color('#123456', None, 0.7), '#123456')

    def test_css_format_clamps(self):
        self.assertEqual(to_css_color(RGBA(300, -5, 16, 2.0)), '#ff0010')


class TestBlendStyle(unittest.TestCase):
    """Tests for blend_style."""

    def test_width_and_color(self):
        source = Stroke('a', color='#ff0000', width=2.0)
        target = Stroke('b', color='#0000ff', width=4.0)
        style = blend_style(source, target, 0.5)

        self.assertEqual(style['width'], 3.0)
        self.assertEqual(style['color'], '#800080')

    def test_defaults(self):
        """Unset source values use defaults; unset target values hold the source."""
        style = blend_style(Stroke('a'), Stroke('b', width=4.0, taper_end=1.0), 0.5)
        self.assertEqual(style['width'], 3.0)
        self.assertEqual(style['taper_start'], 0.0)
        self.assertEqual(style['taper_end'], 0.5)
        self.assertEqual(style['color'], '#000000')

        held = blend_style(Stroke('a', width=6.0, taper_start=0.2), Stroke('b'), 0.5)
        self.assertEqual(held['width'], 6.0)
        self.assertAlmostEqual(held['taper_start'], 0.2)

    def test_closed_if_either_closed(self):
        self.assertTrue(blend_style(Stroke('a'), Stroke('b', closed=True), 0.1)['closed'])
        self.assertTrue(blend_style(Stroke('a', closed=True), Stroke('b', closed=False), 0.9)['closed'])
        self.assertFalse(blend_style(Stroke('a'), Stroke('b'), 0.5)['closed'])

    def test_fill_needs_source_fill(self):
        source = Stroke('a', closed=True)
        target = Stroke('b', closed=True, fill_color='#ffffff')
        self.assertIsNone(blend_style(source, target, 0.5)['fill_color'])

        transparent = Stroke('a', closed=True, fill_color='transparent')
        self.assertIsNone(blend_style(transparent, target, 0.5)['fill_color'])

    def test_fill_blends_when_closed(self):
        source = Stroke('a', closed=True, fill_color='#ffffff')
        target = Stroke('b', closed=True, fill_color='#000000')
        self.assertEqual(blend_style(source, target, 0.5)['fill_color'], '#808080')

    def test_open_result_has_no_fill(self):
        source = Stroke('a', fill_color='#ffffff')
        target = Stroke('b', fill_color='#000000')
        self.assertIsNone(blend_style(source, target, 0.5)['fill_color'])


class TestEasing(unittest.TestCase):
    """Tests for apply_easing."""

    def test_curves_at_half(self):
        self.assertEqual(apply_easing(0.5, Easing.LINEAR), 0.5)
        self.assertEqual(apply_easing(0.5, Easing.EASE_IN), 0.25)
        self.assertEqual(apply_easing(0.5, Easing.EASE_OUT), 0.75)
        self.assertEqual(apply_easing(0.5, Easing.EASE_IN_OUT), 0.5)
        self.assertEqual(apply_easing(0.25, Easing.EASE_IN_OUT), 0.125)

    def test_endpoints_fixed(self):
        for easing in Easing:
            self.assertEqual(apply_easing(0.0, easing), 0.0)
            self.assertEqual(apply_easing(1.0, easing), 1.0)

    def test_names_accepted(self):
        self.assertEqual(apply_easing(0.5, 'ease_in'), 0.25)
        self.assertEqual(apply_easing(0.5, None), 0.5)

    def test_unknown_name_is_linear_and_warns(self):
        with self.assertLogs('tween_lib.domain.stroke', level='WARNING'):
            self.assertEqual(apply_easing(0.3, 'bounce'), 0.3)
