"""
Tests for the soft round brush renderer.

Tests cover:
- Dab placement and colour
- Anti-aliased edges and the soft shadow
- Segment (capsule) rendering between points
- No-op continuation without a starting point
- Clipping at the raster bounds
"""

import unittest

from SS_Libs.MaskEditingLib.mask_models import Point
from SS_Libs.MaskEditingLib.mask_raster import MaskRaster
from SS_Libs.MaskEditingLib.stroke_renderer import StrokeRenderer
from SS_Libs.constants import BRUSH_COLOR


class TestBeginStroke(unittest.TestCase):
    """Test the first dab of a stroke."""

    def setUp(self):
        self.raster = MaskRaster(200, 200)
        self.renderer = StrokeRenderer(self.raster)

    def test_dab_covers_centre(self):
        """Centre pixel takes the brush colour with high alpha."""
        self.renderer.begin_stroke(Point(100, 100), brush_radius=20)

        r, g, b, a = self.raster.pixel(100, 100)
        self.assertEqual((r, g, b), BRUSH_COLOR)
        self.assertGreaterEqual(a, 204)

    def test_dab_leaves_far_pixels_untouched(self):
        self.renderer.begin_stroke(Point(100, 100), brush_radius=20)

        self.assertEqual(self.raster.pixel(0, 0), (0, 0, 0, 0))
        self.assertEqual(self.raster.pixel(199, 199), (0, 0, 0, 0))

    def test_shadow_softens_outside_edge(self):
        """Just outside the radius the shadow gives a faint, partial alpha."""
        self.renderer.begin_stroke(Point(100, 100), brush_radius=20)

        centre_alpha = self.raster.pixel(100, 100)[3]
        edge_alpha = self.raster.pixel(122, 100)[3]
        self.assertGreater(edge_alpha, 0)
        self.assertLess(edge_alpha, centre_alpha)

    def test_edge_is_anti_aliased(self):
        """Without shadow, a pixel straddling the edge gets fractional coverage."""
        renderer = StrokeRenderer(self.raster, shadow_blur=0)
        renderer.begin_stroke(Point(100.25, 100.5), brush_radius=20)

        self.assertEqual(self.raster.pixel(100, 100)[3], 204)
        partial = self.raster.pixel(120, 100)[3]
        self.assertGreater(partial, 40)
        self.assertLess(partial, 60)
        self.assertEqual(self.raster.pixel(122, 100)[3], 0)

    def test_records_last_point(self):
        self.renderer.begin_stroke(Point(10, 20), brush_radius=5)

        self.assertEqual(self.renderer.last_point, Point(10, 20))
        self.assertEqual(self.renderer.radius, 5.0)

    def test_invalid_radius(self):
        with self.assertRaises(ValueError):
            self.renderer.begin_stroke(Point(10, 10), brush_radius=0)

    def test_dab_clipped_at_corner(self):
        """A dab overlapping the raster edge only paints inside it."""
        self.renderer.begin_stroke(Point(0, 0), brush_radius=10)

        self.assertGreater(self.raster.pixel(0, 0)[3], 0)

    def test_dab_outside_raster_is_harmless(self):
        self.renderer.begin_stroke(Point(-500, -500), brush_radius=5)

        self.assertFalse(self.raster.has_content)
        self.assertEqual(self.renderer.last_point, Point(-500, -500))


class TestContinueStroke(unittest.TestCase):
    """Test segment rendering."""

    def setUp(self):
        self.raster = MaskRaster(200, 200)
        self.renderer = StrokeRenderer(self.raster)

    def test_without_prior_point_is_noop(self):
        self.renderer.continue_stroke(Point(50, 50))

        self.assertFalse(self.raster.has_content)
        self.assertIsNone(self.renderer.last_point)

    def test_segment_connects_points(self):
        """Pixels along the segment are painted, pixels well off it are not."""
        self.renderer.begin_stroke(Point(20, 50), brush_radius=5)
        self.renderer.continue_stroke(Point(180, 50))

        for x in (40, 100, 160):
            self.assertGreater(self.raster.pixel(x, 50)[3], 200)
        self.assertEqual(self.raster.pixel(100, 80)[3], 0)
        self.assertEqual(self.renderer.last_point, Point(180, 50))

    def test_segment_has_round_caps(self):
        """The end of a segment is rounded: a corner just past the end stays clear."""
        renderer = StrokeRenderer(self.raster, shadow_blur=0)
        renderer.begin_stroke(Point(50, 100), brush_radius=10)
        renderer.continue_stroke(Point(150, 100))

        self.assertGreater(self.raster.pixel(158, 100)[3], 0)
        self.assertEqual(self.raster.pixel(158, 108)[3], 0)

    def test_end_stroke_forgets_last_point(self):
        self.renderer.begin_stroke(Point(20, 20), brush_radius=5)
        self.renderer.end_stroke()
        before = self.raster.snapshot()

        self.renderer.continue_stroke(Point(150, 150))

        self.assertEqual(self.raster.snapshot(), before)


class TestRendererConfig(unittest.TestCase):

    def test_rejects_invalid_alpha(self):
        with self.assertRaises(ValueError):
            StrokeRenderer(MaskRaster(10, 10), alpha=0)

    def test_rejects_negative_blur(self):
        with self.assertRaises(ValueError):
            StrokeRenderer(MaskRaster(10, 10), shadow_blur=-1)
