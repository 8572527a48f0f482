"""
Tests for ViewportTransform.

Tests cover:
- Screen to image mapping and its inverse
- Anchored zoom (pointer and viewport center)
- Wheel and button zoom steps
- Drag panning
- Fit-to-view
- Error handling for non-positive zoom
"""

import unittest

from RS_Libs.ImageEditingLib.viewport import ViewportTransform


class TestMapping(unittest.TestCase):
    """Test coordinate mapping."""

    def test_identity_by_default(self):
        view = ViewportTransform()

        self.assertEqual(view.to_image_space((12, 7)), (12.0, 7.0))

    def test_zoom_two(self):
        view = ViewportTransform(pan_x=0, pan_y=0, zoom=2)

        self.assertEqual(view.to_image_space((50, 50)), (25.0, 25.0))

    def test_pan_and_zoom(self):
        view = ViewportTransform(pan_x=10, pan_y=-20, zoom=4)

        self.assertEqual(view.to_image_space((30, 20)), (5.0, 10.0))

    def test_screen_space_inverse(self):
        view = ViewportTransform(pan_x=13.5, pan_y=4.0, zoom=1.5)

        x, y = view.to_image_space(view.to_screen_space((40.0, 22.0)))

        self.assertAlmostEqual(x, 40.0)
        self.assertAlmostEqual(y, 22.0)


class TestZoom(unittest.TestCase):
    """Test anchored zoom."""

    def test_anchor_keeps_image_point(self):
        view = ViewportTransform(pan_x=0, pan_y=0, zoom=2)

        view.zoom_to(4, anchor=(50, 50))

        self.assertEqual(view.zoom, 4.0)
        self.assertEqual(view.pan, (-50.0, -50.0))
        self.assertEqual(view.to_image_space((50, 50)), (25.0, 25.0))

    def test_anchor_with_existing_pan(self):
        view = ViewportTransform(pan_x=37, pan_y=-11, zoom=0.8)
        before = view.to_image_space((120, 64))

        view.zoom_by(1.7, anchor=(120, 64))
        after = view.to_image_space((120, 64))

        self.assertAlmostEqual(before[0], after[0])
        self.assertAlmostEqual(before[1], after[1])

    def test_wheel_direction(self):
        view = ViewportTransform()

        view.wheel(1, anchor=(0, 0))
        self.assertAlmostEqual(view.zoom, 1 / 1.1)

        view = ViewportTransform()
        view.wheel(-1, anchor=(0, 0))
        self.assertAlmostEqual(view.zoom, 1.1)

    def test_zoom_buttons_anchor_on_center(self):
        view = ViewportTransform(pan_x=5, pan_y=5, zoom=1)
        center_before = view.to_image_space((200, 100))

        view.zoom_in((400, 200))
        self.assertAlmostEqual(view.zoom, 1.2)
        center_after = view.to_image_space((200, 100))
        self.assertAlmostEqual(center_before[0], center_after[0])
        self.assertAlmostEqual(center_before[1], center_after[1])

        view.zoom_out((400, 200))
        self.assertAlmostEqual(view.zoom, 1.0)

    def test_non_positive_zoom_rejected(self):
        with self.assertRaises(ValueError):
            ViewportTransform(zoom=0)

        view = ViewportTransform()
        with self.assertRaises(ValueError):
            view.zoom_to(-1, anchor=(0, 0))
        with self.assertRaises(ValueError):
            view.zoom_by(0, anchor=(0, 0))

        self.assertEqual(view.zoom, 1.0)


class TestPanAndFit(unittest.TestCase):
    """Test panning and fit-to-view."""

    def test_pan_by(self):
        view = ViewportTransform()

        view.pan_by(3, -4)

        self.assertEqual(view.pan, (3.0, -4.0))

    def test_drag(self):
        view = ViewportTransform(pan_x=10, pan_y=10)

        view.start_drag((100, 100))
        view.drag_to((130, 90))
        view.end_drag()
        view.drag_to((500, 500))

        self.assertEqual(view.pan, (40.0, 0.0))

    def test_fit_centers_image(self):
        view = ViewportTransform()

        view.fit(image_size=(200, 100), view_size=(400, 400))

        self.assertAlmostEqual(view.zoom, 1.9)
        self.assertAlmostEqual(view.pan_x, 10.0)
        self.assertAlmostEqual(view.pan_y, 105.0)

    def test_fit_rejects_empty_view(self):
        with self.assertRaises(ValueError):
            ViewportTransform().fit((10, 10), (0, 100))


if __name__ == "__main__":
    unittest.main()
