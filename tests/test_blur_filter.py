"""
Tests for the box blur filter.

Tests cover:
- Identity below radius 1
- Uniform images stay unchanged (no edge darkening)
- Agreement with a brute-force clamped two-pass mean
- Separable passes
- Alpha preservation
"""

import unittest

import numpy as np

from RS_Libs.ImageEditingLib.blur_filter import (
    apply_box_blur,
    box_blur_horizontal,
    box_blur_vertical,
)
from RS_Libs.ImageEditingLib.image_models import ImageBuffer


def _reference_pass(rgb, radius, axis):
    """Brute-force clamped mean along one axis, rounded to uint8."""
    source = rgb.astype(np.float64)
    out = np.empty_like(source)
    length = source.shape[axis]
    for i in range(length):
        lo = max(0, i - radius)
        hi = min(length - 1, i + radius)
        window = np.take(source, range(lo, hi + 1), axis=axis)
        mean = window.sum(axis=axis) / (hi - lo + 1)
        if axis == 1:
            out[:, i] = mean
        else:
            out[i] = mean
    return np.clip(np.rint(out), 0, 255).astype(np.uint8)


def _reference_blur(image, radius):
    rgb = image.pixels[:, :, :3]
    return _reference_pass(_reference_pass(rgb, radius, axis=1), radius, axis=0)


class TestBoxBlurIdentity(unittest.TestCase):
    """Test the radius < 1 identity."""

    def setUp(self):
        rng = np.random.default_rng(7)
        self.image = ImageBuffer.from_array(
            rng.integers(0, 256, size=(9, 11, 4), dtype=np.uint8)
        )

    def test_zero_radius(self):
        self.assertIs(apply_box_blur(self.image, 0), self.image)

    def test_fractional_radius_below_one(self):
        self.assertIs(apply_box_blur(self.image, 0.99), self.image)

    def test_negative_radius(self):
        self.assertIs(apply_box_blur(self.image, -3), self.image)

    def test_single_passes_identity(self):
        self.assertIs(box_blur_horizontal(self.image, 0.5), self.image)
        self.assertIs(box_blur_vertical(self.image, 0.5), self.image)

    def test_invalid_type(self):
        with self.assertRaises(TypeError):
            apply_box_blur("not_an_image", 3)


class TestBoxBlurValues(unittest.TestCase):
    """Test blurred pixel values."""

    def test_uniform_image_unchanged(self):
        image = ImageBuffer.new(13, 7, (200, 17, 99, 255))

        for radius in (1, 2, 5, 30):
            self.assertEqual(apply_box_blur(image, radius), image, f"radius={radius}")

    def test_matches_reference(self):
        rng = np.random.default_rng(42)
        image = ImageBuffer.from_array(
            rng.integers(0, 256, size=(8, 11, 4), dtype=np.uint8)
        )

        for radius in (1, 2, 3, 12):
            result = apply_box_blur(image, radius)
            np.testing.assert_array_equal(
                result.pixels[:, :, :3], _reference_blur(image, radius)
            )

    def test_radius_is_floored(self):
        rng = np.random.default_rng(3)
        image = ImageBuffer.from_array(
            rng.integers(0, 256, size=(6, 6, 4), dtype=np.uint8)
        )

        self.assertEqual(apply_box_blur(image, 2.9), apply_box_blur(image, 2))

    def test_edge_window_shrinks(self):
        # Row: 0, 0, 0, 90 with radius 1; last pixel averages 0 and 90 only
        pixels = np.zeros((1, 4, 4), dtype=np.uint8)
        pixels[0, 3, :3] = 90
        pixels[:, :, 3] = 255

        result = apply_box_blur(ImageBuffer.from_array(pixels), 1)

        self.assertEqual(result.pixels[0, 3, 0], 45)
        self.assertEqual(result.pixels[0, 2, 0], 30)
        self.assertEqual(result.pixels[0, 0, 0], 0)

    def test_alpha_preserved(self):
        rng = np.random.default_rng(11)
        image = ImageBuffer.from_array(
            rng.integers(0, 256, size=(10, 10, 4), dtype=np.uint8)
        )

        result = apply_box_blur(image, 3)

        np.testing.assert_array_equal(result.pixels[:, :, 3], image.pixels[:, :, 3])

    def test_input_not_modified(self):
        rng = np.random.default_rng(5)
        image = ImageBuffer.from_array(
            rng.integers(0, 256, size=(10, 10, 4), dtype=np.uint8)
        )
        before = image.tobytes()

        apply_box_blur(image, 4)

        self.assertEqual(image.tobytes(), before)


class TestSeparablePasses(unittest.TestCase):
    """Test horizontal and vertical passes."""

    def test_single_row_horizontal_equals_full(self):
        rng = np.random.default_rng(9)
        image = ImageBuffer.from_array(
            rng.integers(0, 256, size=(1, 25, 4), dtype=np.uint8)
        )

        self.assertEqual(box_blur_horizontal(image, 3), apply_box_blur(image, 3))

    def test_single_column_vertical_equals_full(self):
        rng = np.random.default_rng(10)
        image = ImageBuffer.from_array(
            rng.integers(0, 256, size=(25, 1, 4), dtype=np.uint8)
        )

        self.assertEqual(box_blur_vertical(image, 3), apply_box_blur(image, 3))

    def test_full_is_vertical_after_horizontal(self):
        rng = np.random.default_rng(12)
        image = ImageBuffer.from_array(
            rng.integers(0, 256, size=(9, 14, 4), dtype=np.uint8)
        )

        expected = box_blur_vertical(box_blur_horizontal(image, 2), 2)

        self.assertEqual(apply_box_blur(image, 2), expected)


if __name__ == "__main__":
    unittest.main()
