"""
Unit tests for the masked compositor.

Tests the per-pixel blend between an original image and an effect result.
"""

import numpy as np
import pytest

from RS_Libs.ImageEditingLib.compositor import blend
from RS_Libs.ImageEditingLib.image_models import (
    DimensionMismatchError,
    ImageBuffer,
    MaskBuffer,
)


@pytest.fixture
def original():
    rng = np.random.default_rng(21)
    return ImageBuffer.from_array(rng.integers(0, 256, size=(6, 8, 4), dtype=np.uint8))


@pytest.fixture
def effect():
    rng = np.random.default_rng(22)
    return ImageBuffer.from_array(rng.integers(0, 256, size=(6, 8, 4), dtype=np.uint8))


class TestBlend:
    """Tests for blend function."""

    def test_zero_mask_returns_original(self, original, effect):
        result = blend(original, effect, MaskBuffer.zeros(8, 6))

        assert result == original

    def test_full_mask_returns_effect_rgb(self, original, effect):
        mask = MaskBuffer(8, 6, np.full((6, 8), 255, dtype=np.uint8))

        result = blend(original, effect, mask)

        np.testing.assert_array_equal(result.pixels[:, :, :3], effect.pixels[:, :, :3])

    def test_alpha_mirrors_original(self, original, effect):
        mask = MaskBuffer(8, 6, np.full((6, 8), 255, dtype=np.uint8))

        result = blend(original, effect, mask)

        np.testing.assert_array_equal(result.pixels[:, :, 3], original.pixels[:, :, 3])

    def test_partial_alpha_interpolates(self):
        black = ImageBuffer.new(1, 1, (0, 0, 0, 255))
        white = ImageBuffer.new(1, 1, (255, 255, 255, 255))
        mask = MaskBuffer(1, 1, np.array([[51]], dtype=np.uint8))

        result = blend(black, white, mask)

        # 255 * 51 / 255 = 51
        assert tuple(result.pixels[0, 0]) == (51, 51, 51, 255)

    def test_mask_only_affects_selected_pixels(self, original, effect):
        mask = MaskBuffer.zeros(8, 6)
        mask.alpha[2, 3] = 255

        result = blend(original, effect, mask)

        assert tuple(result.pixels[2, 3, :3]) == tuple(effect.pixels[2, 3, :3])
        untouched = np.ones((6, 8), dtype=bool)
        untouched[2, 3] = False
        np.testing.assert_array_equal(result.pixels[untouched], original.pixels[untouched])

    def test_mask_size_mismatch(self, original, effect):
        with pytest.raises(DimensionMismatchError):
            blend(original, effect, MaskBuffer.zeros(8, 5))

    def test_effect_size_mismatch(self, original):
        with pytest.raises(DimensionMismatchError):
            blend(original, ImageBuffer.new(7, 6), MaskBuffer.zeros(8, 6))
