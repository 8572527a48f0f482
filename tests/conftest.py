"""
Pytest configuration and shared fixtures for Retouch Studio tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import numpy as np
import pytest

from RS_Libs.ImageEditingLib.image_models import ImageBuffer, MaskBuffer


@pytest.fixture
def gray_image():
    """
    Provide a 10x10 uniform gray image.

    Returns:
        ImageBuffer filled with (128, 128, 128, 255)
    """
    return ImageBuffer.new(10, 10, (128, 128, 128, 255))


@pytest.fixture
def empty_mask():
    """Provide a 10x10 mask with nothing selected."""
    return MaskBuffer.zeros(10, 10)


@pytest.fixture
def noise_image():
    """
    Provide a 24x24 image of seeded random noise.

    Returns:
        ImageBuffer with opaque random RGB values
    """
    rng = np.random.default_rng(1234)
    pixels = rng.integers(0, 256, size=(24, 24, 4), dtype=np.uint8)
    pixels[:, :, 3] = 255
    return ImageBuffer.from_array(pixels)

