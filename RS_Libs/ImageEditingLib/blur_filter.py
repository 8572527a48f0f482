"""
Box Blur Filter.

Separable sliding-window mean filter:
- Horizontal pass: each pixel becomes the mean of its row neighbours
- Vertical pass: same along columns, applied to the horizontal result

Windows are clamped at the image edges and divided by the number of
in-bounds samples, so borders are not darkened. Only RGB is blurred; the
alpha channel is copied through.

Example:
    >>> from RS_Libs.ImageEditingLib.image_models import ImageBuffer
    >>> image = ImageBuffer.new(64, 64, (200, 100, 50, 255))
    >>>
    >>> # Radius below 1 is the identity
    >>> apply_box_blur(image, 0.5) is image
    True
    >>>
    >>> blurred = apply_box_blur(image, radius=5)
"""

import math

import numpy as np

from RS_Libs.ImageEditingLib.image_models import ImageBuffer


# ============================================================================
# Sliding Window Mean
# ============================================================================

def _sliding_mean_rows(channels: np.ndarray, radius: int) -> np.ndarray:
    """
    Mean over a clamped window of +/- radius along axis 1.

    Args:
        channels: int64 array of shape (rows, length, channels)
        radius: Window radius (>= 1)

    Returns:
        uint8 array of the same shape, rounded half to even
    """
    rows, length, depth = channels.shape
    result = np.empty((rows, length, depth), dtype=np.float64)

    # Window for position 0 covers [0, min(radius, length - 1)]
    window_sum = channels[:, :min(radius, length - 1) + 1].sum(axis=1)

    for x in range(length):
        lo = max(0, x - radius)
        hi = min(length - 1, x + radius)
        result[:, x] = window_sum / (hi - lo + 1)

        leaving = x - radius
        entering = x + radius + 1
        if leaving >= 0:
            window_sum -= channels[:, leaving]
        if entering < length:
            window_sum += channels[:, entering]

    return np.clip(np.rint(result), 0, 255).astype(np.uint8)


def _radius_int(radius: float) -> int:
    return int(math.floor(radius))


def _with_rgb(image: ImageBuffer, rgb: np.ndarray) -> ImageBuffer:
    pixels = image.writable_copy()
    pixels[:, :, :3] = rgb
    return ImageBuffer(image.width, image.height, pixels)


# ============================================================================
# Box Blur
# ============================================================================

def box_blur_horizontal(image: ImageBuffer, radius: float) -> ImageBuffer:
    """
    Horizontal sliding-window pass only.

    Args:
        image: Source ImageBuffer
        radius: Window radius in pixels (floored)

    Returns:
        New ImageBuffer, or image itself when floor(radius) < 1
    """
    r = _radius_int(radius)
    if r < 1:
        return image
    rgb = image.pixels[:, :, :3].astype(np.int64)
    return _with_rgb(image, _sliding_mean_rows(rgb, r))


def box_blur_vertical(image: ImageBuffer, radius: float) -> ImageBuffer:
    """Vertical sliding-window pass only (see box_blur_horizontal)."""
    r = _radius_int(radius)
    if r < 1:
        return image
    columns = image.pixels[:, :, :3].astype(np.int64).transpose(1, 0, 2)
    rgb = _sliding_mean_rows(columns, r).transpose(1, 0, 2)
    return _with_rgb(image, rgb)


def apply_box_blur(image: ImageBuffer, radius: float) -> ImageBuffer:
    """
    Apply a two-pass box blur to image.

    Args:
        image: ImageBuffer to blur
        radius: Blur radius in pixels. Floored; below 1 means no blur.

    Returns:
        Blurred ImageBuffer (alpha unchanged), or image itself when
        floor(radius) < 1

    Raises:
        TypeError: If image is not an ImageBuffer
    """
    if not isinstance(image, ImageBuffer):
        raise TypeError(f"Expected ImageBuffer, got {type(image)}")

    if _radius_int(radius) < 1:
        return image

    return box_blur_vertical(box_blur_horizontal(image, radius), radius)
