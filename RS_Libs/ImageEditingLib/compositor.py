"""
Masked compositor.

Blends an effect result back over the original image, weighted per pixel
by mask alpha:

    out = original * (1 - a) + effect * a,    a = alpha / 255

RGB channels are blended; the output alpha channel is the original's.
"""

import numpy as np

from RS_Libs.ImageEditingLib.image_models import ImageBuffer, MaskBuffer, check_same_size


def blend(original: ImageBuffer, effect_result: ImageBuffer, mask: MaskBuffer) -> ImageBuffer:
    """
    Linearly interpolate between two buffers using mask alpha.

    Args:
        original: Unedited ImageBuffer
        effect_result: ImageBuffer with the effect applied everywhere
        mask: MaskBuffer selecting where (and how strongly) the effect shows

    Returns:
        New ImageBuffer

    Raises:
        DimensionMismatchError: If the three buffers differ in size
    """
    check_same_size(original, effect_result)
    mask.check_matches(original)

    weight = (mask.alpha.astype(np.float64) / 255.0)[:, :, np.newaxis]
    base = original.pixels[:, :, :3].astype(np.float64)
    effect = effect_result.pixels[:, :, :3].astype(np.float64)

    mixed = base * (1.0 - weight) + effect * weight

    pixels = original.writable_copy()
    pixels[:, :, :3] = np.clip(np.rint(mixed), 0, 255).astype(np.uint8)
    return ImageBuffer(original.width, original.height, pixels)
