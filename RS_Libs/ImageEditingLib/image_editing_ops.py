"""
Core image editing operations for Retouch Studio.

This module provides the two mask-driven effects offered to the editor:

Functions:
    apply_region_blur: Blur the masked region, feathered by mask alpha
    remove_object: Fill the masked region from surrounding texture
"""

import logging

from RS_Libs.constants import (
    BLUR_ACTIVATION_THRESHOLD,
    DEFAULT_BLUR_INTENSITY,
    MAX_BLUR_INTENSITY,
    MIN_BLUR_INTENSITY,
    PATCH_RADIUS,
    SEARCH_WINDOW_RADIUS,
)
from RS_Libs.ImageEditingLib.blur_filter import apply_box_blur
from RS_Libs.ImageEditingLib.compositor import blend
from RS_Libs.ImageEditingLib.image_models import ImageBuffer, MaskBuffer
from RS_Libs.ImageEditingLib.inpainting import InpaintingEngine, InpaintResult

logger = logging.getLogger(__name__)


def _check_inputs(image, mask) -> None:
    if not isinstance(image, ImageBuffer):
        raise TypeError(f"Expected ImageBuffer, got {type(image)}")
    if not isinstance(mask, MaskBuffer):
        raise TypeError(f"Expected MaskBuffer, got {type(mask)}")
    mask.check_matches(image)


def apply_region_blur(
    image: ImageBuffer,
    mask: MaskBuffer,
    intensity: int = DEFAULT_BLUR_INTENSITY,
) -> ImageBuffer:
    """
    Blur the parts of image selected by mask.

    The whole image is box blurred at radius intensity / 2 and blended back
    over the original using mask alpha as the weight.

    Args:
        image: ImageBuffer to edit
        mask: MaskBuffer; any alpha above 0 takes part in the blend
        intensity: Blur intensity (1-50)

    Returns:
        New ImageBuffer, or image itself when the mask is empty

    Raises:
        ValueError: If intensity is outside 1-50
        DimensionMismatchError: If mask and image sizes differ
    """
    _check_inputs(image, mask)

    if not (MIN_BLUR_INTENSITY <= intensity <= MAX_BLUR_INTENSITY):
        raise ValueError(
            f"intensity must be {MIN_BLUR_INTENSITY}-{MAX_BLUR_INTENSITY}, got {intensity}"
        )

    if not mask.has_coverage(BLUR_ACTIVATION_THRESHOLD):
        return image

    blurred = apply_box_blur(image, intensity / 2)
    result = blend(image, blurred, mask)
    logger.info(f"Applied region blur at intensity {intensity}")
    return result


def remove_object(
    image: ImageBuffer,
    mask: MaskBuffer,
    patch_radius: int = PATCH_RADIUS,
    search_window_radius: int = SEARCH_WINDOW_RADIUS,
) -> InpaintResult:
    """
    Remove the masked object by inpainting it from nearby texture.

    Args:
        image: ImageBuffer to edit
        mask: MaskBuffer; alpha above 128 marks pixels to replace
        patch_radius: Inpainting patch half-size
        search_window_radius: Source search window half-size

    Returns:
        InpaintResult with the new image and completion status

    Raises:
        DimensionMismatchError: If mask and image sizes differ
    """
    _check_inputs(image, mask)
    engine = InpaintingEngine(patch_radius, search_window_radius)
    result = engine.run(image, mask)
    logger.info(
        f"Object removal finished ({result.status}): "
        f"{result.filled_pixels} filled, {result.remaining_pixels} remaining"
    )
    return result
