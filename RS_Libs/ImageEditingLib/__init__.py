"""
ImageEditingLib - Core image editing functionality

This module provides the buffers, effects, and editing session used by
the Retouch Studio editor.
"""

from RS_Libs.ImageEditingLib.image_models import (
    BrushConfig,
    BrushMode,
    BrushStroke,
    DimensionMismatchError,
    ImageBuffer,
    MaskBuffer,
    PenConfig,
    RgbaColor,
)
from RS_Libs.ImageEditingLib.viewport import ViewportTransform
from RS_Libs.ImageEditingLib.mask_layer import MaskLayer, SketchLayer
from RS_Libs.ImageEditingLib.blur_filter import apply_box_blur
from RS_Libs.ImageEditingLib.compositor import blend
from RS_Libs.ImageEditingLib.inpainting import InpaintingEngine, InpaintResult, inpaint
from RS_Libs.ImageEditingLib.image_editing_ops import apply_region_blur, remove_object
from RS_Libs.ImageEditingLib.editing_session import EditingSession

__all__ = [
    "BrushConfig",
    "BrushMode",
    "BrushStroke",
    "DimensionMismatchError",
    "ImageBuffer",
    "MaskBuffer",
    "PenConfig",
    "RgbaColor",
    "ViewportTransform",
    "MaskLayer",
    "SketchLayer",
    "apply_box_blur",
    "blend",
    "InpaintingEngine",
    "InpaintResult",
    "inpaint",
    "apply_region_blur",
    "remove_object",
    "EditingSession",
]
