"""
Region Blur Node.

Blurs the masked part of an image. The mask alpha (0-255) acts as the
blend weight between the original and a box-blurred copy, so soft mask
edges give a feathered transition.

Example:
    >>> node = create_region_blur_node("blur-1", intensity=20)
    >>> result = execute_region_blur_node(node, [image, mask])
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from RS_Libs.constants import DEFAULT_BLUR_INTENSITY, EFFECT_REGION_BLUR
from RS_Libs.ImageEditingLib.image_editing_ops import apply_region_blur
from RS_Libs.ImageEditingLib.image_models import ImageBuffer, MaskBuffer


@dataclass
class RegionBlurNodeConfig:
    """Configuration for region blur node.

    Attributes:
        intensity: Blur intensity (1-50); the box blur radius is half of it
    """
    intensity: int = DEFAULT_BLUR_INTENSITY

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"intensity": self.intensity}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegionBlurNodeConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                   if k in cls.__dataclass_fields__}
        return cls(**filtered)


def execute_region_blur_node(node: Dict[str, Any], inputs: List[Any]) -> ImageBuffer:
    """
    Execute region blur node.

    Node dict should contain:
        - 'intensity': Blur intensity (1-50)

    Inputs:
        - [0]: Image to edit (ImageBuffer)
        - [1]: Mask selecting the region (MaskBuffer)

    Returns:
        Edited ImageBuffer (the input image when the mask is empty)

    Raises:
        ValueError: If inputs are missing or parameters invalid
        TypeError: If inputs have the wrong type
    """
    if not inputs or len(inputs) < 2:
        raise ValueError("RegionBlurNode requires 2 inputs: image and mask")

    image, mask = inputs[0], inputs[1]

    if not isinstance(image, ImageBuffer):
        raise TypeError(f"Expected ImageBuffer for image input, got {type(image)}")
    if not isinstance(mask, MaskBuffer):
        raise TypeError(f"Expected MaskBuffer for mask input, got {type(mask)}")

    config = RegionBlurNodeConfig.from_dict(node)

    try:
        return apply_region_blur(image, mask, int(config.intensity))
    except (ValueError, TypeError) as e:
        raise type(e)(f"Region blur node error: {str(e)}")


def create_region_blur_node(
    node_id: str,
    intensity: int = DEFAULT_BLUR_INTENSITY,
) -> Dict[str, Any]:
    """
    Create region blur node.

    Args:
        node_id: Unique node identifier
        intensity: Blur intensity (1-50)

    Returns:
        Node dict
    """
    return {
        "id": node_id,
        "type": EFFECT_REGION_BLUR,
        "intensity": intensity,
    }
