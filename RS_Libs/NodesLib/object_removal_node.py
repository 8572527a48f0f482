"""
Object Removal Node.

Removes whatever the mask covers (alpha above 128) by exemplar-based
inpainting from the surrounding texture.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from RS_Libs.constants import EFFECT_OBJECT_REMOVAL, PATCH_RADIUS, SEARCH_WINDOW_RADIUS
from RS_Libs.ImageEditingLib.image_editing_ops import remove_object
from RS_Libs.ImageEditingLib.image_models import ImageBuffer, MaskBuffer
from RS_Libs.ImageEditingLib.inpainting import InpaintResult


@dataclass
class ObjectRemovalNodeConfig:
    """Configuration for object removal node.

    Attributes:
        patch_radius: Half-size of the matching patch (>= 1)
        search_window_radius: Half-size of the source search window (>= 1)
    """
    patch_radius: int = PATCH_RADIUS
    search_window_radius: int = SEARCH_WINDOW_RADIUS

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "patch_radius": self.patch_radius,
            "search_window_radius": self.search_window_radius,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ObjectRemovalNodeConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                   if k in cls.__dataclass_fields__}
        return cls(**filtered)


def execute_object_removal_node(node: Dict[str, Any], inputs: List[Any]) -> InpaintResult:
    """
    Execute object removal node.

    Inputs:
        - [0]: Image to edit (ImageBuffer)
        - [1]: Mask of the object to remove (MaskBuffer)

    Returns:
        InpaintResult

    Raises:
        ValueError: If inputs are missing or parameters invalid
        TypeError: If inputs have the wrong type
    """
    if not inputs or len(inputs) < 2:
        raise ValueError("ObjectRemovalNode requires 2 inputs: image and mask")

    image, mask = inputs[0], inputs[1]

    if not isinstance(image, ImageBuffer):
        raise TypeError(f"Expected ImageBuffer for image input, got {type(image)}")
    if not isinstance(mask, MaskBuffer):
        raise TypeError(f"Expected MaskBuffer for mask input, got {type(mask)}")

    config = ObjectRemovalNodeConfig.from_dict(node)

    try:
        return remove_object(
            image,
            mask,
            patch_radius=int(config.patch_radius),
            search_window_radius=int(config.search_window_radius),
        )
    except (ValueError, TypeError) as e:
        raise type(e)(f"Object removal node error: {str(e)}")


def create_object_removal_node(
    node_id: str,
    patch_radius: int = PATCH_RADIUS,
    search_window_radius: int = SEARCH_WINDOW_RADIUS,
) -> Dict[str, Any]:
    """Create object removal node."""
    return {
        "id": node_id,
        "type": EFFECT_OBJECT_REMOVAL,
        "patch_radius": patch_radius,
        "search_window_radius": search_window_radius,
    }
