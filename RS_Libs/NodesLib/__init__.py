"""
Retouch Studio Nodes Library.

Effect nodes that take an image and a mask and produce an edited image.

Modules:
    region_blur_node: Mask-weighted box blur
    object_removal_node: Exemplar-based inpainting
"""

from RS_Libs.NodesLib.region_blur_node import (
    RegionBlurNodeConfig,
    execute_region_blur_node,
    create_region_blur_node,
)
from RS_Libs.NodesLib.object_removal_node import (
    ObjectRemovalNodeConfig,
    execute_object_removal_node,
    create_object_removal_node,
)

__all__ = [
    "RegionBlurNodeConfig",
    "execute_region_blur_node",
    "create_region_blur_node",
    "ObjectRemovalNodeConfig",
    "execute_object_removal_node",
    "create_object_removal_node",
]
