"""
RS_Libs - Retouch Studio Library Modules

This package contains the editing core of Retouch Studio, organized into
specialized sub-packages:

- ImageEditingLib: Buffers, viewport, mask painting, blur, inpainting, session
- NodesLib: Effect nodes (Region Blur, Object Removal)
"""

__version__ = "0.1.0"
