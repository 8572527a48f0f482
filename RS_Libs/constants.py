"""
Constants and configuration values for Retouch Studio.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the editing core.
"""

# Inpainting constants
PATCH_RADIUS = 4
SEARCH_WINDOW_RADIUS = 40
INPAINT_ITERATION_SLACK = 10

# Mask activation thresholds (alpha must be strictly greater)
BLUR_ACTIVATION_THRESHOLD = 0
INPAINT_ACTIVATION_THRESHOLD = 128

# Mask values
MASK_OPAQUE = 255
MASK_CLEAR = 0

# Blur intensity (halved to get the box blur radius)
DEFAULT_BLUR_INTENSITY = 10
MIN_BLUR_INTENSITY = 1
MAX_BLUR_INTENSITY = 50

# Brush sizes
DEFAULT_REMOVE_BRUSH_SIZE = 20
DEFAULT_BLUR_BRUSH_SIZE = 30
MIN_MASK_BRUSH_SIZE = 5
MAX_MASK_BRUSH_SIZE = 100
DEFAULT_SKETCH_BRUSH_SIZE = 5
MIN_SKETCH_BRUSH_SIZE = 1
MAX_SKETCH_BRUSH_SIZE = 50
DEFAULT_SKETCH_COLOR = "#FFFFFF"

# Viewport
DEFAULT_ZOOM = 1.0
BUTTON_ZOOM_STEP = 1.2
WHEEL_ZOOM_STEP = 1.1
FIT_MARGIN = 0.95

# Tool names
TOOL_REMOVE = "remove"
TOOL_BLUR = "blur"
TOOL_SKETCH = "sketch"

# Effect names
EFFECT_REGION_BLUR = "Region Blur"
EFFECT_OBJECT_REMOVAL = "Object Removal"

# Inpainting status values
STATUS_UNCHANGED = "unchanged"
STATUS_COMPLETE = "complete"
STATUS_PARTIAL = "partial"

# Status messages
MSG_APPLYING_BLUR = "Applying blur effect..."
MSG_RECONSTRUCTING = "Reconstructing image textures locally... This may take a moment."
MSG_PARTIAL_FILL = "Some masked pixels could not be filled."
MSG_EFFECT_FAILED = "Failed to apply effect."
