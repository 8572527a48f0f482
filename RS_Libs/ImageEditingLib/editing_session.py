"""
Editing session: the state behind one open image.

Owns the current ImageBuffer, the MaskLayer painted over it, a SketchLayer
for pen drawings, the viewport used to map pointer positions, and the
per-tool brush settings. Effects replace the image with a new buffer and
clear the mask afterwards.

Only one effect runs at a time. Before the heavy work starts the session
calls the status callback with a processing message so a UI can show an
indicator; it is called again with "" (or a warning) when done, and with a
failure message if the effect raises.

Example:
    >>> session = EditingSession(image, on_status=print)
    >>> session.tool = "remove"
    >>> session.begin_stroke((120, 80))
    >>> session.continue_stroke((140, 95))
    >>> session.end_stroke()
    >>> result = session.remove_object()
    Reconstructing image textures locally... This may take a moment.
    <BLANKLINE>
"""

from typing import Callable, Optional, Tuple
import logging

from RS_Libs.constants import (
    BLUR_ACTIVATION_THRESHOLD,
    DEFAULT_BLUR_BRUSH_SIZE,
    DEFAULT_BLUR_INTENSITY,
    DEFAULT_REMOVE_BRUSH_SIZE,
    INPAINT_ACTIVATION_THRESHOLD,
    MAX_BLUR_INTENSITY,
    MAX_MASK_BRUSH_SIZE,
    MAX_SKETCH_BRUSH_SIZE,
    MIN_BLUR_INTENSITY,
    MIN_MASK_BRUSH_SIZE,
    MIN_SKETCH_BRUSH_SIZE,
    MSG_APPLYING_BLUR,
    MSG_EFFECT_FAILED,
    MSG_PARTIAL_FILL,
    MSG_RECONSTRUCTING,
    TOOL_BLUR,
    TOOL_REMOVE,
    TOOL_SKETCH,
)
from RS_Libs.ImageEditingLib.image_editing_ops import apply_region_blur, remove_object
from RS_Libs.ImageEditingLib.image_models import (
    BrushConfig,
    BrushMode,
    ImageBuffer,
    PenConfig,
    Point,
)
from RS_Libs.ImageEditingLib.inpainting import InpaintResult
from RS_Libs.ImageEditingLib.mask_layer import MaskLayer, SketchLayer
from RS_Libs.ImageEditingLib.viewport import ViewportTransform

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]


class EditingSession:
    def __init__(
        self,
        image: ImageBuffer,
        view_size: Optional[Tuple[int, int]] = None,
        on_status: Optional[StatusCallback] = None,
    ) -> None:
        self.viewport = ViewportTransform()
        self.on_status = on_status
        self.tool = TOOL_REMOVE
        self.remove_brush = BrushConfig(size=DEFAULT_REMOVE_BRUSH_SIZE)
        self.blur_brush = BrushConfig(size=DEFAULT_BLUR_BRUSH_SIZE)
        self.pen = PenConfig()
        self._blur_intensity = DEFAULT_BLUR_INTENSITY
        self._processing = False
        self._stroke_layer = None
        self.load_image(image, view_size)

    # ------------------------------------------------------------------
    # Image and settings
    # ------------------------------------------------------------------

    def load_image(self, image: ImageBuffer, view_size: Optional[Tuple[int, int]] = None) -> None:
        """Make image current with a fresh, empty mask and sketch."""
        if not isinstance(image, ImageBuffer):
            raise TypeError(f"Expected ImageBuffer, got {type(image)}")
        self.image = image
        self.mask_layer = MaskLayer(image.width, image.height)
        self.sketch_layer = SketchLayer(image.width, image.height)
        self._stroke_layer = None
        if view_size is not None:
            self.viewport.fit(image.size, view_size)
        logger.debug(f"Loaded {image.width}x{image.height} image")

    @property
    def is_processing(self) -> bool:
        return self._processing

    @property
    def blur_intensity(self) -> int:
        return self._blur_intensity

    @blur_intensity.setter
    def blur_intensity(self, value: int) -> None:
        value = int(value)
        if not (MIN_BLUR_INTENSITY <= value <= MAX_BLUR_INTENSITY):
            raise ValueError(
                f"Blur intensity must be {MIN_BLUR_INTENSITY}-{MAX_BLUR_INTENSITY}, got {value}"
            )
        self._blur_intensity = value

    def set_brush(
        self,
        tool: str,
        size: Optional[int] = None,
        mode: Optional[str] = None,
        color: Optional[str] = None,
    ) -> None:
        """Update size, mode and (sketch pen only) colour of the brush used by tool."""
        brush = self._brush_for(tool)
        if size is not None:
            size = int(size)
            if tool == TOOL_SKETCH:
                low, high = MIN_SKETCH_BRUSH_SIZE, MAX_SKETCH_BRUSH_SIZE
            else:
                low, high = MIN_MASK_BRUSH_SIZE, MAX_MASK_BRUSH_SIZE
            if not (low <= size <= high):
                raise ValueError(f"Brush size must be {low}-{high}, got {size}")
        if color is not None:
            if tool != TOOL_SKETCH:
                raise ValueError(f"Only the {TOOL_SKETCH} pen has a colour")
            # Raises ValueError for unknown colour strings
            PenConfig(color=color)
        if mode is not None:
            mode = BrushMode.parse(mode)

        if size is not None:
            brush.size = size
        if mode is not None:
            brush.mode = mode
        if color is not None:
            brush.color = color

    def _brush_for(self, tool: str) -> BrushConfig:
        if tool == TOOL_REMOVE:
            return self.remove_brush
        if tool == TOOL_BLUR:
            return self.blur_brush
        if tool == TOOL_SKETCH:
            return self.pen
        raise ValueError(
            f"Unknown tool: {tool}. Valid tools: {TOOL_REMOVE}, {TOOL_BLUR}, {TOOL_SKETCH}"
        )

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def begin_stroke(self, screen_point: Point) -> None:
        """Start a stroke with the active tool: sketch pen or mask brush."""
        brush = self._brush_for(self.tool)
        point = self.viewport.to_image_space(screen_point)
        if self.tool == TOOL_SKETCH:
            self._stroke_layer = self.sketch_layer
            config = PenConfig(size=brush.size, mode=brush.mode, color=brush.color)
        else:
            self._stroke_layer = self.mask_layer
            config = BrushConfig(size=brush.size, mode=brush.mode)
        self._stroke_layer.begin_stroke(point, config)

    def continue_stroke(self, screen_point: Point) -> None:
        if self._stroke_layer is None:
            return
        self._stroke_layer.continue_stroke(self.viewport.to_image_space(screen_point))

    def end_stroke(self) -> None:
        if self._stroke_layer is not None:
            self._stroke_layer.end_stroke()
        self._stroke_layer = None

    def clear_mask(self) -> None:
        self.mask_layer.clear()

    def clear_sketch(self) -> None:
        self.sketch_layer.clear()

    def flattened_image(self) -> ImageBuffer:
        """Current image with the sketch drawn on top, for export."""
        return self.sketch_layer.flatten(self.image)

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------

    def apply_blur(self) -> Optional[ImageBuffer]:
        """
        Blur the masked region of the current image.

        Returns:
            The new current ImageBuffer, or None if nothing is masked

        Raises:
            RuntimeError: If another effect is already running
        """
        self._check_idle()
        mask = self.mask_layer.buffer()
        if not mask.has_coverage(BLUR_ACTIVATION_THRESHOLD):
            return None

        result = self._run_effect(
            MSG_APPLYING_BLUR, apply_region_blur, self.image, mask, self._blur_intensity
        )
        self._replace_image(result)
        self._notify("")
        return result

    def remove_object(self) -> Optional[InpaintResult]:
        """
        Inpaint the masked region of the current image.

        Returns:
            InpaintResult (its image becomes current), or None if nothing
            is masked above the inpainting threshold

        Raises:
            RuntimeError: If another effect is already running
        """
        self._check_idle()
        mask = self.mask_layer.buffer()
        if not mask.has_coverage(INPAINT_ACTIVATION_THRESHOLD):
            return None

        result = self._run_effect(MSG_RECONSTRUCTING, remove_object, self.image, mask)
        self._replace_image(result.image)
        self._notify("" if result.is_complete else MSG_PARTIAL_FILL)
        return result

    def _run_effect(self, message: str, effect: Callable, *args):
        self._processing = True
        try:
            self._notify(message)
            return effect(*args)
        except Exception as e:
            logger.error(f"Effect failed: {e!r}")
            self._notify(MSG_EFFECT_FAILED)
            raise
        finally:
            self._processing = False

    def _check_idle(self) -> None:
        if self._processing:
            raise RuntimeError("An effect is already running in this session")

    def _replace_image(self, image: ImageBuffer) -> None:
        self.image = image
        self.mask_layer.clear()

    def _notify(self, message: str) -> None:
        if self.on_status is not None:
            self.on_status(message)
