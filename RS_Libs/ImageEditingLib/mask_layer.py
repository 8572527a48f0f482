"""
Stroke layers painted by brushes.

MaskLayer is an 8-bit alpha canvas the size of the image. SketchLayer is an
RGBA canvas drawn over the image with a coloured pen. Both draw strokes as
round-capped, round-joined line segments between consecutive pointer
positions. Paint mode writes full alpha (and the pen colour); erase mode
clears covered pixels regardless of what was there. Points outside the
canvas are clipped by the rasterizer.

Example:
    >>> layer = MaskLayer(200, 100)
    >>> layer.begin_stroke((10, 10), BrushConfig(size=8))
    >>> layer.continue_stroke((60, 40))
    >>> layer.end_stroke()
    >>> layer.buffer().has_coverage()
    True
"""

from typing import Any, Optional

import numpy as np
from PIL import Image, ImageDraw

from RS_Libs.constants import DEFAULT_SKETCH_COLOR, MASK_CLEAR, MASK_OPAQUE
from RS_Libs.ImageEditingLib.image_models import (
    BrushConfig,
    BrushMode,
    BrushStroke,
    ImageBuffer,
    MaskBuffer,
    PenConfig,
    Point,
    check_same_size,
)


class _StrokeLayer:
    """Stroke builder shared by the mask and sketch canvases."""

    canvas_mode = "L"
    clear_value: Any = MASK_CLEAR

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Layer dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._canvas = Image.new(self.canvas_mode, (width, height), self.clear_value)
        self._draw = ImageDraw.Draw(self._canvas)
        self._config: Optional[BrushConfig] = None
        self._last_point: Optional[Point] = None

    @property
    def is_drawing(self) -> bool:
        return self._last_point is not None

    def begin_stroke(self, point: Point, config: BrushConfig) -> None:
        """Start a stroke and stamp a single round dot at point."""
        self._config = config
        self._last_point = point
        self._segment(point, point)

    def continue_stroke(self, point: Point) -> None:
        """Draw from the previous point to point. No-op without an active stroke."""
        if self._last_point is None:
            return
        self._segment(self._last_point, point)
        self._last_point = point

    def end_stroke(self) -> None:
        self._last_point = None
        self._config = None

    def commit_stroke(self, stroke: BrushStroke) -> None:
        """Rasterize a complete stroke in one call."""
        if not stroke.points:
            return
        points = list(stroke.points)
        self.begin_stroke(points[0], stroke.config)
        for point in points[1:]:
            self.continue_stroke(point)
        self.end_stroke()

    def clear(self) -> None:
        self._draw.rectangle((0, 0, self.width, self.height), fill=self.clear_value)

    def _fill(self, config: BrushConfig) -> Any:
        raise NotImplementedError

    def _segment(self, start: Point, end: Point) -> None:
        config = self._config
        value = self._fill(config)
        width = max(1, int(round(config.size)))
        # Pillow includes both corners of the ellipse box
        half = (width - 1) / 2.0

        # Round caps at both ends double as round joins between segments
        for x, y in (start, end):
            self._draw.ellipse((x - half, y - half, x + half, y + half), fill=value)

        if start != end:
            self._draw.line([start, end], fill=value, width=width)


class MaskLayer(_StrokeLayer):
    """Stroke builder over an image-sized alpha canvas."""

    @classmethod
    def from_buffer(cls, mask: MaskBuffer) -> "MaskLayer":
        layer = cls(mask.width, mask.height)
        layer._canvas.paste(mask.to_pil())
        return layer

    def buffer(self) -> MaskBuffer:
        """Snapshot of the current mask."""
        return MaskBuffer(self.width, self.height, np.asarray(self._canvas))

    def _fill(self, config: BrushConfig) -> int:
        return MASK_CLEAR if config.mode is BrushMode.ERASE else MASK_OPAQUE


class SketchLayer(_StrokeLayer):
    """Coloured pen strokes kept on their own transparent layer."""

    canvas_mode = "RGBA"
    clear_value = (0, 0, 0, 0)

    def buffer(self) -> ImageBuffer:
        """Snapshot of the sketch as an RGBA ImageBuffer."""
        return ImageBuffer.from_pil(self._canvas)

    def flatten(self, image: ImageBuffer) -> ImageBuffer:
        """Composite the sketch over image (same size) and return the result."""
        check_same_size(image, self)
        base = image.to_pil()
        return ImageBuffer.from_pil(Image.alpha_composite(base, self._canvas))

    def _fill(self, config: BrushConfig):
        if config.mode is BrushMode.ERASE:
            return self.clear_value
        if isinstance(config, PenConfig):
            return config.rgba()
        return PenConfig(size=config.size, color=DEFAULT_SKETCH_COLOR).rgba()
