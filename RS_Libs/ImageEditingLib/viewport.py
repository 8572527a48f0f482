"""
Viewport pan/zoom transform.

Maps pointer positions on the canvas widget to image-space coordinates so
brush strokes land on the right pixels. Zoom changes keep an anchor point
(the pointer, or the viewport center) fixed in image space.

Example:
    >>> view = ViewportTransform(pan_x=0.0, pan_y=0.0, zoom=2.0)
    >>> view.to_image_space((50, 50))
    (25.0, 25.0)
    >>> view.zoom_to(4.0, anchor=(50, 50))
    >>> view.to_image_space((50, 50))
    (25.0, 25.0)
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from RS_Libs.constants import (
    BUTTON_ZOOM_STEP,
    DEFAULT_ZOOM,
    FIT_MARGIN,
    WHEEL_ZOOM_STEP,
)
from RS_Libs.ImageEditingLib.image_models import Point


def _require_positive(name: str, value: float) -> float:
    value = float(value)
    if not value > 0:
        raise ValueError(f"{name} must be > 0, got {value}")
    return value


@dataclass
class ViewportTransform:
    """Pan offset (screen pixels) and zoom factor of the canvas view.

    Attributes:
        pan_x: Horizontal screen offset of the image origin
        pan_y: Vertical screen offset of the image origin
        zoom: Screen pixels per image pixel (> 0)
    """
    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = DEFAULT_ZOOM

    def __post_init__(self):
        self.zoom = _require_positive("zoom", self.zoom)
        self._drag_origin: Optional[Point] = None

    @property
    def pan(self) -> Point:
        return (self.pan_x, self.pan_y)

    def to_image_space(self, screen_point: Point) -> Point:
        sx, sy = screen_point
        return ((sx - self.pan_x) / self.zoom, (sy - self.pan_y) / self.zoom)

    def to_screen_space(self, image_point: Point) -> Point:
        ix, iy = image_point
        return (ix * self.zoom + self.pan_x, iy * self.zoom + self.pan_y)

    def zoom_to(self, new_zoom: float, anchor: Point) -> None:
        """
        Change zoom while keeping anchor over the same image point.

        Args:
            new_zoom: Target zoom factor (> 0)
            anchor: Screen point that must stay fixed (pointer or view center)

        Raises:
            ValueError: If new_zoom <= 0
        """
        new_zoom = _require_positive("zoom", new_zoom)
        ix, iy = self.to_image_space(anchor)
        ax, ay = anchor
        self.pan_x = ax - ix * new_zoom
        self.pan_y = ay - iy * new_zoom
        self.zoom = new_zoom

    def zoom_by(self, factor: float, anchor: Point) -> None:
        factor = _require_positive("zoom factor", factor)
        self.zoom_to(self.zoom * factor, anchor)

    def zoom_in(self, view_size: Tuple[int, int]) -> None:
        """Zoom in one button step around the viewport center."""
        self.zoom_by(BUTTON_ZOOM_STEP, _center(view_size))

    def zoom_out(self, view_size: Tuple[int, int]) -> None:
        """Zoom out one button step around the viewport center."""
        self.zoom_by(1.0 / BUTTON_ZOOM_STEP, _center(view_size))

    def wheel(self, delta: float, anchor: Point) -> None:
        """Mouse wheel zoom: positive delta zooms out, otherwise in."""
        if delta > 0:
            self.zoom_by(1.0 / WHEEL_ZOOM_STEP, anchor)
        else:
            self.zoom_by(WHEEL_ZOOM_STEP, anchor)

    def pan_by(self, dx: float, dy: float) -> None:
        self.pan_x += dx
        self.pan_y += dy

    def start_drag(self, screen_point: Point) -> None:
        sx, sy = screen_point
        self._drag_origin = (sx - self.pan_x, sy - self.pan_y)

    def drag_to(self, screen_point: Point) -> None:
        """Move the pan so the grabbed image point follows the pointer."""
        if self._drag_origin is None:
            return
        sx, sy = screen_point
        ox, oy = self._drag_origin
        self.pan_x = sx - ox
        self.pan_y = sy - oy

    def end_drag(self) -> None:
        self._drag_origin = None

    def fit(self, image_size: Tuple[int, int], view_size: Tuple[int, int]) -> None:
        """
        Fit the whole image inside the view with a small margin, centered.

        Args:
            image_size: (width, height) of the image
            view_size: (width, height) of the viewport widget
        """
        image_w, image_h = image_size
        view_w, view_h = view_size
        _require_positive("image width", image_w)
        _require_positive("image height", image_h)
        _require_positive("view width", view_w)
        _require_positive("view height", view_h)

        self.zoom = min(view_w / image_w, view_h / image_h) * FIT_MARGIN
        self.pan_x = (view_w - image_w * self.zoom) / 2
        self.pan_y = (view_h - image_h * self.zoom) / 2


def _center(view_size: Tuple[int, int]) -> Point:
    view_w, view_h = view_size
    return (view_w / 2, view_h / 2)
