"""
Image editing data models for Retouch Studio.

This module defines core data structures used throughout the editing core.

Classes:
    ImageBuffer: Immutable RGBA pixel buffer (8-bit channels)
    MaskBuffer: Alpha-only buffer aligned 1:1 with an ImageBuffer
    BrushMode: Paint or erase
    BrushConfig: Brush size and mode
    PenConfig: Sketch pen settings (brush plus colour)
    BrushStroke: Ordered image-space points drawn with one brush
    DimensionMismatchError: Raised when buffers do not share a size

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
    Point: An (x, y) pair of floats
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

import numpy as np
from PIL import Image, ImageColor

from RS_Libs.constants import DEFAULT_SKETCH_BRUSH_SIZE, DEFAULT_SKETCH_COLOR, MASK_CLEAR

RgbaColor = Tuple[int, int, int, int]
Point = Tuple[float, float]


class DimensionMismatchError(ValueError):
    """Raised when an image and a mask (or two images) differ in size."""


def check_same_size(first: Any, second: Any) -> None:
    """Raise DimensionMismatchError unless both buffers share width and height."""
    if (first.width, first.height) != (second.width, second.height):
        raise DimensionMismatchError(
            f"Buffer size mismatch: {first.width}x{first.height} "
            f"vs {second.width}x{second.height}"
        )


@dataclass(frozen=True, eq=False)
class ImageBuffer:
    """
    RGBA image buffer.

    The pixel array has shape (height, width, 4) and dtype uint8. It is
    made read-only on construction; edits always produce a new buffer.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        pixels: numpy array of shape (height, width, 4)
    """
    width: int
    height: int
    pixels: np.ndarray = field(repr=False)

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        pixels = np.array(self.pixels, dtype=np.uint8, copy=True)
        if pixels.shape != (self.height, self.width, 4):
            raise DimensionMismatchError(
                f"Pixel array shape {pixels.shape} does not match "
                f"{self.width}x{self.height} RGBA"
            )
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def new(cls, width: int, height: int, color: RgbaColor = (0, 0, 0, 255)) -> "ImageBuffer":
        """Create a buffer filled with a single color."""
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = color
        return cls(width, height, pixels)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "ImageBuffer":
        """Create from an (H, W, 4) array."""
        height, width = pixels.shape[:2]
        return cls(width, height, pixels)

    @classmethod
    def from_pil(cls, image: Any) -> "ImageBuffer":
        """
        Create from a PIL Image.

        Args:
            image: PIL Image in any mode (converted to RGBA)

        Raises:
            TypeError: If image is not a PIL Image
        """
        if not hasattr(image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")
        rgba = image.convert("RGBA")
        return cls(rgba.width, rgba.height, np.asarray(rgba))

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> "ImageBuffer":
        """Create from raw RGBA bytes (length must be width*height*4)."""
        expected = width * height * 4
        if len(data) != expected:
            raise DimensionMismatchError(
                f"Expected {expected} bytes for {width}x{height} RGBA, got {len(data)}"
            )
        pixels = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 4)
        return cls(width, height, pixels)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def to_pil(self) -> Any:
        """Convert to an RGBA PIL Image."""
        return Image.fromarray(np.ascontiguousarray(self.pixels))

    def tobytes(self) -> bytes:
        return self.pixels.tobytes()

    def writable_copy(self) -> np.ndarray:
        """Return a mutable copy of the pixel array."""
        return self.pixels.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageBuffer):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.pixels, other.pixels)

    __hash__ = None


@dataclass(eq=False)
class MaskBuffer:
    """
    Alpha-only mask aligned with an ImageBuffer.

    Values range 0-255. Consumers decide what counts as selected by
    comparing against their own threshold (strictly greater than).

    Attributes:
        width: Mask width in pixels
        height: Mask height in pixels
        alpha: numpy uint8 array of shape (height, width)
    """
    width: int
    height: int
    alpha: np.ndarray = field(repr=False)

    def __post_init__(self):
        alpha = np.array(self.alpha, dtype=np.uint8, copy=True)
        if alpha.shape != (self.height, self.width):
            raise DimensionMismatchError(
                f"Alpha array shape {alpha.shape} does not match "
                f"{self.width}x{self.height}"
            )
        self.alpha = alpha

    @classmethod
    def zeros(cls, width: int, height: int) -> "MaskBuffer":
        return cls(width, height, np.zeros((height, width), dtype=np.uint8))

    @classmethod
    def from_pil(cls, image: Any) -> "MaskBuffer":
        """
        Create from a PIL Image.

        Images with an alpha band contribute that band; anything else is
        converted to 8-bit grayscale ("L").
        """
        if not hasattr(image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")
        if "A" in image.getbands():
            band = image.getchannel("A")
        else:
            band = image.convert("L")
        return cls(band.width, band.height, np.asarray(band))

    def to_pil(self) -> Any:
        """Convert to an "L" mode PIL Image."""
        return Image.fromarray(self.alpha)

    def selected(self, threshold: int) -> np.ndarray:
        """Boolean array of pixels whose alpha is above threshold."""
        return self.alpha > threshold

    def has_coverage(self, threshold: int = 0) -> bool:
        return bool(np.any(self.alpha > threshold))

    def clear(self) -> None:
        self.alpha[:, :] = MASK_CLEAR

    def check_matches(self, image: ImageBuffer) -> None:
        """Raise DimensionMismatchError if this mask is not aligned with image."""
        check_same_size(image, self)


class BrushMode(Enum):
    PAINT = "paint"
    ERASE = "erase"

    @classmethod
    def parse(cls, value: Any) -> "BrushMode":
        """Accept a BrushMode or its name; "brush"/"eraser" are UI aliases."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        aliases = {"brush": "paint", "eraser": "erase"}
        try:
            return cls(aliases.get(name, name))
        except ValueError:
            raise ValueError(f"Unknown brush mode: {value}. Valid modes: paint, erase") from None


@dataclass
class BrushConfig:
    """Brush settings for mask painting.

    Attributes:
        size: Stroke width in image pixels (>= 1)
        mode: BrushMode.PAINT or BrushMode.ERASE
    """
    size: int = 20
    mode: BrushMode = BrushMode.PAINT

    def __post_init__(self):
        self.mode = BrushMode.parse(self.mode)
        if self.size < 1:
            raise ValueError(f"Brush size must be >= 1, got {self.size}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"size": self.size, "mode": self.mode.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BrushConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                   if k in cls.__dataclass_fields__}
        return cls(**filtered)


@dataclass
class PenConfig(BrushConfig):
    """Sketch pen settings.

    Attributes:
        size: Stroke width in image pixels (>= 1)
        mode: BrushMode.PAINT or BrushMode.ERASE
        color: Any colour string Pillow understands ("#FFFFFF", "red", ...)
    """
    size: int = DEFAULT_SKETCH_BRUSH_SIZE
    color: str = DEFAULT_SKETCH_COLOR

    def __post_init__(self):
        super().__post_init__()
        # Raises ValueError for unknown colour strings
        self.rgba()

    def rgba(self) -> RgbaColor:
        """Pen colour as an opaque RGBA tuple."""
        red, green, blue = ImageColor.getcolor(self.color, "RGB")
        return (red, green, blue, 255)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data["color"] = self.color
        return data


@dataclass
class BrushStroke:
    points: List[Point]
    size: int
    mode: BrushMode = BrushMode.PAINT

    def __post_init__(self):
        self.mode = BrushMode.parse(self.mode)

    @property
    def config(self) -> BrushConfig:
        return BrushConfig(size=self.size, mode=self.mode)
