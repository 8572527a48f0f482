"""
Exemplar-based inpainting (object removal).

Fills masked pixels by copying patches from unmasked parts of the same
image. Each iteration:

1. Picks the boundary pixel (masked, with an unmasked 8-neighbour) whose
   patch holds the most known pixels. Only pixels at least patch_radius
   from every edge are considered; ties go to the first in row-major order.
2. Searches a square window around it for fully unmasked source patches
   and picks the one with the lowest sum of squared RGB differences,
   measured only where the target patch is known. Ties go to the first in
   row-major order.
3. Copies the source RGB into the masked pixels of the target patch and
   marks them known.

The loop stops when the hole is filled, when no boundary pixel or no valid
source patch exists, or after (initial hole size + 10) iterations. The
result is greedy and best-effort, and fully deterministic.

Example:
    >>> from PIL import Image
    >>> image = ImageBuffer.from_pil(Image.open("photo.jpg"))
    >>> mask = MaskBuffer.from_pil(Image.open("object_mask.png"))
    >>>
    >>> result = InpaintingEngine().run(image, mask)
    >>> result.status
    'complete'
"""

from dataclasses import dataclass
from typing import Optional, Tuple
import logging

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from scipy import ndimage

from RS_Libs.constants import (
    INPAINT_ACTIVATION_THRESHOLD,
    INPAINT_ITERATION_SLACK,
    PATCH_RADIUS,
    SEARCH_WINDOW_RADIUS,
    STATUS_COMPLETE,
    STATUS_PARTIAL,
    STATUS_UNCHANGED,
)
from RS_Libs.ImageEditingLib.image_models import ImageBuffer, MaskBuffer

logger = logging.getLogger(__name__)

Pixel = Tuple[int, int]

_NEIGHBOURHOOD = np.ones((3, 3), dtype=bool)


@dataclass
class InpaintResult:
    """Outcome of one inpainting run.

    Attributes:
        image: Resulting ImageBuffer (the input itself when unchanged)
        status: 'unchanged' (empty mask), 'complete' or 'partial'
        iterations: Loop iterations performed
        filled_pixels: Number of hole pixels that received a value
        remaining_pixels: Hole pixels left unfilled
    """
    image: ImageBuffer
    status: str
    iterations: int = 0
    filled_pixels: int = 0
    remaining_pixels: int = 0

    @property
    def is_complete(self) -> bool:
        return self.status != STATUS_PARTIAL


@dataclass
class _InpaintingState:
    rgb: np.ndarray
    holes: np.ndarray
    remaining: int
    max_iterations: int
    iterations: int = 0


class InpaintingEngine:
    """
    Greedy patch-based hole filler.

    Args:
        patch_radius: Half-size of the square patch (patch is 2r+1 wide)
        search_window_radius: Half-size of the source search window

    Raises:
        ValueError: If either radius is < 1
    """

    def __init__(
        self,
        patch_radius: int = PATCH_RADIUS,
        search_window_radius: int = SEARCH_WINDOW_RADIUS,
    ):
        if int(patch_radius) < 1:
            raise ValueError(f"patch_radius must be >= 1, got {patch_radius}")
        if int(search_window_radius) < 1:
            raise ValueError(
                f"search_window_radius must be >= 1, got {search_window_radius}"
            )
        self.patch_radius = int(patch_radius)
        self.search_window_radius = int(search_window_radius)
        self._patch_size = 2 * self.patch_radius + 1
        self._patch_kernel = np.ones((self._patch_size, self._patch_size), dtype=np.int32)

    def inpaint(self, image: ImageBuffer, mask: MaskBuffer) -> ImageBuffer:
        """Fill the masked region and return the resulting ImageBuffer."""
        return self.run(image, mask).image

    def run(self, image: ImageBuffer, mask: MaskBuffer) -> InpaintResult:
        """
        Fill the masked region and report how far the fill got.

        Args:
            image: Source ImageBuffer (not modified)
            mask: MaskBuffer; alpha > 128 marks a hole

        Returns:
            InpaintResult

        Raises:
            TypeError: If inputs are not ImageBuffer / MaskBuffer
            DimensionMismatchError: If mask and image sizes differ
        """
        if not isinstance(image, ImageBuffer):
            raise TypeError(f"Expected ImageBuffer, got {type(image)}")
        if not isinstance(mask, MaskBuffer):
            raise TypeError(f"Expected MaskBuffer, got {type(mask)}")
        mask.check_matches(image)

        holes = mask.selected(INPAINT_ACTIVATION_THRESHOLD)
        initial = int(holes.sum())
        if initial == 0:
            return InpaintResult(image=image, status=STATUS_UNCHANGED)

        state = _InpaintingState(
            rgb=image.writable_copy(),
            holes=holes.copy(),
            remaining=initial,
            max_iterations=initial + INPAINT_ITERATION_SLACK,
        )

        while state.remaining > 0 and state.iterations < state.max_iterations:
            state.iterations += 1

            target = self._select_target(state.holes)
            if target is None:
                logger.debug("No boundary pixel left, stopping")
                break

            source = self._find_source(state, target)
            if source is None:
                logger.debug(f"No valid source patch for target {target}, stopping")
                break

            state.remaining -= self._commit(state, target, source)

        status = STATUS_COMPLETE if state.remaining == 0 else STATUS_PARTIAL
        result = InpaintResult(
            image=ImageBuffer(image.width, image.height, state.rgb),
            status=status,
            iterations=state.iterations,
            filled_pixels=initial - state.remaining,
            remaining_pixels=state.remaining,
        )

        if status == STATUS_PARTIAL:
            logger.warning(
                f"Inpainting stopped early: {state.remaining} of {initial} "
                f"pixels unfilled after {state.iterations} iterations"
            )
        else:
            logger.debug(f"Inpainted {initial} pixels in {state.iterations} iterations")

        return result

    def _select_target(self, holes: np.ndarray) -> Optional[Pixel]:
        r = self.patch_radius
        height, width = holes.shape
        if height <= 2 * r or width <= 2 * r:
            return None

        known = ~holes
        boundary = holes & ndimage.binary_dilation(known, structure=_NEIGHBOURHOOD)
        confidence = ndimage.correlate(
            known.astype(np.int32), self._patch_kernel, mode="constant", cval=0
        )

        scores = np.where(boundary, confidence, -1)[r:height - r, r:width - r]
        # argmax returns the first maximum in row-major order
        best = int(np.argmax(scores))
        y, x = divmod(best, scores.shape[1])
        if scores[y, x] < 0:
            return None
        return (y + r, x + r)

    def _find_source(self, state: _InpaintingState, target: Pixel) -> Optional[Pixel]:
        r = self.patch_radius
        size = self._patch_size
        height, width = state.holes.shape
        ty, tx = target

        y0 = max(r, ty - self.search_window_radius)
        y1 = min(height - r - 1, ty + self.search_window_radius)
        x0 = max(r, tx - self.search_window_radius)
        x1 = min(width - r - 1, tx + self.search_window_radius)

        rows = slice(y0 - r, y1 + r + 1)
        cols = slice(x0 - r, x1 + r + 1)

        hole_windows = sliding_window_view(state.holes[rows, cols], (size, size))
        valid = ~hole_windows.any(axis=(2, 3))
        if not valid.any():
            return None

        # (ny, nx, 3, size, size)
        rgb_windows = sliding_window_view(
            state.rgb[rows, cols, :3].astype(np.int64), (size, size), axis=(0, 1)
        )
        target_rgb = (
            state.rgb[ty - r:ty + r + 1, tx - r:tx + r + 1, :3]
            .astype(np.int64)
            .transpose(2, 0, 1)
        )
        target_known = ~state.holes[ty - r:ty + r + 1, tx - r:tx + r + 1]

        diff = rgb_windows - target_rgb
        ssd = (diff * diff * target_known).sum(axis=(2, 3, 4))
        ssd = np.where(valid, ssd, np.iinfo(np.int64).max)

        best = int(np.argmin(ssd))
        y, x = divmod(best, ssd.shape[1])
        return (y + y0, x + x0)

    def _commit(self, state: _InpaintingState, target: Pixel, source: Pixel) -> int:
        r = self.patch_radius
        ty, tx = target
        sy, sx = source
        target_area = (slice(ty - r, ty + r + 1), slice(tx - r, tx + r + 1))
        source_area = (slice(sy - r, sy + r + 1), slice(sx - r, sx + r + 1))

        fill = state.holes[target_area].copy()
        state.rgb[target_area][:, :, :3][fill] = state.rgb[source_area][:, :, :3][fill]
        state.holes[target_area][fill] = False
        return int(fill.sum())


def inpaint(
    image: ImageBuffer,
    mask: MaskBuffer,
    patch_radius: int = PATCH_RADIUS,
    search_window_radius: int = SEARCH_WINDOW_RADIUS,
) -> ImageBuffer:
    """Inpaint with a one-off engine. See InpaintingEngine.run()."""
    engine = InpaintingEngine(patch_radius, search_window_radius)
    return engine.inpaint(image, mask)
