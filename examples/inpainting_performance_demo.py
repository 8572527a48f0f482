"""
Performance demonstration for the two editing effects.

Times region blur and object removal on synthetic images of increasing
size so you can see how the greedy inpainting loop scales with hole size.

Run from the repository root:
    python examples/inpainting_performance_demo.py
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import time

import numpy as np

from RS_Libs.ImageEditingLib.image_editing_ops import apply_region_blur, remove_object
from RS_Libs.ImageEditingLib.image_models import BrushConfig, ImageBuffer
from RS_Libs.ImageEditingLib.mask_layer import MaskLayer


def make_test_image(size):
    """Striped texture with a solid disc to remove."""
    pixels = np.empty((size, size, 4), dtype=np.uint8)
    stripes = (np.arange(size) // 6) % 2
    pixels[:, :, 0] = np.where(stripes, 200, 90)[np.newaxis, :]
    pixels[:, :, 1] = 140
    pixels[:, :, 2] = np.where(stripes, 60, 180)[:, np.newaxis]
    pixels[:, :, 3] = 255
    return ImageBuffer.from_array(pixels)


def make_mask(size, brush_size):
    layer = MaskLayer(size, size)
    center = size / 2
    layer.begin_stroke((center - brush_size, center), BrushConfig(size=brush_size))
    layer.continue_stroke((center + brush_size, center))
    layer.end_stroke()
    return layer.buffer()


def benchmark(size, brush_size):
    print(f"\nBenchmarking {size}x{size} image with brush={brush_size}px")
    print("-" * 60)

    image = make_test_image(size)
    mask = make_mask(size, brush_size)

    start = time.time()
    apply_region_blur(image, mask, intensity=20)
    blur_time = time.time() - start
    print(f"  Region blur:    {blur_time:.3f}s")

    start = time.time()
    result = remove_object(image, mask)
    remove_time = time.time() - start
    print(f"  Object removal: {remove_time:.3f}s "
          f"({result.status}, {result.iterations} iterations, "
          f"{result.filled_pixels} pixels filled)")

    return blur_time, remove_time, result


def main():
    """Run performance benchmarks."""
    print("=" * 60)
    print("Retouch Studio Effect Timing")
    print("=" * 60)

    test_cases = [
        (64, 6),
        (128, 10),
        (256, 16),
    ]

    results = []
    for size, brush_size in test_cases:
        try:
            blur_time, remove_time, result = benchmark(size, brush_size)
            results.append((size, brush_size, blur_time, remove_time, result.status))
        except KeyboardInterrupt:
            print("\n\nBenchmark interrupted by user")
            break

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print("Size       Brush  Blur      Remove    Status")
    print("-" * 60)
    for size, brush_size, blur_time, remove_time, status in results:
        print(f"{size:4d}x{size:<4d}  {brush_size:3d}   {blur_time:6.3f}s  "
              f"{remove_time:6.3f}s  {status}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
