"""
Performance demonstration for color replacement.

Times the replacement filter on increasingly large generated images to
show that cost grows linearly with the pixel count, then walks a short
edit history to show navigation never recomputes anything.

Run after installing the package:
    pip install -e .
    python examples/recolor_performance_demo.py
"""

import time

import numpy as np

from RC_Libs.HistoryLib.edit_history import EditHistory, get_history_summary
from RC_Libs.ImageEditingLib.color_replace_filter import ColorReplacer
from RC_Libs.ImageEditingLib.image_models import Raster


def make_gradient(size):
    """Red-to-dark-red horizontal gradient with a green stripe."""
    ramp = np.linspace(80, 255, size, dtype=np.float64).astype(np.uint8)
    pixels = np.zeros((size, size, 4), dtype=np.uint8)
    pixels[..., 0] = ramp[np.newaxis, :]
    pixels[..., 3] = 255
    pixels[size // 3:size // 2, :, :3] = (0, 200, 0)
    return Raster.from_array(pixels)


def benchmark_replace(size, iterations=3):
    """Benchmark one image size."""
    raster = make_gradient(size)
    replacer = ColorReplacer()

    times = []
    for i in range(iterations):
        start = time.time()
        replacer.replace_color(raster, "#c80000", "#1e90ff", 120)
        elapsed = time.time() - start
        times.append(elapsed)
        label = " (warmup)" if i == 0 else ""
        print(f"  {size}x{size} run {i+1}: {elapsed:.3f}s{label}")

    average = sum(times[1:]) / len(times[1:])
    per_megapixel = average / (size * size / 1_000_000)
    return average, per_megapixel


def demo_history():
    """Record a few edits, branch, and print the history."""
    original = make_gradient(64)
    replacer = ColorReplacer()
    history = EditHistory(original)

    history.record(replacer.apply(history.current(), "#c80000", "#1e90ff", 120))
    history.record(replacer.apply(history.current(), "#00c800", "#ffd700", 40))
    history.undo()
    history.record(replacer.apply(history.current(), "#00c800", "#ff69b4", 40))

    print(get_history_summary(history))


def main():
    """Run benchmarks and the history walkthrough."""
    print("=" * 60)
    print("Color Replacement Performance Demonstration")
    print("=" * 60)

    results = []
    for size in (256, 512, 1024, 2048):
        try:
            results.append((size, *benchmark_replace(size)))
        except KeyboardInterrupt:
            print("\n\nBenchmark interrupted by user")
            break

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    print("Size         Average   Per megapixel")
    print("-" * 60)
    for size, average, per_megapixel in results:
        print(f"{size:4d}x{size:<4d}    {average:6.3f}s  {per_megapixel:6.3f}s")

    print("\n" + "=" * 60)
    demo_history()


if __name__ == "__main__":
    main()
