"""
Image editing data models for Open Recolor.

This module defines core data structures used throughout the image editing system.

Classes:
    Raster: Immutable width x height grid of RGBA pixels

Type Aliases:
    RgbColor: A tuple of 3 integers representing RGB color values (0-255)
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
    HslColor: A tuple of 3 floats (hue, saturation, lightness), each 0-1
"""

from dataclasses import dataclass, field
from typing import Any, Tuple

import numpy as np

from RC_Libs.constants import CHANNELS_PER_PIXEL
from RC_Libs.errors import OutOfRangeError

RgbColor = Tuple[int, int, int]
RgbaColor = Tuple[int, int, int, int]
HslColor = Tuple[float, float, float]


@dataclass(frozen=True)
class Raster:
    """Immutable RGBA pixel grid.

    Pixels are stored row-major in an immutable bytes buffer, four channels
    per pixel. Two rasters compare equal when their dimensions and pixel
    data are identical.

    Attributes:
        width: Number of columns
        height: Number of rows
        data: RGBA bytes, length width * height * 4
    """
    width: int
    height: int
    data: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.width, bool) or not isinstance(self.width, int):
            raise TypeError(f"width must be an int, got {type(self.width).__name__}")
        if isinstance(self.height, bool) or not isinstance(self.height, int):
            raise TypeError(f"height must be an int, got {type(self.height).__name__}")
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Raster dimensions must be non-negative, got {self.width}x{self.height}")

        if isinstance(self.data, (bytearray, memoryview)):
            object.__setattr__(self, "data", bytes(self.data))
        elif not isinstance(self.data, bytes):
            raise TypeError(f"data must be bytes, got {type(self.data).__name__}")

        expected = self.width * self.height * CHANNELS_PER_PIXEL
        if len(self.data) != expected:
            raise ValueError(
                f"Raster buffer holds {len(self.data)} bytes, "
                f"expected {expected} for {self.width}x{self.height} RGBA"
            )

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def pixel(self, x: int, y: int) -> RgbaColor:
        """
        Get one pixel.

        Raises:
            TypeError: If x or y is not an integer
            OutOfRangeError: If (x, y) lies outside the raster
        """
        for name, value in (("x", x), ("y", y)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise TypeError(f"{name} must be an int, got {type(value).__name__}")

        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfRangeError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} raster")

        offset = (y * self.width + x) * CHANNELS_PER_PIXEL
        r, g, b, a = self.data[offset:offset + CHANNELS_PER_PIXEL]
        return r, g, b, a

    def as_array(self) -> np.ndarray:
        """Return a read-only (height, width, 4) uint8 view of the pixels."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(
            self.height, self.width, CHANNELS_PER_PIXEL
        )

    @classmethod
    def from_array(cls, array: Any) -> "Raster":
        """
        Copy a (height, width, 4) array into a new raster.

        Raises:
            ValueError: If the array does not have RGBA shape
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != CHANNELS_PER_PIXEL:
            raise ValueError(f"Expected array of shape (height, width, 4), got {array.shape}")

        height, width = int(array.shape[0]), int(array.shape[1])
        pixels = np.ascontiguousarray(array, dtype=np.uint8)
        return cls(width=width, height=height, data=pixels.tobytes())

    @classmethod
    def blank(cls, width: int, height: int, color: RgbaColor = (0, 0, 0, 255)) -> "Raster":
        """Create a raster filled with a single color."""
        return cls(width=width, height=height, data=bytes(color) * (width * height))
