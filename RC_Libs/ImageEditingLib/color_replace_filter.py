"""
Color Replace Filter for Open Recolor.

Replaces every pixel whose RGB value lies within a Euclidean distance
(the tolerance) of a target color. Matched pixels take the hue and
saturation of the replacement color while keeping their lightness offset
from the target, so shading on the original color survives the recolor.
Alpha is never changed.

The filter works on whole numpy bands of rows at a time; there is no
per-pixel Python loop, so cost is linear in the pixel count.

Classes:
    ColorReplacer: Applies lightness-preserving color replacement to rasters

Functions:
    validate_tolerance: Check a tolerance value is an integer in 0-255
"""

import logging
from typing import Any, Iterator, Tuple

import numpy as np

from RC_Libs.constants import MAX_TOLERANCE, MIN_TOLERANCE, ROW_BAND_PIXELS
from RC_Libs.errors import EmptyRasterError
from RC_Libs.HistoryLib.edit_history import EditOperation
from RC_Libs.ImageEditingLib.color_space import (
    coerce_color,
    format_hex_color,
    hsl_to_rgb_array,
    lightness_array,
    rgb_to_hsl,
)
from RC_Libs.ImageEditingLib.image_models import HslColor, Raster, RgbColor

logger = logging.getLogger(__name__)


def validate_tolerance(tolerance: Any) -> int:
    """
    Check a tolerance value.

    Args:
        tolerance: Maximum Euclidean RGB distance for a match

    Returns:
        The tolerance as a plain int

    Raises:
        TypeError: If tolerance is not an integer
        ValueError: If tolerance is outside 0-255
    """
    if isinstance(tolerance, bool) or not isinstance(tolerance, (int, np.integer)):
        raise TypeError(f"tolerance must be an integer, got {type(tolerance).__name__}")

    if not (MIN_TOLERANCE <= tolerance <= MAX_TOLERANCE):
        raise ValueError(
            f"tolerance must be {MIN_TOLERANCE}-{MAX_TOLERANCE}, got {tolerance}"
        )
    return int(tolerance)


class ColorReplacer:
    """
    Lightness-preserving color replacement.

    Example:
        >>> replacer = ColorReplacer()
        >>> operation = replacer.apply(raster, "#ff0000", "#0000ff", 30)
        >>> history.record(operation)
    """

    def apply(
        self,
        source: Raster,
        target_color: Any,
        replacement_color: Any,
        tolerance: int,
    ) -> EditOperation:
        """
        Replace a color and wrap the result in an EditOperation.

        Args:
            source: Raster to read from (never modified)
            target_color: Color to match, hex string or (r, g, b)
            replacement_color: Color to paint, hex string or (r, g, b)
            tolerance: Maximum Euclidean RGB distance for a match (0-255)

        Returns:
            EditOperation holding the new raster, both colors and the tolerance

        Raises:
            InvalidColorError: If either color is malformed
            EmptyRasterError: If source has zero width or height
            TypeError, ValueError: If tolerance is invalid
        """
        result = self.replace_color(source, target_color, replacement_color, tolerance)
        return EditOperation.create(
            original_color=format_hex_color(target_color),
            replacement_color=format_hex_color(replacement_color),
            tolerance=int(tolerance),
            result_raster=result,
        )

    def replace_color(
        self,
        source: Raster,
        target_color: Any,
        replacement_color: Any,
        tolerance: int,
    ) -> Raster:
        """
        Produce a new raster with matching pixels recolored.

        All arguments are validated before any pixel buffer is allocated;
        on error nothing is produced.

        Returns:
            A new Raster with the same dimensions as source
        """
        target, replacement, tolerance = self._validate(
            source, target_color, replacement_color, tolerance
        )

        target_lightness = float(lightness_array(np.array(target)))
        replacement_hsl = rgb_to_hsl(*replacement)

        pixels = source.as_array()
        output = pixels.copy()
        matched = 0

        for rows in self._row_bands(source):
            band = pixels[rows]
            mask = self._match_mask(band, target, tolerance)
            count = int(np.count_nonzero(mask))
            if count == 0:
                continue

            output[rows][..., :3][mask] = self._recolor(
                band[..., :3][mask],
                target_lightness,
                replacement_hsl,
            )
            matched += count

        logger.debug(
            f"Replaced {matched}/{source.pixel_count} pixels "
            f"({format_hex_color(target)} -> {format_hex_color(replacement)}, "
            f"tolerance {tolerance}) in {source.width}x{source.height} raster"
        )
        return Raster.from_array(output)

    def build_match_mask(self, source: Raster, target_color: Any, tolerance: int) -> np.ndarray:
        """
        Compute which pixels replace_color would recolor.

        Returns:
            Boolean array of shape (height, width)
        """
        if source.is_empty:
            raise EmptyRasterError(f"Cannot match colors in empty {source.width}x{source.height} raster")
        target = coerce_color(target_color)
        tolerance = validate_tolerance(tolerance)
        return self._match_mask(source.as_array(), target, tolerance)

    def _validate(
        self,
        source: Raster,
        target_color: Any,
        replacement_color: Any,
        tolerance: Any,
    ) -> Tuple[RgbColor, RgbColor, int]:
        target = coerce_color(target_color)
        replacement = coerce_color(replacement_color)
        tolerance = validate_tolerance(tolerance)

        if not isinstance(source, Raster):
            raise TypeError(f"Expected Raster, got {type(source).__name__}")
        if source.is_empty:
            raise EmptyRasterError(f"Cannot replace colors in empty {source.width}x{source.height} raster")

        return target, replacement, tolerance

    def _match_mask(self, pixels: np.ndarray, target: RgbColor, tolerance: int) -> np.ndarray:
        # The maximum tolerance selects everything, even colors further than
        # 255 away (the RGB cube diagonal is ~441).
        if tolerance >= MAX_TOLERANCE:
            return np.ones(pixels.shape[:2], dtype=bool)

        diff = pixels[..., :3].astype(np.int32) - np.array(target, dtype=np.int32)
        distance_sq = (diff * diff).sum(axis=-1)
        return distance_sq <= tolerance * tolerance

    def _recolor(
        self,
        rgb: np.ndarray,
        target_lightness: float,
        replacement_hsl: HslColor,
    ) -> np.ndarray:
        hue, saturation, replacement_lightness = replacement_hsl
        lightness_diff = lightness_array(rgb) - target_lightness
        new_lightness = np.clip(replacement_lightness + lightness_diff, 0.0, 1.0)
        return hsl_to_rgb_array(hue, saturation, new_lightness)

    def _row_bands(self, source: Raster) -> Iterator[slice]:
        rows_per_band = max(1, ROW_BAND_PIXELS // source.width)
        for start in range(0, source.height, rows_per_band):
            yield slice(start, min(start + rows_per_band, source.height))
