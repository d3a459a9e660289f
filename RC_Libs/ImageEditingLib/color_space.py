"""
Color space conversions for Open Recolor.

Converts between 8-bit RGB and normalized HSL, and between RGB triples and
their hex string form. The scalar conversions are built on the standard
library colorsys module; the array forms apply the same formulas to numpy
arrays so the replacement filter can recolor a whole raster in one pass.

Functions:
    rgb_to_hsl: 8-bit RGB to normalized (h, s, l)
    hsl_to_rgb: Normalized (h, s, l) to 8-bit RGB
    lightness_array: Per-pixel HSL lightness of an RGB array
    hsl_to_rgb_array: Fixed hue/saturation plus a lightness array to RGB
    parse_hex_color: Strictly parse '#rrggbb' / '#rgb' strings
    format_hex_color: Format an RGB triple as '#rrggbb'
    coerce_color: Validate a hex string or RGB triple
"""

import re
from colorsys import hls_to_rgb, rgb_to_hls
from typing import Any, Tuple

import numpy as np

from RC_Libs.constants import HEX_COLOR_PREFIX
from RC_Libs.errors import InvalidColorError
from RC_Libs.ImageEditingLib.image_models import HslColor, RgbColor

ONE_THIRD = 1.0 / 3.0
ONE_SIXTH = 1.0 / 6.0
TWO_THIRD = 2.0 / 3.0

_HEX_COLOR_RE = re.compile(r"#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


def rgb_to_hsl(r: int, g: int, b: int) -> HslColor:
    """
    Convert an 8-bit RGB color to normalized HSL.

    Args:
        r, g, b: Channel values in 0-255

    Returns:
        Tuple (h, s, l), each in [0, 1]. Achromatic colors have h = s = 0.
    """
    h, l, s = rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    return h, s, l


def hsl_to_rgb(h: float, s: float, l: float) -> RgbColor:
    """
    Convert a normalized HSL color to 8-bit RGB.

    Args:
        h, s, l: Components in [0, 1]

    Returns:
        Tuple (r, g, b) with each channel rounded to the nearest integer
    """
    rr, gg, bb = hls_to_rgb(h, l, s)
    return _to_byte(rr), _to_byte(gg), _to_byte(bb)


def lightness_array(rgb: np.ndarray) -> np.ndarray:
    """
    Compute HSL lightness for every color in an array.

    Args:
        rgb: Integer array of shape (..., 3) with channels in 0-255

    Returns:
        Float64 array of shape (...) with lightness in [0, 1]
    """
    maxc = rgb.max(axis=-1).astype(np.float64)
    minc = rgb.min(axis=-1).astype(np.float64)
    return (maxc + minc) / 510.0


def hsl_to_rgb_array(h: float, s: float, lightness: np.ndarray) -> np.ndarray:
    """
    Convert one hue/saturation pair and many lightness values to RGB.

    Args:
        h: Hue in [0, 1], shared by every output color
        s: Saturation in [0, 1], shared by every output color
        lightness: Float array of lightness values in [0, 1]

    Returns:
        uint8 array of shape lightness.shape + (3,)
    """
    lightness = np.asarray(lightness, dtype=np.float64)
    if s == 0.0:
        channels = (lightness, lightness, lightness)
    else:
        q = np.where(lightness <= 0.5, lightness * (1.0 + s), lightness + s - (lightness * s))
        p = 2.0 * lightness - q
        channels = (
            _hue_to_channel(p, q, h + ONE_THIRD),
            _hue_to_channel(p, q, h),
            _hue_to_channel(p, q, h - ONE_THIRD),
        )

    rgb = np.stack(channels, axis=-1)
    return np.clip(np.rint(rgb * 255.0), 0, 255).astype(np.uint8)


def _hue_to_channel(p: np.ndarray, q: np.ndarray, hue: float) -> np.ndarray:
    hue = hue % 1.0
    if hue < ONE_SIXTH:
        return p + (q - p) * hue * 6.0
    if hue < 0.5:
        return q
    if hue < TWO_THIRD:
        return p + (q - p) * (TWO_THIRD - hue) * 6.0
    return p


def parse_hex_color(value: Any) -> RgbColor:
    """
    Parse a hex color string.

    Accepts 'rrggbb' or the 'rgb' shorthand, optionally prefixed by '#',
    in any letter case. The shorthand expands each digit by duplication
    ('#abc' -> '#aabbcc').

    Args:
        value: The string to parse

    Returns:
        Tuple (r, g, b)

    Raises:
        InvalidColorError: If value is not a string or is not a valid hex color
    """
    if not isinstance(value, str):
        raise InvalidColorError(f"Expected hex color string, got {type(value).__name__}")

    match = _HEX_COLOR_RE.fullmatch(value)
    if match is None:
        raise InvalidColorError(f"Invalid hex color: {value!r}")

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(digit * 2 for digit in digits)

    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def format_hex_color(color: Any) -> str:
    """Format a color as a lowercase '#rrggbb' string."""
    r, g, b = coerce_color(color)
    return f"{HEX_COLOR_PREFIX}{r:02x}{g:02x}{b:02x}"


def coerce_color(value: Any) -> RgbColor:
    """
    Validate a color given either as a hex string or as an RGB triple.

    Args:
        value: Hex string, or a sequence of three integers in 0-255

    Returns:
        Tuple (r, g, b)

    Raises:
        InvalidColorError: If the value cannot be read as a color
    """
    if isinstance(value, str):
        return parse_hex_color(value)

    if not isinstance(value, (tuple, list)) or len(value) != 3:
        raise InvalidColorError(f"Expected hex string or (r, g, b) triple, got {value!r}")

    channels: Tuple[int, ...] = tuple(value)
    for channel in channels:
        if isinstance(channel, bool) or not isinstance(channel, (int, np.integer)):
            raise InvalidColorError(f"Color channels must be integers, got {value!r}")
        if not (0 <= channel <= 255):
            raise InvalidColorError(f"Color channels must be 0-255, got {value!r}")

    r, g, b = (int(channel) for channel in channels)
    return r, g, b


def _to_byte(value: float) -> int:
    return int(max(0, min(255, round(value * 255))))
