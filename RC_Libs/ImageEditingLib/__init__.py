"""
ImageEditingLib - Core image editing functionality

This module provides the raster model, color space conversions, the
color replacement filter and Pillow helpers for the Open Recolor project.
"""

from RC_Libs.ImageEditingLib.image_models import HslColor, Raster, RgbaColor, RgbColor
from RC_Libs.ImageEditingLib.color_space import (
    coerce_color,
    format_hex_color,
    hsl_to_rgb,
    parse_hex_color,
    rgb_to_hsl,
)
from RC_Libs.ImageEditingLib.color_replace_filter import ColorReplacer, validate_tolerance
from RC_Libs.ImageEditingLib.image_editing_ops import (
    generate_change_mask,
    load_raster,
    pick_color,
    raster_from_image,
    raster_to_image,
    save_raster,
)

__all__ = [
    "HslColor",
    "Raster",
    "RgbaColor",
    "RgbColor",
    "coerce_color",
    "format_hex_color",
    "hsl_to_rgb",
    "parse_hex_color",
    "rgb_to_hsl",
    "ColorReplacer",
    "validate_tolerance",
    "generate_change_mask",
    "load_raster",
    "pick_color",
    "raster_from_image",
    "raster_to_image",
    "save_raster",
]
