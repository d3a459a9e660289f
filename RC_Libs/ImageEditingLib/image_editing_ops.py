"""
Core image editing operations for Open Recolor.

This module bridges Pillow images and Rasters, and provides the small
pixel-level helpers the editor needs around the replacement filter.

Functions:
    raster_from_image: Convert a PIL Image to a Raster
    raster_to_image: Convert a Raster to a PIL Image
    is_supported_format: Check a file extension against supported image formats
    load_raster: Open an image file as a Raster
    save_raster: Write a Raster to disk
    pick_color: Read the RGB color of one pixel as a hex string
    generate_change_mask: Build a mask of pixels that differ between two rasters
"""

import logging
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image

from RC_Libs.constants import DEFAULT_OUTPUT_FORMAT, RASTER_MODE, SUPPORTED_STANDARD_IMAGES
from RC_Libs.ImageEditingLib.color_space import format_hex_color
from RC_Libs.ImageEditingLib.image_models import Raster

logger = logging.getLogger(__name__)


def raster_from_image(image: Any) -> Raster:
    """
    Convert a PIL Image to a Raster.

    Images in any other mode are converted to RGBA first.

    Args:
        image: A PIL Image object

    Returns:
        A new Raster holding a copy of the pixels

    Raises:
        TypeError: If image is not a PIL Image
    """
    if not hasattr(image, "size") or not hasattr(image, "convert"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    if image.mode != RASTER_MODE:
        image = image.convert(RASTER_MODE)

    width, height = image.size
    return Raster(width=width, height=height, data=image.tobytes())


def raster_to_image(raster: Raster) -> Any:
    """Convert a Raster to a new RGBA PIL Image."""
    return Image.frombytes(RASTER_MODE, raster.size, raster.data)


def is_supported_format(file_path: Path) -> bool:
    """Check if a file path has a supported image extension."""
    return file_path.suffix.lower() in SUPPORTED_STANDARD_IMAGES


def load_raster(file_path: Path) -> Raster:
    """
    Open an image file and decode it to a Raster.

    Args:
        file_path: Path to the image file

    Returns:
        The decoded Raster

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file extension is not a supported image format
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Image file not found: {file_path}")

    if not is_supported_format(file_path):
        supported = ", ".join(sorted(SUPPORTED_STANDARD_IMAGES))
        raise ValueError(f"Unsupported image format '{file_path.suffix}'. Supported: {supported}")

    with Image.open(file_path) as image:
        raster = raster_from_image(image)

    logger.info(f"Loaded {file_path.name} ({raster.width}x{raster.height})")
    return raster


def save_raster(raster: Raster, file_path: Path, image_format: str = DEFAULT_OUTPUT_FORMAT) -> Path:
    """
    Write a Raster to disk.

    Args:
        raster: The raster to save
        file_path: Destination file
        image_format: Pillow format name (default PNG)

    Returns:
        The path written

    Raises:
        OSError: If the parent directory does not exist or the file cannot be written
    """
    file_path = Path(file_path)
    if not file_path.parent.is_dir():
        raise OSError(f"Output directory does not exist: {file_path.parent}")

    raster_to_image(raster).save(file_path, format=image_format)
    logger.info(f"Saved {raster.width}x{raster.height} raster to {file_path}")
    return file_path


def pick_color(raster: Raster, x: int, y: int) -> str:
    """
    Read the color of one pixel.

    Args:
        raster: Raster to sample
        x, y: Pixel coordinates

    Returns:
        The pixel's RGB color as '#rrggbb' (alpha is ignored)

    Raises:
        TypeError: If x or y is not an integer
        OutOfRangeError: If (x, y) lies outside the raster
    """
    r, g, b, _ = raster.pixel(x, y)
    return format_hex_color((r, g, b))


def generate_change_mask(original: Raster, modified: Raster) -> Any:
    """
    Generate a mask showing differences between two rasters.

    Args:
        original: Raster before an edit
        modified: Raster after an edit

    Returns:
        PIL Image (mode L), 255 where any channel differs and 0 elsewhere

    Raises:
        ValueError: If the rasters have different sizes
    """
    if original.size != modified.size:
        raise ValueError("Rasters must have the same size")

    changed = np.any(original.as_array() != modified.as_array(), axis=-1)
    mask = changed.astype(np.uint8) * 255
    return Image.fromarray(mask)
