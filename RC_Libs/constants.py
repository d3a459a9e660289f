"""
Constants and configuration values for Open Recolor.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the library.
"""

# Tolerance bounds (Euclidean RGB distance)
MIN_TOLERANCE = 0
MAX_TOLERANCE = 255
DEFAULT_TOLERANCE = 30

# Colors
DEFAULT_REPLACEMENT_COLOR = "#ff0000"
HEX_COLOR_PREFIX = "#"

# History
ORIGINAL_HISTORY_INDEX = -1
EDIT_ID_PREFIX = "edit-"
HISTORY_TIME_FORMAT = "%H:%M:%S"

# Raster layout
RASTER_MODE = "RGBA"
CHANNELS_PER_PIXEL = 4

# Export
EXPORT_FILE_NAME = "modified-image.png"
DEFAULT_OUTPUT_FORMAT = "PNG"

# Pixels processed per band by the replacement filter
ROW_BAND_PIXELS = 1 << 20

# Background processing
DEFAULT_MAX_WORKERS = 1

# Supported file formats
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}
