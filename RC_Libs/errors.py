"""
Error types raised by Open Recolor.

Every error derives from RecolorError and from the built-in exception a
caller would otherwise expect (ValueError, IndexError, RuntimeError), so code that only
knows the built-ins keeps working.
"""


class RecolorError(Exception):
    """Base class for all Open Recolor errors."""


class InvalidColorError(RecolorError, ValueError):
    """A color string or triple is malformed or out of range."""


class OutOfRangeError(RecolorError, IndexError):
    """A history index or pixel coordinate is outside the valid range."""


class EmptyRasterError(RecolorError, ValueError):
    """A raster with zero width or zero height was given to a transform."""


class StaleEditError(RecolorError, RuntimeError):
    """A session edit finished after its source image stopped being displayed."""
