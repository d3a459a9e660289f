"""
Pytest configuration and shared fixtures for Open Recolor tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest

from RC_Libs.ImageEditingLib.image_models import Raster


@pytest.fixture
def sample_rgba_colors():
    """
    Provide a list of sample RGBA color tuples for testing.

    Returns:
        List of (R, G, B, A) tuples with common test colors
    """
    return [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 255),    # Green
        (0, 0, 255, 255),    # Blue
        (255, 255, 255, 255),  # White
        (0, 0, 0, 255),      # Black
        (128, 128, 128, 255),  # Gray
    ]


@pytest.fixture
def sample_raster(sample_rgba_colors):
    """
    Provide a 3x2 raster built from the sample colors.

    Returns:
        Raster whose pixels, row by row, are the sample colors in order
    """
    data = b"".join(bytes(color) for color in sample_rgba_colors)
    return Raster(width=3, height=2, data=data)


@pytest.fixture
def red_green_raster():
    """Provide the 2x1 raster [red, green]."""
    return Raster(width=2, height=1, data=bytes((255, 0, 0, 255, 0, 255, 0, 255)))
