"""
RC_Libs - Open Recolor Library Modules

This package contains core functionality for the Open Recolor project,
organized into specialized sub-packages:

- ImageEditingLib: Color space math, raster model and the color replacement filter
- HistoryLib: Linear undo/redo history over raster snapshots
- SessionLib: Editor session tying an image, its history and the picked colors together
"""

__version__ = "0.1.0"
