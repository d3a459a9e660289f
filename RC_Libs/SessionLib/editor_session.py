"""
Editor session for Open Recolor.

An EditorSession owns everything one editing session needs: the loaded
image, its edit history, the color picked from the image, the replacement
color and the tolerance. A rendering layer only ever reads current().

Replacements can run synchronously (process) or on a worker thread
(process_async) so an interactive surface stays responsive. History
mutations are serialized with a lock either way. An edit whose source image
was replaced by load_raster, undo, redo or jump_to while it was running is
dropped and reported with StaleEditError instead of being recorded.

Classes:
    EditorSession: Stateful owner of an image and its edit history
"""

import concurrent.futures
import logging
import threading
from pathlib import Path
from typing import Any, Optional

from RC_Libs.constants import (
    DEFAULT_MAX_WORKERS,
    DEFAULT_REPLACEMENT_COLOR,
    DEFAULT_TOLERANCE,
    EXPORT_FILE_NAME,
)
from RC_Libs.errors import StaleEditError
from RC_Libs.HistoryLib.edit_history import EditHistory, EditOperation
from RC_Libs.ImageEditingLib.color_replace_filter import ColorReplacer, validate_tolerance
from RC_Libs.ImageEditingLib.color_space import format_hex_color
from RC_Libs.ImageEditingLib.image_editing_ops import load_raster, save_raster
from RC_Libs.ImageEditingLib.image_editing_ops import pick_color as pick_pixel_color
from RC_Libs.ImageEditingLib.image_models import Raster

logger = logging.getLogger(__name__)


class EditorSession:
    """
    Stateful editing session.

    Example:
        >>> with EditorSession() as session:
        ...     session.load_image(Path("photo.png"))
        ...     session.pick_color(10, 20)
        ...     session.replacement_color = "#00ff00"
        ...     session.process()
        ...     session.undo()
    """

    def __init__(
        self,
        replacer: Optional[ColorReplacer] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self._replacer = replacer or ColorReplacer()
        self._max_workers = max_workers
        self._executor: Optional[concurrent.futures.ThreadPoolExecutor] = None
        self._lock = threading.Lock()
        self._generation = 0

        self._history: Optional[EditHistory] = None
        self._selected_color: Optional[str] = None
        self._replacement_color = DEFAULT_REPLACEMENT_COLOR
        self._tolerance = DEFAULT_TOLERANCE

    def __enter__(self) -> "EditorSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Image loading
    # ------------------------------------------------------------------

    def load_raster(self, raster: Raster) -> None:
        """Start a new session on an already decoded raster."""
        if not isinstance(raster, Raster):
            raise TypeError(f"Expected Raster, got {type(raster).__name__}")

        with self._lock:
            if self._history is None:
                self._history = EditHistory(raster)
            else:
                self._history.reset(raster)
            self._generation += 1
            self._selected_color = None

        logger.info(f"Session loaded {raster.width}x{raster.height} image")

    def load_image(self, file_path: Path) -> Raster:
        """Decode an image file and start a new session on it."""
        raster = load_raster(Path(file_path))
        self.load_raster(raster)
        return raster

    @property
    def has_image(self) -> bool:
        return self._history is not None

    @property
    def history(self) -> EditHistory:
        return self._require_history()

    # ------------------------------------------------------------------
    # Color and tolerance settings
    # ------------------------------------------------------------------

    @property
    def selected_color(self) -> Optional[str]:
        return self._selected_color

    @selected_color.setter
    def selected_color(self, value: Any) -> None:
        color = None if value is None else format_hex_color(value)
        with self._lock:
            self._selected_color = color

    @property
    def replacement_color(self) -> str:
        return self._replacement_color

    @replacement_color.setter
    def replacement_color(self, value: Any) -> None:
        color = format_hex_color(value)
        with self._lock:
            self._replacement_color = color

    @property
    def tolerance(self) -> int:
        return self._tolerance

    @tolerance.setter
    def tolerance(self, value: int) -> None:
        tolerance = validate_tolerance(value)
        with self._lock:
            self._tolerance = tolerance

    def pick_color(self, x: int, y: int) -> str:
        """
        Select the color of a pixel in the currently displayed image.

        Returns:
            The picked color as '#rrggbb'

        Raises:
            RuntimeError: If no image is loaded
            OutOfRangeError: If (x, y) lies outside the image
        """
        color = pick_pixel_color(self.current(), x, y)
        with self._lock:
            self._selected_color = color
        logger.debug(f"Picked {color} at ({x}, {y})")
        return color

    @property
    def can_process(self) -> bool:
        return self._history is not None and self._selected_color is not None

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def process(self) -> EditOperation:
        """
        Replace the selected color in the displayed image and record the edit.

        Returns:
            The recorded EditOperation

        The source image and the color and tolerance settings are read
        together, so changing a setting while a replacement runs only
        affects the next one.

        Raises:
            RuntimeError: If no image is loaded or no color is selected
            EmptyRasterError: If the image has zero size
            StaleEditError: If another image was loaded, or the history was
                navigated away from the source image, before the replacement
                finished. The result is dropped and history is unchanged.
        """
        history = self._require_history()

        with self._lock:
            if self._selected_color is None:
                raise RuntimeError("No color selected; pick a color before processing")
            generation = self._generation
            source = history.current()
            target = self._selected_color
            replacement = self._replacement_color
            tolerance = self._tolerance

        operation = self._replacer.apply(source, target, replacement, tolerance)

        with self._lock:
            if self._generation != generation or history.current() is not source:
                logger.warning(f"Dropped {operation.id}: displayed image changed during processing")
                raise StaleEditError(
                    f"Edit {operation.id} was computed from an image that is no longer displayed"
                )
            history.record(operation)

        logger.info(f"Processed {operation.id}: {operation.describe()}")
        return operation

    def process_async(self) -> "concurrent.futures.Future[EditOperation]":
        """Run process() on the session's worker thread."""
        self._require_history()
        if self._selected_color is None:
            raise RuntimeError("No color selected; pick a color before processing")

        if self._executor is None:
            self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=self._max_workers)
        return self._executor.submit(self.process)

    # ------------------------------------------------------------------
    # History navigation
    # ------------------------------------------------------------------

    def current(self) -> Raster:
        history = self._require_history()
        with self._lock:
            return history.current()

    def undo(self) -> Raster:
        history = self._require_history()
        with self._lock:
            return history.undo()

    def redo(self) -> Raster:
        history = self._require_history()
        with self._lock:
            return history.redo()

    def jump_to(self, index: int) -> Raster:
        history = self._require_history()
        with self._lock:
            return history.jump_to(index)

    # ------------------------------------------------------------------
    # Export and shutdown
    # ------------------------------------------------------------------

    def export(self, file_path: Path) -> Path:
        """
        Save the displayed image as PNG.

        Args:
            file_path: Destination file, or a directory to write
                'modified-image.png' into

        Returns:
            The path written
        """
        file_path = Path(file_path)
        if file_path.is_dir():
            file_path = file_path / EXPORT_FILE_NAME
        return save_raster(self.current(), file_path)

    def close(self) -> None:
        """Wait for pending work and release the worker thread."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def _require_history(self) -> EditHistory:
        if self._history is None:
            raise RuntimeError("No image loaded")
        return self._history
