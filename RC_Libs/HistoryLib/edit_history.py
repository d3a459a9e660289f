"""
Edit history for Open Recolor.

A linear undo/redo log over immutable raster snapshots. The cursor points
at the snapshot currently shown: -1 is the original image, k is the
result of entry k. Recording a new edit while the cursor is behind the
last entry discards every entry after the cursor, so history never forks.

Navigation only moves the cursor; no transform is ever replayed.

Classes:
    EditOperation: One recorded color replacement and its result
    EditHistory: Cursor-based history of EditOperations

Functions:
    get_history_summary: Human-readable listing of a history
"""

import itertools
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional, Tuple

from RC_Libs.constants import EDIT_ID_PREFIX, HISTORY_TIME_FORMAT, ORIGINAL_HISTORY_INDEX
from RC_Libs.errors import OutOfRangeError

if TYPE_CHECKING:
    from RC_Libs.ImageEditingLib.image_models import Raster

logger = logging.getLogger(__name__)

_edit_ids = itertools.count(1)


@dataclass(frozen=True)
class EditOperation:
    """A single color replacement.

    Attributes:
        id: Unique, monotonically increasing identifier ('edit-<n>')
        original_color: Matched color as '#rrggbb'
        replacement_color: Painted color as '#rrggbb'
        tolerance: Tolerance the replacement ran with (0-255)
        result_raster: Raster produced by the replacement
        created_at: When the operation was created
    """
    id: str
    original_color: str
    replacement_color: str
    tolerance: int
    result_raster: "Raster" = field(repr=False, compare=False)
    created_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def create(
        cls,
        original_color: str,
        replacement_color: str,
        tolerance: int,
        result_raster: "Raster",
    ) -> "EditOperation":
        """Create an operation with a fresh id and the current time."""
        return cls(
            id=f"{EDIT_ID_PREFIX}{next(_edit_ids)}",
            original_color=original_color,
            replacement_color=replacement_color,
            tolerance=tolerance,
            result_raster=result_raster,
        )

    def describe(self) -> str:
        """Short label for a history list entry."""
        return (
            f"{self.original_color} -> {self.replacement_color} "
            f"(tolerance {self.tolerance}) at {self.created_at.strftime(HISTORY_TIME_FORMAT)}"
        )


class EditHistory:
    """
    Linear, branch-truncating undo/redo history.

    Not thread safe: callers sharing one history must serialize
    record/undo/redo/jump_to/reset.

    Example:
        >>> history = EditHistory(original)
        >>> history.record(operation)
        >>> history.undo() is original
        True
    """

    def __init__(self, original: "Raster"):
        self._original = original
        self._entries: List[EditOperation] = []
        self._cursor = ORIGINAL_HISTORY_INDEX

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def original(self) -> "Raster":
        return self._original

    @property
    def entries(self) -> Tuple[EditOperation, ...]:
        return tuple(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current_operation(self) -> Optional[EditOperation]:
        """The operation at the cursor, or None when the original is shown."""
        if self._cursor == ORIGINAL_HISTORY_INDEX:
            return None
        return self._entries[self._cursor]

    @property
    def can_undo(self) -> bool:
        return self._cursor > ORIGINAL_HISTORY_INDEX

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def current(self) -> "Raster":
        """Raster at the cursor."""
        operation = self.current_operation
        if operation is None:
            return self._original
        return operation.result_raster

    def record(self, operation: EditOperation) -> int:
        """
        Append an operation and move the cursor onto it.

        Every entry after the cursor is discarded first.

        Args:
            operation: The operation to append

        Returns:
            Number of entries discarded from the redo branch
        """
        if not isinstance(operation, EditOperation):
            raise TypeError(f"Expected EditOperation, got {type(operation).__name__}")

        keep = self._cursor + 1
        discarded = len(self._entries) - keep
        if discarded:
            logger.warning(f"Recording {operation.id} discards {discarded} redo entries")
            del self._entries[keep:]

        self._entries.append(operation)
        self._cursor = len(self._entries) - 1
        logger.debug(f"Recorded {operation.id} at index {self._cursor}")
        return discarded

    def undo(self) -> "Raster":
        """
        Step back one entry. Does nothing when the original is already shown.

        Returns:
            The raster now current
        """
        if self._cursor > ORIGINAL_HISTORY_INDEX:
            self._cursor -= 1
            logger.debug(f"Undo to index {self._cursor}")
        return self.current()

    def redo(self) -> "Raster":
        """
        Step forward one entry.

        Raises:
            OutOfRangeError: If the cursor is already on the last entry
        """
        return self.jump_to(self._cursor + 1)

    def jump_to(self, index: int) -> "Raster":
        """
        Move the cursor to any entry, or to -1 for the original.

        Args:
            index: Target index in -1 .. len(history) - 1

        Returns:
            The raster now current

        Raises:
            OutOfRangeError: If index is outside that range
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"index must be an int, got {type(index).__name__}")

        if index < ORIGINAL_HISTORY_INDEX or index >= len(self._entries):
            raise OutOfRangeError(
                f"History index {index} out of range "
                f"[{ORIGINAL_HISTORY_INDEX}, {len(self._entries) - 1}]"
            )

        self._cursor = index
        logger.debug(f"Jumped to index {index}")
        return self.current()

    def reset(self, new_original: "Raster") -> None:
        """Drop every entry and start over from a new original image."""
        self._original = new_original
        self._entries.clear()
        self._cursor = ORIGINAL_HISTORY_INDEX
        logger.debug("History reset")


def get_history_summary(history: EditHistory) -> str:
    """
    Get human-readable summary of a history.

    The entry at the cursor is marked with '*'.

    Args:
        history: The history to summarize

    Returns:
        Multi-line string listing the original image and every edit
    """
    def marker(index: int) -> str:
        return "*" if index == history.cursor else " "

    original = history.original
    lines = [
        f"Edit History ({len(history)} edits, cursor {history.cursor})",
        f"{marker(ORIGINAL_HISTORY_INDEX)} Original Image ({original.width}x{original.height})",
    ]

    for index, operation in enumerate(history.entries):
        lines.append(f"{marker(index)} Edit {index + 1}: {operation.describe()}")

    return "\n".join(lines)
