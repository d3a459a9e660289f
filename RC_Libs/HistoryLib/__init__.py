"""
HistoryLib - Edit history

This module provides the linear undo/redo history of color replacements.
"""

from RC_Libs.HistoryLib.edit_history import EditHistory, EditOperation, get_history_summary

__all__ = [
    "EditHistory",
    "EditOperation",
    "get_history_summary",
]
