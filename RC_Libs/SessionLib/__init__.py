"""
SessionLib - Editing sessions

This module provides the session object that owns a loaded image, its
edit history and the current color settings.
"""

from RC_Libs.SessionLib.editor_session import EditorSession

__all__ = [
    "EditorSession",
]
