"""
Editor Module

Explicit session state for editing a captured position and its corners.
"""

from chess_capture.editor.session import EditorSession, PaletteSelection, Tool

__all__ = ['EditorSession', 'PaletteSelection', 'Tool']
