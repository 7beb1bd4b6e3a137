"""
editor package

Generated-code viewer with Python syntax highlighting.
"""

from editor.highlighter import PythonHighlighter
from editor.code_view import CodeViewDialog

__all__ = [
    "PythonHighlighter",
    "CodeViewDialog",
]
