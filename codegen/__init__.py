"""
codegen package

PyQt6 source generation and live preview for a designed screen.
"""

from codegen.generator import class_name_for, generate_code, variable_name
from codegen.preview import PreviewWindow, build_preview, create_widget

__all__ = [
    "class_name_for",
    "generate_code",
    "variable_name",
    "PreviewWindow",
    "build_preview",
    "create_widget",
]
