"""
properties package

Property panel for editing the selected component.
"""

from properties.dock import PropertyPanel

__all__ = ["PropertyPanel"]
