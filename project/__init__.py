"""
project package

Project and screen store, application project context, and the screen
tab bar.
"""

from project.store import (
    DesignProject,
    DesignScreen,
    ProjectContext,
    ProjectError,
    ScreenType,
)
from project.panel import AddScreenDialog, ScreenTabs

__all__ = [
    "DesignProject",
    "DesignScreen",
    "ProjectContext",
    "ProjectError",
    "ScreenType",
    "AddScreenDialog",
    "ScreenTabs",
]
