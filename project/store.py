"""
project/store.py

Projects, screens and the application-level project context.

A ``DesignProject`` owns an ordered list of ``DesignScreen`` objects and
each screen owns its ordered list of ``PlacedComponent`` objects.  The
canvas never owns components; it is handed the active screen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from models import WHITE, PlacedComponent

logger = logging.getLogger(__name__)


class ProjectError(ValueError):
    """Raised for invalid project or screen operations requested by the caller."""


# ----------------------------
# Screen types
# ----------------------------

class ScreenType(Enum):
    MAIN = "main"
    DIALOG = "dialog"
    LOGIN = "login"
    SPLASH = "splash"
    SETTINGS = "settings"
    ABOUT = "about"
    WIZARD = "wizard"
    DASHBOARD = "dashboard"
    REPORT = "report"
    FORM = "form"
    LIST = "list"
    DETAIL = "detail"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        return SCREEN_TYPE_INFO[self].display_name

    @property
    def description(self) -> str:
        return SCREEN_TYPE_INFO[self].description


@dataclass(frozen=True)
class ScreenTypeInfo:
    display_name: str
    description: str


SCREEN_TYPE_INFO: Dict[ScreenType, ScreenTypeInfo] = {
    ScreenType.MAIN:      ScreenTypeInfo("Main Window", "Primary application window"),
    ScreenType.DIALOG:    ScreenTypeInfo("Dialog", "Modal or non-modal dialog"),
    ScreenType.LOGIN:     ScreenTypeInfo("Login Screen", "User authentication screen"),
    ScreenType.SPLASH:    ScreenTypeInfo("Splash Screen", "Application startup screen"),
    ScreenType.SETTINGS:  ScreenTypeInfo("Settings", "Application settings/preferences"),
    ScreenType.ABOUT:     ScreenTypeInfo("About Dialog", "About/information dialog"),
    ScreenType.WIZARD:    ScreenTypeInfo("Wizard Page", "Step-by-step wizard page"),
    ScreenType.DASHBOARD: ScreenTypeInfo("Dashboard", "Data dashboard or overview"),
    ScreenType.REPORT:    ScreenTypeInfo("Report", "Data report or summary"),
    ScreenType.FORM:      ScreenTypeInfo("Form", "Data entry form"),
    ScreenType.LIST:      ScreenTypeInfo("List View", "List or table view"),
    ScreenType.DETAIL:    ScreenTypeInfo("Detail View", "Detail/edit view"),
    ScreenType.CUSTOM:    ScreenTypeInfo("Custom", "Custom screen type"),
}


# Settings every screen starts with, then per-type overrides on top.
BASE_SCREEN_SETTINGS: Dict[str, Any] = {
    "backgroundColor": WHITE,
    "width": 800,
    "height": 600,
}

SCREEN_TYPE_SETTINGS: Dict[ScreenType, Dict[str, Any]] = {
    ScreenType.MAIN: {
        "showMenuBar": True,
        "showToolbar": True,
        "showStatusBar": True,
    },
    ScreenType.DIALOG: {
        "modal": True,
        "resizable": False,
        "width": 400,
        "height": 300,
    },
    ScreenType.LOGIN: {
        "centerOnScreen": True,
        "showTitleBar": True,
        "width": 350,
        "height": 250,
    },
    ScreenType.SPLASH: {
        "undecorated": True,
        "centerOnScreen": True,
        "autoClose": True,
        "displayTime": 3000,  # ms
    },
}


def default_screen_settings(screen_type: ScreenType) -> Dict[str, Any]:
    settings = dict(BASE_SCREEN_SETTINGS)
    settings.update(SCREEN_TYPE_SETTINGS.get(screen_type, {}))
    return settings


DEFAULT_PROJECT_SETTINGS: Dict[str, Any] = {
    "targetResolution": "1920x1080",
    "gridSize": 10,
    "snapToGrid": True,
}


# ----------------------------
# Screen
# ----------------------------

class DesignScreen:
    """A named page of a project, owning an ordered list of components.

    Components later in the list are drawn on top.
    """

    def __init__(self, name: str, screen_type: ScreenType = ScreenType.CUSTOM, description: str = ""):
        self.name = name
        self.description = description
        self.visible = True
        self.project: Optional["DesignProject"] = None
        self.components: List[PlacedComponent] = []
        self._type = screen_type
        self.settings: Dict[str, Any] = default_screen_settings(screen_type)

    def __repr__(self) -> str:
        return f"DesignScreen({self.name!r}, {self._type.name}, {len(self.components)} components)"

    @property
    def screen_type(self) -> ScreenType:
        return self._type

    @screen_type.setter
    def screen_type(self, value: ScreenType) -> None:
        """Changing the type re-applies that type's default settings."""
        self._type = value
        self.settings = default_screen_settings(value)
        self._touch()

    def _touch(self) -> None:
        if self.project is not None:
            self.project.touch()

    def add_component(self, component: PlacedComponent) -> None:
        self.components.append(component)
        self._touch()

    def remove_component(self, component: PlacedComponent) -> None:
        """Remove *component*; removing one that is not on this screen is a no-op."""
        for i, comp in enumerate(self.components):
            if comp is component:
                del self.components[i]
                self._touch()
                return

    def clear_components(self) -> None:
        self.components.clear()
        self._touch()

    def get_setting(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def set_setting(self, key: str, value: Any) -> None:
        self.settings[key] = value
        self._touch()

    def duplicate(self, name: Optional[str] = None) -> "DesignScreen":
        """Copy of this screen with copied components offset by (+20, +20).

        The copy is not attached to any project.
        """
        copy = DesignScreen(name or f"{self.name} Copy", self._type, self.description)
        copy.settings = dict(self.settings)
        copy.components = [comp.duplicate() for comp in self.components]
        return copy


# ----------------------------
# Project
# ----------------------------

class DesignProject:
    """A set of screens plus project-level settings."""

    def __init__(self, name: str, description: str = ""):
        self._name = name
        self._description = description
        self.screens: List[DesignScreen] = []
        self.active_screen: Optional[DesignScreen] = None
        self.settings: Dict[str, Any] = dict(DEFAULT_PROJECT_SETTINGS)
        self.created = datetime.now()
        self.modified = self.created

    def __repr__(self) -> str:
        return f"DesignProject({self._name!r}, {len(self.screens)} screens)"

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value
        self.touch()

    @property
    def description(self) -> str:
        return self._description

    @description.setter
    def description(self, value: str) -> None:
        self._description = value
        self.touch()

    @property
    def target_resolution(self) -> Tuple[int, int]:
        """``targetResolution`` as (width, height), or 1920x1080 if malformed."""
        value = str(self.settings.get("targetResolution", ""))
        w, _, h = value.lower().partition("x")
        try:
            width, height = int(w), int(h)
        except ValueError:
            return (1920, 1080)
        if width <= 0 or height <= 0:
            return (1920, 1080)
        return (width, height)

    def touch(self) -> None:
        """Update the last-modified timestamp."""
        self.modified = datetime.now()

    def find_screen(self, name: str) -> Optional[DesignScreen]:
        for screen in self.screens:
            if screen.name == name:
                return screen
        return None

    def add_screen(self, screen: DesignScreen) -> DesignScreen:
        """Append *screen* and take ownership of it.

        Raises:
            ProjectError: A screen with the same name already exists.
        """
        if self.find_screen(screen.name) is not None:
            raise ProjectError(f"A screen named '{screen.name}' already exists")
        self.screens.append(screen)
        screen.project = self
        if self.active_screen is None:
            self.active_screen = screen
        self.touch()
        return screen

    def create_screen(self, name: str, screen_type: ScreenType = ScreenType.CUSTOM,
                      description: str = "") -> DesignScreen:
        return self.add_screen(DesignScreen(name, screen_type, description))

    def remove_screen(self, screen: DesignScreen) -> None:
        """Remove *screen*.  The active screen falls back to the first remaining one.

        Raises:
            ProjectError: *screen* is not in this project, or is the last screen.
        """
        if not any(s is screen for s in self.screens):
            raise ProjectError(f"Screen '{screen.name}' is not part of project '{self._name}'")
        if len(self.screens) == 1:
            raise ProjectError("A project must keep at least one screen")
        self.screens = [s for s in self.screens if s is not screen]
        screen.project = None
        if self.active_screen is screen:
            self.active_screen = self.screens[0]
        self.touch()

    def rename_screen(self, screen: DesignScreen, new_name: str) -> None:
        """Rename *screen*.

        Raises:
            ProjectError: The name is empty or used by another screen.
        """
        new_name = new_name.strip()
        if not new_name:
            raise ProjectError("Screen name cannot be empty")
        other = self.find_screen(new_name)
        if other is not None and other is not screen:
            raise ProjectError(f"A screen named '{new_name}' already exists")
        screen.name = new_name
        self.touch()

    def unique_screen_name(self, base: str) -> str:
        """*base*, or *base* with a numeric suffix if it is taken."""
        if self.find_screen(base) is None:
            return base
        n = 2
        while self.find_screen(f"{base} {n}") is not None:
            n += 1
        return f"{base} {n}"


# ----------------------------
# Application context
# ----------------------------

ProjectListener = Callable[[DesignProject], None]


class ProjectContext:
    """Holds the current project and notifies listeners when it changes.

    Constructed once by the main window and passed to whoever needs it.
    *project_settings* overrides ``DEFAULT_PROJECT_SETTINGS`` for every
    project this context creates.
    """

    def __init__(self, project_name: str = "Untitled Project", screen_name: str = "Main Screen",
                 project_settings: Optional[Dict[str, Any]] = None):
        self._listeners: List[ProjectListener] = []
        self.default_project_name = project_name
        self.default_screen_name = screen_name
        self.default_project_settings: Dict[str, Any] = dict(project_settings or {})
        self.project: DesignProject = self._make_default_project()

    def _make_default_project(self) -> DesignProject:
        project = DesignProject(self.default_project_name)
        project.settings.update(self.default_project_settings)
        project.create_screen(self.default_screen_name, ScreenType.MAIN)
        return project

    def add_listener(self, listener: ProjectListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ProjectListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify(self) -> None:
        """Tell every listener the project (or its screen list) changed."""
        for listener in list(self._listeners):
            listener(self.project)

    def new_project(self) -> DesignProject:
        self.project = self._make_default_project()
        logger.info("Created new project %r", self.project.name)
        self.notify()
        return self.project

    def load_project(self, project: DesignProject) -> DesignProject:
        """Make *project* current, giving it a screen and an active screen if missing."""
        if not project.screens:
            project.create_screen(self.default_screen_name, ScreenType.MAIN)
        if project.active_screen is None or project.active_screen not in project.screens:
            project.active_screen = project.screens[0]
        self.project = project
        logger.info("Loaded project %r with %d screens", project.name, len(project.screens))
        self.notify()
        return project

    @property
    def active_screen(self) -> Optional[DesignScreen]:
        return self.project.active_screen

    def set_active_screen(self, screen: DesignScreen) -> None:
        if screen not in self.project.screens:
            raise ProjectError(f"Screen '{screen.name}' is not part of project '{self.project.name}'")
        self.project.active_screen = screen
