"""
Module with the closed value sets used by the directive and binding models,
each paired with a display name and description for presentation.
"""

from enum import StrEnum
from typing import Self


class DisplayEnum(StrEnum):
    """String enumeration whose members carry a display name and a description."""

    @property
    def display_name(self) -> str:
        """Human-readable name of the member."""
        return _METADATA[type(self)][self.value][0]

    @property
    def description(self) -> str:
        """One-line description of the member."""
        return _METADATA[type(self)][self.value][1]

    @classmethod
    def lookup(cls, value: str | None) -> Self | None:
        """Find a member by its canonical value or display name, case-insensitively."""
        if value is None:
            return None
        folded = value.strip().lower()
        for member in cls:
            if folded in (member.value, member.display_name.lower()):
                return member
        return None


class Layout(DisplayEnum):
    BSP = "bsp"
    FLOAT = "float"
    STACK = "stack"


class WindowPlacement(DisplayEnum):
    FIRST_CHILD = "first_child"
    SECOND_CHILD = "second_child"


class MouseModifier(DisplayEnum):
    ALT = "alt"
    CMD = "cmd"
    CTRL = "ctrl"
    SHIFT = "shift"
    FN = "fn"


class MouseAction(DisplayEnum):
    MOVE = "move"
    RESIZE = "resize"


class MouseDropAction(DisplayEnum):
    SWAP = "swap"
    STACK = "stack"


class SplitType(DisplayEnum):
    AUTO = "auto"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class WindowShadow(DisplayEnum):
    ON = "on"
    OFF = "off"
    FLOAT = "float"


class FocusFollowsMouse(DisplayEnum):
    OFF = "off"
    AUTORAISE = "autoraise"
    AUTOFOCUS = "autofocus"


class WindowLayer(DisplayEnum):
    BELOW = "below"
    NORMAL = "normal"
    ABOVE = "above"


class BindingCategory(DisplayEnum):
    """Grouping of hotkey bindings, as written in "# === Name ===" markers of binding text."""

    FOCUS = "focus"
    MOVE = "move"
    RESIZE = "resize"
    LAYOUT = "layout"
    SPACE = "space"
    DISPLAY = "display"
    CUSTOM = "custom"


class ActionGroup(DisplayEnum):
    """Coarser grouping of actions used by presets, with spaces and displays merged."""

    FOCUS = "focus"
    MOVE = "move"
    RESIZE = "resize"
    LAYOUT = "layout"
    SPACES = "spaces"
    CUSTOM = "custom"


class SignalEvent(DisplayEnum):
    APPLICATION_LAUNCHED = "application_launched"
    APPLICATION_TERMINATED = "application_terminated"
    APPLICATION_FRONT_SWITCHED = "application_front_switched"
    APPLICATION_ACTIVATED = "application_activated"
    APPLICATION_DEACTIVATED = "application_deactivated"
    APPLICATION_VISIBLE = "application_visible"
    APPLICATION_HIDDEN = "application_hidden"
    WINDOW_CREATED = "window_created"
    WINDOW_DESTROYED = "window_destroyed"
    WINDOW_FOCUSED = "window_focused"
    WINDOW_MOVED = "window_moved"
    WINDOW_RESIZED = "window_resized"
    WINDOW_MINIMIZED = "window_minimized"
    WINDOW_DEMINIMIZED = "window_deminimized"
    WINDOW_TITLE_CHANGED = "window_title_changed"
    SPACE_CREATED = "space_created"
    SPACE_DESTROYED = "space_destroyed"
    SPACE_CHANGED = "space_changed"
    DISPLAY_ADDED = "display_added"
    DISPLAY_REMOVED = "display_removed"
    DISPLAY_MOVED = "display_moved"
    DISPLAY_RESIZED = "display_resized"
    DISPLAY_CHANGED = "display_changed"
    MISSION_CONTROL_ENTER = "mission_control_enter"
    MISSION_CONTROL_EXIT = "mission_control_exit"
    DOCK_DID_RESTART = "dock_did_restart"
    MENU_BAR_HIDDEN_CHANGED = "menu_bar_hidden_changed"
    SYSTEM_WOKE = "system_woke"


def _event_display_name(value: str) -> str:
    return " ".join(word.capitalize() for word in value.split("_"))


_SIGNAL_EVENT_DESCRIPTIONS = {
    "application_launched": "When an application is launched",
    "application_terminated": "When an application is terminated",
    "application_front_switched": "When the frontmost application changes",
    "application_activated": "When an application is activated",
    "application_deactivated": "When an application is deactivated",
    "application_visible": "When an application becomes visible",
    "application_hidden": "When an application is hidden",
    "window_created": "When a window is created",
    "window_destroyed": "When a window is destroyed",
    "window_focused": "When a window gains focus",
    "window_moved": "When a window is moved",
    "window_resized": "When a window is resized",
    "window_minimized": "When a window is minimized",
    "window_deminimized": "When a window is restored from dock",
    "window_title_changed": "When a window title changes",
    "space_created": "When a space is created",
    "space_destroyed": "When a space is destroyed",
    "space_changed": "When the active space changes",
    "display_added": "When a display is added",
    "display_removed": "When a display is removed",
    "display_moved": "When a display is moved",
    "display_resized": "When a display is resized",
    "display_changed": "When the active display changes",
    "mission_control_enter": "When Mission Control is activated",
    "mission_control_exit": "When Mission Control is exited",
    "dock_did_restart": "When the Dock restarts",
    "menu_bar_hidden_changed": "When menu bar visibility changes",
    "system_woke": "When the system wakes from sleep",
}

_METADATA: dict[type, dict[str, tuple[str, str]]] = {
    Layout: {
        "bsp": ("Binary Space Partition", "Automatically tiles windows in a binary tree structure"),
        "float": ("Floating", "Windows float freely and can be moved/resized manually"),
        "stack": ("Stacking", "Windows stack on top of each other"),
    },
    WindowPlacement: {
        "first_child": ("First Child", "New windows become the first child of the split"),
        "second_child": ("Second Child", "New windows become the second child of the split"),
    },
    MouseModifier: {
        "alt": ("Option (Alt)", "Hold Option to move or resize windows with the mouse"),
        "cmd": ("Command", "Hold Command to move or resize windows with the mouse"),
        "ctrl": ("Control", "Hold Control to move or resize windows with the mouse"),
        "shift": ("Shift", "Hold Shift to move or resize windows with the mouse"),
        "fn": ("Function", "Hold Fn to move or resize windows with the mouse"),
    },
    MouseAction: {
        "move": ("Move Window", "Drag to move the window"),
        "resize": ("Resize Window", "Drag to resize the window"),
    },
    MouseDropAction: {
        "swap": ("Swap Windows", "Dropping a window onto another swaps them"),
        "stack": ("Stack Windows", "Dropping a window onto another stacks them"),
    },
    SplitType: {
        "auto": ("Auto", "Split along the longer side of the window"),
        "vertical": ("Vertical", "Always split vertically"),
        "horizontal": ("Horizontal", "Always split horizontally"),
    },
    WindowShadow: {
        "on": ("On", "Draw shadows for all windows"),
        "off": ("Off", "Draw no window shadows"),
        "float": ("Floating Only", "Draw shadows for floating windows only"),
    },
    FocusFollowsMouse: {
        "off": ("Off", "Focus does not follow the mouse"),
        "autoraise": ("Autoraise", "Focus and raise the window under the mouse"),
        "autofocus": ("Autofocus", "Focus the window under the mouse without raising it"),
    },
    WindowLayer: {
        "below": ("Below", "Keep the window below tiled windows"),
        "normal": ("Normal", "Default window layer"),
        "above": ("Above", "Keep the window above tiled windows"),
    },
    BindingCategory: {
        "focus": ("Focus", "Window focus commands"),
        "move": ("Move", "Window movement commands"),
        "resize": ("Resize", "Window resize commands"),
        "layout": ("Layout", "Layout switching commands"),
        "space": ("Space", "Space/desktop commands"),
        "display": ("Display", "Display/monitor commands"),
        "custom": ("Custom", "User-defined commands"),
    },
    ActionGroup: {
        "focus": ("Focus", "Move keyboard focus between windows"),
        "move": ("Move", "Move windows to different locations"),
        "resize": ("Resize", "Change window dimensions"),
        "layout": ("Layout", "Change tiling layout modes"),
        "spaces": ("Spaces", "Navigate between spaces and displays"),
        "custom": ("Custom", "User-defined shortcuts"),
    },
    SignalEvent: {
        event: (_event_display_name(event), description) for event, description in _SIGNAL_EVENT_DESCRIPTIONS.items()
    },
}
