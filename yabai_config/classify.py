"""
Module to infer a category for a hotkey action from the window manager command it runs.
Rules are checked in order and the first match wins, since e.g. a zoom toggle is both
a resize and a toggle command.
"""

from typing import Callable

from yabai_config.enums import ActionGroup, BindingCategory


def _window(*flags: str) -> Callable[[str], bool]:
    return lambda action: "-m window" in action and any(flag in action for flag in flags)


def _any(*fragments: str) -> Callable[[str], bool]:
    return lambda action: any(fragment in action for fragment in fragments)


_RULES: tuple[tuple[BindingCategory, Callable[[str], bool]], ...] = (
    (BindingCategory.FOCUS, _window("--focus")),
    (BindingCategory.MOVE, _window("--swap", "--warp", "--move")),
    (BindingCategory.RESIZE, _window("--resize", "--ratio", "--toggle zoom")),
    (
        BindingCategory.LAYOUT,
        lambda action: _window("--toggle")(action)
        or _any("-m config layout", "-m space --layout", "--balance", "--equalize", "--rotate", "--mirror")(action),
    ),
    (BindingCategory.SPACE, _any("-m space", "-m window --space")),
    (BindingCategory.DISPLAY, _any("-m display", "-m window --display")),
)

_GROUPS = {
    BindingCategory.FOCUS: ActionGroup.FOCUS,
    BindingCategory.MOVE: ActionGroup.MOVE,
    BindingCategory.RESIZE: ActionGroup.RESIZE,
    BindingCategory.LAYOUT: ActionGroup.LAYOUT,
    BindingCategory.SPACE: ActionGroup.SPACES,
    BindingCategory.DISPLAY: ActionGroup.SPACES,
    BindingCategory.CUSTOM: ActionGroup.CUSTOM,
}


def classify_action(action: str, program: str = "yabai") -> BindingCategory:
    """Infer the binding category of an action; anything not running the window manager is custom."""
    lowered = action.lower()
    if program.lower() not in lowered:
        return BindingCategory.CUSTOM
    return next((category for category, matches in _RULES if matches(lowered)), BindingCategory.CUSTOM)


def classify_action_group(action: str, program: str = "yabai") -> ActionGroup:
    """Infer the coarser action group of an action, where space and display commands share one group."""
    return _GROUPS[classify_action(action, program)]


def resolve_category(category: str | None, action: str, program: str = "yabai") -> str:
    """Use an explicit category if there is one, otherwise infer it from the action."""
    if category:
        return category
    return classify_action(action, program).value
