"""
Module containing ready-made hotkey binding sets. Preset categories are inferred from the
actions, and presets can be shown grouped by action group.
"""

from typing import Callable, Iterable, NamedTuple

from yabai_config.bindings import BindingConfig, HotkeyBinding
from yabai_config.classify import classify_action, classify_action_group
from yabai_config.enums import ActionGroup

_DIRECTIONS = {"h": "west", "j": "south", "k": "north", "l": "east"}
_RESIZES = {"h": "left:-50:0", "j": "bottom:0:50", "k": "top:0:-50", "l": "right:50:0"}


def _bindings(specs: Iterable[tuple[str, str, str, str]], program: str = "yabai") -> BindingConfig:
    """Build a binding config from (modifiers, key, action, description) specs."""
    return BindingConfig(
        bindings=tuple(
            HotkeyBinding(
                id=f"binding_{ind}",
                modifiers=tuple(mods.split("+")) if mods else (),
                key=key,
                action=action,
                category=classify_action(action, program).value,
                description=description,
            )
            for ind, (mods, key, action, description) in enumerate(specs)
        )
    )


def vim_style() -> BindingConfig:
    """hjkl navigation: focus on alt, swap on alt+shift, warp on alt+ctrl and resize on alt+cmd."""
    specs = []
    for key, direction in _DIRECTIONS.items():
        specs.append(("alt", key, f"yabai -m window --focus {direction}", f"Focus window to the {direction}"))
    for key, direction in _DIRECTIONS.items():
        specs.append(("alt+shift", key, f"yabai -m window --swap {direction}", f"Swap with window to the {direction}"))
    for key, direction in _DIRECTIONS.items():
        specs.append(("alt+ctrl", key, f"yabai -m window --warp {direction}", f"Warp to the {direction}"))
    for key, resize in _RESIZES.items():
        specs.append(("alt+cmd", key, f"yabai -m window --resize {resize}", f"Resize {resize.split(':')[0]} edge"))
    for ind in range(1, 10):
        specs.append(("alt", str(ind), f"yabai -m space --focus {ind}", f"Focus space {ind}"))
    for ind in range(1, 10):
        specs.append(("alt+shift", str(ind), f"yabai -m window --space {ind}", f"Move window to space {ind}"))
    specs += [
        ("alt", "f", "yabai -m window --toggle zoom-fullscreen", "Toggle fullscreen zoom"),
        ("alt+shift", "f", "yabai -m window --toggle float", "Toggle float"),
        ("alt", "s", "yabai -m window --toggle split", "Toggle split orientation"),
        ("alt", "e", "yabai -m space --balance", "Balance windows"),
        ("alt", "r", "yabai -m space --rotate 90", "Rotate layout 90 degrees"),
        ("alt+shift", "r", "yabai -m space --rotate 270", "Rotate layout -90 degrees"),
        ("alt", "p", "yabai -m display --focus prev", "Focus previous display"),
        ("alt", "n", "yabai -m display --focus next", "Focus next display"),
        ("alt+shift", "p", "yabai -m window --display prev", "Move window to previous display"),
        ("alt+shift", "n", "yabai -m window --display next", "Move window to next display"),
    ]
    return _bindings(specs)


def minimal() -> BindingConfig:
    """Focus with alt + hjkl, fullscreen and float toggles, and focusing the first four spaces."""
    specs = [
        ("alt", key, f"yabai -m window --focus {direction}", f"Focus {direction}")
        for key, direction in _DIRECTIONS.items()
    ]
    specs += [
        ("alt", "f", "yabai -m window --toggle zoom-fullscreen", "Toggle fullscreen"),
        ("alt+shift", "f", "yabai -m window --toggle float", "Toggle float"),
    ]
    specs += [("alt", str(ind), f"yabai -m space --focus {ind}", f"Focus space {ind}") for ind in range(1, 5)]
    return _bindings(specs)


class Preset(NamedTuple):
    name: str
    description: str
    build: Callable[[], BindingConfig]


PRESETS = {
    preset.name: preset
    for preset in (
        Preset("vim", "Vim-style hjkl navigation with swap, warp, resize, space and display bindings", vim_style),
        Preset("minimal", "A small set of essential focus and toggle bindings", minimal),
    )
}


def group_bindings(binding_config: BindingConfig, program: str = "yabai") -> dict[ActionGroup, list[HotkeyBinding]]:
    """Partition bindings by action group, in action group order; empty groups are left out."""
    groups: dict[ActionGroup, list[HotkeyBinding]] = {group: [] for group in ActionGroup}
    for binding in binding_config.bindings:
        groups[classify_action_group(binding.action, program)].append(binding)
    return {group: bindings for group, bindings in groups.items() if bindings}
