"""
Module with classes that define the binding-side representation: hotkey bindings
made of modifiers, a trigger key and an action command, and the set containing them.
"""

import re
from collections import Counter
from typing import Iterable, Self

from pydantic import BaseModel, field_validator, model_validator

from yabai_config.enums import BindingCategory

VALID_MODIFIERS = frozenset(
    (
        "alt",
        "lalt",
        "ralt",
        "shift",
        "lshift",
        "rshift",
        "cmd",
        "lcmd",
        "rcmd",
        "ctrl",
        "lctrl",
        "rctrl",
        "fn",
        "hyper",
        "meh",
    )
)

MODIFIER_SYMBOLS = {
    "cmd": "⌘",
    "lcmd": "⌘",
    "rcmd": "⌘",
    "alt": "⌥",
    "lalt": "⌥",
    "ralt": "⌥",
    "shift": "⇧",
    "lshift": "⇧",
    "rshift": "⇧",
    "ctrl": "⌃",
    "lctrl": "⌃",
    "rctrl": "⌃",
    "fn": "fn",
    "hyper": "⌃⌥⇧⌘",
    "meh": "⌃⌥⇧",
}

KEY_SYMBOLS = {
    "left": "←",
    "right": "→",
    "up": "↑",
    "down": "↓",
    "space": "Space",
    "tab": "⇥",
    "return": "⏎",
    "escape": "⎋",
    "delete": "⌫",
}


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    """Case-fold and deduplicate modifiers into a sorted tuple, for order-independent comparison."""
    return tuple(sorted({mod.strip().lower() for mod in modifiers if mod.strip()}))


def format_hotkey(modifiers: Iterable[str], key: str) -> str:
    """Render a hotkey in binding syntax, e.g. `shift + alt - j`."""
    if mods := " + ".join(modifiers):
        return f"{mods} - {key}"
    return key


class HotkeyBinding(BaseModel, frozen=True):
    """
    Represents a hotkey: modifiers (display order kept, ignored for equality), a trigger key
    and the command that runs when pressed, plus optional category and description.
    """

    id: str
    modifiers: tuple[str, ...] = ()
    key: str
    action: str
    category: str | None = None
    description: str | None = None
    enabled: bool = True

    @field_validator("key", "action")
    @classmethod
    def check_not_empty(cls, val: str) -> str:
        """Make sure key and action are present."""
        assert val.strip(), "Hotkey binding needs a key and an action"
        return val.strip()

    @field_validator("modifiers")
    @classmethod
    def strip_modifiers(cls, val: tuple[str, ...]) -> tuple[str, ...]:
        """Drop empty modifier tokens."""
        return tuple(mod.strip() for mod in val if mod.strip())

    @property
    def hotkey(self) -> str:
        return format_hotkey(self.modifiers, self.key)

    @property
    def signature(self) -> tuple[tuple[str, ...], str]:
        """Normalized (modifier set, key) pair that identifies the physical hotkey."""
        return normalize_modifiers(self.modifiers), self.key.lower()

    @property
    def display_string(self) -> str:
        """Compact display form using modifier and key symbols, e.g. `⇧⌥J`."""
        mods = "".join(MODIFIER_SYMBOLS.get(mod.lower(), mod) for mod in self.modifiers)
        return mods + KEY_SYMBOLS.get(self.key.lower(), self.key.upper())

    @property
    def category_enum(self) -> BindingCategory | None:
        return BindingCategory.lookup(self.category)

    @property
    def has_valid_modifiers(self) -> bool:
        return all(mod.lower() in VALID_MODIFIERS for mod in self.modifiers)

    def _comparable(self) -> tuple:
        return (
            self.id,
            normalize_modifiers(self.modifiers),
            self.key,
            self.action,
            self.category,
            self.description,
            self.enabled,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HotkeyBinding):
            return NotImplemented
        return self._comparable() == other._comparable()

    def __hash__(self) -> int:
        return hash(self._comparable())


class BindingConfig(BaseModel, frozen=True):
    """Represents all hotkey bindings of a binding config."""

    bindings: tuple[HotkeyBinding, ...] = ()

    @model_validator(mode="after")
    def check_unique_ids(self):
        """Make sure binding identifiers are unique."""
        dupes = [key for key, count in Counter(binding.id for binding in self.bindings).items() if count > 1]
        assert not dupes, f"Duplicate binding id(s) found: {dupes}"
        return self

    def _replace(self, bindings: Iterable[HotkeyBinding]) -> Self:
        return self.__class__(bindings=tuple(bindings))

    def add_binding(self, binding: HotkeyBinding) -> Self:
        return self._replace(self.bindings + (binding,))

    def remove_binding(self, binding_id: str) -> Self:
        return self._replace(binding for binding in self.bindings if binding.id != binding_id)

    def update_binding(self, binding: HotkeyBinding) -> Self:
        """Replace the binding with the same id."""
        return self._replace(binding if old.id == binding.id else old for old in self.bindings)

    def find_by_id(self, binding_id: str) -> HotkeyBinding | None:
        return next((binding for binding in self.bindings if binding.id == binding_id), None)

    def by_category(self, category: str | None) -> list[HotkeyBinding]:
        return [binding for binding in self.bindings if binding.category == category]

    @property
    def categories(self) -> list[str | None]:
        """Distinct categories in order of first appearance."""
        return list(dict.fromkeys(binding.category for binding in self.bindings))

    @property
    def enabled_count(self) -> int:
        return sum(1 for binding in self.bindings if binding.enabled)

    @property
    def disabled_count(self) -> int:
        return len(self.bindings) - self.enabled_count


_compact_hotkey_re = re.compile(r"(.+?)\s*-\s*(\S+)")


def parse_hotkey_line(line: str) -> tuple[tuple[str, ...], str, str] | None:
    """
    Split a binding line of the form `mod + mod - key : action` into its modifiers, key and action.

    The hotkey ends at the first ` : ` so that actions may contain colons, and the key is split
    off at the last ` - ` of the hotkey so that modifiers are everything before it. Returns None
    for comments, blank lines and lines that do not follow the grammar.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    hotkey, sep, action = stripped.partition(" : ")
    hotkey, action = hotkey.strip(), action.strip()
    if not sep or not hotkey or not action:
        return None

    if " - " in hotkey:
        mod_part, _, key = hotkey.rpartition(" - ")
    elif m := _compact_hotkey_re.fullmatch(hotkey):
        mod_part, key = m.group(1), m.group(2)
    else:
        mod_part, key = "", hotkey
    key = key.strip()

    modifiers = tuple(mod.strip().lower() for mod in mod_part.split("+") if mod.strip())
    if not key or any(char.isspace() for char in key) or any(" " in mod for mod in modifiers):
        return None
    return modifiers, key, action
