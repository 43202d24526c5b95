"""
Module with classes that define the directive-side representation: global settings,
window rules, exclusion rules, signals and per-space overrides. All models are
immutable; edits return a new aggregate.
"""

import logging
from collections import Counter
from typing import Any, ClassVar, Self, get_args

from pydantic import BaseModel, Field, field_validator, model_validator

from yabai_config.coerce import Scalar, coerce_to, coerce_value, format_value
from yabai_config.enums import (
    FocusFollowsMouse,
    Layout,
    MouseAction,
    MouseDropAction,
    MouseModifier,
    SignalEvent,
    SplitType,
    WindowLayer,
    WindowPlacement,
    WindowShadow,
)

logger = logging.getLogger(__name__)


def strip_anchors(pattern: str) -> str:
    """Remove a leading `^` and a trailing `$` regex anchor from an app-name pattern."""
    return pattern.removeprefix("^").removesuffix("$")


def anchor(pattern: str) -> str:
    """Wrap an app name in `^...$` regex anchors for an exact match."""
    return f"^{pattern}$"


class DirectiveSettings(BaseModel, frozen=True, extra="forbid"):
    """Global window manager settings, as set by `config <key> <value>` directives."""

    # layout
    layout: Layout = Layout.BSP
    window_placement: WindowPlacement = WindowPlacement.SECOND_CHILD
    auto_balance: bool = False
    split_ratio: float = 0.5
    split_type: SplitType = SplitType.AUTO

    # gaps and padding, in pixels
    window_gap: int = 6
    top_padding: int = 6
    bottom_padding: int = 6
    left_padding: int = 6
    right_padding: int = 6

    # status bar integration, e.g. "all:40:0"; omitted from output when unset
    external_bar: str | None = None

    # mouse
    mouse_follows_focus: bool = False
    focus_follows_mouse: FocusFollowsMouse = FocusFollowsMouse.OFF
    mouse_modifier: MouseModifier = MouseModifier.ALT
    mouse_action1: MouseAction = MouseAction.MOVE
    mouse_action2: MouseAction = MouseAction.RESIZE
    mouse_drop_action: MouseDropAction = MouseDropAction.SWAP

    # appearance; opacity values only take effect when window_opacity is on
    window_opacity: bool = False
    active_window_opacity: float = 1.0
    normal_window_opacity: float = 0.9
    window_shadow: WindowShadow = WindowShadow.ON
    window_animation_duration: float = 0.0

    # borders; width and colors only take effect when window_border is on
    window_border: bool = False
    window_border_width: int = 4
    active_window_border_color: str = "0xff775759"
    normal_window_border_color: str = "0xff555555"
    insert_feedback_color: str = "0xffd75f5f"

    # keys that are not recognized, preserved verbatim in order of appearance
    extra: dict[str, str] = {}

    @classmethod
    def from_raw(cls, raw: dict[str, str]) -> "DirectiveSettings":
        """
        Build settings from raw `key -> value text` pairs, coercing each recognized key to its
        declared type. Absent keys and values that cannot be coerced take the default.
        """
        values: dict[str, Any] = {}
        extra: dict[str, str] = {}
        for key, text in raw.items():
            if (target := SETTING_TYPES.get(key)) is None:
                logger.debug('keeping unrecognized setting "%s" verbatim', key)
                extra[key] = text
                continue
            if (coerced := coerce_to(coerce_value(text), target)) is None:
                logger.warning('unsupported value "%s" for setting "%s", using default', text, key)
                continue
            values[key] = coerced
        return cls(**(SETTING_DEFAULTS | values), extra=extra)

    def get(self, key: str) -> Any:
        """Return the typed value of a recognized setting or the raw text of an unrecognized one."""
        if key in SETTING_TYPES:
            return getattr(self, key)
        return self.extra.get(key)

    def with_setting(self, key: str, value: Scalar | None) -> Self:
        """Return a copy with one setting changed; `None` resets it to its default or drops an unknown key."""
        if key not in SETTING_TYPES:
            extra = {k: v for k, v in self.extra.items() if k != key}
            if value is not None:
                extra[key] = format_value(value)
            return self.model_copy(update={"extra": extra})
        if value is None:
            return self.model_copy(update={key: SETTING_DEFAULTS[key]})
        coerced = coerce_to(value, SETTING_TYPES[key])
        if coerced is None:
            raise ValueError(f'Value "{value}" is not valid for setting "{key}"')
        return self.model_copy(update={key: coerced})


def _declared_type(annotation: Any) -> type:
    args = [arg for arg in get_args(annotation) if arg is not type(None)]
    return args[0] if args else annotation


SETTING_TYPES: dict[str, type] = {
    name: _declared_type(field.annotation) for name, field in DirectiveSettings.model_fields.items() if name != "extra"
}
SETTING_DEFAULTS: dict[str, Any] = {name: DirectiveSettings.model_fields[name].default for name in SETTING_TYPES}


class WindowRule(BaseModel, frozen=True):
    """
    A rule matching windows by app name and/or title, setting how the window manager
    treats them. Actions that are None are left to the window manager.
    """

    id: str
    app_name: str | None = None  # stored without regex anchors
    title: str | None = None
    manage: bool | None = None
    sticky: bool | None = None
    layer: WindowLayer | None = None
    space: int | None = None
    enabled: bool = True

    @field_validator("app_name")
    @classmethod
    def remove_anchors(cls, val: str | None) -> str | None:
        """Store app name patterns without `^...$` anchors."""
        return strip_anchors(val) if val is not None else None

    @property
    def has_selector(self) -> bool:
        return bool(self.app_name) or bool(self.title)

    def conditions(self) -> dict[str, str]:
        """Selector properties, with the app name anchored."""
        out = {}
        if self.app_name:
            out["app"] = anchor(self.app_name)
        if self.title:
            out["title"] = self.title
        return out

    def actions(self) -> dict[str, str]:
        """Set action properties in emission order."""
        out = {}
        if self.manage is not None:
            out["manage"] = format_value(self.manage)
        if self.sticky is not None:
            out["sticky"] = format_value(self.sticky)
        if self.layer is not None:
            out["layer"] = self.layer.value
        if self.space is not None:
            out["space"] = str(self.space)
        return out


class ExclusionRule(BaseModel, frozen=True):
    """A narrower rule view used to manage apps excluded from (or pinned by) the window manager."""

    id: str
    app_name: str
    title_pattern: str | None = None
    manage_off: bool = True
    sticky: bool = False
    layer: WindowLayer = WindowLayer.NORMAL
    assigned_space: int | None = None
    enabled: bool = True

    @field_validator("app_name")
    @classmethod
    def remove_anchors(cls, val: str) -> str:
        """Store app name patterns without `^...$` anchors."""
        val = strip_anchors(val)
        assert val, "Exclusion rule needs a non-empty app name"
        return val

    def conditions(self) -> dict[str, str]:
        out = {"app": anchor(self.app_name)}
        if self.title_pattern:
            out["title"] = self.title_pattern
        return out

    def actions(self) -> dict[str, str]:
        out = {}
        if self.manage_off:
            out["manage"] = "off"
        if self.sticky:
            out["sticky"] = "on"
        if self.layer != WindowLayer.NORMAL:
            out["layer"] = self.layer.value
        if self.assigned_space is not None:
            out["space"] = str(self.assigned_space)
        return out


class Signal(BaseModel, frozen=True):
    """A command run by the window manager whenever the given event fires."""

    id: str
    event: str
    action: str
    label: str | None = None
    enabled: bool = True

    @field_validator("event", "action")
    @classmethod
    def check_required(cls, val: str) -> str:
        """Both event and action are needed for a signal to do anything."""
        assert val.strip(), "Signal needs both an event and an action"
        return val

    @property
    def known_event(self) -> SignalEvent | None:
        """The event as a known signal event, or None for events this module does not know about."""
        return SignalEvent.lookup(self.event)

    @property
    def event_description(self) -> str:
        if (event := self.known_event) is not None:
            return event.description
        return f"Unknown event: {self.event}"


class SpaceConfig(BaseModel, frozen=True):
    """Per-space overrides of a subset of the global settings, keyed by 1-based space index."""

    OVERRIDE_KEYS: ClassVar[tuple[str, ...]] = (
        "layout",
        "window_gap",
        "top_padding",
        "bottom_padding",
        "left_padding",
        "right_padding",
    )

    index: int = Field(ge=1)
    label: str | None = None
    layout: Layout | None = None
    window_gap: int | None = Field(default=None, ge=0)
    top_padding: int | None = Field(default=None, ge=0)
    bottom_padding: int | None = Field(default=None, ge=0)
    left_padding: int | None = Field(default=None, ge=0)
    right_padding: int | None = Field(default=None, ge=0)

    def overrides(self) -> dict[str, str]:
        """Overridden settings in emission order, formatted as directive values."""
        return {key: format_value(val) for key in self.OVERRIDE_KEYS if (val := getattr(self, key)) is not None}

    @property
    def display_name(self) -> str:
        return self.label if self.label else f"Space {self.index}"

    @property
    def has_customization(self) -> bool:
        return self.label is not None or bool(self.overrides())

    def with_override(self, key: str, value: Scalar | None) -> Self:
        """Return a copy with one override changed, coerced to the setting's type; None clears it."""
        assert key in self.OVERRIDE_KEYS, f'"{key}" cannot be overridden per space'
        coerced = None if value is None else coerce_to(value, SETTING_TYPES[key])
        if value is not None and coerced is None:
            raise ValueError(f'Value "{value}" is not valid for setting "{key}" of space {self.index}')
        return self.model_validate(self.model_dump() | {key: coerced})


class DirectiveConfig(BaseModel, frozen=True):
    """Represents everything set by a directive config: settings, rules, signals and space overrides."""

    settings: DirectiveSettings = DirectiveSettings()
    rules: tuple[WindowRule, ...] = ()
    signals: tuple[Signal, ...] = ()
    spaces: tuple[SpaceConfig, ...] = ()

    @model_validator(mode="after")
    def check_unique(self):
        """Make sure identifiers and space indices are unique within their collections."""
        for name, keys in (
            ("rule id", [rule.id for rule in self.rules]),
            ("signal id", [signal.id for signal in self.signals]),
            ("space index", [space.index for space in self.spaces]),
        ):
            dupes = [key for key, count in Counter(keys).items() if count > 1]
            assert not dupes, f"Duplicate {name}(s) found: {dupes}"
        return self

    def _replace(self, **changes) -> Self:
        return self.__class__(**(dict(self) | changes))

    def with_settings(self, settings: DirectiveSettings) -> Self:
        return self._replace(settings=settings)

    def with_setting(self, key: str, value: Scalar | None) -> Self:
        return self._replace(settings=self.settings.with_setting(key, value))

    def add_rule(self, rule: WindowRule) -> Self:
        return self._replace(rules=self.rules + (rule,))

    def remove_rule(self, rule_id: str) -> Self:
        return self._replace(rules=tuple(rule for rule in self.rules if rule.id != rule_id))

    def update_rule(self, rule: WindowRule) -> Self:
        """Replace the rule with the same id."""
        return self._replace(rules=tuple(rule if old.id == rule.id else old for old in self.rules))

    def add_signal(self, signal: Signal) -> Self:
        return self._replace(signals=self.signals + (signal,))

    def remove_signal(self, signal_id: str) -> Self:
        return self._replace(signals=tuple(signal for signal in self.signals if signal.id != signal_id))

    def update_signal(self, signal: Signal) -> Self:
        return self._replace(signals=tuple(signal if old.id == signal.id else old for old in self.signals))

    def get_space(self, index: int) -> SpaceConfig | None:
        return next((space for space in self.spaces if space.index == index), None)

    def set_space(self, space: SpaceConfig) -> Self:
        """Add a space override, replacing an existing one with the same index, keeping spaces sorted by index."""
        others = [old for old in self.spaces if old.index != space.index]
        return self._replace(spaces=tuple(sorted(others + [space], key=lambda s: s.index)))

    def remove_space(self, index: int) -> Self:
        return self._replace(spaces=tuple(space for space in self.spaces if space.index != index))
