"""
Module that contains the DirectiveGenerator class which writes a DirectiveConfig, and
optionally a list of exclusion rules, as canonical directive text.
"""

from io import StringIO
from typing import Sequence, TextIO

from yabai_config.coerce import format_value
from yabai_config.config import GenerateConfig
from yabai_config.directives import DirectiveConfig, DirectiveSettings, ExclusionRule, WindowRule
from yabai_config.properties import quote_value


class DirectiveGenerator:
    """Class that writes directive text in a fixed section order, so that its output parses back to its input."""

    def __init__(self, config: GenerateConfig, out: TextIO) -> None:
        self.cfg = config
        self.out = out

    def _line(self, text: str = "") -> None:
        self.out.write(text + "\n")

    def _command(self, *parts: str) -> None:
        self._line(" ".join((self.cfg.program, "-m") + parts))

    def _setting(self, settings: DirectiveSettings, *keys: str) -> None:
        for key in keys:
            self._command("config", key, format_value(getattr(settings, key)))

    def _section(self, title: str) -> None:
        self._line(f"# === {title} ===")

    def _rule(self, conditions: dict[str, str], actions: dict[str, str]) -> None:
        props = [f"{key}={quote_value(val)}" for key, val in conditions.items()]
        props += [f"{key}={val}" for key, val in actions.items()]
        self._command("rule", "--add", *props)

    def print_header(self) -> None:
        self._line(self.cfg.shebang)
        self._line()
        self._line(f"# {self.cfg.directive_title}")
        self._line(f"# Generated by {self.cfg.generator_name}")
        self._line()

    def print_rules(self, rules: Sequence[WindowRule], exclusions: Sequence[ExclusionRule] | None) -> None:
        """
        Print exclusion rules followed by window rules. When no exclusion rules are given, a rule
        keeping the editor itself unmanaged is printed in their place.
        """
        self._section("Window Rules (Exclusions)")
        if exclusions:
            for exclusion in exclusions:
                if exclusion.enabled and (actions := exclusion.actions()):
                    self._rule(exclusion.conditions(), actions)
        elif not any(rule.app_name == self.cfg.self_exclusion_app for rule in rules):
            self._rule({"app": f"^{self.cfg.self_exclusion_app}$"}, {"manage": "off"})
        for rule in rules:
            if rule.enabled and rule.has_selector and (actions := rule.actions()):
                self._rule(rule.conditions(), actions)
        self._line()

    def print_settings(self, settings: DirectiveSettings) -> None:
        self._section("Layout")
        self._setting(settings, "layout", "window_placement", "auto_balance", "split_ratio", "split_type")
        self._line()

        self._section("Gaps and Padding")
        self._setting(settings, "window_gap", "top_padding", "bottom_padding", "left_padding", "right_padding")
        self._line()

        if settings.external_bar:
            self._section("External Bar")
            self._setting(settings, "external_bar")
            self._line()

        self._section("Mouse")
        self._setting(
            settings,
            "mouse_follows_focus",
            "focus_follows_mouse",
            "mouse_modifier",
            "mouse_action1",
            "mouse_action2",
            "mouse_drop_action",
        )
        self._line()

        self._section("Window Appearance")
        self._setting(settings, "window_opacity")
        if settings.window_opacity:
            self._setting(settings, "active_window_opacity", "normal_window_opacity")
        self._setting(settings, "window_shadow", "window_animation_duration")
        self._line()

        self._section("Window Borders")
        self._setting(settings, "window_border")
        if settings.window_border:
            self._setting(
                settings,
                "window_border_width",
                "active_window_border_color",
                "normal_window_border_color",
                "insert_feedback_color",
            )
        self._line()

        if settings.extra:
            self._section("Other Settings")
            for key, value in settings.extra.items():
                self._command("config", key, value)
            self._line()

    def print_spaces(self, directive_config: DirectiveConfig) -> None:
        spaces = [space for space in directive_config.spaces if space.has_customization]
        if not spaces:
            return
        self._section("Space Configurations")
        for space in spaces:
            if space.label is not None:
                self._command("space", str(space.index), "--label", quote_value(space.label))
            for key, value in space.overrides().items():
                self._command("config", "--space", str(space.index), key, value)
        self._line()

    def print_signals(self, directive_config: DirectiveConfig) -> None:
        signals = [signal for signal in directive_config.signals if signal.enabled]
        if not signals:
            return
        self._section("Signals")
        for signal in signals:
            props = [f"label={quote_value(signal.label)}"] if signal.label else []
            props += [f"event={signal.event}", f"action={quote_value(signal.action)}"]
            self._command("signal", "--add", *props)
        self._line()

    def print_config(
        self, directive_config: DirectiveConfig, exclusions: Sequence[ExclusionRule] | None = None
    ) -> None:
        """Print the complete directive text for the given config."""
        self.print_header()
        self.print_rules(directive_config.rules, exclusions)
        self.print_settings(directive_config.settings)
        self.print_spaces(directive_config)
        self.print_signals(directive_config)
        self._line(self.cfg.status_line)


def generate_directives(
    directive_config: DirectiveConfig,
    exclusions: Sequence[ExclusionRule] | None = None,
    config: GenerateConfig | None = None,
) -> str:
    """Render directive text for the given config into a string."""
    out = StringIO()
    DirectiveGenerator(config if config is not None else GenerateConfig(), out).print_config(
        directive_config, exclusions
    )
    return out.getvalue()
