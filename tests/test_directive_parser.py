from io import StringIO

from yabai_config.config import ParseConfig
from yabai_config.directives import DirectiveSettings
from yabai_config.enums import FocusFollowsMouse, Layout, WindowLayer
from yabai_config.parse import DirectiveParser, ExclusionRuleParser


def test_settings(yabairc: str, parse_config: ParseConfig) -> None:
    settings = DirectiveParser(parse_config).parse_str(yabairc).config.settings
    assert settings.layout is Layout.BSP
    assert settings.window_gap == 10
    assert settings.top_padding == 12
    assert settings.bottom_padding == 6
    assert settings.mouse_follows_focus is True
    assert settings.focus_follows_mouse is FocusFollowsMouse.AUTORAISE
    assert settings.window_opacity is True
    assert settings.normal_window_opacity == 0.85
    assert settings.extra == {"menubar_opacity": "0.9"}
    assert settings.get("menubar_opacity") == "0.9"


def test_rules(yabairc: str, parse_config: ParseConfig) -> None:
    rules = DirectiveParser(parse_config).parse_str(yabairc).config.rules
    assert [rule.id for rule in rules] == ["rule_0", "rule_1", "rule_2"]
    assert rules[0].app_name == "System Settings"
    assert rules[0].manage is False
    assert rules[0].sticky is None
    assert rules[1].sticky is True
    assert rules[1].layer is WindowLayer.ABOVE
    assert rules[2].app_name is None
    assert rules[2].title == "Preferences"


def test_signals(yabairc: str, parse_config: ParseConfig) -> None:
    signals = DirectiveParser(parse_config).parse_str(yabairc).config.signals
    assert len(signals) == 2
    assert signals[0].event == "window_focused"
    assert signals[0].action == "sketchybar --trigger window_focus"
    assert signals[0].label is None
    assert signals[1].label == "refresh"
    assert signals[1].action == 'echo "changed"'
    assert signals[1].event_description != "Unknown event: space_changed"


def test_spaces(yabairc: str, parse_config: ParseConfig) -> None:
    config = DirectiveParser(parse_config).parse_str(yabairc).config
    assert [space.index for space in config.spaces] == [1, 2]
    assert config.get_space(1).label == "code"
    assert config.get_space(1).layout is Layout.STACK
    assert config.get_space(2).window_gap == 0
    assert config.get_space(2).display_name == "Space 2"


def test_missing_signal_action_is_reported(yabairc: str, parse_config: ParseConfig) -> None:
    result = DirectiveParser(parse_config).parse_str(yabairc)
    assert len(result.diagnostics) == 1
    diagnostic = result.diagnostics[0]
    assert diagnostic.message == "Signal --add missing action parameter"
    assert diagnostic.line == "yabai -m signal --add event=display_added"
    assert yabairc.splitlines()[diagnostic.line_number - 1] == diagnostic.line
    assert all(signal.event != "display_added" for signal in result.config.signals)


def test_empty_and_foreign_text(parse_config: ParseConfig) -> None:
    result = DirectiveParser(parse_config).parse_str("")
    assert result.ok
    assert result.config.settings == DirectiveSettings()

    result = DirectiveParser(parse_config).parse_str("export PATH=/usr/bin\nsketchybar --reload\n")
    assert result.config.rules == ()
    assert [d.message for d in result.diagnostics] == ["Unrecognized command"]


def test_invalid_values_fall_back_to_default(parse_config: ParseConfig) -> None:
    result = DirectiveParser(parse_config).parse_str("yabai -m config layout spiral\nyabai -m config window_gap wide\n")
    assert result.config.settings.layout is Layout.BSP
    assert result.config.settings.window_gap == 6
    assert [d.message for d in result.diagnostics] == [
        'Unsupported value "spiral" for setting "layout"',
        'Unsupported value "wide" for setting "window_gap"',
    ]


def test_self_exclusion_rule_is_skipped(parse_config: ParseConfig) -> None:
    text = 'yabai -m rule --add app="^yabai_config$" manage=off\nyabai -m rule --add app="^yabai_config$" sticky=on\n'
    rules = DirectiveParser(parse_config).parse_str(text).config.rules
    assert len(rules) == 1
    assert rules[0].sticky is True


def test_custom_program_name() -> None:
    parser = DirectiveParser(ParseConfig(program="yabai-dev"))
    config = parser.parse_str("yabai-dev -m config window_gap 3\nyabai -m config window_gap 9\n").config
    assert config.settings.window_gap == 3


def test_parser_is_reentrant(yabairc: str, parse_config: ParseConfig) -> None:
    parser = DirectiveParser(parse_config)
    first = parser.parse(StringIO(yabairc)).config
    second = parser.parse_str(yabairc).config
    assert first == second
    assert second.rules[0].id == "rule_0"


def test_exclusion_rules(yabairc: str, parse_config: ParseConfig) -> None:
    exclusions = ExclusionRuleParser(parse_config).parse_str(yabairc).config
    assert [rule.app_name for rule in exclusions] == ["System Settings", "Calculator"]
    assert exclusions[0].manage_off is True
    assert exclusions[1].manage_off is False
    assert exclusions[1].sticky is True
    assert exclusions[1].layer is WindowLayer.ABOVE
