import pytest

from yabai_config.bindings import BindingConfig, HotkeyBinding, parse_hotkey_line
from yabai_config.config import GenerateConfig, ParseConfig
from yabai_config.enums import BindingCategory
from yabai_config.generate import generate_bindings
from yabai_config.parse import BindingParser


@pytest.mark.parametrize(
    "line,expected",
    [
        ("shift + alt - j : yabai -m window --swap south", (("shift", "alt"), "j", "yabai -m window --swap south")),
        ("alt - h : yabai -m window --focus west", (("alt",), "h", "yabai -m window --focus west")),
        ("ALT-h : echo a : b", (("alt",), "h", "echo a : b")),
        ("f1 : open -a Safari", ((), "f1", "open -a Safari")),
        ("ctrl + alt - 0x2C : yabai -m space --focus 9", (("ctrl", "alt"), "0x2C", "yabai -m space --focus 9")),
        ("alt - - : yabai -m space --balance", (("alt",), "-", "yabai -m space --balance")),
    ],
)
def test_parse_hotkey_line(line: str, expected) -> None:
    assert parse_hotkey_line(line) == expected


@pytest.mark.parametrize(
    "line", ["", "# comment", "alt - h yabai -m window --focus west", "alt - h : ", "alt shift - h : echo", "alt - : x"]
)
def test_parse_hotkey_line_invalid(line: str) -> None:
    assert parse_hotkey_line(line) is None


def test_parse_bindings(skhdrc: str, parse_config: ParseConfig) -> None:
    result = BindingParser(parse_config).parse_str(skhdrc)
    assert result.ok
    bindings = result.config.bindings
    assert [binding.id for binding in bindings] == [f"binding_{ind}" for ind in range(5)]
    assert bindings[0].description == "Focus window to the west"
    assert bindings[1].description is None
    assert bindings[2].modifiers == ("shift", "alt")
    assert bindings[2].key == "j"
    assert bindings[2].category == "move"
    assert bindings[3].enabled is False
    assert bindings[3].description is None
    assert bindings[4].category == "custom"
    assert bindings[4].description == "Open a terminal"
    assert result.config.enabled_count == 4
    assert result.config.disabled_count == 1


def test_disabled_bindings_can_be_dropped(skhdrc: str) -> None:
    bindings = BindingParser(ParseConfig(parse_disabled_bindings=False)).parse_str(skhdrc).config.bindings
    assert len(bindings) == 4
    assert all(binding.enabled for binding in bindings)
    assert all(binding.key != "k" for binding in bindings)


def test_category_inferred_without_marker(parse_config: ParseConfig) -> None:
    text = "alt - r : yabai -m space --rotate 90\n# === Uncategorized ===\nalt - t : open -a Terminal\n"
    bindings = BindingParser(parse_config).parse_str(text).config.bindings
    assert bindings[0].category == "layout"
    assert bindings[1].category is None


def test_unknown_marker_keeps_its_name(parse_config: ParseConfig) -> None:
    text = "# === Media Keys ===\nfn - f8 : nowplaying-cli togglePlayPause\n"
    assert BindingParser(parse_config).parse_str(text).config.bindings[0].category == "Media Keys"


def test_blank_line_clears_description(parse_config: ParseConfig) -> None:
    text = "# lonely comment\n\nalt - h : yabai -m window --focus west\n"
    assert BindingParser(parse_config).parse_str(text).config.bindings[0].description is None


def test_invalid_lines_are_reported(parse_config: ParseConfig) -> None:
    text = ":: passthrough @\nalt - h yabai -m window --focus west\nalt shift - h : echo\n"
    result = BindingParser(parse_config).parse_str(text)
    assert result.config.bindings == ()
    assert [(d.line_number, d.message) for d in result.diagnostics] == [
        (2, 'Missing command separator ":"'),
        (3, "Invalid shortcut format"),
    ]


def test_round_trip(skhdrc: str, parse_config: ParseConfig, generate_config: GenerateConfig) -> None:
    parsed = BindingParser(parse_config).parse_str(skhdrc).config
    text = generate_bindings(parsed, generate_config)
    assert BindingParser(parse_config).parse_str(text).config == parsed


def test_generated_layout(skhdrc: str, parse_config: ParseConfig) -> None:
    text = generate_bindings(BindingParser(parse_config).parse_str(skhdrc).config)
    assert text.startswith("# skhd configuration\n# Generated by Yabai Config\n\n# === Focus ===\n")
    assert "# [DISABLED] shift + alt - k : yabai -m window --swap north\n" in text
    assert "# Open a terminal\ncmd - return : open -a Terminal\n" in text


def test_groups_are_ordered() -> None:
    config = BindingConfig(
        bindings=(
            HotkeyBinding(id="a", key="t", action="open -a Terminal"),
            HotkeyBinding(id="b", key="x", action="echo x", category="media"),
            HotkeyBinding(id="c", modifiers=("alt",), key="1", action="yabai -m space --focus 1", category="space"),
            HotkeyBinding(id="d", modifiers=("alt",), key="h", action="yabai -m window --focus west", category="focus"),
        )
    )
    markers = [line for line in generate_bindings(config).splitlines() if line.startswith("# ===")]
    assert markers == ["# === Focus ===", "# === Space ===", "# === media ===", "# === Uncategorized ==="]


def test_binding_equality_ignores_modifier_order() -> None:
    first = HotkeyBinding(id="a", modifiers=("shift", "alt"), key="j", action="echo")
    second = HotkeyBinding(id="a", modifiers=("Alt", "shift"), key="j", action="echo")
    assert first == second
    assert hash(first) == hash(second)
    assert first.hotkey == "shift + alt - j"
    assert first.display_string == "⇧⌥J"
    assert first.has_valid_modifiers


def test_binding_edits_are_immutable() -> None:
    config = BindingConfig()
    action = "yabai -m window --focus west"
    binding = HotkeyBinding(id="a", modifiers=("alt",), key="h", action=action, category="focus")
    added = config.add_binding(binding)
    assert config.bindings == ()
    assert added.find_by_id("a") == binding
    assert added.by_category("focus") == [binding]
    assert added.categories == ["focus"]
    updated = added.update_binding(binding.model_copy(update={"enabled": False}))
    assert added.find_by_id("a").enabled
    assert not updated.find_by_id("a").enabled
    assert updated.remove_binding("a").bindings == ()
    assert BindingCategory.lookup("Display") is BindingCategory.DISPLAY


def test_duplicate_binding_ids_rejected() -> None:
    binding = HotkeyBinding(id="a", key="h", action="echo")
    with pytest.raises(ValueError):
        BindingConfig(bindings=(binding, binding))


@pytest.mark.parametrize("parse_disabled,survives", [(True, True), (False, False)])
def test_disabled_binding_after_regeneration(parse_disabled: bool, survives: bool) -> None:
    config = BindingConfig(
        bindings=(
            HotkeyBinding(id="binding_0", modifiers=("alt",), key="h", action="yabai -m window --focus west"),
            HotkeyBinding(
                id="binding_1", modifiers=("alt",), key="l", action="yabai -m window --focus east", enabled=False
            ),
        )
    )
    text = generate_bindings(config)
    reparsed = BindingParser(ParseConfig(parse_disabled_bindings=parse_disabled)).parse_str(text).config
    assert any(binding.key == "l" and not binding.enabled for binding in reparsed.bindings) is survives
    assert reparsed.find_by_id("binding_0").key == "h"


def test_categories_survive_regeneration(parse_config: ParseConfig) -> None:
    config = BindingConfig(
        bindings=(
            HotkeyBinding(
                id="binding_0", modifiers=("alt",), key="h", action="yabai -m window --focus west", category="focus"
            ),
            HotkeyBinding(id="binding_1", key="f8", action="nowplaying-cli togglePlayPause", category="Media"),
            HotkeyBinding(id="binding_2", modifiers=("alt",), key="l", action="yabai -m window --focus east"),
            HotkeyBinding(id="binding_3", modifiers=("cmd",), key="return", action="open -a Terminal"),
        )
    )
    text = generate_bindings(config)
    assert "# === Media ===\n" in text
    assert BindingParser(parse_config).parse_str(text).config == config


@pytest.mark.parametrize(
    "description", ["=== apps ===", "[DISABLED] not really", "\\escaped", "=== Focus === leftovers", "  === x"]
)
def test_marker_like_descriptions_survive_regeneration(description: str, parse_config: ParseConfig) -> None:
    config = BindingConfig(
        bindings=(
            HotkeyBinding(
                id="binding_0", key="t", action="open -a Terminal", category="custom", description=description
            ),
            HotkeyBinding(id="binding_1", key="f", action="open -a Finder", category="custom"),
        )
    )
    reparsed = BindingParser(parse_config).parse_str(generate_bindings(config)).config
    assert reparsed.find_by_id("binding_0").description == description.strip()
    assert reparsed.find_by_id("binding_0").category == "custom"
    assert reparsed.find_by_id("binding_1").description is None
    assert len(reparsed.bindings) == 2
