from yabai_config.enums import ActionGroup
from yabai_config.generate import generate_bindings
from yabai_config.parse import BindingParser
from yabai_config.presets import PRESETS, group_bindings, minimal, vim_style
from yabai_config.validate import find_all_conflicts, validate_binding_text


def test_presets_are_valid() -> None:
    for preset in PRESETS.values():
        config = preset.build()
        assert find_all_conflicts(config.bindings) == []
        text = generate_bindings(config)
        assert validate_binding_text(text) == []
        reparsed = BindingParser().parse_str(text).config
        # bindings are regrouped by category on output, so ids follow the generated order
        assert {(b.hotkey, b.action, b.category, b.description) for b in reparsed.bindings} == {
            (b.hotkey, b.action, b.category, b.description) for b in config.bindings
        }
        assert generate_bindings(reparsed) == text


def test_vim_style_groups() -> None:
    groups = group_bindings(vim_style())
    assert list(groups) == [
        ActionGroup.FOCUS,
        ActionGroup.MOVE,
        ActionGroup.RESIZE,
        ActionGroup.LAYOUT,
        ActionGroup.SPACES,
    ]
    assert len(groups[ActionGroup.FOCUS]) == 4
    assert len(groups[ActionGroup.SPACES]) == 22


def test_minimal() -> None:
    config = minimal()
    assert len(config.bindings) == 10
    assert config.find_by_id("binding_0").hotkey == "alt - h"
    assert set(group_bindings(config)) == {
        ActionGroup.FOCUS,
        ActionGroup.RESIZE,
        ActionGroup.LAYOUT,
        ActionGroup.SPACES,
    }
