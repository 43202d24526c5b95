import pytest

from yabai_config.config import GenerateConfig, ParseConfig

YABAIRC = """\
#!/usr/bin/env sh

# global settings
yabai -m config layout bsp
yabai -m config window_placement second_child
yabai -m config window_gap 10
yabai -m config top_padding 12 # leave room for the bar
yabai -m config mouse_follows_focus on
yabai -m config focus_follows_mouse autoraise
yabai -m config window_opacity on
yabai -m config active_window_opacity 1.0
yabai -m config normal_window_opacity 0.85
yabai -m config menubar_opacity 0.9

yabai -m rule --add app="^System Settings$" manage=off
yabai -m rule --add app="^Calculator$" sticky=on layer=above
yabai -m rule --add title="Preferences" manage=off
yabai -m rule --add manage=off

yabai -m space 1 --label "code"
yabai -m config --space 1 layout stack
yabai -m config --space 2 window_gap 0

yabai -m signal --add event=window_focused action="sketchybar --trigger window_focus"
yabai -m signal --add label="refresh" event=space_changed action='echo "changed"'
yabai -m signal --add event=display_added

echo "yabai configuration loaded..."
"""

SKHDRC = """\
# === Focus ===
# Focus window to the west
alt - h : yabai -m window --focus west
alt - l : yabai -m window --focus east

# === Move ===
shift + alt - j : yabai -m window --swap south
# [DISABLED] shift + alt - k : yabai -m window --swap north

# === Custom ===
# Open a terminal
cmd - return : open -a Terminal
"""


@pytest.fixture()
def parse_config() -> ParseConfig:
    return ParseConfig()


@pytest.fixture()
def generate_config() -> GenerateConfig:
    return GenerateConfig()


@pytest.fixture()
def yabairc() -> str:
    return YABAIRC


@pytest.fixture()
def skhdrc() -> str:
    return SKHDRC
