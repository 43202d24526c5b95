"""
Module containing settings that control how configuration text is parsed
and how canonical text is generated.
"""

from pydantic_settings import BaseSettings


class ParseConfig(BaseSettings, env_prefix="YABAI_CONFIG_", extra="ignore"):
    """Configuration settings related to parsing directive and binding text."""

    # program name that starts every meaningful directive line
    program: str = "yabai"

    # app name of the editor itself; the generated rule excluding it is not surfaced as a user rule
    self_exclusion_app: str = "yabai_config"

    # parse "# [DISABLED] <hotkey> : <action>" lines into disabled bindings instead of dropping them
    parse_disabled_bindings: bool = True


class GenerateConfig(BaseSettings, env_prefix="YABAI_CONFIG_", extra="ignore"):
    """Configuration settings related to generating canonical directive and binding text."""

    program: str = "yabai"

    # rule excluding this app from management is written whenever no exclusion rules are given
    self_exclusion_app: str = "yabai_config"

    shebang: str = "#!/usr/bin/env sh"

    # name written in the "Generated by" header comment of both outputs
    generator_name: str = "Yabai Config"

    directive_title: str = "yabai configuration"
    binding_title: str = "skhd configuration"

    # last line of generated directive text
    status_line: str = 'echo "yabai configuration loaded..."'


class Config(BaseSettings, env_prefix="YABAI_CONFIG_"):
    """All configuration settings used for this module."""

    parse_config: ParseConfig = ParseConfig()
    generate_config: GenerateConfig = GenerateConfig()
