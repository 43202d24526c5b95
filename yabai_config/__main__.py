"""
Parse yabai directive text or skhd binding text into a structured model (in YAML or JSON),
generate canonical configuration text from such a model, and check configuration text
for problems and conflicting hotkeys.
"""

import logging
import sys
from argparse import ArgumentParser, FileType, Namespace
from importlib.metadata import version
from pathlib import Path

import yaml
from platformdirs import user_config_dir

from yabai_config import logger
from yabai_config.config import Config
from yabai_config.diagnostics import ConfigLoadError
from yabai_config.exchange import (
    dump_exclusion_rules,
    dump_model,
    load_binding_config,
    load_directive_config,
    load_exclusion_rules,
)
from yabai_config.generate import BindingGenerator, DirectiveGenerator
from yabai_config.parse import BindingParser, DirectiveParser, ExclusionRuleParser, ParseError
from yabai_config.presets import PRESETS
from yabai_config.validate import find_all_conflicts, validate_binding_text, validate_directive_text

DEFAULT_CONFIG_PATH = Path(user_config_dir("yabai-config", appauthor=False)) / "config.yaml"


def _dump(data, args: Namespace) -> None:
    yaml.safe_dump(data, args.output, width=160, sort_keys=False, default_flow_style=None, allow_unicode=True)


def parse(args: Namespace, config: Config) -> None:
    """Call the appropriate parser for given args and dump the model to the output."""
    if args.yabairc:
        result = DirectiveParser(config.parse_config).parse(args.yabairc)
    elif args.exclusions:
        result = ExclusionRuleParser(config.parse_config).parse(args.exclusions)
    else:
        result = BindingParser(config.parse_config).parse(args.skhdrc)

    for diagnostic in result.diagnostics:
        logger.warning("%s", diagnostic)

    if isinstance(result.config, list):
        if args.json:
            args.output.write(dump_exclusion_rules(result.config) + "\n")
        else:
            _dump([rule.model_dump(mode="json") for rule in result.config], args)
    elif args.json:
        args.output.write(dump_model(result.config) + "\n")
    else:
        _dump(result.config.model_dump(mode="json"), args)


def generate(args: Namespace, config: Config) -> None:
    """Generate canonical configuration text from a YAML or JSON model file."""
    if args.preset:
        BindingGenerator(config.generate_config, args.output).print_config(PRESETS[args.preset].build())
        return

    if args.bindings:
        binding_config = load_binding_config(args.model.read(), from_yaml=True)
        BindingGenerator(config.generate_config, args.output).print_config(binding_config)
        return

    directive_config = load_directive_config(args.model.read(), from_yaml=True)
    exclusions = load_exclusion_rules(args.exclusions.read(), from_yaml=True) if args.exclusions else None
    DirectiveGenerator(config.generate_config, args.output).print_config(directive_config, exclusions)


def validate(args: Namespace, config: Config) -> None:
    """Print diagnostics for the given configuration text, exiting with an error if there are any."""
    if args.yabairc:
        diagnostics = validate_directive_text(args.yabairc.read(), config.parse_config.program)
    else:
        diagnostics = validate_binding_text(args.skhdrc.read())
    for diagnostic in diagnostics:
        print(diagnostic, file=args.output)
    if diagnostics:
        sys.exit(1)


def conflicts(args: Namespace, config: Config) -> None:
    """Print pairs of enabled bindings that share a hotkey, exiting with an error if there are any."""
    bindings = BindingParser(config.parse_config).parse(args.skhdrc).config.bindings
    pairs = find_all_conflicts(bindings)
    for first, second in pairs:
        print(f'{first.hotkey}: "{first.action}" conflicts with "{second.action}"', file=args.output)
    if pairs:
        sys.exit(1)


def dump_config(args: Namespace, config: Config) -> None:
    """Dump the currently active config, either default or parsed from args."""
    yaml.safe_dump(config.model_dump(), args.output, sort_keys=False, allow_unicode=True)


def _load_config(args: Namespace) -> Config:
    if args.config:
        return Config.model_validate(yaml.safe_load(args.config) or {})
    if DEFAULT_CONFIG_PATH.exists():
        logger.debug("reading config from %s", DEFAULT_CONFIG_PATH)
        with open(DEFAULT_CONFIG_PATH, encoding="utf-8") as f:
            return Config.model_validate(yaml.safe_load(f) or {})
    return Config()


def _add_output(parser: ArgumentParser) -> None:
    parser.add_argument(
        "-o",
        "--output",
        help="Output to path instead of stdout",
        type=FileType("wt", encoding="utf-8"),
        default=sys.stdout,
    )


def main() -> None:
    """Parse the configuration and run the given command."""
    parser = ArgumentParser(description=__doc__)
    parser.add_argument("-v", "--version", action="version", version=version("yabai-config"))
    parser.add_argument("-d", "--debug", action="store_true")
    parser.add_argument(
        "-c",
        "--config",
        help="A YAML file containing settings for parsing and generating, "
        f"default can be dumped using `dump-config` command and to be modified; read from {DEFAULT_CONFIG_PATH} "
        "if it exists and this is not given",
        type=FileType("rt", encoding="utf-8"),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_p = subparsers.add_parser("parse", help="parse directive or binding text into a model")
    srcs = parse_p.add_mutually_exclusive_group(required=True)
    srcs.add_argument("-y", "--yabairc", help="Directive text to parse", type=FileType("rt", encoding="utf-8"))
    srcs.add_argument(
        "-e",
        "--exclusions",
        help="Directive text to parse only the window rules of, as exclusion rules",
        type=FileType("rt", encoding="utf-8"),
    )
    srcs.add_argument("-s", "--skhdrc", help="Binding text to parse", type=FileType("rt", encoding="utf-8"))
    parse_p.add_argument("--json", help="Output the JSON exchange format instead of YAML", action="store_true")
    _add_output(parse_p)

    generate_p = subparsers.add_parser("generate", help="generate canonical configuration text from a model")
    models = generate_p.add_mutually_exclusive_group(required=True)
    models.add_argument(
        "model",
        help='YAML or JSON file (or stdin for "-") containing a directive config, or a binding config with -b',
        nargs="?",
        type=FileType("rt", encoding="utf-8"),
    )
    models.add_argument("-p", "--preset", help="Generate binding text for a preset binding set", choices=PRESETS)
    generate_p.add_argument("-b", "--bindings", help="The model is a binding config", action="store_true")
    generate_p.add_argument(
        "-x",
        "--exclusions",
        help="YAML or JSON file containing a list of exclusion rules to write with a directive config",
        type=FileType("rt", encoding="utf-8"),
    )
    _add_output(generate_p)

    validate_p = subparsers.add_parser("validate", help="check directive or binding text for problems")
    srcs = validate_p.add_mutually_exclusive_group(required=True)
    srcs.add_argument("-y", "--yabairc", help="Directive text to check", type=FileType("rt", encoding="utf-8"))
    srcs.add_argument("-s", "--skhdrc", help="Binding text to check", type=FileType("rt", encoding="utf-8"))
    _add_output(validate_p)

    conflicts_p = subparsers.add_parser("conflicts", help="list enabled bindings that share a hotkey")
    conflicts_p.add_argument("skhdrc", help="Binding text to check", type=FileType("rt", encoding="utf-8"))
    _add_output(conflicts_p)

    dump_p = subparsers.add_parser(
        "dump-config", help="dump default parse and generate config to stdout that can be passed to -c/--config option"
    )
    _add_output(dump_p)

    args = parser.parse_args()
    if args.debug:
        logger.setLevel(logging.DEBUG)

    config = _load_config(args)

    try:
        match args.command:
            case "parse":
                parse(args, config)
            case "generate":
                generate(args, config)
            case "validate":
                validate(args, config)
            case "conflicts":
                conflicts(args, config)
            case "dump-config":
                dump_config(args, config)
    except (ConfigLoadError, ParseError) as exc:
        logger.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
