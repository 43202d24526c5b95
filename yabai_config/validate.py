"""
Module containing line-level validators for directive and binding text, and
hotkey conflict detection over bindings.
"""

import logging
import re
from typing import Iterable

from yabai_config.bindings import HotkeyBinding, normalize_modifiers, parse_hotkey_line
from yabai_config.coerce import coerce_to, coerce_value
from yabai_config.diagnostics import Diagnostic
from yabai_config.directives import SETTING_TYPES
from yabai_config.properties import strip_trailing_comment, tokenize_properties

logger = logging.getLogger(__name__)

_domain_re = re.compile(r"\s-m\s+(\S+)")
_config_re = re.compile(r"-m\s+config\s+(\S+)\s+(.+)")
_space_config_re = re.compile(r"-m\s+config\s+--space\s+\S+\s+\S+\s+\S+")


def _check_command(line: str, program: str) -> list[str]:
    """Return the problems found in a single command line of the window manager."""
    if not (m := _domain_re.search(line)):
        return [f"Missing -m flag in {program} command"]
    tokens = line.split()
    match m.group(1):
        case "config":
            if not (cm := _config_re.search(line)):
                return ["Invalid config command format"]
            key, value = cm.group(1), cm.group(2).strip()
            if key == "--space":
                return [] if _space_config_re.search(line) else ["Invalid config command format"]
            if (target := SETTING_TYPES.get(key)) is not None and target is not str:
                if coerce_to(coerce_value(value), target) is None:
                    return [f'Unsupported value "{value}" for setting "{key}"']
        case "rule":
            if "--add" not in tokens and "--remove" not in tokens:
                return ["Rule command missing --add or --remove"]
        case "signal":
            if "--add" not in tokens and "--remove" not in tokens:
                return ["Signal command missing --add or --remove"]
            if "--add" in tokens:
                properties = tokenize_properties(line.split("--add", 1)[1])
                problems = []
                if "event" not in properties:
                    problems.append("Signal --add missing event parameter")
                if "action" not in properties:
                    problems.append("Signal --add missing action parameter")
                return problems
    return []


def validate_directive_text(text: str, program: str = "yabai") -> list[Diagnostic]:
    """
    Check directive text line by line and return one diagnostic per problem found.
    Blank lines, comments and shell lines such as `echo` or variable assignments are accepted.
    """
    diagnostics = []
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith(program + " "):
            for message in _check_command(strip_trailing_comment(line), program):
                diagnostics.append(Diagnostic(line_number, message, line))
        elif not line.startswith("echo ") and "=" not in line:
            diagnostics.append(Diagnostic(line_number, "Unrecognized command", line))
    logger.debug("found %d problem(s) in directive text", len(diagnostics))
    return diagnostics


def validate_binding_text(text: str) -> list[Diagnostic]:
    """Check binding text line by line; comments, blank lines and `::` mode declarations are skipped."""
    diagnostics = []
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith(("#", "::")):
            continue
        if ":" not in line:
            diagnostics.append(Diagnostic(line_number, 'Missing command separator ":"', line))
        elif parse_hotkey_line(line) is None:
            diagnostics.append(Diagnostic(line_number, "Invalid shortcut format", line))
    logger.debug("found %d problem(s) in binding text", len(diagnostics))
    return diagnostics


def find_conflicts(
    bindings: Iterable[HotkeyBinding], modifiers: Iterable[str], key: str, excluding: str | None = None
) -> list[HotkeyBinding]:
    """
    Find enabled bindings that use the same hotkey, comparing modifiers as a case-insensitive
    set and keys case-insensitively. A binding with id `excluding` is never reported, so that
    a binding being edited does not conflict with itself.
    """
    signature = normalize_modifiers(modifiers), key.lower()
    return [
        binding
        for binding in bindings
        if binding.enabled and binding.id != excluding and binding.signature == signature
    ]


def has_conflict(
    bindings: Iterable[HotkeyBinding], modifiers: Iterable[str], key: str, excluding: str | None = None
) -> bool:
    return bool(find_conflicts(bindings, modifiers, key, excluding))


def find_all_conflicts(bindings: Iterable[HotkeyBinding]) -> list[tuple[HotkeyBinding, HotkeyBinding]]:
    """Return every pair of enabled bindings sharing a hotkey, earlier binding first."""
    seen: dict[tuple[tuple[str, ...], str], list[HotkeyBinding]] = {}
    pairs = []
    for binding in bindings:
        if not binding.enabled:
            continue
        previous = seen.setdefault(binding.signature, [])
        pairs.extend((other, binding) for other in previous)
        previous.append(binding)
    return pairs
