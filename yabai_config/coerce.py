"""
Module containing helpers to coerce raw directive tokens into scalars, and scalars
into the declared type of a setting or property.
"""

import re
from typing import Any

from yabai_config.enums import DisplayEnum
from yabai_config.properties import RawToken

Scalar = bool | int | float | str

TRUE_LITERALS = frozenset(("on", "yes", "true"))
FALSE_LITERALS = frozenset(("off", "no", "false"))

_int_re = re.compile(r"[+-]?\d+")
_float_re = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")


def coerce_value(token: RawToken | str) -> Scalar:
    """
    Coerce a raw token into a scalar, trying in order: boolean literals, integer,
    float, a string with one layer of matching quotes stripped and finally the raw text.

    Tokens that were quoted in a property fragment are always returned as strings.
    """
    if isinstance(token, RawToken):
        if token.quoted:
            return token.text
        text = token.text
    else:
        text = token.strip()

    if text in TRUE_LITERALS:
        return True
    if text in FALSE_LITERALS:
        return False
    if _int_re.fullmatch(text):
        return int(text)
    if _float_re.fullmatch(text):
        return float(text)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'"):
        return text[1:-1]
    return text


def coerce_properties(properties: dict[str, RawToken]) -> dict[str, Scalar]:
    """Coerce every token of a tokenized property fragment, keeping key order."""
    return {key: coerce_value(token) for key, token in properties.items()}


def to_bool(value: Scalar | RawToken | None) -> bool | None:
    """Interpret a scalar as a boolean, accepting the on/yes/true and off/no/false literals directly."""
    if isinstance(value, RawToken):
        value = value.text
    match value:
        case bool():
            return value
        case str():
            folded = value.strip().lower()
            if folded in TRUE_LITERALS:
                return True
            if folded in FALSE_LITERALS:
                return False
    return None


def to_int(value: Scalar | RawToken | None) -> int | None:
    if isinstance(value, RawToken):
        value = value.text
    match value:
        case bool():
            return None
        case int():
            return value
        case float() if value.is_integer():
            return int(value)
        case str() if _int_re.fullmatch(value.strip()):
            return int(value)
    return None


def to_float(value: Scalar | RawToken | None) -> float | None:
    if isinstance(value, RawToken):
        value = value.text
    match value:
        case bool():
            return None
        case int() | float():
            return float(value)
        case str() if _float_re.fullmatch(value.strip()):
            return float(value)
    return None


def to_str(value: Scalar | RawToken | None) -> str | None:
    """Render a scalar as string, using the on/off vocabulary for booleans."""
    match value:
        case None:
            return None
        case RawToken():
            return value.text
        case bool():
            return "on" if value else "off"
    return str(value)


def coerce_to(value: Scalar | RawToken | None, target: type) -> Any:
    """Coerce a scalar to the given target type, returning None if it cannot be represented."""
    if target is bool:
        return to_bool(value)
    if target is int:
        return to_int(value)
    if target is float:
        return to_float(value)
    if issubclass(target, DisplayEnum):
        return target.lookup(to_str(value))
    return to_str(value)


def format_value(value: Any) -> str:
    """Format a typed value for emission in directive text."""
    return to_str(value) or ""
