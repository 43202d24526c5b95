"""
Module containing the tokenizer for `key=value key2="quoted value"` property
fragments, as used by rule and signal directives.
"""

import logging
import re
from dataclasses import dataclass

import pyparsing as pp

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RawToken:
    """A property value as written in source, remembering whether it was quoted."""

    text: str
    quoted: bool = False

    def __str__(self) -> str:
        return self.text


_escape_re = re.compile(r'\\([\\"])')

# inside double quotes only \\ and \" are escapes, any other backslash is kept as written
_DOUBLE_QUOTED = pp.QuotedString('"', esc_char="\\", unquote_results=False).set_parse_action(
    lambda toks: RawToken(_escape_re.sub(r"\1", toks[0][1:-1]), quoted=True)
)
_SINGLE_QUOTED = pp.QuotedString("'", convert_whitespace_escapes=False).set_parse_action(
    lambda toks: RawToken(toks[0], quoted=True)
)
_BARE = pp.Regex(r"\S+").set_parse_action(lambda toks: RawToken(toks[0]))
_PROPERTY = (
    pp.Word(pp.alphanums + "_")
    + pp.Literal("=").leave_whitespace().suppress()
    + (_DOUBLE_QUOTED | _SINGLE_QUOTED | _BARE).leave_whitespace()
)


def tokenize_properties(fragment: str) -> dict[str, RawToken]:
    """
    Split a property fragment into an ordered mapping of keys to raw tokens.

    Keys keep the order of their first occurrence while a repeated key takes the
    last value. Text that is not part of a `key=value` pair is skipped, so a
    fragment without any pairs yields an empty mapping.
    """
    properties: dict[str, RawToken] = {}
    for toks, _, _ in _PROPERTY.scan_string(fragment):
        properties[toks[0]] = toks[1]
    logger.debug("tokenized %r into %s", fragment, properties)
    return properties


def read_value(text: str) -> RawToken:
    """Read a single value that may be quoted, e.g. a space label."""
    text = text.strip()
    try:
        return (_DOUBLE_QUOTED | _SINGLE_QUOTED).parse_string(text, parse_all=True)[0]
    except pp.ParseException:
        return RawToken(text)


def quote_value(text: str) -> str:
    """
    Quote a value for emission, preferring double quotes unless the value contains one.
    Values with both kinds of quotes are double quoted with `\\` and `"` escaped.
    """
    if '"' in text and "'" not in text:
        return f"'{text}'"
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def strip_trailing_comment(line: str) -> str:
    """Remove a ` #` trailing comment that is not inside a quoted value."""
    quote: str | None = None
    escaped = False
    for ind, char in enumerate(line):
        if escaped:
            escaped = False
        elif quote == '"' and char == "\\":
            escaped = True
        elif quote is not None:
            if char == quote:
                quote = None
        elif char in ('"', "'"):
            quote = char
        elif char == "#" and ind > 0 and line[ind - 1].isspace():
            return line[:ind].rstrip()
    return line
