"""
Module containing base parser class to parse configuration text into models.
Do not use directly, use DirectiveParser, ExclusionRuleParser or BindingParser instead.
"""

import logging
from abc import ABC
from typing import Generic, Iterator, TextIO, TypeVar

from yabai_config.config import ParseConfig
from yabai_config.diagnostics import ParseResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ParseError(Exception):
    """Error type for exceptions that happen while reading configuration text."""


class ConfigParser(ABC, Generic[T]):
    """
    Abstract base class for parsing configuration text. Parsers keep no state between
    calls, so a single instance can parse any number of inputs.
    """

    def __init__(self, config: ParseConfig | None = None):
        self.cfg = config if config is not None else ParseConfig()

    @staticmethod
    def _meaningful_lines(in_str: str) -> Iterator[tuple[int, str]]:
        """Yield 1-based line numbers and trimmed text of lines that are not blank or comments."""
        for line_number, line in enumerate(in_str.splitlines(), start=1):
            if (stripped := line.strip()) and not stripped.startswith("#"):
                yield line_number, stripped

    def _parse(self, in_str: str) -> ParseResult[T]:
        raise NotImplementedError

    def parse_str(self, in_str: str) -> ParseResult[T]:
        """Parse configuration text into a model plus diagnostics. Never raises on malformed lines."""
        result = self._parse(in_str)
        for diagnostic in result.diagnostics:
            logger.debug("%s", diagnostic)
        return result

    def parse(self, in_buf: TextIO) -> ParseResult[T]:
        """Wrapper to call parser on a file handle."""
        try:
            in_str = in_buf.read()
        except UnicodeDecodeError as exc:
            raise ParseError(f"Could not read {getattr(in_buf, 'name', 'input')} as text: {exc}") from exc
        return self.parse_str(in_str)
