"""Submodule containing parsers for directive and hotkey binding text."""

from .binding import BindingParser
from .directive import DirectiveParser, ExclusionRuleParser
from .parse import ParseError

__all__ = ["BindingParser", "DirectiveParser", "ExclusionRuleParser", "ParseError"]
