"""Submodule containing generators that write models back out as configuration text."""

from .binding import BindingGenerator, generate_bindings
from .directive import DirectiveGenerator, generate_directives

__all__ = ["BindingGenerator", "DirectiveGenerator", "generate_bindings", "generate_directives"]
