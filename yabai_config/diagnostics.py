"""Module with the diagnostic and parse result types shared by parsers and validators."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A problem found on a single line of configuration text."""

    line_number: int  # 1-based
    message: str
    line: str

    def __str__(self) -> str:
        return f"Line {self.line_number}: {self.message}\n  {self.line}"


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[T]):
    """Best-effort model parsed from text, paired with the diagnostics collected on the way."""

    config: T
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


class ConfigLoadError(Exception):
    """Error type for failures loading a model from its JSON exchange format."""


class InvalidJsonError(ConfigLoadError):
    """The input is not valid JSON (or YAML, when reading model files)."""


class InvalidShapeError(ConfigLoadError):
    """The input is valid JSON but does not describe the expected model."""
