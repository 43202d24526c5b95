"""
Module containing the JSON exchange format of the models, with snake_case field names
throughout. Loading fails with InvalidJsonError for malformed JSON and with
InvalidShapeError for well-formed JSON that does not describe the expected model. Model
files written by hand can be read as YAML as well.
"""

import json
import logging
from typing import Any, Callable, TypeVar

import yaml
from pydantic import BaseModel, TypeAdapter, ValidationError

from yabai_config.bindings import BindingConfig
from yabai_config.diagnostics import InvalidJsonError, InvalidShapeError
from yabai_config.directives import DirectiveConfig, ExclusionRule

logger = logging.getLogger(__name__)

T = TypeVar("T")

_exclusions_adapter = TypeAdapter(list[ExclusionRule])


def _load(text: str, validate: Callable[[Any], T], what: str, from_yaml: bool) -> T:
    try:
        data = yaml.safe_load(text) if from_yaml else json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise InvalidJsonError(f"Could not decode {what}: {exc}") from exc
    try:
        return validate(data)
    except ValidationError as exc:
        logger.debug("validation errors: %s", exc.errors())
        raise InvalidShapeError(f"Input does not describe a valid {what}: {exc}") from exc


def load_directive_config(text: str, from_yaml: bool = False) -> DirectiveConfig:
    return _load(text, DirectiveConfig.model_validate, "directive config", from_yaml)


def load_binding_config(text: str, from_yaml: bool = False) -> BindingConfig:
    return _load(text, BindingConfig.model_validate, "binding config", from_yaml)


def load_exclusion_rules(text: str, from_yaml: bool = False) -> list[ExclusionRule]:
    """Load a list of exclusion rules; `from_yaml` also accepts YAML, which JSON is a subset of."""
    return _load(text, _exclusions_adapter.validate_python, "exclusion rule list", from_yaml)


def dump_model(model: BaseModel, indent: int | None = 2) -> str:
    """Serialize a directive or binding config to JSON."""
    return model.model_dump_json(indent=indent)


def dump_exclusion_rules(exclusions: list[ExclusionRule], indent: int | None = 2) -> str:
    return _exclusions_adapter.dump_json(exclusions, indent=indent).decode()
