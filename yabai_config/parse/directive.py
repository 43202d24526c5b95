"""Module containing classes to parse window manager directive text."""

import logging
import re
from typing import Any

from pydantic import ValidationError

from yabai_config.coerce import coerce_to, coerce_value, to_bool, to_int, to_str
from yabai_config.config import ParseConfig
from yabai_config.diagnostics import ParseResult
from yabai_config.directives import (
    SETTING_TYPES,
    DirectiveConfig,
    DirectiveSettings,
    ExclusionRule,
    Signal,
    SpaceConfig,
    WindowRule,
    strip_anchors,
)
from yabai_config.enums import WindowLayer
from yabai_config.properties import RawToken, read_value, strip_trailing_comment, tokenize_properties
from yabai_config.validate import validate_directive_text

from .parse import ConfigParser

logger = logging.getLogger(__name__)


def _layer(token: RawToken | None) -> WindowLayer | None:
    if token is None:
        return None
    if (layer := WindowLayer.lookup(token.text)) is None:
        logger.warning('ignoring unknown window layer "%s"', token.text)
    return layer


class DirectiveParser(ConfigParser[DirectiveConfig]):
    """
    Parser for directive text, e.g. a yabairc. Lines that do not start with the program name
    are ignored, and malformed directives are dropped rather than failing the parse; the
    diagnostics of the returned result describe what was wrong with them.
    """

    def __init__(self, config: ParseConfig | None = None):
        super().__init__(config)
        prefix = re.escape(self.cfg.program) + r"\s+-m\s+"
        self._space_config_re = re.compile(prefix + r"config\s+--space\s+(\S+)\s+(\S+)\s+(.+)")
        self._config_re = re.compile(prefix + r"config\s+([^-\s]\S*)\s+(.+)")
        self._space_label_re = re.compile(prefix + r"space\s+(\S+)\s+--label\s+(.+)")
        self._rule_re = re.compile(prefix + r"rule\s+--add\s+(.+)")
        self._signal_re = re.compile(prefix + r"signal\s+--add\s+(.+)")

    def _is_self_exclusion(self, rule: WindowRule) -> bool:
        """Check for the rule the generator writes to keep the editor itself unmanaged."""
        return (
            rule.app_name == self.cfg.self_exclusion_app
            and rule.title is None
            and rule.manage is False
            and rule.sticky is None
            and rule.layer is None
            and rule.space is None
        )

    @staticmethod
    def _build_rule(fragment: str, rule_id: str) -> WindowRule | None:
        properties = tokenize_properties(fragment)
        app, title = properties.get("app"), properties.get("title")
        if not (app and strip_anchors(app.text)) and not (title and title.text):
            logger.debug("dropping rule without app or title selector: %s", fragment)
            return None
        return WindowRule(
            id=rule_id,
            app_name=to_str(app),
            title=to_str(title) or None,
            manage=to_bool(properties.get("manage")),
            sticky=to_bool(properties.get("sticky")),
            layer=_layer(properties.get("layer")),
            space=to_int(properties.get("space")),
        )

    @staticmethod
    def _build_signal(fragment: str, signal_id: str) -> Signal | None:
        properties = tokenize_properties(fragment)
        event, action = to_str(properties.get("event")), to_str(properties.get("action"))
        if not event or not action or not action.strip():
            logger.debug("dropping signal without event or action: %s", fragment)
            return None
        return Signal(id=signal_id, event=event, action=action, label=to_str(properties.get("label")))

    def _space_override(self, spaces: dict[int, dict[str, Any]], index_str: str, key: str, value: str) -> None:
        index = to_int(index_str)
        if index is None or index < 1 or key not in SpaceConfig.OVERRIDE_KEYS:
            logger.debug('ignoring override "%s" for space "%s"', key, index_str)
            return
        if (coerced := coerce_to(coerce_value(value), SETTING_TYPES[key])) is None:
            logger.warning('unsupported value "%s" for "%s" of space %d', value, key, index)
            return
        spaces.setdefault(index, {})[key] = coerced

    @staticmethod
    def _build_spaces(spaces: dict[int, dict[str, Any]]) -> tuple[SpaceConfig, ...]:
        out = []
        for index in sorted(spaces):
            try:
                out.append(SpaceConfig(index=index, **spaces[index]))
            except ValidationError as exc:
                logger.warning("dropping configuration of space %d: %s", index, exc)
        return tuple(out)

    def _parse(self, in_str: str) -> ParseResult[DirectiveConfig]:
        raw_settings: dict[str, str] = {}
        rules: list[WindowRule] = []
        signals: list[Signal] = []
        spaces: dict[int, dict[str, Any]] = {}

        for _, line in self._meaningful_lines(in_str):
            if not line.startswith(self.cfg.program):
                continue
            line = strip_trailing_comment(line)

            if m := self._space_config_re.fullmatch(line):
                self._space_override(spaces, *m.groups())
            elif m := self._config_re.fullmatch(line):
                raw_settings[m.group(1)] = m.group(2).strip()
            elif m := self._space_label_re.fullmatch(line):
                if (index := to_int(m.group(1))) is not None and index >= 1:
                    spaces.setdefault(index, {})["label"] = read_value(m.group(2)).text
            elif m := self._rule_re.fullmatch(line):
                rule = self._build_rule(m.group(1), f"rule_{len(rules)}")
                if rule is not None and self._is_self_exclusion(rule):
                    logger.debug("skipping generated self exclusion rule")
                elif rule is not None:
                    rules.append(rule)
            elif m := self._signal_re.fullmatch(line):
                if (signal := self._build_signal(m.group(1), f"signal_{len(signals)}")) is not None:
                    signals.append(signal)

        config = DirectiveConfig(
            settings=DirectiveSettings.from_raw(raw_settings),
            rules=tuple(rules),
            signals=tuple(signals),
            spaces=self._build_spaces(spaces),
        )
        return ParseResult(config, validate_directive_text(in_str, self.cfg.program))


class ExclusionRuleParser(ConfigParser[list[ExclusionRule]]):
    """Parser that collects the rules of directive text as exclusion rules, keyed on app name."""

    def __init__(self, config: ParseConfig | None = None):
        super().__init__(config)
        self._rule_re = re.compile(re.escape(self.cfg.program) + r"\s+-m\s+rule\s+--add\s+(.+)")

    def _parse(self, in_str: str) -> ParseResult[list[ExclusionRule]]:
        exclusions: list[ExclusionRule] = []
        for _, line in self._meaningful_lines(in_str):
            if not (m := self._rule_re.fullmatch(strip_trailing_comment(line))):
                continue
            properties = tokenize_properties(m.group(1))
            if (app := properties.get("app")) is None or not strip_anchors(app.text):
                logger.debug("skipping rule without app selector: %s", line)
                continue
            exclusions.append(
                ExclusionRule(
                    id=f"exclusion_{len(exclusions)}",
                    app_name=app.text,
                    title_pattern=to_str(properties.get("title")) or None,
                    manage_off=to_bool(properties.get("manage")) is False,
                    sticky=to_bool(properties.get("sticky")) is True,
                    layer=_layer(properties.get("layer")) or WindowLayer.NORMAL,
                    assigned_space=to_int(properties.get("space")),
                )
            )
        return ParseResult(exclusions)
