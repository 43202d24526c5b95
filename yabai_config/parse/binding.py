"""Module containing class to parse hotkey binding text, e.g. an skhdrc."""

import logging
import re

from yabai_config.bindings import BindingConfig, HotkeyBinding, parse_hotkey_line
from yabai_config.classify import resolve_category
from yabai_config.diagnostics import ParseResult
from yabai_config.enums import BindingCategory
from yabai_config.validate import validate_binding_text

from .parse import ConfigParser

logger = logging.getLogger(__name__)


class BindingParser(ConfigParser[BindingConfig]):
    """
    Parser for hotkey binding text. `# === Name ===` markers set the category of the bindings
    that follow, a plain comment right above a binding becomes its description and
    `# [DISABLED]` lines are read as disabled bindings.

    Bindings before the first marker get a category inferred from their action, while
    bindings under an `Uncategorized` marker have none.
    """

    _category_re = re.compile(r"#\s*===\s*(.+?)\s*===")
    _disabled_re = re.compile(r"#\s*\[DISABLED\]\s*(.*)")

    @staticmethod
    def _category_context(name: str) -> str | None:
        if (category := BindingCategory.lookup(name)) is not None:
            return category.value
        if name.lower() == "uncategorized":
            return None
        return name

    @staticmethod
    def _description(comment: str) -> str | None:
        text = comment[1:].strip()
        # a leading backslash escapes descriptions that would read as markers
        return text.removeprefix("\\") or None

    def _parse(self, in_str: str) -> ParseResult[BindingConfig]:
        bindings: list[HotkeyBinding] = []
        category: str | None = None
        in_section = False
        pending_description: str | None = None

        for line in in_str.splitlines():
            stripped = line.strip()
            enabled = True

            if m := self._category_re.match(stripped):
                category, in_section = self._category_context(m.group(1)), True
                pending_description = None
                continue
            if m := self._disabled_re.fullmatch(stripped):
                if not self.cfg.parse_disabled_bindings:
                    logger.debug("dropping disabled binding: %s", stripped)
                    pending_description = None
                    continue
                stripped, enabled = m.group(1), False
            elif stripped.startswith("#"):
                pending_description = self._description(stripped)
                continue

            parsed = None if stripped.startswith("::") else parse_hotkey_line(stripped)
            if parsed is not None:
                modifiers, key, action = parsed
                bindings.append(
                    HotkeyBinding(
                        id=f"binding_{len(bindings)}",
                        modifiers=modifiers,
                        key=key,
                        action=action,
                        category=category if in_section else resolve_category(None, action, self.cfg.program),
                        description=pending_description,
                        enabled=enabled,
                    )
                )
            elif stripped:
                logger.debug("skipping line that is not a binding: %s", stripped)
            pending_description = None

        return ParseResult(BindingConfig(bindings=tuple(bindings)), validate_binding_text(in_str))
