"""
Module that contains the BindingGenerator class which writes a BindingConfig as
canonical hotkey binding text, grouped into category sections.
"""

from io import StringIO
from typing import TextIO

from yabai_config.bindings import BindingConfig, HotkeyBinding
from yabai_config.config import GenerateConfig
from yabai_config.enums import BindingCategory

_CATEGORY_ORDER = [category.value for category in BindingCategory]


def _category_sort_key(category: str | None) -> tuple[int, int]:
    # known categories first, then custom-named ones, then uncategorized bindings
    if category is None:
        return 2, 0
    if category in _CATEGORY_ORDER:
        return 0, _CATEGORY_ORDER.index(category)
    return 1, 0


def _category_title(category: str | None) -> str:
    if category is None:
        return "Uncategorized"
    if (known := BindingCategory.lookup(category)) is not None:
        return known.display_name
    return category


class BindingGenerator:
    """Class that writes hotkey binding text with one section per category."""

    def __init__(self, config: GenerateConfig, out: TextIO) -> None:
        self.cfg = config
        self.out = out

    def print_binding(self, binding: HotkeyBinding) -> None:
        """Print a binding, preceded by its description; disabled bindings are commented out."""
        if binding.description:
            description = " ".join(binding.description.splitlines()).strip()
            if description.startswith(("===", "[DISABLED]", "\\")):
                description = "\\" + description
            self.out.write(f"# {description}\n")
        prefix = "" if binding.enabled else "# [DISABLED] "
        self.out.write(f"{prefix}{binding.hotkey} : {binding.action}\n")

    def print_config(self, binding_config: BindingConfig) -> None:
        self.out.write(f"# {self.cfg.binding_title}\n")
        self.out.write(f"# Generated by {self.cfg.generator_name}\n\n")

        groups: dict[str | None, list[HotkeyBinding]] = {}
        for binding in binding_config.bindings:
            groups.setdefault(binding.category, []).append(binding)

        for category in sorted(groups, key=_category_sort_key):
            self.out.write(f"# === {_category_title(category)} ===\n")
            for binding in groups[category]:
                self.print_binding(binding)
            self.out.write("\n")


def generate_bindings(binding_config: BindingConfig, config: GenerateConfig | None = None) -> str:
    """Render hotkey binding text for the given config into a string."""
    out = StringIO()
    BindingGenerator(config if config is not None else GenerateConfig(), out).print_config(binding_config)
    return out.getvalue()
