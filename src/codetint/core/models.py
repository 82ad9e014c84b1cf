# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Data models for codetint."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from codetint.core.constants import FALLBACK_BACKGROUND, FALLBACK_FOREGROUND
from codetint.core.contrast import ensure_min_contrast
from codetint.utils.colors import is_dark_color
from codetint.utils.error_handler import ThemeValidationError

logger = logging.getLogger("codetint.models")


class ThemeType(Enum):
    """Whether a theme is meant for dark or light surroundings."""
    DARK = "dark"
    LIGHT = "light"

    @property
    def opposite(self) -> ThemeType:
        return ThemeType.LIGHT if self is ThemeType.DARK else ThemeType.DARK


@dataclass
class Theme:
    """A color theme: UI palette plus syntax highlighting colors.

    Instances are mutated during engine construction (contrast adjustment),
    so the engine always works on its own copies.
    """
    name: str
    type: ThemeType
    colors: dict[str, str] = field(default_factory=dict)
    syntax_colors: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.type, ThemeType):
            try:
                self.type = ThemeType(self.type)
            except ValueError as e:
                raise ThemeValidationError(
                    f"Theme {self.name!r} has invalid type {self.type!r}; expected 'dark' or 'light'"
                ) from e

    @property
    def bg(self) -> str:
        return self.colors.get("editor.background") or FALLBACK_BACKGROUND[self.type.value]

    @property
    def fg(self) -> str:
        return self.colors.get("editor.foreground") or FALLBACK_FOREGROUND[self.type.value]

    def copy(self) -> Theme:
        return copy.deepcopy(self)

    def ensure_min_syntax_highlighting_color_contrast(
        self, min_ratio: float, background: str | None = None
    ) -> None:
        """Adjust syntax colors in place to reach min_ratio against background (default: own bg)."""
        ensure_min_contrast(self, min_ratio, background if background is not None else self.bg)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type.value,
            "colors": dict(self.colors),
            "syntax_colors": dict(self.syntax_colors),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Theme:
        try:
            name = data["name"]
        except KeyError as e:
            raise ThemeValidationError(f"Theme missing required key: {e}") from e
        if not isinstance(name, str) or not name.strip():
            raise ThemeValidationError("Theme name must be a non-empty string")

        colors = _string_map(data.get("colors", {}), f"theme {name!r} colors")
        syntax_colors = _string_map(data.get("syntax_colors", {}), f"theme {name!r} syntax_colors")

        raw_type = data.get("type")
        if raw_type is None:
            # Guess from the editor background, defaulting to dark
            background = colors.get("editor.background")
            try:
                theme_type = (
                    ThemeType.DARK if not background or is_dark_color(background) else ThemeType.LIGHT
                )
            except ValueError:
                theme_type = ThemeType.DARK
            logger.debug("Theme %r has no type, inferred %s", name, theme_type.value)
        else:
            try:
                theme_type = ThemeType(raw_type)
            except ValueError as e:
                raise ThemeValidationError(
                    f"Theme {name!r} has invalid type {raw_type!r}; expected 'dark' or 'light'"
                ) from e

        return cls(name=name.strip(), type=theme_type, colors=colors, syntax_colors=syntax_colors)


def _string_map(raw: Any, context: str) -> dict[str, str]:
    if not isinstance(raw, Mapping):
        raise ThemeValidationError(f"{context} must be an object")
    result: dict[str, str] = {}
    for key, value in raw.items():
        if not isinstance(value, str):
            raise ThemeValidationError(f"{context}: {key!r} must be a string")
        result[str(key)] = value.strip()
    return result


@dataclass(frozen=True)
class StyleVariant:
    """The fully resolved CSS variable values for one configured theme."""
    theme: Theme
    style_variant_index: int
    css_var_declarations: Mapping[str, str]

    def __post_init__(self) -> None:
        # Read-only view over a private copy
        object.__setattr__(
            self, "css_var_declarations", MappingProxyType(dict(self.css_var_declarations))
        )
