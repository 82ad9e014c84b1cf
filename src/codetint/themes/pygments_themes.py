# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Themes derived from Pygments styles."""

from __future__ import annotations

import logging

from pygments.style import StyleMeta
from pygments.styles import get_all_styles, get_style_by_name
from pygments.token import Comment, Keyword, Name, Number, Operator, String, Text, Token
from pygments.util import ClassNotFound

from codetint.core.models import Theme, ThemeType
from codetint.utils.colors import is_dark_color, parse_color
from codetint.utils.error_handler import ThemeValidationError

logger = logging.getLogger("codetint.themes")

_SYNTAX_TOKENS = {
    "comment": Comment,
    "keyword": Keyword,
    "number": Number,
    "string": String,
    "class": Name.Class,
    "function": Name.Function,
    "decorator": Name.Decorator,
    "operator": Operator,
    "variable": Name.Variable,
    "builtin": Name.Builtin,
}


def _hex(value: str | None) -> str | None:
    """Pygments colors come as "#abc", "abc" or things like "inherit"."""
    if not value:
        return None
    if not value.startswith("#"):
        value = f"#{value}"
    return value.lower() if parse_color(value) is not None else None


def _token_color(style: StyleMeta, token) -> str | None:
    return _hex(style.style_for_token(token).get("color"))


def list_pygments_styles() -> list[str]:
    return sorted(get_all_styles())


def theme_from_pygments_style(style_name: str, name: str | None = None) -> Theme:
    """Build a Theme from a Pygments style's background, text and token colors."""
    try:
        style = get_style_by_name(style_name)
    except ClassNotFound as e:
        raise ThemeValidationError(f"Unknown Pygments style {style_name!r}") from e

    bg = _hex(style.background_color) or "#ffffff"
    theme_type = ThemeType.DARK if is_dark_color(bg) else ThemeType.LIGHT
    fg = _token_color(style, Text) or _token_color(style, Token)
    if fg is None:
        fg = "#d4d4d4" if theme_type is ThemeType.DARK else "#333333"

    colors = {
        "editor.background": bg,
        "editor.foreground": fg,
    }
    selection = _hex(style.highlight_color)
    if selection:
        colors["editor.selectionBackground"] = selection
    line_numbers = _hex(getattr(style, "line_number_color", None))
    if line_numbers:
        colors["editorLineNumber.foreground"] = line_numbers

    syntax_colors = {}
    for kind, token in _SYNTAX_TOKENS.items():
        color = _token_color(style, token)
        if color:
            syntax_colors[kind] = color

    logger.debug("Built theme from Pygments style %r (%s, %d syntax colors)",
                 style_name, theme_type.value, len(syntax_colors))
    return Theme(name=name or style_name, type=theme_type, colors=colors, syntax_colors=syntax_colors)
