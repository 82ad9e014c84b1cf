# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Built-in themes.

Each ThemePalette names the handful of base colors a theme needs; the full
Theme (UI palette keyed by editor color names plus syntax colors) is derived
from it on request, so callers always get a fresh instance they may mutate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from codetint.core.models import Theme, ThemeType
from codetint.utils.error_handler import ThemeValidationError

logger = logging.getLogger("codetint.themes")


@dataclass(frozen=True)
class ThemePalette:
    """Base colors a built-in theme derives from."""
    name: str
    type: ThemeType

    # Core background/foreground
    bg: str
    bg_alt: str       # title bars, inactive tabs
    text: str
    text_muted: str   # line numbers
    border: str

    # Accent colors
    accent: str       # focus ring, UI selection
    selection: str    # code selection, usually translucent
    scrollbar: str
    scrollbar_hover: str
    shadow: str

    # Syntax highlighting
    syn_comment: str
    syn_keyword: str
    syn_number: str
    syn_string: str
    syn_class: str
    syn_func: str
    syn_decorator: str
    syn_operator: str
    syn_variable: str


GITHUB_DARK = ThemePalette(
    name="github-dark", type=ThemeType.DARK,
    bg="#24292e", bg_alt="#1f2428", text="#e1e4e8", text_muted="#444d56",
    border="#1b1f23",
    accent="#005cc5", selection="#3392ff44",
    scrollbar="#6a737d33", scrollbar_hover="#6a737d44", shadow="#00000066",
    syn_comment="#6a737d", syn_keyword="#f97583", syn_number="#79b8ff",
    syn_string="#9ecbff", syn_class="#b392f0", syn_func="#b392f0",
    syn_decorator="#b392f0", syn_operator="#f97583", syn_variable="#ffab70",
)

GITHUB_LIGHT = ThemePalette(
    name="github-light", type=ThemeType.LIGHT,
    bg="#ffffff", bg_alt="#f6f8fa", text="#24292e", text_muted="#1b1f234d",
    border="#e1e4e8",
    accent="#2188ff", selection="#0366d625",
    scrollbar="#959da533", scrollbar_hover="#959da544", shadow="#0000001a",
    syn_comment="#6a737d", syn_keyword="#d73a49", syn_number="#005cc5",
    syn_string="#032f62", syn_class="#6f42c1", syn_func="#6f42c1",
    syn_decorator="#6f42c1", syn_operator="#d73a49", syn_variable="#e36209",
)

SEPIA = ThemePalette(
    name="sepia", type=ThemeType.LIGHT,
    bg="#f4ecd8", bg_alt="#efe6d0", text="#5b4636", text_muted="#9c8b74",
    border="#d4c5a9",
    accent="#7a5b10", selection="#8b691433",
    scrollbar="#9c8b7433", scrollbar_hover="#9c8b7455", shadow="#5b463633",
    syn_comment="#8a7862", syn_keyword="#8b6914", syn_number="#b85c3c",
    syn_string="#a0522d", syn_class="#6b3a2a", syn_func="#6b3a2a",
    syn_decorator="#7a5230", syn_operator="#5b4636", syn_variable="#6b4422",
)

PALETTES: dict[str, ThemePalette] = {
    "github-dark": GITHUB_DARK,
    "github-light": GITHUB_LIGHT,
    "sepia": SEPIA,
}


def _theme_from_palette(p: ThemePalette) -> Theme:
    """Generate a Theme from a built-in palette."""
    return Theme(
        name=p.name,
        type=p.type,
        colors={
            "editor.background": p.bg,
            "editor.foreground": p.text,
            "editor.selectionBackground": p.selection,
            "editorLineNumber.foreground": p.text_muted,
            "panel.border": p.border,
            "focusBorder": p.accent,
            "scrollbarSlider.background": p.scrollbar,
            "scrollbarSlider.hoverBackground": p.scrollbar_hover,
            "tab.activeBackground": p.bg,
            "tab.activeForeground": p.text,
            "tab.inactiveBackground": p.bg_alt,
            "titleBar.border": p.border,
            "widget.shadow": p.shadow,
        },
        syntax_colors={
            "comment": p.syn_comment,
            "keyword": p.syn_keyword,
            "number": p.syn_number,
            "string": p.syn_string,
            "class": p.syn_class,
            "function": p.syn_func,
            "decorator": p.syn_decorator,
            "operator": p.syn_operator,
            "variable": p.syn_variable,
        },
    )


def list_builtin_themes() -> list[str]:
    return list(PALETTES)


def get_theme(name: str) -> Theme:
    """Get a fresh Theme by name: a built-in palette, else a Pygments style."""
    palette = PALETTES.get(name)
    if palette is not None:
        return _theme_from_palette(palette)

    from codetint.themes.pygments_themes import list_pygments_styles, theme_from_pygments_style

    try:
        return theme_from_pygments_style(name)
    except ThemeValidationError:
        raise ThemeValidationError(
            f"Unknown theme {name!r}; built-in themes are: {', '.join(PALETTES)}; "
            f"Pygments styles are: {', '.join(list_pygments_styles())}"
        ) from None
