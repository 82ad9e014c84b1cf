# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Style settings, base styles and theme styles of the core contributor."""

from __future__ import annotations

from codetint.core.constants import CORE_CONTRIBUTOR
from codetint.core.plugin import Plugin, ResolverContext
from codetint.core.style_resolving import StyleResolverContext
from codetint.core.style_settings import StyleSetting


def _palette(key: str):
    """Theme default reading one palette color (None when the theme lacks it)."""

    def read(context: StyleResolverContext) -> str | None:
        return context.theme.colors.get(key) or None

    return read


def _setting(path: str):
    """Default that mirrors another resolved setting."""

    def read(context: StyleResolverContext) -> str:
        return context.resolve_setting(path)

    return read


CORE_STYLE_SETTINGS: tuple[StyleSetting, ...] = (
    # Layout
    StyleSetting("borderRadius", default="0.3rem"),
    StyleSetting("borderWidth", default="1.5px"),
    StyleSetting("borderColor", theme_default=_palette("panel.border"), default=("#444d56", "#e1e4e8")),
    # Code
    StyleSetting(
        "codeFontFamily",
        default="ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, 'Liberation Mono', 'Courier New', monospace",
    ),
    StyleSetting("codeFontSize", default="0.85rem"),
    StyleSetting("codeFontWeight", default="400"),
    StyleSetting("codeLineHeight", default="1.65"),
    StyleSetting("codePaddingBlock", default="1rem"),
    StyleSetting("codePaddingInline", default="1.35rem"),
    StyleSetting("codeBackground", theme_default=_palette("editor.background"), default=("#24292e", "#ffffff")),
    StyleSetting("codeForeground", theme_default=_palette("editor.foreground"), default=("#e1e4e8", "#24292e")),
    StyleSetting(
        "codeSelectionBackground",
        theme_default=_palette("editor.selectionBackground"),
        default=("#3392ff44", "#0366d625"),
    ),
    # Gutter
    StyleSetting(
        "gutterForeground",
        theme_default=_palette("editorLineNumber.foreground"),
        default=("#6a737d", "#959da5"),
    ),
    StyleSetting("gutterBorderColor", default=_setting("borderColor")),
    # Scrollbars
    StyleSetting(
        "scrollbarThumbColor",
        theme_default=_palette("scrollbarSlider.background"),
        default=("#6a737d33", "#959da533"),
    ),
    StyleSetting(
        "scrollbarThumbHoverColor",
        theme_default=_palette("scrollbarSlider.hoverBackground"),
        default=("#6a737d44", "#959da544"),
    ),
    # UI
    StyleSetting(
        "uiFontFamily",
        default="-apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif",
    ),
    StyleSetting("uiFontSize", default="0.9rem"),
    StyleSetting("uiForeground", theme_default=_palette("foreground"), default=_setting("codeForeground")),
    StyleSetting("uiBackground", theme_default=_palette("tab.inactiveBackground"), default=_setting("codeBackground")),
    StyleSetting(
        "uiSelectionBackground",
        theme_default=_palette("menu.selectionBackground"),
        default=("#39414a", "#0366d6"),
    ),
    StyleSetting(
        "uiSelectionForeground",
        theme_default=_palette("menu.selectionForeground"),
        default=("#ffffff", "#ffffff"),
    ),
    StyleSetting("focusBorder", theme_default=_palette("focusBorder"), default=("#005cc5", "#2188ff")),
)


def core_plugin() -> Plugin:
    """The core contributor. Its base styles are built by the engine, which knows the flags."""
    return Plugin(name=CORE_CONTRIBUTOR, style_settings=CORE_STYLE_SETTINGS)


def get_core_base_styles(
    context: ResolverContext,
    use_style_reset: bool = True,
    use_themed_scrollbars: bool = True,
    use_themed_selection_colors: bool = False,
) -> str:
    """Theme-independent nested CSS for the code block scope."""
    var = context.css_var
    parts = []
    if use_style_reset:
        parts.append("all: revert;")
    parts.append(f"""
        position: relative;
        font-family: {var("uiFontFamily")};
        font-size: {var("uiFontSize")};
        color: {var("uiForeground")};

        & pre {{
            display: flex;
            margin: 0;
            padding: 0;
            border: {var("borderWidth")} solid {var("borderColor")};
            border-radius: {var("borderRadius")};
            background: {var("codeBackground")};
            overflow-x: auto;
        }}

        & pre:focus-visible {{
            outline: 3px solid {var("focusBorder")};
            outline-offset: -3px;
        }}

        & pre > code {{
            all: unset;
            display: block;
            flex: 1 0 100%;
            padding: {var("codePaddingBlock")} 0;
            color: {var("codeForeground")};
            font-family: {var("codeFontFamily")};
            font-size: {var("codeFontSize")};
            font-weight: {var("codeFontWeight")};
            line-height: {var("codeLineHeight")};
        }}

        & .ct-line {{
            padding-inline: {var("codePaddingInline")};
            white-space: pre;
        }}

        & .ct-gutter {{
            padding-inline-end: 1ch;
            border-inline-end: 1px solid {var("gutterBorderColor")};
            color: {var("gutterForeground")};
            user-select: none;
        }}
    """)
    if use_themed_scrollbars:
        parts.append(f"""
            & pre::-webkit-scrollbar,
            & pre::-webkit-scrollbar-track {{
                background-color: inherit;
                border-radius: calc({var("borderRadius")} + {var("borderWidth")});
                border-top-left-radius: 0;
                border-top-right-radius: 0;
            }}
            & pre::-webkit-scrollbar-thumb {{
                background-color: {var("scrollbarThumbColor")};
                border: 4px solid transparent;
                background-clip: content-box;
                border-radius: 10px;
            }}
            & pre::-webkit-scrollbar-thumb:hover {{
                background-color: {var("scrollbarThumbHoverColor")};
            }}
        """)
    if use_themed_selection_colors:
        parts.append(f"""
            & pre ::selection {{
                background: {var("codeSelectionBackground")};
            }}
        """)
    return "\n".join(parts)


def get_core_theme_styles(style_variant_index: int) -> str:
    """Non-variable styles that pick a style variant's inline token colors.

    Highlighted tokens carry one set of inline custom properties per style
    variant: --<i> (color), --<i>fs (font style), --<i>fw (font weight) and
    --<i>td (text decoration).
    """
    i = style_variant_index
    return f"""
        & .ct-line :where(span[style^='--']:not([class])) {{
            color: var(--{i}, inherit);
            font-style: var(--{i}fs, inherit);
            font-weight: var(--{i}fw, inherit);
            text-decoration: var(--{i}td, inherit);
        }}
    """
