# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Frames plugin: editor-style title bars with an optional copy button."""

from __future__ import annotations

from codetint.core.plugin import Plugin, ResolverContext
from codetint.core.style_resolving import StyleResolverContext
from codetint.core.style_settings import StyleSetting

PLUGIN_NAME = "frames"


def _palette(key: str, fallback: str | None = None):
    def read(context: StyleResolverContext) -> str | None:
        return context.theme.colors.get(key) or fallback

    return read


def _box_shadow(context: StyleResolverContext) -> str:
    return f"0.1rem 0.1rem 0.2rem {context.resolve_setting('frames.shadowColor')}"


FRAMES_STYLE_SETTINGS = (
    StyleSetting("shadowColor", theme_default=_palette("widget.shadow"), default=("#00000066", "#0000001a")),
    StyleSetting("frameBoxShadowCssValue", default=_box_shadow),
    StyleSetting(
        "editorActiveTabBackground",
        theme_default=_palette("tab.activeBackground"),
        default=lambda context: context.resolve_setting("codeBackground"),
    ),
    StyleSetting(
        "editorActiveTabForeground",
        theme_default=_palette("tab.activeForeground"),
        default=lambda context: context.resolve_setting("codeForeground"),
    ),
    StyleSetting(
        "editorTabBarBackground",
        theme_default=_palette("tab.inactiveBackground"),
        default=("#1f2428", "#f6f8fa"),
    ),
    StyleSetting(
        "titleBarBorderBottomColor",
        theme_default=_palette("titleBar.border"),
        default=lambda context: context.resolve_setting("borderColor"),
    ),
    StyleSetting("tooltipSuccessBackground", default=("#158744", "#1a7f37")),
    StyleSetting("tooltipSuccessForeground", default="white"),
)

COPY_BUTTON_MODULE = """
function ctCopy(button) {
  const code = button.closest('.codetint').querySelector('pre > code');
  navigator.clipboard.writeText(code.innerText).then(() => {
    button.dataset.copied = 'true';
    setTimeout(() => delete button.dataset.copied, 1500);
  });
}
document.addEventListener('click', (event) => {
  const button = event.target.closest('.codetint .ct-copy');
  if (button) ctCopy(button);
});
"""


def _base_styles(context: ResolverContext, show_copy_button: bool) -> str:
    var = context.css_var
    styles = f"""
        & .ct-frame {{
            position: relative;
            box-shadow: {var("frames.frameBoxShadowCssValue")};
            border-radius: {var("borderRadius")};
        }}
        & .ct-frame .ct-header {{
            display: flex;
            padding: 0.4rem {var("codePaddingInline")};
            background: {var("frames.editorTabBarBackground")};
            border-bottom: 1px solid {var("frames.titleBarBorderBottomColor")};
        }}
        & .ct-frame .ct-title {{
            color: {var("frames.editorActiveTabForeground")};
            background: {var("frames.editorActiveTabBackground")};
            font-family: {var("uiFontFamily")};
        }}
    """
    if show_copy_button:
        styles += f"""
            & .ct-copy {{
                position: absolute;
                inset-block-start: 0.5rem;
                inset-inline-end: 0.5rem;
                color: {var("uiForeground")};
                background: transparent;
                border: 1px solid {var("borderColor")};
                cursor: pointer;
            }}
            & .ct-copy[data-copied] {{
                color: {var("frames.tooltipSuccessForeground")};
                background: {var("frames.tooltipSuccessBackground")};
            }}
        """
    return styles


def frames_plugin(show_copy_button: bool = True) -> Plugin:
    return Plugin(
        name=PLUGIN_NAME,
        style_settings=FRAMES_STYLE_SETTINGS,
        base_styles=lambda context: _base_styles(context, show_copy_button),
        js_modules=[COPY_BUTTON_MODULE] if show_copy_button else None,
    )
