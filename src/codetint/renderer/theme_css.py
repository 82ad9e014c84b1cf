# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Differential theme stylesheet: base variables, alternate diffs, media query, selectors."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence, Union

from codetint.core.constants import DEFAULT_THEME_CSS_ROOT
from codetint.core.models import StyleVariant, Theme
from codetint.renderer.core_styles import get_core_theme_styles
from codetint.renderer.css import scope_and_minify_nested_css, wrap_in_cascade_layer
from codetint.utils.error_handler import ConfigurationError

logger = logging.getLogger("codetint.theme_css")

# Called with (theme, style_variants); a falsy result skips the theme
ThemeSelector = Callable[[Theme, Sequence[StyleVariant]], Union[str, bool, None]]


@dataclass(frozen=True)
class AlternateVariantStyles:
    """Render inputs for one alternate theme, before they become CSS."""
    theme: Theme
    style_variant_index: int
    css_vars: str
    core_styles: str


def render_declarations(declarations: Mapping[str, str]) -> str:
    return ";".join(f"{name}:{value}" for name, value in declarations.items())


def diff_declarations(base: Mapping[str, str], variant: Mapping[str, str]) -> dict[str, str]:
    """Declarations of variant whose value differs (string-exact) from base."""
    return {name: value for name, value in variant.items() if base.get(name) != value}


class ThemeCssEmitter:
    """Builds the theme-dependent stylesheet from resolved style variants.

    The first variant is the base theme and gets its full variable set on the
    root selector. Every other variant only declares what differs from it.
    """

    def __init__(
        self,
        style_variants: Sequence[StyleVariant],
        theme_css_root: str = DEFAULT_THEME_CSS_ROOT,
        theme_css_selector: ThemeSelector | bool = False,
        use_dark_mode_media_query: bool = False,
        cascade_layer: str = "",
        core_theme_styles: Callable[[int], str] = get_core_theme_styles,
    ) -> None:
        if not style_variants:
            raise ConfigurationError("At least one theme is required to emit theme styles")
        self.style_variants = list(style_variants)
        self.theme_css_root = theme_css_root
        self.theme_css_selector = theme_css_selector
        self.use_dark_mode_media_query = use_dark_mode_media_query
        self.cascade_layer = cascade_layer
        self.core_theme_styles = core_theme_styles

    def _selector_for(self, theme: Theme) -> str | None:
        if not callable(self.theme_css_selector):
            return None
        return self.theme_css_selector(theme, self.style_variants) or None

    def alternate_variants(self) -> list[AlternateVariantStyles]:
        base_vars = self.style_variants[0].css_var_declarations
        return [
            AlternateVariantStyles(
                theme=variant.theme,
                style_variant_index=variant.style_variant_index,
                css_vars=render_declarations(diff_declarations(base_vars, variant.css_var_declarations)),
                core_styles=self.core_theme_styles(variant.style_variant_index),
            )
            for variant in self.style_variants[1:]
        ]

    def emit(self) -> str:
        root = self.theme_css_root
        base = self.style_variants[0]

        # Lets a block explicitly request the base theme inside an alternate-themed root
        base_selector = self._selector_for(base.theme)
        not_base = f":not({base_selector})" if base_selector else ""
        base_inside_alternate = f"{root}{not_base} &{base_selector}" if not_base else ""

        base_var_selectors = ",".join(s for s in (root, base_inside_alternate) if s)
        base_style_selectors = ",".join(s for s in ("&", base_inside_alternate) if s)
        fragments = [
            scope_and_minify_nested_css(f"""
                {base_var_selectors} {{
                    {render_declarations(base.css_var_declarations)}
                }}
                {base_style_selectors} {{
                    {self.core_theme_styles(0)}
                }}
            """)
        ]

        alternates = self.alternate_variants()

        if self.use_dark_mode_media_query:
            alt_type = base.theme.type.opposite
            first_alt = next((a for a in alternates if a.theme.type is alt_type), None)
            if first_alt is None:
                themes = ", ".join(f"{v.theme.name} ({v.theme.type.value})" for v in self.style_variants)
                raise ConfigurationError(
                    'The option "use_dark_mode_media_query: True" requires at least one dark '
                    f"and one light theme, but the following themes were given: {themes}"
                )
            fragments.append(scope_and_minify_nested_css(f"""
                @media (prefers-color-scheme: {alt_type.value}) {{
                    {root}{not_base} {{
                        {first_alt.css_vars}
                    }}
                    {root}{not_base} & {{
                        {first_alt.core_styles}
                    }}
                }}
            """))

        if self.theme_css_selector is not False:
            for alt in alternates:
                selector = self._selector_for(alt.theme)
                if not selector:
                    logger.debug("No theme selector for %r, skipping its block", alt.theme.name)
                    continue
                css_vars = f"{alt.css_vars};" if alt.css_vars else ""
                fragments.append(scope_and_minify_nested_css(f"""
                    {root}{selector} &{not_base}, &{selector} {{
                        {css_vars}
                        {alt.core_styles}
                    }}
                """))

        return wrap_in_cascade_layer("".join(fragments), self.cascade_layer)
