# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""The codetint engine: resolves themes once, then serves base CSS, theme CSS and JS modules."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from codetint.core.constants import CORE_CONTRIBUTOR
from codetint.core.config import EngineConfig, ResolvedEngineConfig, resolve_config
from codetint.core.models import StyleVariant, Theme
from codetint.core.plugin import Plugin, ResolverContext, resolve_contribution
from codetint.core.style_resolving import (
    find_unknown_override_paths,
    resolve_style_settings,
    resolve_style_variants,
)
from codetint.core.style_settings import StyleSettingPath, get_css_var_name
from codetint.renderer.core_styles import core_plugin, get_core_base_styles, get_core_theme_styles
from codetint.renderer.css import PluginStyles, process_plugin_styles, wrap_in_cascade_layer
from codetint.renderer.theme_css import ThemeCssEmitter
from codetint.utils.colors import first_static_color


class CodeTintEngine:
    """Generates the CSS and JS a page needs to display themed code blocks.

    Construction does all theme work up front: each configured theme is
    copied, customized, contrast-adjusted against its resolved code
    background and resolved into a StyleVariant. The accessors then only
    render text, so one engine can serve any number of pages.
    """

    def __init__(self, config: EngineConfig | Mapping[str, Any] | None = None) -> None:
        self._config: ResolvedEngineConfig = resolve_config(config)
        self.logger: logging.Logger = self._config.logger
        self.plugins: tuple[Plugin, ...] = (core_plugin(), *self._config.plugins)

        for path in find_unknown_override_paths(self._config.style_overrides, self.plugins):
            self.logger.warning(f"Style override {path!r} does not match any declared style setting")

        self.themes: tuple[Theme, ...] = tuple(
            self._prepare_theme(theme, index) for index, theme in enumerate(self._config.themes)
        )
        self.style_variants: tuple[StyleVariant, ...] = tuple(
            resolve_style_variants(self.themes, self._config.style_overrides, self.plugins, get_css_var_name)
        )
        self.logger.debug(
            "Engine ready: %d theme(s), %d plugin(s)", len(self.themes), len(self.plugins) - 1
        )

    def _prepare_theme(self, theme: Theme, style_variant_index: int) -> Theme:
        # The engine owns its themes; callers may reuse theirs elsewhere
        theme = theme.copy()
        if self._config.customize_theme is not None:
            customized = self._config.customize_theme(theme)
            if customized is not None and customized is not theme:
                theme = customized.copy()

        min_contrast = self._config.min_syntax_highlighting_color_contrast
        if min_contrast > 0:
            # Contrast is checked against the code background after overrides
            settings = resolve_style_settings(
                theme, style_variant_index, self.plugins, self._config.style_overrides
            )
            code_bg = first_static_color(settings.get("codeBackground"))
            if code_bg is None:
                self.logger.warning(
                    f"Cannot ensure syntax color contrast for theme {theme.name!r}: "
                    f"code background {settings.get('codeBackground')!r} is not a concrete color"
                )
            else:
                theme.ensure_min_syntax_highlighting_color_contrast(min_contrast, code_bg)
        return theme

    # --- Resolved options ---

    @property
    def config(self) -> ResolvedEngineConfig:
        return self._config

    @property
    def min_syntax_highlighting_color_contrast(self) -> float:
        return self._config.min_syntax_highlighting_color_contrast

    @property
    def use_dark_mode_media_query(self) -> bool:
        return self._config.use_dark_mode_media_query

    @property
    def theme_css_root(self) -> str:
        return self._config.theme_css_root

    @property
    def theme_css_selector(self) -> Callable[..., Any] | bool:
        return self._config.theme_css_selector

    @property
    def cascade_layer(self) -> str:
        return self._config.cascade_layer

    @property
    def use_style_reset(self) -> bool:
        return self._config.use_style_reset

    @property
    def use_themed_scrollbars(self) -> bool:
        return self._config.use_themed_scrollbars

    @property
    def use_themed_selection_colors(self) -> bool:
        return self._config.use_themed_selection_colors

    @property
    def style_overrides(self) -> Mapping[str, Any]:
        return self._config.style_overrides

    # --- Output ---

    def css_var(self, path: str | StyleSettingPath, fallback: str | None = None) -> str:
        """Reference a style setting's CSS variable, e.g. var(--ct-code-background)."""
        name = get_css_var_name(path)
        return f"var({name}, {fallback})" if fallback else f"var({name})"

    def get_resolver_context(self) -> ResolverContext:
        return ResolverContext(
            css_var=self.css_var,
            css_var_name=get_css_var_name,
            style_variants=self.style_variants,
        )

    async def get_base_styles(self) -> str:
        """Theme-independent styles for every page, core first, then plugins in order."""
        context = self.get_resolver_context()
        plugin_styles = [
            PluginStyles(
                plugin_name=CORE_CONTRIBUTOR,
                styles=get_core_base_styles(
                    context,
                    use_style_reset=self.use_style_reset,
                    use_themed_scrollbars=self.use_themed_scrollbars,
                    use_themed_selection_colors=self.use_themed_selection_colors,
                ),
            )
        ]
        for plugin in self.plugins[1:]:
            styles = await resolve_contribution(plugin.base_styles, context)
            if not styles:
                continue
            plugin_styles.append(PluginStyles(plugin_name=plugin.name, styles=styles))

        processed = process_plugin_styles(plugin_styles)
        return wrap_in_cascade_layer("".join(processed), self.cascade_layer)

    async def get_theme_styles(self) -> str:
        """The differential stylesheet switching between the configured themes."""
        emitter = ThemeCssEmitter(
            self.style_variants,
            theme_css_root=self.theme_css_root,
            theme_css_selector=self.theme_css_selector,
            use_dark_mode_media_query=self.use_dark_mode_media_query,
            cascade_layer=self.cascade_layer,
            core_theme_styles=get_core_theme_styles,
        )
        return emitter.emit()

    async def get_js_modules(self) -> list[str]:
        """JS module sources of all plugins, trimmed and without duplicates."""
        modules: list[str] = []
        for plugin in self.plugins:
            plugin_modules = await resolve_contribution(plugin.js_modules, self.get_resolver_context())
            if isinstance(plugin_modules, str):
                plugin_modules = [plugin_modules]
            for module in plugin_modules or ():
                module = module.strip()
                if module and module not in modules:
                    modules.append(module)
        return modules
