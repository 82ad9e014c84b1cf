# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Resolve declared style settings into per-theme style variants.

Precedence for every declared path:
    1. per-theme-type override (the "dark"/"light" subtrees of the overrides)
    2. global override
    3. the contributor's theme-derived default
    4. the contributor's static default
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from codetint.core.models import StyleVariant, Theme, ThemeType
from codetint.core.plugin import Plugin
from codetint.core.style_settings import (
    StyleOverrides,
    StyleSetting,
    canonical_path,
    flatten_style_overrides,
    get_css_var_name,
    is_theme_type_pair,
)
from codetint.utils.error_handler import ConfigurationError, StyleResolutionError

logger = logging.getLogger("codetint.resolver")


@dataclass(frozen=True)
class StyleResolverContext:
    """Passed to theme defaults and computed values."""
    theme: Theme
    style_variant_index: int
    resolve_setting: Callable[[str], str]


@dataclass(frozen=True)
class DeclaredSetting:
    contributor: str
    setting: StyleSetting


def collect_style_settings(contributors: Sequence[Plugin]) -> dict[str, DeclaredSetting]:
    """Gather declared settings in contributor order, rejecting duplicate paths."""
    declared: dict[str, DeclaredSetting] = {}
    for contributor in contributors:
        for path, setting in zip(contributor.setting_paths, contributor.style_settings):
            key = str(path)
            existing = declared.get(key)
            if existing is not None:
                raise ConfigurationError(
                    f"Style setting {key!r} is declared by both "
                    f"{existing.contributor!r} and {contributor.name!r}"
                )
            declared[key] = DeclaredSetting(contributor.name, setting)
    return declared


def find_unknown_override_paths(
    style_overrides: StyleOverrides | None, contributors: Sequence[Plugin]
) -> list[str]:
    """Override paths that no contributor declares."""
    declared = collect_style_settings(contributors)
    global_overrides, by_theme_type = flatten_style_overrides(style_overrides)
    paths = list(global_overrides)
    for type_overrides in by_theme_type.values():
        paths.extend(p for p in type_overrides if p not in paths)
    return [p for p in paths if p not in declared]


class _SettingResolver:
    """Resolves the settings of one theme, memoizing and detecting cycles."""

    def __init__(
        self,
        theme: Theme,
        style_variant_index: int,
        declared: dict[str, DeclaredSetting],
        global_overrides: dict[str, Any],
        type_overrides: dict[str, Any],
    ) -> None:
        self.theme = theme
        self.declared = declared
        self.global_overrides = global_overrides
        self.type_overrides = type_overrides
        self.resolved: dict[str, str] = {}
        self._in_progress: list[str] = []
        self.context = StyleResolverContext(
            theme=theme,
            style_variant_index=style_variant_index,
            resolve_setting=self.resolve,
        )

    def resolve(self, path: str) -> str:
        key = canonical_path(path)
        if key in self.resolved:
            return self.resolved[key]
        if key not in self.declared:
            raise StyleResolutionError(f"Unknown style setting {key!r}")
        if key in self._in_progress:
            chain = " -> ".join([*self._in_progress, key])
            raise StyleResolutionError(f"Circular style setting reference: {chain}")

        self._in_progress.append(key)
        try:
            value = self._resolve_value(key)
        finally:
            self._in_progress.pop()
        self.resolved[key] = value
        return value

    def _evaluate(self, value: Any) -> Any:
        if is_theme_type_pair(value):
            value = value[0] if self.theme.type is ThemeType.DARK else value[1]
        if callable(value):
            value = value(self.context)
            if is_theme_type_pair(value):
                value = value[0] if self.theme.type is ThemeType.DARK else value[1]
        return value

    def _resolve_value(self, key: str) -> str:
        declared = self.declared[key]
        setting = declared.setting
        tiers: list[Any] = []
        if key in self.type_overrides:
            tiers.append(self.type_overrides[key])
        if key in self.global_overrides:
            tiers.append(self.global_overrides[key])
        if setting.theme_default is not None:
            tiers.append(setting.theme_default)
        tiers.append(setting.default)

        for raw in tiers:
            value = self._evaluate(raw)
            if value is not None:
                return str(value)
        raise StyleResolutionError(
            f"Style setting {key!r} of contributor {declared.contributor!r} has no value "
            f"for theme {self.theme.name!r}: no override, theme default or static default"
        )


def resolve_style_settings(
    theme: Theme,
    style_variant_index: int,
    contributors: Sequence[Plugin],
    style_overrides: StyleOverrides | None = None,
) -> dict[str, str]:
    """Resolve every declared setting for one theme, in declaration order."""
    declared = collect_style_settings(contributors)
    global_overrides, by_theme_type = flatten_style_overrides(style_overrides)
    resolver = _SettingResolver(
        theme,
        style_variant_index,
        declared,
        global_overrides,
        by_theme_type[theme.type.value],
    )
    for key in declared:
        resolver.resolve(key)
    return {key: resolver.resolved[key] for key in declared}


def resolve_style_variants(
    themes: Sequence[Theme],
    style_overrides: StyleOverrides | None,
    contributors: Sequence[Plugin],
    css_var_name: Callable[[str], str] = get_css_var_name,
) -> list[StyleVariant]:
    """Resolve one StyleVariant per theme, index-aligned with themes."""
    variants: list[StyleVariant] = []
    for index, theme in enumerate(themes):
        settings = resolve_style_settings(theme, index, contributors, style_overrides)
        variants.append(
            StyleVariant(
                theme=theme,
                style_variant_index=index,
                css_var_declarations={css_var_name(path): value for path, value in settings.items()},
            )
        )
    logger.debug("Resolved %d style variant(s) with %d setting(s) each",
                 len(variants), len(variants[0].css_var_declarations) if variants else 0)
    return variants
