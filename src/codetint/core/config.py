# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Engine configuration: option defaults, deprecated option migration, JSON loading."""

from __future__ import annotations

import copy
import dataclasses
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence

from codetint.core.constants import (
    DEFAULT_CASCADE_LAYER,
    DEFAULT_MIN_CONTRAST,
    DEFAULT_THEME_CSS_ROOT,
    DEFAULT_THEME_NAMES,
    DEFAULT_USE_STYLE_RESET,
    DEFAULT_USE_THEMED_SCROLLBARS,
    DEFAULT_USE_THEMED_SELECTION_COLORS,
)
from codetint.core.models import StyleVariant, Theme
from codetint.core.plugin import Plugin, flatten_plugins
from codetint.utils.error_handler import ConfigurationError, ThemeValidationError

logger = logging.getLogger("codetint.config")

# Called once per theme before contrast adjustment; a non-None result replaces the theme
CustomizeTheme = Callable[[Theme], "Theme | None"]


def default_theme_css_selector(theme: Theme, style_variants: Sequence[StyleVariant] = ()) -> str:
    return f"[data-theme='{theme.name}']"


def _safe_float(value: Any, default: float) -> float:
    """Convert value to float, returning default on failure."""
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def _load_json(path: Path) -> dict[str, Any]:
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                return data
            logger.error(f"Config file {path} does not hold a JSON object, using defaults")
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.error(f"Corrupt config file {path}: {e}, using defaults")
    else:
        logger.warning(f"Config file {path} not found, using defaults")
    return {}


@dataclass
class EngineConfig:
    """Raw engine options. None means "use the default"."""
    themes: Sequence[Theme | str] | None = None
    min_syntax_highlighting_color_contrast: float | None = None
    use_dark_mode_media_query: bool | None = None
    theme_css_root: str | None = None
    theme_css_selector: Callable[..., Any] | bool | None = None
    cascade_layer: str | None = None
    use_style_reset: bool | None = None
    use_themed_scrollbars: bool | None = None
    use_themed_selection_colors: bool | None = None
    style_overrides: Mapping[str, Any] | None = None
    customize_theme: CustomizeTheme | None = None
    plugins: Sequence[Any] | None = None
    logger: logging.Logger | None = None
    # Deprecated: a single theme, migrated into themes
    theme: Theme | str | None = None


CONFIG_OPTIONS = tuple(f.name for f in dataclasses.fields(EngineConfig))


@dataclass(frozen=True)
class ResolvedEngineConfig:
    """Fully defaulted options. Built once per engine and never changed."""
    themes: tuple[Theme, ...]
    min_syntax_highlighting_color_contrast: float
    use_dark_mode_media_query: bool
    theme_css_root: str
    theme_css_selector: Callable[..., Any] | bool
    cascade_layer: str
    use_style_reset: bool
    use_themed_scrollbars: bool
    use_themed_selection_colors: bool
    style_overrides: Mapping[str, Any] = field(default_factory=dict)
    customize_theme: CustomizeTheme | None = None
    plugins: tuple[Plugin, ...] = ()
    logger: logging.Logger = logger


def _as_engine_config(config: EngineConfig | Mapping[str, Any] | None) -> EngineConfig:
    if config is None:
        return EngineConfig()
    if isinstance(config, EngineConfig):
        return config
    if isinstance(config, Mapping):
        unknown = [key for key in config if key not in CONFIG_OPTIONS]
        if unknown:
            raise ConfigurationError(
                f"Unknown config option(s): {', '.join(map(str, unknown))}"
            )
        return EngineConfig(**config)
    raise ConfigurationError(f"Expected an EngineConfig or a mapping, got {type(config).__name__}")


def _resolve_theme(theme: Theme | str) -> Theme:
    if isinstance(theme, Theme):
        return theme
    if isinstance(theme, str):
        from codetint.themes.registry import get_theme

        return get_theme(theme)
    raise ConfigurationError(f"Expected a Theme or a theme name, got {type(theme).__name__}")


def resolve_config(config: EngineConfig | Mapping[str, Any] | None = None) -> ResolvedEngineConfig:
    """Apply defaults and migrations without touching the caller's objects.

    Theme instances are passed through as-is; copying them is up to the engine.
    """
    raw = _as_engine_config(config)

    themes_option = raw.themes
    if themes_option is None and raw.theme is not None:
        # Deprecated single-theme option
        themes_option = [raw.theme]
    if themes_option is None:
        themes_option = DEFAULT_THEME_NAMES
    if isinstance(themes_option, (str, Theme)):
        raise ConfigurationError("themes must be a list of themes, not a single theme")
    themes = tuple(_resolve_theme(theme) for theme in themes_option)
    if not themes:
        raise ConfigurationError("themes must contain at least one theme")

    min_contrast = DEFAULT_MIN_CONTRAST
    if raw.min_syntax_highlighting_color_contrast is not None:
        min_contrast = _safe_float(raw.min_syntax_highlighting_color_contrast, DEFAULT_MIN_CONTRAST)

    use_media_query = raw.use_dark_mode_media_query
    if use_media_query is None:
        use_media_query = len(themes) == 2 and themes[0].type is not themes[1].type

    selector = raw.theme_css_selector
    if selector is None or selector is True:
        selector = default_theme_css_selector
    elif selector is not False and not callable(selector):
        raise ConfigurationError("theme_css_selector must be a function or False")

    def pick(value: Any, default: Any) -> Any:
        return default if value is None else value

    return ResolvedEngineConfig(
        themes=themes,
        min_syntax_highlighting_color_contrast=min_contrast,
        use_dark_mode_media_query=bool(use_media_query),
        theme_css_root=pick(raw.theme_css_root, DEFAULT_THEME_CSS_ROOT),
        theme_css_selector=selector,
        cascade_layer=pick(raw.cascade_layer, DEFAULT_CASCADE_LAYER),
        use_style_reset=bool(pick(raw.use_style_reset, DEFAULT_USE_STYLE_RESET)),
        use_themed_scrollbars=bool(pick(raw.use_themed_scrollbars, DEFAULT_USE_THEMED_SCROLLBARS)),
        use_themed_selection_colors=bool(
            pick(raw.use_themed_selection_colors, DEFAULT_USE_THEMED_SELECTION_COLORS)
        ),
        style_overrides=copy.deepcopy(dict(raw.style_overrides or {})),
        customize_theme=raw.customize_theme,
        plugins=tuple(flatten_plugins(raw.plugins)),
        logger=raw.logger or logger,
    )


def load_engine_config(path: Path) -> EngineConfig:
    """Read engine options from a JSON file.

    Themes are given by name (built-in or Pygments style) or as theme objects.
    Options that cannot come from JSON (functions, plugins, loggers) are
    ignored with a warning, as are unknown keys.
    """
    data = _load_json(Path(path))
    options: dict[str, Any] = {}
    for key, value in data.items():
        if key not in CONFIG_OPTIONS or key in ("customize_theme", "plugins", "logger"):
            logger.warning(f"Ignoring config option {key!r} in {path}")
            continue
        options[key] = value

    def load_theme(entry: Any) -> Theme | str:
        if isinstance(entry, Mapping):
            return Theme.from_dict(entry)
        if isinstance(entry, str):
            return entry
        raise ThemeValidationError(f"Invalid theme entry in {path}: {entry!r}")

    if isinstance(options.get("themes"), list):
        options["themes"] = [load_theme(entry) for entry in options["themes"]]
    if options.get("theme") is not None:
        options["theme"] = load_theme(options["theme"])
    if isinstance(options.get("theme_css_selector"), str):
        template = options["theme_css_selector"]
        options["theme_css_selector"] = lambda theme, style_variants=(): template.format(name=theme.name)

    return EngineConfig(**options)
