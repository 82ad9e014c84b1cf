# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Package constants and option defaults."""

APP_NAME = "codetint"
APP_VERSION = "1.0.0"

# Every generated rule is scoped below this class
SCOPE_CLASS = "codetint"
SCOPE_SELECTOR = f".{SCOPE_CLASS}"

# Generated CSS custom properties
CSS_VAR_PREFIX = "--ct-"
CORE_CONTRIBUTOR = "core"

# Defaults
DEFAULT_MIN_CONTRAST = 5.5
DEFAULT_THEME_CSS_ROOT = ":root"
DEFAULT_CASCADE_LAYER = ""
DEFAULT_USE_STYLE_RESET = True
DEFAULT_USE_THEMED_SCROLLBARS = True
DEFAULT_USE_THEMED_SELECTION_COLORS = False
DEFAULT_THEME_NAMES = ("github-dark", "github-light")

# Theme types, also the reserved per-type keys of the style override tree
THEME_TYPE_DARK = "dark"
THEME_TYPE_LIGHT = "light"
RESERVED_OVERRIDE_KEYS = (THEME_TYPE_DARK, THEME_TYPE_LIGHT)

# Fallback palette colors when a theme does not define them
FALLBACK_BACKGROUND = {THEME_TYPE_DARK: "#1e1e1e", THEME_TYPE_LIGHT: "#ffffff"}
FALLBACK_FOREGROUND = {THEME_TYPE_DARK: "#d4d4d4", THEME_TYPE_LIGHT: "#333333"}
