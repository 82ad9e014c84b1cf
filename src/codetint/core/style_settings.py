# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Style setting paths, CSS variable naming and the style override tree."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Mapping, Union

from codetint.core.constants import CORE_CONTRIBUTOR, CSS_VAR_PREFIX, RESERVED_OVERRIDE_KEYS
from codetint.utils.error_handler import ConfigurationError

if TYPE_CHECKING:
    from codetint.core.style_resolving import StyleResolverContext

_CONTRIBUTOR_RE = re.compile(r"^[a-z][a-z0-9]*$")
_SETTING_NAME_RE = re.compile(r"^[a-z][a-zA-Z0-9]*$")
_CSS_VAR_RE = re.compile(
    rf"^{re.escape(CSS_VAR_PREFIX)}(?:(?P<contributor>[a-z][a-z0-9]*)_)?(?P<name>[a-z][a-z0-9-]*)$"
)
_UPPER_RE = re.compile(r"[A-Z]")

# A literal, a (dark, light) pair, or a function of the resolver context
StyleValue = Union[str, int, float, tuple, list, Callable[["StyleResolverContext"], Any]]
StyleOverrides = Mapping[str, Any]


def validate_contributor_name(name: str) -> str:
    if not isinstance(name, str) or not _CONTRIBUTOR_RE.match(name):
        raise ConfigurationError(
            f"Invalid contributor name {name!r}: must match [a-z][a-z0-9]*"
        )
    if name in RESERVED_OVERRIDE_KEYS:
        raise ConfigurationError(
            f"Invalid contributor name {name!r}: reserved for per-theme-type overrides"
        )
    return name


@dataclass(frozen=True, order=True)
class StyleSettingPath:
    """Identifies one configurable style property of a contributor."""
    contributor: str
    name: str

    def __post_init__(self) -> None:
        validate_contributor_name(self.contributor)
        if not isinstance(self.name, str) or not _SETTING_NAME_RE.match(self.name):
            raise ConfigurationError(
                f"Invalid style setting name {self.name!r}: must match [a-z][a-zA-Z0-9]*"
            )

    def __str__(self) -> str:
        if self.contributor == CORE_CONTRIBUTOR:
            return self.name
        return f"{self.contributor}.{self.name}"

    @classmethod
    def parse(cls, path: str | StyleSettingPath) -> StyleSettingPath:
        """Parse "name", "core.name" or "plugin.name"."""
        if isinstance(path, StyleSettingPath):
            return path
        parts = str(path).split(".")
        if len(parts) == 1:
            return cls(CORE_CONTRIBUTOR, parts[0])
        if len(parts) == 2:
            return cls(parts[0], parts[1])
        raise ConfigurationError(f"Invalid style setting path {path!r}")


def canonical_path(path: str | StyleSettingPath) -> str:
    return str(StyleSettingPath.parse(path))


def get_css_var_name(path: str | StyleSettingPath) -> str:
    """Map a setting path to its CSS custom property name.

    codeBackground -> --ct-code-background
    frames.shadowColor -> --ct-frames_shadow-color
    """
    parsed = StyleSettingPath.parse(path)
    kebab = _UPPER_RE.sub(lambda m: "-" + m.group(0).lower(), parsed.name)
    if parsed.contributor == CORE_CONTRIBUTOR:
        return f"{CSS_VAR_PREFIX}{kebab}"
    return f"{CSS_VAR_PREFIX}{parsed.contributor}_{kebab}"


def get_style_setting_path(css_var_name: str) -> StyleSettingPath:
    """Inverse of get_css_var_name."""
    match = _CSS_VAR_RE.match(css_var_name)
    if not match or "--" in match.group("name") or match.group("name").endswith("-"):
        raise ValueError(f"Not a codetint CSS variable name: {css_var_name!r}")
    name = re.sub(r"-([a-z0-9])", lambda m: m.group(1).upper(), match.group("name"))
    return StyleSettingPath(match.group("contributor") or CORE_CONTRIBUTOR, name)


@dataclass(frozen=True)
class StyleSetting:
    """A style setting declared by a contributor.

    theme_default derives a value from the theme palette and may return None
    to fall through to the static default.
    """
    name: str
    default: Any = None
    theme_default: Callable[[StyleResolverContext], Any] | None = None


def is_theme_type_pair(value: Any) -> bool:
    return isinstance(value, (tuple, list)) and len(value) == 2


def _flatten_tree(tree: Mapping[str, Any], prefix: str, out: dict[str, Any]) -> None:
    for key, value in tree.items():
        key = str(key)
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping):
            _flatten_tree(value, path, out)
        else:
            out[canonical_path(path)] = value


def flatten_style_overrides(
    overrides: StyleOverrides | None,
) -> tuple[dict[str, Any], dict[str, dict[str, Any]]]:
    """Split the nested override tree into global and per-theme-type flat maps.

    The top-level "dark" and "light" keys hold subtrees that only apply to
    themes of that type.
    """
    global_overrides: dict[str, Any] = {}
    by_theme_type: dict[str, dict[str, Any]] = {key: {} for key in RESERVED_OVERRIDE_KEYS}
    for key, value in (overrides or {}).items():
        if key in RESERVED_OVERRIDE_KEYS:
            if not isinstance(value, Mapping):
                raise ConfigurationError(
                    f"Style override {key!r} must be a nested mapping of settings"
                )
            _flatten_tree(value, "", by_theme_type[key])
        elif isinstance(value, Mapping):
            _flatten_tree(value, str(key), global_overrides)
        else:
            global_overrides[canonical_path(key)] = value
    return global_overrides, by_theme_type
