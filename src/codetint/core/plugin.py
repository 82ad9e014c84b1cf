# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Style contributors: the core and plugins.

A contributor declares a fixed set of style settings and may contribute
static base styles and JS modules. Contributions are either Static values or
Computed functions of a ResolverContext; functions may be coroutines.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterable, Sequence, Union

from codetint.core.style_settings import StyleSetting, StyleSettingPath, validate_contributor_name
from codetint.utils.error_handler import ConfigurationError

if TYPE_CHECKING:
    from codetint.core.models import StyleVariant


@dataclass(frozen=True)
class Static:
    value: Any


@dataclass(frozen=True)
class Computed:
    fn: Callable[[ResolverContext], Any]


Contribution = Union[Static, Computed]


def as_contribution(value: Any) -> Contribution | None:
    """Normalize a plain value, a callable or an already tagged contribution."""
    if value is None or isinstance(value, (Static, Computed)):
        return value
    if callable(value):
        return Computed(value)
    return Static(value)


async def resolve_contribution(contribution: Contribution | None, context: ResolverContext) -> Any:
    if contribution is None:
        return None
    if isinstance(contribution, Static):
        return contribution.value
    result = contribution.fn(context)
    if inspect.isawaitable(result):
        result = await result
    return result


@dataclass(frozen=True)
class ResolverContext:
    """What plugin contributions get to see of the engine."""
    css_var: Callable[..., str]
    css_var_name: Callable[[Any], str]
    style_variants: Sequence[StyleVariant]


@dataclass
class Plugin:
    """A named contributor of style settings, base styles and JS modules."""
    name: str
    style_settings: Sequence[StyleSetting] = ()
    base_styles: Any = None
    js_modules: Any = None
    setting_paths: tuple[StyleSettingPath, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        validate_contributor_name(self.name)
        self.style_settings = tuple(self.style_settings)
        self.base_styles = as_contribution(self.base_styles)
        self.js_modules = as_contribution(self.js_modules)
        self.setting_paths = tuple(
            StyleSettingPath(self.name, setting.name) for setting in self.style_settings
        )


def flatten_plugins(plugins: Iterable[Any] | None) -> list[Plugin]:
    """Flatten arbitrarily nested plugin lists, keeping order."""
    flat: list[Plugin] = []
    for item in plugins or ():
        if isinstance(item, (list, tuple)):
            flat.extend(flatten_plugins(item))
        elif isinstance(item, Plugin):
            flat.append(item)
        else:
            raise ConfigurationError(f"Expected a Plugin, got {type(item).__name__}")
    return flat
