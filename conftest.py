"""Shared pytest fixtures for codetint tests."""

from __future__ import annotations

import pytest

from codetint.core.models import Theme, ThemeType
from codetint.core.plugin import Plugin
from codetint.core.style_settings import StyleSetting


@pytest.fixture
def dark_theme() -> Theme:
    """A small dark theme with one low-contrast syntax color."""
    return Theme(
        name="dark1",
        type=ThemeType.DARK,
        colors={
            "editor.background": "#1e1e1e",
            "editor.foreground": "#d4d4d4",
            "panel.border": "#333333",
        },
        syntax_colors={
            "comment": "#3a3a3a",
            "keyword": "#569cd6",
            "string": "#ce9178",
        },
    )


@pytest.fixture
def light_theme() -> Theme:
    """A small light theme."""
    return Theme(
        name="light1",
        type=ThemeType.LIGHT,
        colors={
            "editor.background": "#ffffff",
            "editor.foreground": "#333333",
            "panel.border": "#dddddd",
        },
        syntax_colors={
            "comment": "#dddddd",
            "keyword": "#0000ff",
            "string": "#a31515",
        },
    )


@pytest.fixture
def second_dark_theme() -> Theme:
    return Theme(
        name="dark2",
        type=ThemeType.DARK,
        colors={"editor.background": "#002b36", "editor.foreground": "#839496"},
        syntax_colors={"keyword": "#859900"},
    )


@pytest.fixture
def sample_plugin() -> Plugin:
    """A plugin with a static, a per-type and a palette-derived setting."""
    return Plugin(
        name="sample",
        style_settings=[
            StyleSetting("gap", default="0.5rem"),
            StyleSetting("accent", default=("#ff00ff", "#800080")),
            StyleSetting(
                "borderTone",
                theme_default=lambda context: context.theme.colors.get("panel.border"),
                default="gray",
            ),
        ],
        base_styles="& .sample { margin: 0; }",
    )
