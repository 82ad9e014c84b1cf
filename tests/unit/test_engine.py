# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Unit tests for CodeTintEngine: construction, theme preparation and accessors."""

from __future__ import annotations

import asyncio
import logging

import pytest

from codetint.core.config import EngineConfig
from codetint.core.models import Theme, ThemeType
from codetint.core.plugin import Plugin
from codetint.core.style_settings import StyleSetting
from codetint.engine import CodeTintEngine
from codetint.utils.colors import contrast_ratio, parse_color
from codetint.utils.error_handler import ConfigurationError


class TestConstruction:
    def test_default_themes(self):
        engine = CodeTintEngine()
        assert [t.name for t in engine.themes] == ["github-dark", "github-light"]
        assert engine.use_dark_mode_media_query is True

    def test_variants_align_with_themes(self, dark_theme, light_theme):
        engine = CodeTintEngine(EngineConfig(themes=[dark_theme, light_theme]))
        assert len(engine.style_variants) == 2
        for index, variant in enumerate(engine.style_variants):
            assert variant.theme is engine.themes[index]
            assert variant.style_variant_index == index

    def test_themes_are_copied(self, dark_theme):
        before = dark_theme.to_dict()
        engine = CodeTintEngine(EngineConfig(themes=[dark_theme]))
        assert engine.themes[0] is not dark_theme
        assert dark_theme.to_dict() == before
        assert engine.themes[0].syntax_colors["comment"] != before["syntax_colors"]["comment"]

    def test_accepts_mapping(self, dark_theme):
        engine = CodeTintEngine({"themes": [dark_theme], "cascade_layer": "ec"})
        assert engine.cascade_layer == "ec"

    def test_resolved_options_exposed(self, dark_theme):
        engine = CodeTintEngine(EngineConfig(
            themes=[dark_theme], theme_css_root="html", use_themed_selection_colors=True,
        ))
        assert engine.theme_css_root == "html"
        assert engine.use_themed_selection_colors is True
        assert engine.use_style_reset is True
        assert engine.min_syntax_highlighting_color_contrast == 5.5
        assert engine.config.themes[0] is dark_theme

    def test_plugins_follow_core(self, sample_plugin):
        engine = CodeTintEngine(EngineConfig(plugins=[sample_plugin]))
        assert [p.name for p in engine.plugins] == ["core", "sample"]

    def test_duplicate_setting_paths(self, sample_plugin):
        clone = Plugin(name="sample", style_settings=[StyleSetting("gap", default="1px")])
        with pytest.raises(ConfigurationError, match="sample.gap"):
            CodeTintEngine(EngineConfig(plugins=[sample_plugin, clone]))

    def test_unknown_overrides_are_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="codetint"):
            CodeTintEngine(EngineConfig(style_overrides={"codeBackgroud": "#000"}))
        assert "'codeBackgroud'" in caplog.text

    def test_custom_logger(self, caplog):
        custom = logging.getLogger("my.app")
        with caplog.at_level(logging.WARNING, logger="my.app"):
            CodeTintEngine(EngineConfig(style_overrides={"nope": "1"}, logger=custom))
        assert any(record.name == "my.app" for record in caplog.records)


class TestCustomizeTheme:
    def test_called_once_per_theme_with_copy(self, dark_theme, light_theme):
        seen = []

        def customize(theme):
            seen.append(theme)

        engine = CodeTintEngine(EngineConfig(themes=[dark_theme, light_theme], customize_theme=customize))
        assert [t.name for t in seen] == ["dark1", "light1"]
        assert seen[0] is not dark_theme
        assert seen[0] is engine.themes[0]

    def test_return_value_replaces_theme(self, dark_theme, second_dark_theme):
        engine = CodeTintEngine(EngineConfig(
            themes=[dark_theme],
            customize_theme=lambda theme: second_dark_theme,
            min_syntax_highlighting_color_contrast=0,
        ))
        assert engine.themes[0] == second_dark_theme
        assert engine.themes[0] is not second_dark_theme
        assert engine.style_variants[0].css_var_declarations["--ct-code-background"] == "#002b36"

    def test_returned_theme_is_not_mutated(self, dark_theme):
        shared = Theme(
            name="shared",
            type=ThemeType.DARK,
            colors={"editor.background": "#000000"},
            syntax_colors={"comment": "#222222"},
        )
        first = CodeTintEngine(EngineConfig(themes=[dark_theme], customize_theme=lambda theme: shared))
        second = CodeTintEngine(EngineConfig(themes=[dark_theme], customize_theme=lambda theme: shared))
        assert shared.syntax_colors == {"comment": "#222222"}
        assert first.themes[0].syntax_colors["comment"] != "#222222"
        assert first.themes[0].syntax_colors == second.themes[0].syntax_colors

    def test_runs_before_contrast_adjustment(self, dark_theme):
        def customize(theme):
            theme.syntax_colors["keyword"] = "#222222"

        engine = CodeTintEngine(EngineConfig(themes=[dark_theme], customize_theme=customize))
        keyword = parse_color(engine.themes[0].syntax_colors["keyword"])
        assert contrast_ratio(keyword, parse_color("#1e1e1e")) >= 5.5 - 1e-9

    def test_errors_propagate(self, dark_theme):
        def customize(theme):
            raise KeyError("palette")

        with pytest.raises(KeyError):
            CodeTintEngine(EngineConfig(themes=[dark_theme], customize_theme=customize))


class TestContrastPass:
    def test_adjusts_against_code_background(self, dark_theme):
        engine = CodeTintEngine(EngineConfig(themes=[dark_theme]))
        bg = parse_color("#1e1e1e")
        for value in engine.themes[0].syntax_colors.values():
            assert contrast_ratio(parse_color(value), bg) >= 5.5 - 1e-9

    def test_uses_overridden_background(self, dark_theme):
        engine = CodeTintEngine(EngineConfig(
            themes=[dark_theme],
            style_overrides={"codeBackground": "#ffffff"},
            min_syntax_highlighting_color_contrast=4.5,
        ))
        white = parse_color("#ffffff")
        for value in engine.themes[0].syntax_colors.values():
            assert contrast_ratio(parse_color(value), white) >= 4.5 - 1e-9

    def test_disabled(self, dark_theme):
        engine = CodeTintEngine(EngineConfig(themes=[dark_theme], min_syntax_highlighting_color_contrast=0))
        assert engine.themes[0].syntax_colors == dark_theme.syntax_colors

    def test_non_concrete_background_warns_and_skips(self, dark_theme, caplog):
        with caplog.at_level(logging.WARNING, logger="codetint"):
            engine = CodeTintEngine(EngineConfig(
                themes=[dark_theme], style_overrides={"codeBackground": "var(--page-bg)"},
            ))
        assert engine.themes[0].syntax_colors == dark_theme.syntax_colors
        assert "dark1" in caplog.text
        assert "not a concrete color" in caplog.text


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


class TestBaseStyles:
    @pytest.mark.asyncio
    async def test_core_then_plugins(self, sample_plugin):
        engine = CodeTintEngine(EngineConfig(plugins=[sample_plugin]))
        css = await engine.get_base_styles()
        assert css.startswith(".codetint{all:revert;")
        assert css.endswith(".codetint .sample{margin:0}")

    @pytest.mark.asyncio
    async def test_plugins_awaited_one_at_a_time_in_order(self):
        events = []

        def make(name):
            async def styles(context):
                events.append(f"{name} start")
                await asyncio.sleep(0.01)
                events.append(f"{name} end")
                return f"& .{name} {{ color: red }}"

            return Plugin(name=name, base_styles=styles)

        engine = CodeTintEngine(EngineConfig(plugins=[make("a"), make("b")]))
        css = await engine.get_base_styles()
        assert events == ["a start", "a end", "b start", "b end"]
        assert css.index(".codetint .a{") < css.index(".codetint .b{")

    @pytest.mark.asyncio
    async def test_empty_contributions_are_skipped(self):
        engine = CodeTintEngine(EngineConfig(plugins=[Plugin(name="quiet", base_styles=lambda c: "")]))
        assert await engine.get_base_styles() == await CodeTintEngine().get_base_styles()

    @pytest.mark.asyncio
    async def test_cascade_layer(self):
        engine = CodeTintEngine(EngineConfig(cascade_layer="ec"))
        css = await engine.get_base_styles()
        assert css.startswith("@layer ec { .codetint{")
        assert css.endswith(" }")

    @pytest.mark.asyncio
    async def test_plugin_errors_propagate(self):
        def explode(context):
            raise RuntimeError("plugin failed")

        engine = CodeTintEngine(EngineConfig(plugins=[Plugin(name="bad", base_styles=explode)]))
        with pytest.raises(RuntimeError, match="plugin failed"):
            await engine.get_base_styles()

    @pytest.mark.asyncio
    async def test_flags_forwarded(self):
        engine = CodeTintEngine(EngineConfig(
            use_style_reset=False, use_themed_scrollbars=False, use_themed_selection_colors=True,
        ))
        css = await engine.get_base_styles()
        assert "all:revert" not in css
        assert "-webkit-scrollbar" not in css
        assert "::selection" in css


class TestJsModules:
    @pytest.mark.asyncio
    async def test_no_plugins(self):
        assert await CodeTintEngine().get_js_modules() == []

    @pytest.mark.asyncio
    async def test_trimmed_deduplicated_in_order(self):
        async def computed(context):
            return ["  second()  ", "first()"]

        engine = CodeTintEngine(EngineConfig(plugins=[
            Plugin(name="a", js_modules=["first()", "   ", "\nfirst()\n"]),
            Plugin(name="b", js_modules=computed),
            Plugin(name="c", js_modules="third()"),
        ]))
        assert await engine.get_js_modules() == ["first()", "second()", "third()"]


class TestCssVar:
    def test_without_fallback(self):
        assert CodeTintEngine().css_var("codeBackground") == "var(--ct-code-background)"

    def test_with_fallback(self):
        assert CodeTintEngine().css_var("frames.shadowColor", "#000") == "var(--ct-frames_shadow-color, #000)"

    def test_resolver_context(self):
        engine = CodeTintEngine()
        context = engine.get_resolver_context()
        assert context.style_variants is engine.style_variants
        assert context.css_var("borderRadius") == "var(--ct-border-radius)"
