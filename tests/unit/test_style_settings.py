# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Tests for style setting paths, CSS variable names and override flattening."""

from __future__ import annotations

import pytest

from codetint.core.style_settings import (
    StyleSettingPath,
    canonical_path,
    flatten_style_overrides,
    get_css_var_name,
    get_style_setting_path,
    validate_contributor_name,
)
from codetint.utils.error_handler import ConfigurationError

# ---------------------------------------------------------------------------
# StyleSettingPath
# ---------------------------------------------------------------------------


class TestStyleSettingPath:
    def test_core_path_string_is_bare_name(self):
        assert str(StyleSettingPath("core", "codeBackground")) == "codeBackground"

    def test_plugin_path_string_is_dotted(self):
        assert str(StyleSettingPath("frames", "shadowColor")) == "frames.shadowColor"

    def test_parse_bare_name(self):
        assert StyleSettingPath.parse("codeBackground") == StyleSettingPath("core", "codeBackground")

    def test_parse_core_alias(self):
        assert StyleSettingPath.parse("core.codeBackground") == StyleSettingPath("core", "codeBackground")

    def test_parse_plugin_path(self):
        assert StyleSettingPath.parse("frames.shadowColor") == StyleSettingPath("frames", "shadowColor")

    def test_parse_returns_existing_path(self):
        path = StyleSettingPath("frames", "shadowColor")
        assert StyleSettingPath.parse(path) is path

    def test_too_many_segments(self):
        with pytest.raises(ConfigurationError):
            StyleSettingPath.parse("a.b.c")

    @pytest.mark.parametrize("name", ["CodeBackground", "code-background", "1st", ""])
    def test_invalid_setting_names(self, name):
        with pytest.raises(ConfigurationError):
            StyleSettingPath("core", name)

    def test_canonical_path_strips_core(self):
        assert canonical_path("core.borderRadius") == "borderRadius"


class TestContributorNames:
    def test_valid(self):
        assert validate_contributor_name("frames2") == "frames2"

    @pytest.mark.parametrize("name", ["Frames", "my-plugin", "2fa", "", "my_plugin"])
    def test_invalid(self, name):
        with pytest.raises(ConfigurationError):
            validate_contributor_name(name)

    @pytest.mark.parametrize("name", ["dark", "light"])
    def test_theme_type_keys_are_reserved(self, name):
        with pytest.raises(ConfigurationError, match="reserved"):
            validate_contributor_name(name)


# ---------------------------------------------------------------------------
# CSS variable names
# ---------------------------------------------------------------------------


class TestCssVarNames:
    def test_core_setting(self):
        assert get_css_var_name("codeBackground") == "--ct-code-background"

    def test_core_alias_gives_same_name(self):
        assert get_css_var_name("core.codeBackground") == get_css_var_name("codeBackground")

    def test_plugin_setting(self):
        assert get_css_var_name("frames.shadowColor") == "--ct-frames_shadow-color"

    def test_digits(self):
        assert get_css_var_name("h1Size") == "--ct-h1-size"

    @pytest.mark.parametrize("path", [
        "codeBackground",
        "borderRadius",
        "x",
        "frames.shadowColor",
        "frames.frameBoxShadowCssValue",
        "tabs2.a1B2",
    ])
    def test_inverse(self, path):
        parsed = StyleSettingPath.parse(path)
        assert get_style_setting_path(get_css_var_name(path)) == parsed

    def test_distinct_paths_give_distinct_names(self):
        names = {
            get_css_var_name(p)
            for p in ("borderColor", "frames.borderColor", "frames.border", "frameBorderColor")
        }
        assert len(names) == 4

    @pytest.mark.parametrize("name", ["--other-x", "--ct-", "--ct-Code", "--ct-code--x", "color"])
    def test_inverse_rejects_foreign_names(self, name):
        with pytest.raises(ValueError):
            get_style_setting_path(name)


# ---------------------------------------------------------------------------
# Override tree
# ---------------------------------------------------------------------------


class TestFlattenStyleOverrides:
    def test_none(self):
        assert flatten_style_overrides(None) == ({}, {"dark": {}, "light": {}})

    def test_core_settings_at_top_level(self):
        global_overrides, _ = flatten_style_overrides({"borderRadius": "0"})
        assert global_overrides == {"borderRadius": "0"}

    def test_nested_plugin_settings(self):
        global_overrides, _ = flatten_style_overrides({"frames": {"shadowColor": "red"}})
        assert global_overrides == {"frames.shadowColor": "red"}

    def test_dotted_keys(self):
        global_overrides, _ = flatten_style_overrides({"frames.shadowColor": "red"})
        assert global_overrides == {"frames.shadowColor": "red"}

    def test_core_prefix_is_stripped(self):
        global_overrides, _ = flatten_style_overrides({"core": {"borderRadius": "0"}})
        assert global_overrides == {"borderRadius": "0"}

    def test_theme_type_subtrees(self):
        global_overrides, by_type = flatten_style_overrides({
            "borderRadius": "0",
            "dark": {"codeBackground": "#000000", "frames": {"shadowColor": "black"}},
            "light": {"codeBackground": "#ffffff"},
        })
        assert global_overrides == {"borderRadius": "0"}
        assert by_type["dark"] == {"codeBackground": "#000000", "frames.shadowColor": "black"}
        assert by_type["light"] == {"codeBackground": "#ffffff"}

    def test_pairs_and_callables_are_leaves(self):
        fn = lambda context: "1px"
        global_overrides, _ = flatten_style_overrides({"borderColor": ("#000", "#fff"), "borderWidth": fn})
        assert global_overrides == {"borderColor": ("#000", "#fff"), "borderWidth": fn}

    def test_theme_type_value_must_be_mapping(self):
        with pytest.raises(ConfigurationError):
            flatten_style_overrides({"dark": "#000000"})

    def test_input_is_not_mutated(self):
        overrides = {"frames": {"shadowColor": "red"}, "dark": {"borderRadius": "0"}}
        flatten_style_overrides(overrides)
        assert overrides == {"frames": {"shadowColor": "red"}, "dark": {"borderRadius": "0"}}
