# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Nested CSS flattening, plugin style scoping and cascade layer wrapping.

Generated styles are written with CSS nesting. At the top level, "&" stands
for the code block scope (.codetint) and selectors without "&" stay global,
so theme variables can target :root while block styles target the scope.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import tinycss2

from codetint.core.constants import SCOPE_SELECTOR
from codetint.utils.error_handler import CodeTintError

logger = logging.getLogger("codetint.css")

# At-rules whose block holds rules (or nested declarations) rather than descriptors
_GROUPING_AT_RULES = frozenset({"media", "supports", "container", "layer", "document"})

_BLOCK_DELIMITERS = {
    "() block": ("(", ")"),
    "[] block": ("[", "]"),
    "{} block": ("{", "}"),
}


class CssProcessingError(CodeTintError):
    """Generated or contributed CSS could not be parsed."""


@dataclass(frozen=True)
class PluginStyles:
    """Base styles contributed by one contributor."""
    plugin_name: str
    styles: str


def _check_errors(nodes: Iterable[Any]) -> None:
    for node in nodes:
        if node.type == "error":
            raise CssProcessingError(f"Invalid CSS: {node.message}")


def _contains_ampersand(nodes: Iterable[Any]) -> bool:
    for node in nodes:
        if node.type == "literal" and node.value == "&":
            return True
        if node.type == "function" and _contains_ampersand(node.arguments):
            return True
        if node.type in _BLOCK_DELIMITERS and _contains_ampersand(node.content):
            return True
    return False


def _compact(nodes: Iterable[Any], ampersand: str | None = None) -> str:
    """Serialize component values with whitespace collapsed and comments dropped."""
    parts: list[str] = []
    for node in nodes:
        kind = node.type
        if kind == "comment":
            continue
        if kind == "whitespace":
            if parts and parts[-1] != " ":
                parts.append(" ")
        elif kind == "literal" and node.value == "&" and ampersand is not None:
            parts.append(ampersand)
        elif kind == "function":
            parts.append(f"{node.name}({_compact(node.arguments, ampersand).strip()})")
        elif kind in _BLOCK_DELIMITERS:
            opening, closing = _BLOCK_DELIMITERS[kind]
            parts.append(f"{opening}{_compact(node.content, ampersand).strip()}{closing}")
        else:
            parts.append(node.serialize())
    return "".join(parts)


def _split_selector_list(prelude: Sequence[Any]) -> list[list[Any]]:
    groups: list[list[Any]] = [[]]
    for node in prelude:
        if node.type == "literal" and node.value == ",":
            groups.append([])
        else:
            groups[-1].append(node)
    return [group for group in groups if _compact(group).strip()]


def _resolve_selectors(prelude: Sequence[Any], parents: list[str] | None, scope: str) -> list[str]:
    resolved: list[str] = []
    groups = _split_selector_list(prelude)
    for parent in parents if parents is not None else [None]:
        for group in groups:
            if _contains_ampersand(group):
                selector = _compact(group, parent if parent is not None else scope).strip()
            elif parent is None:
                selector = _compact(group).strip()
            else:
                selector = f"{parent} {_compact(group).strip()}"
            if selector not in resolved:
                resolved.append(selector)
    return resolved


def _render_declaration(node: Any) -> str:
    value = _compact(node.value).strip()
    if node.important:
        value += "!important"
    return f"{node.name}:{value}"


def _flatten_block(
    content: Sequence[Any], selectors: list[str], scope: str
) -> list[str]:
    """Flatten the contents of a style rule (declarations plus nested rules)."""
    nodes = tinycss2.parse_blocks_contents(content, skip_comments=True, skip_whitespace=True)
    _check_errors(nodes)
    out: list[str] = []
    declarations = [_render_declaration(n) for n in nodes if n.type == "declaration"]
    if declarations:
        out.append(f"{','.join(selectors)}{{{';'.join(declarations)}}}")
    nested = [n for n in nodes if n.type in ("qualified-rule", "at-rule")]
    out.extend(_flatten_rules(nested, selectors, scope))
    return out


def _flatten_at_rule(node: Any, parents: list[str] | None, scope: str) -> list[str]:
    prelude = _compact(node.prelude).strip()
    head = f"@{node.at_keyword}" + (f" {prelude}" if prelude else "")
    if node.content is None:
        return [f"{head};"]

    if node.lower_at_keyword not in _GROUPING_AT_RULES:
        # Descriptor blocks like @font-face or @keyframes are kept verbatim
        return [f"{head}{{{_compact(node.content).strip()}}}"]

    if parents is None:
        children = tinycss2.parse_rule_list(node.content, skip_comments=True, skip_whitespace=True)
        _check_errors(children)
        inner = _flatten_rules(children, None, scope)
    else:
        inner = _flatten_block(node.content, parents, scope)
    if not inner:
        return []
    return [f"{head}{{{''.join(inner)}}}"]


def _flatten_rules(nodes: Iterable[Any], parents: list[str] | None, scope: str) -> list[str]:
    out: list[str] = []
    for node in nodes:
        if node.type == "qualified-rule":
            selectors = _resolve_selectors(node.prelude, parents, scope)
            if not selectors:
                continue
            out.extend(_flatten_block(node.content, selectors, scope))
        elif node.type == "at-rule":
            out.extend(_flatten_at_rule(node, parents, scope))
        elif node.type == "error":
            raise CssProcessingError(f"Invalid CSS: {node.message}")
    return out


def scope_and_minify_nested_css(css: str, scope: str = SCOPE_SELECTOR) -> str:
    """Flatten nested CSS into plain rules and strip insignificant whitespace."""
    nodes = tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True)
    return "".join(_flatten_rules(nodes, None, scope))


def process_plugin_styles(
    plugin_styles: Sequence[PluginStyles], scope: str = SCOPE_SELECTOR
) -> list[str]:
    """Scope each contributor's base styles below the code block scope."""
    processed: list[str] = []
    for entry in plugin_styles:
        try:
            processed.append(scope_and_minify_nested_css(f"&{{{entry.styles}}}", scope))
        except CssProcessingError as e:
            raise CssProcessingError(f"Base styles of {entry.plugin_name!r}: {e}") from e
    return processed


def wrap_in_cascade_layer(css: str, layer_name: str) -> str:
    """Wrap css in "@layer <name> { ... }", or return it unchanged without a layer name."""
    if not layer_name:
        return css
    return f"@layer {layer_name} {{ {css} }}"
