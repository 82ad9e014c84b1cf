# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Color parsing, WCAG luminance/contrast math and lightness adjustments."""

from __future__ import annotations

import colorsys
import re
from typing import NamedTuple

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC_COLOR_RE = re.compile(r"^rgba?\(\s*([^)]*)\)$", re.IGNORECASE)


class RGBA(NamedTuple):
    """An sRGB color with 0-255 channels and a 0-1 alpha."""
    r: int
    g: int
    b: int
    a: float = 1.0


def _clamp_channel(value: float) -> int:
    return max(0, min(255, round(value)))


def _parse_channel(raw: str) -> float:
    raw = raw.strip()
    if raw.endswith("%"):
        return float(raw[:-1]) * 255 / 100
    return float(raw)


def _parse_alpha(raw: str) -> float:
    raw = raw.strip()
    if raw.endswith("%"):
        return max(0.0, min(1.0, float(raw[:-1]) / 100))
    return max(0.0, min(1.0, float(raw)))


def parse_color(value: str | None) -> RGBA | None:
    """Parse a hex or rgb()/rgba() color. Returns None for anything else."""
    if not value:
        return None
    value = value.strip()

    if _HEX_COLOR_RE.match(value):
        digits = value[1:]
        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits)
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
        a = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
        return RGBA(r, g, b, a)

    match = _FUNC_COLOR_RE.match(value)
    if not match:
        return None
    body = match.group(1)
    # Both "r, g, b, a" and "r g b / a" syntaxes
    alpha_part = None
    if "/" in body:
        body, alpha_part = body.split("/", 1)
    parts = [p for p in re.split(r"[\s,]+", body.strip()) if p]
    if len(parts) == 4 and alpha_part is None:
        alpha_part = parts.pop()
    if len(parts) != 3:
        return None
    try:
        r, g, b = (_clamp_channel(_parse_channel(p)) for p in parts)
        a = _parse_alpha(alpha_part) if alpha_part is not None else 1.0
    except ValueError:
        return None
    return RGBA(r, g, b, a)


def to_hex(color: RGBA) -> str:
    """Format as lowercase #rrggbb, or #rrggbbaa when not fully opaque."""
    text = f"#{color.r:02x}{color.g:02x}{color.b:02x}"
    if color.a < 1.0:
        text += f"{_clamp_channel(color.a * 255):02x}"
    return text


def first_static_color(value: str | None) -> str | None:
    """Return the value as a normalized hex color if it is a concrete color.

    CSS variable references and other expressions are not concrete.
    """
    color = parse_color(value)
    return to_hex(color) if color is not None else None


def blend(foreground: RGBA, background: RGBA) -> RGBA:
    """Composite a (possibly translucent) foreground over an opaque background."""
    a = foreground.a
    return RGBA(
        _clamp_channel(foreground.r * a + background.r * (1 - a)),
        _clamp_channel(foreground.g * a + background.g * (1 - a)),
        _clamp_channel(foreground.b * a + background.b * (1 - a)),
    )


def relative_luminance(color: RGBA) -> float:
    """Relative luminance per WCAG 2.x."""

    def channel(c: int) -> float:
        c = c / 255
        return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4

    return 0.2126 * channel(color.r) + 0.7152 * channel(color.g) + 0.0722 * channel(color.b)


def luminance_contrast(lum1: float, lum2: float) -> float:
    lighter = max(lum1, lum2)
    darker = min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)


def contrast_ratio(foreground: RGBA, background: RGBA) -> float:
    """WCAG contrast ratio of a foreground drawn on a background."""
    fg = blend(foreground, background) if foreground.a < 1.0 else foreground
    return luminance_contrast(relative_luminance(fg), relative_luminance(background))


def lightness(color: RGBA) -> float:
    """HLS lightness in 0-1."""
    _, light, _ = colorsys.rgb_to_hls(color.r / 255, color.g / 255, color.b / 255)
    return light


def with_lightness(color: RGBA, light: float) -> RGBA:
    """Return the color with its HLS lightness replaced, keeping hue, saturation and alpha."""
    h, _, s = colorsys.rgb_to_hls(color.r / 255, color.g / 255, color.b / 255)
    r, g, b = colorsys.hls_to_rgb(h, max(0.0, min(1.0, light)), s)
    return RGBA(_clamp_channel(r * 255), _clamp_channel(g * 255), _clamp_channel(b * 255), color.a)


def is_dark_color(value: str) -> bool:
    """True when the color's lightness is below one half."""
    color = parse_color(value)
    if color is None:
        raise ValueError(f"Not a concrete color: {value!r}")
    return lightness(color) < 0.5
