# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Minimum contrast enforcement for syntax highlighting colors."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from codetint.utils.colors import (
    RGBA,
    blend,
    contrast_ratio,
    lightness,
    parse_color,
    relative_luminance,
    to_hex,
    with_lightness,
)

if TYPE_CHECKING:
    from codetint.core.models import Theme

logger = logging.getLogger("codetint.contrast")

_SEARCH_STEPS = 24


def _search_lightness(fg: RGBA, bg: RGBA, min_ratio: float, lighter: bool) -> RGBA | None:
    """Binary-search the smallest lightness change that reaches min_ratio.

    Moving away from the background luminance makes the contrast grow
    monotonically, so the luminance threshold below is a monotone predicate.
    """
    bg_lum = relative_luminance(bg)
    if lighter:
        threshold = min_ratio * (bg_lum + 0.05) - 0.05
    else:
        threshold = (bg_lum + 0.05) / min_ratio - 0.05

    def meets(candidate: RGBA) -> bool:
        lum = relative_luminance(blend(candidate, bg))
        return lum >= threshold if lighter else lum <= threshold

    extreme = with_lightness(fg, 1.0 if lighter else 0.0)
    if not meets(extreme):
        return None

    start = lightness(fg)
    passing_l = 1.0 if lighter else 0.0
    passing = extreme
    failing_l = start
    for _ in range(_SEARCH_STEPS):
        mid = (failing_l + passing_l) / 2
        candidate = with_lightness(fg, mid)
        if meets(candidate):
            passing_l, passing = mid, candidate
        else:
            failing_l = mid
    return passing


def _search_alpha(fg: RGBA, bg: RGBA, min_ratio: float, lighter: bool) -> RGBA | None:
    """Binary-search the smallest alpha at which the lightness extreme reaches min_ratio.

    Alpha is searched in 1/255 steps so the result survives hex formatting.
    """
    extreme = with_lightness(fg, 1.0 if lighter else 0.0)
    opaque = extreme._replace(a=1.0)
    if contrast_ratio(opaque, bg) < min_ratio:
        return None

    failing = min(254, round(fg.a * 255))
    passing = 255
    while passing - failing > 1:
        mid = (failing + passing) // 2
        if contrast_ratio(extreme._replace(a=mid / 255), bg) >= min_ratio:
            passing = mid
        else:
            failing = mid
    return opaque if passing == 255 else extreme._replace(a=passing / 255)


def adjust_for_contrast(fg: RGBA, bg: RGBA, min_ratio: float) -> RGBA:
    """Return fg unchanged if it already meets min_ratio, else the closest passing variant."""
    if contrast_ratio(fg, bg) >= min_ratio:
        return fg
    if fg.a < 1.0:
        # Work on the alpha the hex output can represent
        fg = fg._replace(a=round(fg.a * 255) / 255)

    fg_lum = relative_luminance(blend(fg, bg))
    lighter_first = fg_lum >= relative_luminance(bg)
    for lighter in (lighter_first, not lighter_first):
        found = _search_lightness(fg, bg, min_ratio, lighter)
        if found is not None:
            return found

    if fg.a < 1.0:
        # Translucent colors can still get there by becoming more opaque
        for lighter in (lighter_first, not lighter_first):
            found = _search_alpha(fg, bg, min_ratio, lighter)
            if found is not None:
                return found
        fg = fg._replace(a=1.0)

    # Unreachable ratio: settle for whichever extreme gets closest
    extremes = (with_lightness(fg, 1.0), with_lightness(fg, 0.0))
    return max(extremes, key=lambda candidate: contrast_ratio(candidate, bg))


def ensure_min_contrast(theme: Theme, min_ratio: float, background: str | None) -> None:
    """Rewrite the theme's syntax colors in place until each meets min_ratio against background.

    A non-positive ratio disables the pass. A background that is not a concrete
    color (e.g. a CSS variable reference) skips the pass with a warning.
    """
    if min_ratio <= 0:
        return

    bg = parse_color(background)
    if bg is None:
        logger.warning(
            "Skipping contrast adjustment for theme %r: background %r is not a concrete color",
            theme.name, background,
        )
        return
    bg = RGBA(bg.r, bg.g, bg.b)

    adjusted = 0
    for kind, value in theme.syntax_colors.items():
        fg = parse_color(value)
        if fg is None:
            logger.debug("Theme %r: ignoring non-color syntax value %s=%r", theme.name, kind, value)
            continue
        if contrast_ratio(fg, bg) >= min_ratio:
            continue
        theme.syntax_colors[kind] = to_hex(adjust_for_contrast(fg, bg, min_ratio))
        adjusted += 1

    if adjusted:
        logger.debug(
            f"Adjusted {adjusted} syntax color(s) of theme {theme.name!r} "
            f"to a {min_ratio}:1 contrast against {to_hex(bg)}"
        )
