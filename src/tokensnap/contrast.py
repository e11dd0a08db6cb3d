from __future__ import annotations

from typing import Optional

import colour

from .color import hex_to_rgb

# ============================================================
# WCAG 2.x thresholds
# ============================================================

WCAG_RATIO_AA_LARGE = 3.0
WCAG_RATIO_AA = 4.5
WCAG_RATIO_AAA = 7.0

CONTRAST_LEVELS = {
    "AA": WCAG_RATIO_AA,
    "AAA": WCAG_RATIO_AAA,
    "AA_LARGE": WCAG_RATIO_AA_LARGE,
}


def relative_luminance(hex_color: str) -> Optional[float]:
    """WCAG relative luminance: the Y of sRGB-decoded XYZ, in [0, 1]."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return None
    Y = float(colour.sRGB_to_XYZ(rgb)[1])
    return max(0.0, min(1.0, Y))


def contrast_ratio(hex1: str, hex2: str) -> float:
    """
    WCAG 2.x contrast ratio between two colors (order independent, 1..21).

    Returns 0.0 when either color cannot be parsed, so comparisons against a
    threshold simply fail.
    """
    y1 = relative_luminance(hex1)
    y2 = relative_luminance(hex2)
    if y1 is None or y2 is None:
        return 0.0
    hi, lo = max(y1, y2), min(y1, y2)
    return (hi + 0.05) / (lo + 0.05)


def meets_contrast(ratio: float, level: str) -> bool:
    threshold = CONTRAST_LEVELS.get(level)
    if threshold is None:
        return False
    return ratio >= threshold


def contrast_text_color(background_hex: str) -> str:
    """Pick "black" or "white" text, whichever contrasts more with the background."""
    with_white = contrast_ratio(background_hex, "#ffffff")
    with_black = contrast_ratio(background_hex, "#000000")
    return "black" if with_black >= with_white else "white"
