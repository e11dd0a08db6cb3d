"""
Lightness solver: move a color along OKLCH lightness (hue and chroma held)
until it reaches a contrast target against a reference color.
"""

from __future__ import annotations

from dataclasses import dataclass

from .color import hex_to_oklch, is_light, oklch_to_hex, parse_hex
from .config import DEFAULT_CONFIG, SnapConfig
from .contrast import (
    WCAG_RATIO_AA,
    WCAG_RATIO_AA_LARGE,
    contrast_ratio,
    contrast_text_color,
)

# Fallback text colors when a requested text color is unreadable
SAFE_TEXT_ON_LIGHT = "#1a1a1a"
SAFE_TEXT_ON_DARK = "#f5f5f5"

PASTEL_BACKGROUND_MIN_L = 0.9
PASTEL_BACKGROUND_MAX_C = 0.06


def adjust_lightness_for_contrast(
    color_hex: str,
    background_hex: str,
    target_contrast: float,
    *,
    config: SnapConfig = DEFAULT_CONFIG,
) -> str:
    """
    Return a color that reaches ``target_contrast`` against ``background_hex``.

    Already-compliant input comes back unchanged. Otherwise lightness is
    binary-searched with hue and chroma fixed: darker on a light background
    (search [0, L0]), lighter on a dark one (search [L0, 1]). Among the
    midpoints that meet the target, the one closest to L0 wins. If none does,
    lightness saturates to 0 or 1, so an unreachable target still yields a hex.
    """
    try:
        target = float(target_contrast)
    except (TypeError, ValueError):
        return color_hex

    current = contrast_ratio(background_hex, color_hex)
    if current >= target:
        return color_hex

    lch = hex_to_oklch(color_hex)
    if lch is None:
        return color_hex
    L0, C, h = lch

    light_bg = is_light(background_hex, config.light_background_threshold)
    if light_bg:
        low, high = 0.0, L0
    else:
        low, high = L0, 1.0

    best_L = None
    best_dev = float("inf")

    for _ in range(config.solver_max_iterations):
        mid = (low + high) / 2.0
        c = contrast_ratio(background_hex, oklch_to_hex(mid, C, h))
        ok = c >= target

        if ok and abs(mid - L0) < best_dev:
            best_dev = abs(mid - L0)
            best_L = mid

        # contrast grows away from the background: step back toward L0 once met
        if light_bg:
            if ok:
                low = mid
            else:
                high = mid
        else:
            if ok:
                high = mid
            else:
                low = mid

        if abs(high - low) < config.solver_tolerance:
            break

    if best_L is None:
        best_L = 0.0 if light_bg else 1.0

    return oklch_to_hex(best_L, C, h)


def ensure_min_contrast(
    color_hex: str,
    background_hex: str,
    min_contrast: float,
    *,
    config: SnapConfig = DEFAULT_CONFIG,
) -> str:
    if contrast_ratio(background_hex, color_hex) >= min_contrast:
        return color_hex
    return adjust_lightness_for_contrast(
        color_hex, background_hex, min_contrast, config=config
    )


def text_safe_color(text_hex: str, background_hex: str, large_text: bool = False) -> str:
    """
    Keep ``text_hex`` if readable on the background (AA, or AA large), else
    fall back to a near-black or near-white.
    """
    threshold = WCAG_RATIO_AA_LARGE if large_text else WCAG_RATIO_AA
    if contrast_ratio(background_hex, text_hex) >= threshold:
        return text_hex
    if contrast_text_color(background_hex) == "black":
        return SAFE_TEXT_ON_LIGHT
    return SAFE_TEXT_ON_DARK


# ============================================================
# Pastel helpers
# ============================================================


@dataclass(frozen=True)
class PastelColorPair:
    background: str
    text: str


def create_pastel_color_pair(
    color_hex: str,
    background_hex: str,
    target_contrast: float = WCAG_RATIO_AA,
    *,
    config: SnapConfig = DEFAULT_CONFIG,
) -> PastelColorPair:
    """
    Split one (usually pastel) color into a soft surface and a same-hue text
    color readable on the page background.
    """
    lch = hex_to_oklch(color_hex)
    if lch is None:
        return PastelColorPair(background=color_hex, text=color_hex)
    L, C, h = lch

    surface = oklch_to_hex(
        max(L, PASTEL_BACKGROUND_MIN_L), min(C, PASTEL_BACKGROUND_MAX_C), h
    )
    text = adjust_lightness_for_contrast(
        parse_hex(color_hex), background_hex, target_contrast, config=config
    )
    return PastelColorPair(background=surface, text=text)


def create_soft_border_color(
    color_hex: str, *, config: SnapConfig = DEFAULT_CONFIG
) -> str:
    """Slightly darker, desaturated border; OKLCH lightness never below the floor."""
    lch = hex_to_oklch(color_hex)
    if lch is None:
        return color_hex
    L, C, h = lch
    L = max(config.soft_border_lightness_floor, L - config.soft_border_lightness_drop)
    return oklch_to_hex(L, C * config.soft_border_chroma_scale, h)
