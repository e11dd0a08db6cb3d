from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .catalog import Token, filter_chromatic, find_by_hex, hue_from_display_name
from .color import delta_e_hex, is_light, mix_oklch
from .config import DEFAULT_CONFIG, SnapConfig
from .contrast import contrast_ratio
from .matcher import infer_base_hue_name
from .solver import adjust_lightness_for_contrast

# ============================================================
# Results
# ============================================================


@dataclass(frozen=True)
class TokenRef:
    hue: str
    step: int


@dataclass(frozen=True)
class KeyBackgroundResult:
    hex: str
    token_ref: Optional[TokenRef] = None

    def to_dict(self) -> dict:
        ref = None
        if self.token_ref is not None:
            ref = {"hue": self.token_ref.hue, "step": self.token_ref.step}
        return {"hex": self.hex, "token_ref": ref}


# ============================================================
# Steps
# ============================================================


def resolve_mix_ratio(
    preset: str, background_hex: str, *, config: SnapConfig = DEFAULT_CONFIG
) -> float:
    light = is_light(background_hex, config.light_background_threshold)
    return config.mix_ratio(preset, light_background=light)


def resolve_primary_hue(
    primary_hex: str,
    catalog: Optional[Sequence[Token]],
    primary_hue_hint: Optional[str] = None,
) -> Optional[str]:
    """
    Catalog hue for the primary color: exact catalog match, then the hint,
    then the nearest base hue bucket by name. None if nothing maps.
    """
    if catalog:
        token = find_by_hex(catalog, primary_hex)
        if token is not None and token.classification.hue:
            return token.classification.hue

    name = primary_hue_hint or infer_base_hue_name(primary_hex)
    return hue_from_display_name(name)


def pick_nearest_same_hue_token(
    catalog: Iterable[Token],
    hue: str,
    target_hex: str,
    text_hex: str,
    min_text_contrast: float,
) -> Optional[Token]:
    best = None
    best_de = float("inf")

    for token in filter_chromatic(catalog):
        if token.classification.hue != hue or token.classification.scale is None:
            continue
        if contrast_ratio(text_hex, token.hex) < min_text_contrast:
            continue
        de = delta_e_hex(target_hex, token.hex)
        if de is None:
            continue
        if de < best_de:
            best, best_de = token, de

    return best


def _text_contrast_target(value, config: SnapConfig) -> float:
    """``value`` as a finite ratio, else the configured default."""
    try:
        target = float(value)
    except (TypeError, ValueError):
        return config.key_background_min_text_contrast
    if not math.isfinite(target):
        return config.key_background_min_text_contrast
    return target


def resolve_key_background(
    primary_hex: str,
    background_hex: str,
    text_hex: str,
    preset: str = "default",
    catalog: Optional[Sequence[Token]] = None,
    primary_hue_hint: Optional[str] = None,
    min_text_contrast: Optional[float] = None,
    *,
    config: SnapConfig = DEFAULT_CONFIG,
) -> KeyBackgroundResult:
    """
    Derive a tinted surface for a brand color.

    The primary is mixed into the background in OKLCH, pushed along lightness
    until text stays readable, then snapped to the nearest same-hue catalog
    token that keeps the text contrast. Without a usable catalog token the
    computed color is returned without a token reference.
    """
    min_text_contrast = _text_contrast_target(min_text_contrast, config)

    ratio = resolve_mix_ratio(preset, background_hex, config=config)
    mixed = mix_oklch(background_hex, primary_hex, ratio)
    adjusted = adjust_lightness_for_contrast(
        mixed, text_hex, min_text_contrast, config=config
    )

    if not catalog:
        return KeyBackgroundResult(hex=adjusted)

    hue = resolve_primary_hue(primary_hex, catalog, primary_hue_hint)
    if hue is None:
        return KeyBackgroundResult(hex=adjusted)

    token = pick_nearest_same_hue_token(
        catalog, hue, adjusted, text_hex, min_text_contrast
    )
    if token is None:
        return KeyBackgroundResult(hex=adjusted)

    return KeyBackgroundResult(
        hex=token.hex, token_ref=TokenRef(hue=hue, step=token.classification.scale)
    )


def split_key_color(key_color: str):
    """"#0066cc@600" -> ("#0066cc", 600); the step suffix is optional."""
    color, _, step = str(key_color).partition("@")
    return color.strip(), (int(step) if step.strip().isdigit() else None)


def extract_key_surface(
    palettes: List[dict],
    background_hex: str,
    text_hex: str,
    preset: str = "default",
    catalog: Optional[Sequence[Token]] = None,
    *,
    config: SnapConfig = DEFAULT_CONFIG,
) -> Optional[KeyBackgroundResult]:
    """
    Key surface for the first non-derived palette that has a key color.

    palettes: dicts with ``key_colors`` (list of hex, optionally "hex@step")
    and an optional ``derived_from``.
    """
    for palette in palettes or []:
        if not isinstance(palette, dict) or palette.get("derived_from"):
            continue
        keys = palette.get("key_colors") or []
        if not keys or not keys[0]:
            continue
        primary_hex, _ = split_key_color(keys[0])
        return resolve_key_background(
            primary_hex, background_hex, text_hex, preset, catalog, config=config
        )
    return None
