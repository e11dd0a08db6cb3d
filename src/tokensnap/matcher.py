from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .catalog import Token, filter_chromatic, filter_for_preset
from .color import delta_e_ok, hex_to_oklab, hex_to_oklch, hue_distance, parse_hex

# ============================================================
# Base hue buckets (OKLCH hue anchors, ordered from blue)
# ============================================================

BASE_HUES = [
    ("blue", 250.0, "Blue"),
    ("indigo", 275.0, "Indigo"),
    ("purple", 300.0, "Purple"),
    ("magenta", 330.0, "Magenta"),
    ("pink", 350.0, "Pink"),
    ("red", 25.0, "Red"),
    ("orange", 55.0, "Orange"),
    ("amber", 75.0, "Amber"),
    ("yellow", 95.0, "Yellow"),
    ("lime", 125.0, "Lime"),
    ("green", 145.0, "Green"),
    ("teal", 175.0, "Teal"),
    ("cyan", 195.0, "Cyan"),
]


def nearest_base_hue(hue: float) -> Tuple[str, float, str]:
    """First bucket wins on ties."""
    best = BASE_HUES[0]
    best_d = hue_distance(hue, best[1])
    for bucket in BASE_HUES[1:]:
        d = hue_distance(hue, bucket[1])
        if d < best_d:
            best, best_d = bucket, d
    return best


def infer_base_hue_name(hex_color: str) -> str:
    lch = hex_to_oklch(hex_color)
    hue = lch[2] if lch is not None else 0.0
    return nearest_base_hue(hue)[2]


# ============================================================
# Matching
# ============================================================


@dataclass(frozen=True)
class MatchResult:
    hex: str
    step: Optional[int] = None
    base_hue_name: Optional[str] = None

    @classmethod
    def from_token(cls, token: Token) -> "MatchResult":
        return cls(
            hex=token.hex,
            step=token.classification.scale,
            base_hue_name=infer_base_hue_name(token.hex),
        )

    def to_dict(self) -> dict:
        return {"hex": self.hex, "step": self.step, "base_hue_name": self.base_hue_name}


def find_nearest(
    target_hex: str,
    catalog: Iterable[Token],
    preset: str = "default",
    limit: int = 1,
) -> List[Tuple[Token, float]]:
    """
    Rank preset-eligible chromatic tokens by OKLab ΔE to ``target_hex``.

    Ties keep catalog order. Returns [] for an unparsable target, an empty
    catalog or a non-positive limit.
    """
    try:
        limit = int(limit)
    except (TypeError, ValueError, OverflowError):
        return []
    if limit <= 0:
        return []
    target = hex_to_oklab(target_hex)
    if target is None:
        return []

    scored = []
    for token in filter_for_preset(catalog, preset):
        lab = hex_to_oklab(token.hex)
        if lab is None:
            continue
        scored.append((token, delta_e_ok(target, lab)))

    # sorted() is stable: first-encountered candidate wins exact ties
    scored = sorted(scored, key=lambda pair: pair[1])
    return scored[:limit]


def snap_to_nearest(
    target_hex: str,
    catalog: Iterable[Token],
    preset: str = "default",
) -> Optional[MatchResult]:
    ranked = find_nearest(target_hex, catalog, preset, limit=1)
    if not ranked:
        return None
    return MatchResult.from_token(ranked[0][0])


def is_catalog_result(result: Optional[MatchResult], catalog: Iterable[Token]) -> bool:
    """True when the result's hex is literally one of the catalog's chromatic tokens."""
    if result is None:
        return False
    target = parse_hex(result.hex)
    if target is None:
        return False
    return any(parse_hex(t.hex) == target for t in filter_chromatic(catalog))
