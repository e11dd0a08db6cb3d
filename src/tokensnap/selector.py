"""
Hue-distant multi-selection.

Picks up to N catalog colors whose hues stay apart from each other and from a
set of hues already in use. Candidates come from an ordered list of tiers
that relax accessibility before hue diversity, and hue diversity before
"anything chromatic".
"""

from __future__ import annotations

import math
from typing import Callable, Iterable, List, Sequence, Tuple

from .catalog import Token, filter_chromatic, matches_preset, preset_min_contrast
from .color import as_hue, hex_to_oklch, hue_distance, parse_hex
from .config import DEFAULT_CONFIG, SnapConfig
from .contrast import contrast_ratio
from .matcher import MatchResult

MIN_HUE_DISTANCE = DEFAULT_CONFIG.min_hue_distance

RngNext = Callable[[], float]


def clean_hues(hues) -> List[float]:
    """Usable hues from ``hues``; non-numeric and non-finite entries are dropped."""
    try:
        items = list(hues or [])
    except TypeError:
        return []
    return [h for h in (as_hue(v) for v in items) if h is not None]


def is_hue_far_enough(
    hue: float, existing_hues: Iterable[float], min_distance: float = MIN_HUE_DISTANCE
) -> bool:
    """False for an unusable ``hue``; unusable entries of ``existing_hues`` are ignored."""
    h = as_hue(hue)
    if h is None:
        return False
    return all(hue_distance(h, other) >= min_distance for other in clean_hues(existing_hues))


def _unit(value) -> float:
    try:
        r = float(value)
    except (TypeError, ValueError):
        return 0.0
    return r if math.isfinite(r) else 0.0


def fisher_yates_shuffle(items: Sequence, rng_next: RngNext) -> list:
    """Shuffled copy of ``items``; ``rng_next`` returns floats in [0, 1), anything else reads as 0."""
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = int(math.floor(_unit(rng_next()) * (i + 1)))
        j = max(0, min(i, j))
        out[i], out[j] = out[j], out[i]
    return out


def _token_hue(token: Token) -> float:
    lch = hex_to_oklch(token.hex)
    return lch[2] if lch is not None else 0.0


def candidate_tiers(
    existing_hues: Sequence[float],
    catalog: Iterable[Token],
    preset: str,
    background_hex: str,
    *,
    config: SnapConfig = DEFAULT_CONFIG,
) -> List[List[Tuple[Token, float]]]:
    """
    Candidate pools, strictest first, as (token, hue) pairs:

    1. preset + contrast + hue distance from ``existing_hues``
    2. preset + contrast
    3. every chromatic token
    """
    min_contrast = preset_min_contrast(preset, config)
    chromatic = [(t, _token_hue(t)) for t in filter_chromatic(catalog)]

    accessible = [
        (t, hue)
        for t, hue in chromatic
        if matches_preset(t.hex, preset)
        and contrast_ratio(t.hex, background_hex) >= min_contrast
    ]
    distant = [
        (t, hue)
        for t, hue in accessible
        if is_hue_far_enough(hue, existing_hues, config.min_hue_distance)
    ]
    return [distant, accessible, chromatic]


def select_hue_distant(
    existing_hues: Sequence[float],
    needed: int,
    catalog: Iterable[Token],
    preset: str,
    background_hex: str,
    rng_next: RngNext,
    *,
    config: SnapConfig = DEFAULT_CONFIG,
) -> List[MatchResult]:
    """
    Choose up to ``needed`` catalog colors hue-separated from ``existing_hues``
    and from each other.

    Tier 1 is used when it alone can fill the request, otherwise tier 2 when
    non-empty, otherwise tier 3. The pool is shuffled with ``rng_next``, then
    read twice: first taking only hue-distant tokens, then (if still short)
    any token not yet picked. Hex values are never repeated.
    """
    try:
        needed = int(needed)
    except (TypeError, ValueError, OverflowError):
        return []
    if needed <= 0:
        return []

    used_hues = clean_hues(existing_hues)
    distant, accessible, chromatic = candidate_tiers(
        used_hues, catalog, preset, background_hex, config=config
    )

    if len({parse_hex(t.hex) for t, _ in distant}) >= needed:
        pool = distant
    elif accessible:
        pool = accessible
    else:
        pool = chromatic

    shuffled = fisher_yates_shuffle(pool, rng_next)

    selected: List[MatchResult] = []
    picked_hex = set()

    def take(token: Token, hue: float) -> None:
        selected.append(MatchResult.from_token(token))
        picked_hex.add(parse_hex(token.hex))
        used_hues.append(hue)

    for token, hue in shuffled:
        if len(selected) >= needed:
            break
        if parse_hex(token.hex) in picked_hex:
            continue
        if is_hue_far_enough(hue, used_hues, config.min_hue_distance):
            take(token, hue)

    for token, hue in shuffled:
        if len(selected) >= needed:
            break
        if parse_hex(token.hex) in picked_hex:
            continue
        take(token, hue)

    return selected
