from __future__ import annotations

import math
import re
from typing import Optional, Tuple

import colour
import numpy as np

# ============================================================
# Hex parsing
# ============================================================

HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")

# Below this OKLCH chroma the hue angle is noise; report 0 like an
# achromatic color.
ACHROMATIC_CHROMA = 2e-3


def parse_hex(value) -> Optional[str]:
    """
    Normalise a hex color to lower-case ``#rrggbb``.

    Accepts ``#rgb`` shorthand and a missing ``#``. Returns None for anything
    that is not a hex color.
    """
    if not isinstance(value, str):
        return None
    m = HEX_RE.match(value.strip())
    if m is None:
        return None
    digits = m.group(1).lower()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits}"


def is_literal_hex(value) -> bool:
    """True for a literal ``#`` color (not a symbolic reference such as var())."""
    return isinstance(value, str) and value.strip().startswith("#") and (
        parse_hex(value) is not None
    )


def hex_to_rgb(hex_color: str) -> Optional[np.ndarray]:
    h = parse_hex(hex_color)
    if h is None:
        return None
    return (
        np.array(
            [
                int(h[1:3], 16),
                int(h[3:5], 16),
                int(h[5:7], 16),
            ]
        )
        / 255.0
    )


def rgb_to_hex(rgb) -> str:
    rgb = np.clip(np.asarray(rgb, dtype=float), 0.0, 1.0)
    r, g, b = (rgb * 255.0 + 0.5).astype(int)
    return f"#{r:02x}{g:02x}{b:02x}"


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


# ============================================================
# OKLab / OKLCH
# ============================================================


def hex_to_oklab(hex_color: str) -> Optional[Tuple[float, float, float]]:
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return None
    xyz = colour.sRGB_to_XYZ(rgb)
    L, a, b = colour.XYZ_to_Oklab(xyz)
    return (float(L), float(a), float(b))


def oklab_to_oklch(L: float, a: float, b: float) -> Tuple[float, float, float]:
    C = math.sqrt(a * a + b * b)
    h = (math.degrees(math.atan2(b, a)) % 360.0) if C > ACHROMATIC_CHROMA else 0.0
    return (float(L), float(C), float(h))


def oklch_to_oklab(L: float, C: float, h: float) -> Tuple[float, float, float]:
    hr = math.radians(h)
    return (float(L), float(C * math.cos(hr)), float(C * math.sin(hr)))


def hex_to_oklch(hex_color: str) -> Optional[Tuple[float, float, float]]:
    lab = hex_to_oklab(hex_color)
    if lab is None:
        return None
    return oklab_to_oklch(*lab)


def oklab_to_hex(L: float, a: float, b: float) -> str:
    xyz = colour.Oklab_to_XYZ(np.array([L, a, b], dtype=float))
    rgb = colour.XYZ_to_sRGB(xyz)
    return rgb_to_hex(rgb)


def oklch_to_hex(L: float, C: float, h: float) -> str:
    """OKLCH to hex; lightness is clamped to [0, 1], sRGB channels are clipped."""
    L = clamp(float(L), 0.0, 1.0)
    C = max(0.0, float(C))
    return oklab_to_hex(*oklch_to_oklab(L, C, h))


def is_light(hex_color: str, threshold: float = 0.5) -> bool:
    """Light means OKLCH lightness above the threshold; unparsable colors count as L=0.5."""
    lch = hex_to_oklch(hex_color)
    L = lch[0] if lch is not None else 0.5
    return L > threshold


# ============================================================
# Distances
# ============================================================


def delta_e_ok(lab1, lab2) -> float:
    d = np.asarray(lab1, dtype=float) - np.asarray(lab2, dtype=float)
    return float(np.sqrt(np.dot(d, d)))


def delta_e_hex(hex1: str, hex2: str) -> Optional[float]:
    lab1 = hex_to_oklab(hex1)
    lab2 = hex_to_oklab(hex2)
    if lab1 is None or lab2 is None:
        return None
    return delta_e_ok(lab1, lab2)


def as_hue(value) -> Optional[float]:
    """Finite hue in [0, 360), or None when ``value`` is not a usable number."""
    try:
        h = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(h):
        return None
    return h % 360.0


def hue_distance(h1: float, h2: float) -> float:
    """Shorter arc between two hues (0..180). Unusable hues count as coincident."""
    a, b = as_hue(h1), as_hue(h2)
    if a is None or b is None:
        return 0.0
    d = abs(a - b)
    return min(d, 360.0 - d)


# ============================================================
# Mixing
# ============================================================


def mix_oklch(base_hex: str, tint_hex: str, ratio: float) -> str:
    """
    Interpolate from base toward tint in OKLCH at ``ratio`` (0 = base, 1 = tint).

    Hue travels the shorter arc. If one side is achromatic it borrows the
    other's hue. Returns ``tint_hex`` untouched when either color is unparsable.
    """
    base = hex_to_oklch(base_hex)
    tint = hex_to_oklch(tint_hex)
    if base is None or tint is None:
        return tint_hex

    t = clamp(float(ratio), 0.0, 1.0)
    L0, C0, h0 = base
    L1, C1, h1 = tint

    if C0 <= ACHROMATIC_CHROMA:
        h0 = h1
    if C1 <= ACHROMATIC_CHROMA:
        h1 = h0

    dh = ((h1 - h0 + 180.0) % 360.0) - 180.0
    L = L0 + (L1 - L0) * t
    C = C0 + (C1 - C0) * t
    h = (h0 + dh * t) % 360.0
    return oklch_to_hex(L, C, h)
