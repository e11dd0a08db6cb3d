"""
Design-token catalog: token model, filtering and loaders.

A catalog is a plain list of ``Token``. It is loaded once and treated as
read-only; every function here returns new lists.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from .color import hex_to_oklch, is_literal_hex, parse_hex
from .config import DEFAULT_CONFIG, SnapConfig

# ============================================================
# Hues & scales (fixed)
# ============================================================

HUE_ORDER = [
    "blue",
    "light-blue",
    "cyan",
    "green",
    "lime",
    "yellow",
    "orange",
    "red",
    "magenta",
    "purple",
]

HUE_NAME_EN = {
    "blue": "Blue",
    "light-blue": "Light Blue",
    "cyan": "Cyan",
    "green": "Green",
    "lime": "Lime",
    "yellow": "Yellow",
    "orange": "Orange",
    "red": "Red",
    "magenta": "Magenta",
    "purple": "Purple",
}

HUE_BY_NAME_EN = {name: hue for hue, name in HUE_NAME_EN.items()}

SCALE_ORDER = [50, 100, 200, 300, 400, 500, 600, 700, 800, 900, 1000, 1100, 1200]

CATEGORIES = ("chromatic", "neutral", "semantic")


class CatalogError(ValueError):
    pass


@dataclass(frozen=True)
class TokenClassification:
    category: str
    hue: Optional[str] = None
    scale: Optional[int] = None


@dataclass(frozen=True)
class Token:
    id: str
    hex: str
    name: str
    classification: TokenClassification
    name_en: Optional[str] = None
    alpha: Optional[float] = None

    @property
    def is_chromatic(self) -> bool:
        return self.classification.category == "chromatic"


def chromatic_token(hue: str, scale: int, hex_color: str) -> Token:
    name = f"{HUE_NAME_EN.get(hue, hue)} {scale}"
    return Token(
        id=f"{hue}-{scale}",
        hex=hex_color,
        name=name,
        name_en=name,
        classification=TokenClassification("chromatic", hue, int(scale)),
    )


# ============================================================
# Filtering
# ============================================================


def filter_chromatic(catalog: Iterable[Token]) -> List[Token]:
    """Chromatic tokens carrying a literal hex; semantic aliases and neutrals are dropped."""
    try:
        items = list(catalog or [])
    except TypeError:
        return []
    return [
        t
        for t in items
        if isinstance(t, Token) and t.is_chromatic and is_literal_hex(t.hex)
    ]


def matches_preset(hex_color: str, preset: str) -> bool:
    lch = hex_to_oklch(hex_color)
    if lch is None:
        return True
    L, C, _ = lch

    if preset == "pastel":
        return L >= 0.75 and C <= 0.10
    if preset == "vibrant":
        return C >= 0.12 and 0.35 <= L <= 0.85
    if preset == "dark":
        return L <= 0.40
    return True


def preset_min_contrast(preset: str, config: SnapConfig = DEFAULT_CONFIG) -> float:
    return config.min_contrast(preset)


def filter_for_preset(catalog: Iterable[Token], preset: str) -> List[Token]:
    """
    Chromatic tokens eligible under ``preset``.

    Falls back to every chromatic token when the preset leaves nothing, so a
    non-empty chromatic catalog never filters down to empty.
    """
    chromatic = filter_chromatic(catalog)
    eligible = [t for t in chromatic if matches_preset(t.hex, preset)]
    return eligible if eligible else chromatic


# ============================================================
# Lookup
# ============================================================


def find_by_hex(catalog: Iterable[Token], hex_color: str) -> Optional[Token]:
    target = parse_hex(hex_color)
    if target is None:
        return None
    for t in filter_chromatic(catalog):
        if parse_hex(t.hex) == target:
            return t
    return None


def tokens_for_hue(catalog: Iterable[Token], hue: str) -> List[Token]:
    """Chromatic tokens of one hue, ordered by scale step."""
    sub = [t for t in filter_chromatic(catalog) if t.classification.hue == hue]
    return sorted(sub, key=lambda t: t.classification.scale or 0)


def tonal_scale(catalog: Iterable[Token], hue: str) -> List[Tuple[int, str]]:
    return [(t.classification.scale, t.hex) for t in tokens_for_hue(catalog, hue)]


def hue_from_display_name(name: Optional[str]) -> Optional[str]:
    """Map "Light Blue" (or an id like "light-blue") to a catalog hue id."""
    if not name:
        return None
    if name in HUE_NAME_EN:
        return name
    return HUE_BY_NAME_EN.get(name)


# ============================================================
# Loaders
# ============================================================


def _token_from_record(rec: Dict, where: str) -> Token:
    if not isinstance(rec, dict):
        raise CatalogError(f"{where}: token must be an object")

    cls = rec.get("classification") or {}
    if not isinstance(cls, dict):
        raise CatalogError(f"{where}: classification must be an object")
    category = cls.get("category", rec.get("category"))
    hue = cls.get("hue", rec.get("hue"))
    scale = cls.get("scale", rec.get("scale"))
    hex_color = rec.get("hex")

    if category not in CATEGORIES:
        raise CatalogError(f"{where}: unknown category {category!r}")
    if not isinstance(hex_color, str) or not hex_color.strip():
        raise CatalogError(f"{where}: missing hex")

    if not isinstance(hue, str) or not hue.strip():
        hue = None
    if scale is None or (isinstance(scale, float) and pd.isna(scale)):
        scale = None
    else:
        try:
            scale = int(scale)
        except (TypeError, ValueError) as exc:
            raise CatalogError(f"{where}: bad scale {scale!r}") from exc

    if category == "chromatic" and (hue is None or scale is None):
        raise CatalogError(f"{where}: chromatic token needs hue and scale")

    literal = parse_hex(hex_color) if is_literal_hex(hex_color) else None
    token_id = rec.get("id") or (f"{hue}-{scale}" if category == "chromatic" else where)
    name = rec.get("name") or rec.get("name_en") or rec.get("nameEn") or str(token_id)
    alpha = rec.get("alpha")
    if alpha is not None:
        try:
            alpha = float(alpha)
        except (TypeError, ValueError) as exc:
            raise CatalogError(f"{where}: bad alpha {alpha!r}") from exc

    return Token(
        id=str(token_id),
        hex=literal or hex_color.strip(),
        name=str(name),
        name_en=rec.get("name_en") or rec.get("nameEn"),
        classification=TokenClassification(category, hue, scale),
        alpha=alpha,
    )


def load_catalog_json(path: Path) -> List[Token]:
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Could not read catalog {path}: {exc}") from exc
    if isinstance(data, dict):
        data = data.get("tokens")
    if not isinstance(data, list):
        raise CatalogError(f"{path}: expected a list of tokens")
    return [_token_from_record(rec, f"{path.name}[{i}]") for i, rec in enumerate(data)]


def load_catalog_csv(path: Path) -> List[Token]:
    path = Path(path)
    try:
        df = pd.read_csv(path)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise CatalogError(f"Could not read catalog {path}: {exc}") from exc

    if not {"hex", "category"}.issubset(df.columns):
        raise CatalogError("CSV must contain hex, category columns")

    df = df.astype(object).where(pd.notna(df), None)
    return [
        _token_from_record(rec, f"{path.name}:{i + 2}")
        for i, rec in enumerate(df.to_dict("records"))
    ]


CSS_VAR_RE = re.compile(
    r"--color-(primitive|neutral|semantic)([a-z0-9-]*)\s*:\s*([^;]+);", re.IGNORECASE
)
RGBA_RE = re.compile(
    r"rgba\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*([\d.]+)\s*\)", re.IGNORECASE
)
VAR_RE = re.compile(r"var\(--[a-z0-9-]+\)", re.IGNORECASE)
NEUTRAL_GRAY_RE = re.compile(r"^(solid|opacity)-gray-(\d+)$")


def _parse_css_value(value: str, name: str, warnings: List[str]):
    value = value.strip()
    h = parse_hex(value) if value.startswith("#") else None
    if h is not None:
        return h, None
    m = RGBA_RE.match(value)
    if m:
        r, g, b = (int(x) for x in m.groups()[:3])
        if max(r, g, b) > 255:
            warnings.append(f"{name}: rgba channel out of range: {value}")
            return None
        return f"#{r:02x}{g:02x}{b:02x}", float(m.group(4))
    warnings.append(f"{name}: unsupported color value: {value}")
    return None


def parse_catalog_css(text: str) -> Tuple[List[Token], List[str]]:
    """
    Parse design-token CSS custom properties into tokens.

    --color-primitive-<hue>-<scale>: #hex;   -> chromatic
    --color-neutral-white|black: #hex;       -> neutral
    --color-neutral-solid-gray-<scale>: #hex -> neutral with scale
    --color-neutral-opacity-gray-<scale>: rgba(...) -> neutral with scale and alpha
    --color-semantic-<name>: var(--...);     -> semantic (symbolic hex)

    Returns (tokens, warnings). Unrecognised declarations are skipped with a
    warning rather than failing the whole file.
    """
    tokens: List[Token] = []
    warnings: List[str] = []

    for kind, suffix, value in CSS_VAR_RE.findall(text):
        kind = kind.lower()
        suffix = suffix.lstrip("-").lower()
        name = f"--color-{kind}-{suffix}"
        value = value.strip()

        if kind == "primitive":
            hue = next((h for h in HUE_ORDER if suffix.startswith(f"{h}-")), None)
            scale_str = suffix[len(hue) + 1 :] if hue else ""
            if hue is None or not scale_str.isdigit():
                warnings.append(f"{name}: not a <hue>-<scale> primitive")
                continue
            parsed = _parse_css_value(value, name, warnings)
            if parsed is None:
                continue
            hex_color, alpha = parsed
            tok = chromatic_token(hue, int(scale_str), hex_color)
            tokens.append(
                Token(tok.id, tok.hex, tok.name, tok.classification, tok.name_en, alpha)
            )
        elif kind == "neutral":
            gray = NEUTRAL_GRAY_RE.match(suffix)
            if suffix in ("white", "black"):
                token_name, scale = suffix.capitalize(), None
            elif gray:
                variant, scale = gray.group(1), int(gray.group(2))
                token_name = f"Gray {scale} ({variant.capitalize()})"
            else:
                warnings.append(f"{name}: unrecognised neutral token")
                continue
            parsed = _parse_css_value(value, name, warnings)
            if parsed is None:
                continue
            tokens.append(
                Token(
                    id=f"neutral-{suffix}",
                    hex=parsed[0],
                    name=token_name,
                    name_en=token_name,
                    classification=TokenClassification("neutral", scale=scale),
                    alpha=parsed[1],
                )
            )
        else:
            if not suffix:
                warnings.append(f"{name}: semantic token without a name")
                continue
            if not VAR_RE.search(value):
                warnings.append(f"{name}: semantic token without var() reference")
            tokens.append(
                Token(
                    id=f"semantic-{suffix}",
                    hex=value,
                    name=suffix,
                    classification=TokenClassification("semantic"),
                )
            )

    return tokens, warnings


def load_catalog_css(path: Path) -> Tuple[List[Token], List[str]]:
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as exc:
        raise CatalogError(f"Could not read catalog {path}: {exc}") from exc
    tokens, warnings = parse_catalog_css(text)
    if not tokens:
        raise CatalogError(f"No color tokens found in {path}")
    return tokens, warnings


def load_catalog(path: Path) -> Tuple[List[Token], List[str]]:
    """
    Load a catalog by file suffix (.json, .csv, .css).

    Returns (tokens, warnings); only the CSS parser produces warnings.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        return load_catalog_json(path), []
    if suffix == ".csv":
        return load_catalog_csv(path), []
    if suffix == ".css":
        return load_catalog_css(path)
    raise CatalogError(f"Unsupported catalog format: {suffix} (use .json, .csv or .css)")
