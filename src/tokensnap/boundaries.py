from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterable, List, Optional, Tuple

from .contrast import WCAG_RATIO_AA, WCAG_RATIO_AA_LARGE, contrast_ratio

LIGHT_REFERENCE = "#ffffff"
DARK_REFERENCE = "#000000"


@dataclass(frozen=True)
class ContrastBoundary:
    white_3_to_1: Optional[int]
    white_4_5_to_1: Optional[int]
    black_4_5_to_1: Optional[int]
    black_3_to_1: Optional[int]

    def to_dict(self) -> dict:
        return asdict(self)


def _valid_steps(scale: Iterable[Tuple[int, str]]) -> List[Tuple[int, str]]:
    out = []
    for item in scale or []:
        try:
            step, hex_color = item
            out.append((int(step), hex_color))
        except (TypeError, ValueError):
            continue
    return out


def find_light_boundary(
    scale: Iterable[Tuple[int, str]],
    threshold: float,
    light_bg: str = LIGHT_REFERENCE,
) -> Optional[int]:
    """
    First step, light to dark (ascending step), reaching ``threshold`` on the
    light background. Steps before it are too pale for that threshold.
    """
    for step, hex_color in sorted(_valid_steps(scale), key=lambda s: s[0]):
        if contrast_ratio(hex_color, light_bg) >= threshold:
            return step
    return None


def find_dark_boundary(
    scale: Iterable[Tuple[int, str]],
    threshold: float,
    dark_bg: str = DARK_REFERENCE,
) -> Optional[int]:
    """First step, dark to light (descending step), reaching ``threshold`` on the dark background."""
    for step, hex_color in sorted(_valid_steps(scale), key=lambda s: -s[0]):
        if contrast_ratio(hex_color, dark_bg) >= threshold:
            return step
    return None


def calculate_boundaries(
    scale: Iterable[Tuple[int, str]],
    light_bg: str = LIGHT_REFERENCE,
    dark_bg: str = DARK_REFERENCE,
) -> ContrastBoundary:
    scale = _valid_steps(scale)
    return ContrastBoundary(
        white_3_to_1=find_light_boundary(scale, WCAG_RATIO_AA_LARGE, light_bg),
        white_4_5_to_1=find_light_boundary(scale, WCAG_RATIO_AA, light_bg),
        black_4_5_to_1=find_dark_boundary(scale, WCAG_RATIO_AA, dark_bg),
        black_3_to_1=find_dark_boundary(scale, WCAG_RATIO_AA_LARGE, dark_bg),
    )
