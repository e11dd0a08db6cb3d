"""
tokensnap: resolve arbitrary colors against a design-token palette while
keeping perceptual closeness, WCAG contrast and hue separation.
"""

from .boundaries import ContrastBoundary, calculate_boundaries
from .catalog import (
    CatalogError,
    Token,
    TokenClassification,
    filter_chromatic,
    filter_for_preset,
    load_catalog,
    matches_preset,
    preset_min_contrast,
)
from .color import delta_e_ok, hex_to_oklab, hex_to_oklch, hue_distance, mix_oklch
from .config import DEFAULT_CONFIG, ConfigError, SnapConfig, load_config
from .contrast import contrast_ratio
from .key_background import KeyBackgroundResult, TokenRef, resolve_key_background
from .matcher import MatchResult, find_nearest, snap_to_nearest
from .selector import is_hue_far_enough, select_hue_distant
from .solver import adjust_lightness_for_contrast, create_soft_border_color

__version__ = "0.1.0"
