from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

# ============================================================
# Presets
# ============================================================

PRESETS = ("default", "pastel", "vibrant", "dark", "high-contrast")


class ConfigError(ValueError):
    pass


def _default_min_contrast() -> Dict[str, float]:
    return {"high-contrast": 7.0, "pastel": 3.0}


def _default_mix_ratios() -> Dict[str, Tuple[float, float]]:
    # preset -> (light background, dark background)
    return {
        "default": (0.16, 0.18),
        "pastel": (0.22, 0.18),
        "high-contrast": (0.14, 0.16),
        "dark": (0.12, 0.20),
    }


# ============================================================
# Tunables
# ============================================================


@dataclass(frozen=True)
class SnapConfig:
    min_hue_distance: float = 30.0
    solver_max_iterations: int = 25
    solver_tolerance: float = 0.001
    light_background_threshold: float = 0.5
    default_min_contrast: float = 4.5
    preset_min_contrast: Dict[str, float] = field(default_factory=_default_min_contrast)
    mix_ratios: Dict[str, Tuple[float, float]] = field(
        default_factory=_default_mix_ratios
    )
    key_background_min_text_contrast: float = 4.5
    soft_border_lightness_floor: float = 0.6
    soft_border_lightness_drop: float = 0.08
    soft_border_chroma_scale: float = 0.6

    def min_contrast(self, preset: str) -> float:
        return float(self.preset_min_contrast.get(preset, self.default_min_contrast))

    def mix_ratio(self, preset: str, *, light_background: bool) -> float:
        pair = self.mix_ratios.get(preset) or self.mix_ratios.get("default", (0.16, 0.18))
        light, dark = pair
        return float(light if light_background else dark)


DEFAULT_CONFIG = SnapConfig()


def _coerce(name: str, value: Any) -> Any:
    if name == "mix_ratios":
        if not isinstance(value, dict):
            raise ConfigError("mix_ratios must be an object of preset -> [light, dark]")
        out = dict(DEFAULT_CONFIG.mix_ratios)
        for preset, pair in value.items():
            if not isinstance(pair, (list, tuple)) or len(pair) != 2:
                raise ConfigError(f"mix_ratios[{preset!r}] must be [light, dark]")
            out[preset] = (float(pair[0]), float(pair[1]))
        return out
    if name == "preset_min_contrast":
        if not isinstance(value, dict):
            raise ConfigError("preset_min_contrast must be an object of preset -> ratio")
        out = dict(DEFAULT_CONFIG.preset_min_contrast)
        out.update({k: float(v) for k, v in value.items()})
        return out
    if name == "solver_max_iterations":
        return int(value)
    return float(value)


def config_from_dict(data: Dict[str, Any], base: Optional[SnapConfig] = None) -> SnapConfig:
    base = base or DEFAULT_CONFIG
    known = {f.name for f in fields(SnapConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
    try:
        overrides = {k: _coerce(k, v) for k, v in data.items()}
    except (TypeError, ValueError) as exc:
        if isinstance(exc, ConfigError):
            raise
        raise ConfigError(str(exc)) from exc
    return replace(base, **overrides)


def load_config(path: Path) -> SnapConfig:
    """
    Load JSON overrides on top of the defaults.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Could not read config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")
    return config_from_dict(data)
