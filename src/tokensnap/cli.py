from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Tuple

import click
import numpy as np

from .boundaries import calculate_boundaries
from .catalog import HUE_ORDER, CatalogError, load_catalog, tonal_scale
from .color import parse_hex
from .config import DEFAULT_CONFIG, PRESETS, ConfigError, load_config
from .contrast import contrast_ratio
from .display import (
    build_boundary_table,
    build_colors_table,
    build_key_background_table,
    build_nearest_table,
    build_selection_table,
    render,
    save_table_image,
)
from .key_background import resolve_key_background
from .matcher import find_nearest, infer_base_hue_name
from .selector import select_hue_distant
from .solver import adjust_lightness_for_contrast

PRESET_CHOICE = click.Choice(list(PRESETS), case_sensitive=False)


def log(msg: str) -> None:
    click.echo(f"[tokensnap] {msg}", err=True)


def read_catalog(path: Path):
    try:
        tokens, warnings = load_catalog(path)
    except CatalogError as exc:
        raise click.ClickException(str(exc))
    for w in warnings:
        log(f"warning: {w}")
    log(f"loaded {len(tokens)} tokens from {path}")
    return tokens


def require_hex(value: str, what: str) -> str:
    h = parse_hex(value)
    if h is None:
        raise click.ClickException(f"Could not parse {what} color: {value!r}")
    return h


def emit(ctx: click.Context, payload, table, title: str) -> None:
    if ctx.obj["json"]:
        click.echo(json.dumps(payload, indent=2))
    else:
        render(table)
    out_image: Optional[Path] = ctx.obj["out_image"]
    if out_image is not None:
        save_table_image(table, title, out_image)


# ============================================================
# CLI
# ============================================================


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file overriding solver/selector tunables.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON instead of a table.")
@click.option(
    "--out-image",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Save table as image (.svg or .png). PNG requires cairosvg.",
)
@click.pass_context
def main(ctx, config_path: Optional[Path], as_json: bool, out_image: Optional[Path]):
    """
    Resolve arbitrary colors against a design-token palette.
    """
    config = DEFAULT_CONFIG
    if config_path is not None:
        try:
            config = load_config(config_path)
        except ConfigError as exc:
            raise click.ClickException(str(exc))
    ctx.obj = {"config": config, "json": as_json, "out_image": out_image}


@main.command()
@click.argument("color")
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
)
@click.option("--preset", type=PRESET_CHOICE, default="default", show_default=True)
@click.option("--limit", default=1, show_default=True, type=click.IntRange(min=1))
@click.pass_context
def snap(ctx, color: str, catalog_path: Path, preset: str, limit: int):
    """Snap COLOR to the nearest catalog token(s) by OKLab ΔE."""
    target = require_hex(color, "target")
    catalog = read_catalog(catalog_path)

    ranked = find_nearest(target, catalog, preset.lower(), limit)
    if not ranked:
        raise click.ClickException("No chromatic tokens to match against")

    payload = [
        {
            "id": t.id,
            "hex": t.hex,
            "hue": t.classification.hue,
            "step": t.classification.scale,
            "base_hue_name": infer_base_hue_name(t.hex),
            "delta_e": de,
        }
        for t, de in ranked
    ]
    emit(ctx, payload, build_nearest_table(target, ranked), "snap")


@main.command()
@click.argument("color")
@click.option("--background", required=True, help="Reference color to contrast against.")
@click.option("--target", default=4.5, show_default=True, type=float)
@click.pass_context
def adjust(ctx, color: str, background: str, target: float):
    """Shift COLOR's lightness until it reaches TARGET contrast."""
    src = require_hex(color, "source")
    bg = require_hex(background, "background")
    config = ctx.obj["config"]

    out = adjust_lightness_for_contrast(src, bg, target, config=config)
    before = contrast_ratio(bg, src)
    after = contrast_ratio(bg, out)
    if after < target:
        log(f"target {target:.2f} unreachable; saturated to {out} ({after:.2f})")

    payload = {"input": src, "output": out, "contrast_before": before, "contrast_after": after}
    table = build_colors_table(
        f"Contrast vs {bg}",
        [
            ("input", src, f"{before:.2f}:1"),
            ("adjusted", out, f"{after:.2f}:1"),
        ],
    )
    emit(ctx, payload, table, "adjust")


@main.command()
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
)
@click.option("--count", default=3, show_default=True, type=click.IntRange(min=0))
@click.option("--existing-hue", "existing_hues", multiple=True, type=float, help="Hue already in use (repeatable).")
@click.option("--preset", type=PRESET_CHOICE, default="default", show_default=True)
@click.option("--background", default="#ffffff", show_default=True)
@click.option("--seed", default=None, type=int, help="Seed for reproducible picks.")
@click.pass_context
def select(
    ctx,
    catalog_path: Path,
    count: int,
    existing_hues: Tuple[float, ...],
    preset: str,
    background: str,
    seed: Optional[int],
):
    """Pick COUNT hue-distant accent tokens."""
    bg = require_hex(background, "background")
    catalog = read_catalog(catalog_path)
    rng = np.random.default_rng(seed)

    results = select_hue_distant(
        list(existing_hues),
        count,
        catalog,
        preset.lower(),
        bg,
        lambda: float(rng.random()),
        config=ctx.obj["config"],
    )
    if len(results) < count:
        log(f"only {len(results)} of {count} colors available")

    payload = [r.to_dict() for r in results]
    emit(ctx, payload, build_selection_table(results, bg), "select")


@main.command("key-background")
@click.argument("primary")
@click.option("--background", default="#ffffff", show_default=True)
@click.option("--text", "text_color", default="#000000", show_default=True)
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
)
@click.option("--preset", type=PRESET_CHOICE, default="default", show_default=True)
@click.option("--hue-hint", default=None, help='Catalog hue of PRIMARY (e.g. "blue" or "Light Blue").')
@click.option("--min-contrast", default=None, type=float, help="Minimum text contrast [default: 4.5].")
@click.pass_context
def key_background(
    ctx,
    primary: str,
    background: str,
    text_color: str,
    catalog_path: Optional[Path],
    preset: str,
    hue_hint: Optional[str],
    min_contrast: Optional[float],
):
    """Derive a tinted key surface from PRIMARY."""
    primary_hex = require_hex(primary, "primary")
    bg = require_hex(background, "background")
    text = require_hex(text_color, "text")
    catalog = read_catalog(catalog_path) if catalog_path is not None else None

    result = resolve_key_background(
        primary_hex,
        bg,
        text,
        preset.lower(),
        catalog,
        hue_hint,
        min_contrast,
        config=ctx.obj["config"],
    )
    emit(ctx, result.to_dict(), build_key_background_table(primary_hex, result), "key-background")


@main.command()
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
)
@click.option("--hue", type=click.Choice(HUE_ORDER), required=True)
@click.option("--light-bg", default="#ffffff", show_default=True)
@click.option("--dark-bg", default="#000000", show_default=True)
@click.pass_context
def boundaries(ctx, catalog_path: Path, hue: str, light_bg: str, dark_bg: str):
    """Locate the 3:1 and 4.5:1 steps of one hue's tonal scale."""
    light = require_hex(light_bg, "light background")
    dark = require_hex(dark_bg, "dark background")
    catalog = read_catalog(catalog_path)

    scale = tonal_scale(catalog, hue)
    if not scale:
        raise click.ClickException(f"No {hue} tokens in catalog")

    result = calculate_boundaries(scale, light, dark)
    emit(ctx, result.to_dict(), build_boundary_table(hue, scale, result), "boundaries")


if __name__ == "__main__":
    main()
