from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import click
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from .boundaries import ContrastBoundary
from .catalog import Token
from .color import hex_to_oklch, parse_hex
from .contrast import contrast_ratio
from .key_background import KeyBackgroundResult
from .matcher import MatchResult


def _swatch(hex_color: Optional[str]) -> Text:
    h = parse_hex(hex_color) if hex_color else None
    if h is None:
        return Text("")
    return Text("   ", style=Style(bgcolor=h))


def _lch_cells(hex_color: str) -> Tuple[str, str, str]:
    lch = hex_to_oklch(hex_color)
    if lch is None:
        return ("", "", "")
    L, C, h = lch
    return (f"{L:.3f}", f"{C:.3f}", f"{h:.0f}°")


# ============================================================
# Tables
# ============================================================


def build_nearest_table(target_hex: str, ranked: Sequence[Tuple[Token, float]]) -> Table:
    table = Table(title=f"Nearest tokens to {target_hex}")

    table.add_column("#", justify="right")
    table.add_column("Token", style="cyan", no_wrap=True)
    table.add_column("Hex", no_wrap=True)
    table.add_column(" ")
    table.add_column("L", justify="right")
    table.add_column("C", justify="right")
    table.add_column("Hue", justify="right")
    table.add_column("ΔE", justify="right")

    for i, (token, de) in enumerate(ranked, start=1):
        table.add_row(
            str(i),
            token.id,
            token.hex,
            _swatch(token.hex),
            *_lch_cells(token.hex),
            f"{de:.4f}",
        )
    return table


def build_selection_table(results: Sequence[MatchResult], background_hex: str) -> Table:
    table = Table(title=f"Hue-distant selection on {background_hex}")

    table.add_column("Hex", no_wrap=True)
    table.add_column(" ")
    table.add_column("Step", justify="right")
    table.add_column("Family", style="cyan")
    table.add_column("Hue", justify="right")
    table.add_column("Contrast", justify="right")

    for r in results:
        lch = hex_to_oklch(r.hex)
        table.add_row(
            r.hex,
            _swatch(r.hex),
            "" if r.step is None else str(r.step),
            r.base_hue_name or "",
            f"{lch[2]:.0f}°" if lch else "",
            f"{contrast_ratio(r.hex, background_hex):.2f}",
        )
    return table


def build_colors_table(title: str, rows: List[Tuple[str, str, str]]) -> Table:
    """rows: (label, hex, note)"""
    table = Table(title=title)
    table.add_column("Color", style="cyan", no_wrap=True)
    table.add_column("Hex", no_wrap=True)
    table.add_column(" ")
    table.add_column("Note")
    for label, hex_color, note in rows:
        table.add_row(label, hex_color or "[dim]—[/dim]", _swatch(hex_color), note)
    return table


def build_boundary_table(
    hue: str, scale: Sequence[Tuple[int, str]], boundary: ContrastBoundary
) -> Table:
    table = Table(title=f"Contrast boundaries: {hue}")

    table.add_column("Step", justify="right")
    table.add_column("Hex", no_wrap=True)
    table.add_column(" ")
    table.add_column("White", justify="center")
    table.add_column("Black", justify="center")

    marks = {}
    for label, step in (
        ("3:1→", boundary.white_3_to_1),
        ("4.5:1→", boundary.white_4_5_to_1),
    ):
        if step is not None:
            marks.setdefault((step, "white"), []).append(label)
    for label, step in (
        ("←4.5:1", boundary.black_4_5_to_1),
        ("←3:1", boundary.black_3_to_1),
    ):
        if step is not None:
            marks.setdefault((step, "black"), []).append(label)

    for step, hex_color in scale:
        table.add_row(
            str(step),
            hex_color,
            _swatch(hex_color),
            " ".join(marks.get((step, "white"), [])),
            " ".join(marks.get((step, "black"), [])),
        )
    return table


def build_key_background_table(primary_hex: str, result: KeyBackgroundResult) -> Table:
    ref = ""
    if result.token_ref is not None:
        ref = f"{result.token_ref.hue} {result.token_ref.step}"
    return build_colors_table(
        "Key background",
        [
            ("primary", parse_hex(primary_hex) or primary_hex, ""),
            ("key background", result.hex, ref or "[dim]computed[/dim]"),
        ],
    )


# ============================================================
# Output
# ============================================================


def render(table: Table) -> None:
    console = Console()
    console.print(table)


def save_table_image(table: Table, title: str, out_path: Path) -> None:
    """
    Save a table as SVG or PNG.

    - .svg: Native Rich export
    - .png: Requires cairosvg (pip install cairosvg)
    """
    console = Console(record=True, width=100, force_terminal=True)
    console.print(table)
    svg_content = console.export_svg(title=title)

    suffix = out_path.suffix.lower()
    if suffix == ".svg":
        out_path.write_text(svg_content)
    elif suffix == ".png":
        try:
            import cairosvg
        except ImportError:
            raise click.ClickException(
                "PNG export requires cairosvg: pip install cairosvg"
            )
        cairosvg.svg2png(bytestring=svg_content.encode(), write_to=str(out_path))
    else:
        raise click.ClickException(
            f"Unsupported image format: {suffix} (use .svg or .png)"
        )
