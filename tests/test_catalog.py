"""Tests for the token catalog model, filters and loaders."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tokensnap.catalog import (
    CatalogError,
    filter_chromatic,
    filter_for_preset,
    find_by_hex,
    hue_from_display_name,
    load_catalog,
    matches_preset,
    parse_catalog_css,
    preset_min_contrast,
    tokens_for_hue,
    tonal_scale,
)


def test_filter_chromatic_drops_semantic(mock_tokens) -> None:
    result = filter_chromatic(mock_tokens)

    assert len(result) == 13
    assert all(t.classification.category == "chromatic" for t in result)
    assert all(t.hex.startswith("#") for t in result)


def test_filter_chromatic_handles_empty() -> None:
    assert filter_chromatic([]) == []
    assert filter_chromatic(None) == []


def test_matches_preset_predicates() -> None:
    assert matches_preset("#ffffff", "pastel")
    assert not matches_preset("#ff2800", "pastel")
    assert matches_preset("#ff2800", "vibrant")
    assert not matches_preset("#ffffff", "vibrant")
    assert matches_preset("#000000", "dark")
    assert not matches_preset("#ffffff", "dark")
    assert matches_preset("#ffffff", "default")
    assert matches_preset("#000000", "high-contrast")
    # unparsable colors are not filtered out
    assert matches_preset("var(--x)", "dark")


def test_filter_for_preset_falls_back_when_empty(mock_tokens) -> None:
    # none of the mock tokens is light and muted enough for pastel
    assert filter_for_preset(mock_tokens, "pastel") == filter_chromatic(mock_tokens)


def test_filter_for_preset_subset(mock_tokens) -> None:
    vibrant = filter_for_preset(mock_tokens, "vibrant")

    assert vibrant
    assert all(matches_preset(t.hex, "vibrant") for t in vibrant)


def test_preset_min_contrast() -> None:
    assert preset_min_contrast("high-contrast") == 7.0
    assert preset_min_contrast("pastel") == 3.0
    assert preset_min_contrast("default") == 4.5
    assert preset_min_contrast("vibrant") == 4.5
    assert preset_min_contrast("dark") == 4.5


def test_find_by_hex_case_insensitive(mock_tokens) -> None:
    token = find_by_hex(mock_tokens, "#0066cc")

    assert token is not None
    assert token.classification.hue == "blue"
    assert token.classification.scale == 500
    assert find_by_hex(mock_tokens, "#123456") is None
    assert find_by_hex(mock_tokens, "var(--color-primitive-red-600)") is None


def test_tokens_for_hue_ordered_by_scale(mock_tokens) -> None:
    reordered = list(reversed(mock_tokens))
    blues = tokens_for_hue(reordered, "blue")

    assert [t.classification.scale for t in blues] == [500, 600, 700]
    assert tonal_scale(reordered, "blue")[0] == (500, "#0066CC")


def test_hue_from_display_name() -> None:
    assert hue_from_display_name("Light Blue") == "light-blue"
    assert hue_from_display_name("blue") == "blue"
    assert hue_from_display_name("Indigo") is None
    assert hue_from_display_name(None) is None


# ============================================================================
# Loaders
# ============================================================================


def test_load_json_catalog(catalog_json: Path) -> None:
    tokens, warnings = load_catalog(catalog_json)

    assert warnings == []
    assert len(tokens) == 15
    assert tokens[0].hex == "#0066cc"
    assert tokens[0].classification.scale == 500
    assert tokens[-1].classification.category == "semantic"
    assert tokens[-1].hex == "var(--color-primitive-green-600)"


def test_load_json_catalog_flat_records(tmp_path: Path) -> None:
    path = tmp_path / "flat.json"
    path.write_text(
        json.dumps([{"hex": "#FF9900", "category": "chromatic", "hue": "orange", "scale": 500}])
    )

    tokens, _ = load_catalog(path)

    assert tokens[0].id == "orange-500"
    assert tokens[0].hex == "#ff9900"


def test_load_json_rejects_chromatic_without_scale(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"hex": "#FF9900", "category": "chromatic", "hue": "orange"}]))

    with pytest.raises(CatalogError):
        load_catalog(path)


def test_load_json_rejects_garbage(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{not json")

    with pytest.raises(CatalogError):
        load_catalog(path)


def test_load_csv_catalog(tmp_path: Path) -> None:
    path = tmp_path / "catalog.csv"
    path.write_text(
        "id,hex,category,hue,scale\n"
        "blue-500,#0066CC,chromatic,blue,500\n"
        "semantic-error,var(--color-primitive-red-600),semantic,,\n"
    )

    tokens, warnings = load_catalog(path)

    assert warnings == []
    assert tokens[0].hex == "#0066cc"
    assert tokens[0].classification.hue == "blue"
    assert tokens[0].classification.scale == 500
    assert tokens[1].classification.category == "semantic"
    assert tokens[1].classification.scale is None
    assert filter_chromatic(tokens) == [tokens[0]]


def test_load_csv_requires_columns(tmp_path: Path) -> None:
    path = tmp_path / "catalog.csv"
    path.write_text("id,color\nx,#ffffff\n")

    with pytest.raises(CatalogError):
        load_catalog(path)


CSS = """
:root {
  --color-primitive-blue-500: #0066CC;
  --color-primitive-light-blue-300: #99CCFF;
  --color-primitive-red-600: rgba(255, 40, 0, 0.5);
  --color-neutral-white: #ffffff;
  --color-semantic-error: var(--color-primitive-red-600);
  --color-primitive-sparkle-100: #123456;
}
"""


def test_parse_catalog_css() -> None:
    tokens, warnings = parse_catalog_css(CSS)

    by_id = {t.id: t for t in tokens}
    assert set(by_id) == {
        "blue-500",
        "light-blue-300",
        "red-600",
        "neutral-white",
        "semantic-error",
    }
    assert by_id["light-blue-300"].classification.hue == "light-blue"
    assert by_id["light-blue-300"].name == "Light Blue 300"
    assert by_id["red-600"].hex == "#ff2800"
    assert by_id["red-600"].alpha == 0.5
    assert by_id["neutral-white"].classification.category == "neutral"
    assert by_id["semantic-error"].hex.startswith("var(")

    assert len(warnings) == 1
    assert "sparkle" in warnings[0]

    # neutrals and semantic aliases never reach matching
    assert {t.id for t in filter_chromatic(tokens)} == {"blue-500", "light-blue-300", "red-600"}


NEUTRAL_CSS = """
:root {
  --color-neutral-solid-gray-50: #F2F2F2;
  --color-neutral-opacity-gray-300: rgba(0, 0, 0, 0.3);
  --color-neutral-chalk: #fafafa;
  --color-semantic: var(--color-primitive-blue-500);
}
"""


def test_parse_catalog_css_neutral_grays() -> None:
    tokens, warnings = parse_catalog_css(NEUTRAL_CSS)

    by_id = {t.id: t for t in tokens}
    assert set(by_id) == {"neutral-solid-gray-50", "neutral-opacity-gray-300"}

    solid = by_id["neutral-solid-gray-50"]
    assert solid.hex == "#f2f2f2"
    assert solid.name == "Gray 50 (Solid)"
    assert solid.classification.category == "neutral"
    assert solid.classification.scale == 50
    assert solid.alpha is None

    opacity = by_id["neutral-opacity-gray-300"]
    assert opacity.hex == "#000000"
    assert opacity.alpha == 0.3
    assert opacity.classification.scale == 300

    # unknown neutral and nameless semantic are skipped with a warning each
    assert len(warnings) == 2
    assert any("chalk" in w for w in warnings)
    assert filter_chromatic(tokens) == []


@pytest.mark.parametrize("classification", ["chromatic", ["chromatic", "blue", 500]])
def test_load_json_rejects_non_object_classification(tmp_path: Path, classification) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"hex": "#0066cc", "classification": classification}]))

    with pytest.raises(CatalogError, match="classification must be an object"):
        load_catalog(path)


def test_load_json_rejects_bad_alpha(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(
        json.dumps(
            [{"hex": "#0066cc", "category": "chromatic", "hue": "blue", "scale": 500, "alpha": "half"}]
        )
    )

    with pytest.raises(CatalogError, match="bad alpha"):
        load_catalog(path)


@pytest.mark.parametrize("catalog", [None, 5, 3.5])
def test_filter_chromatic_non_iterable_catalog(catalog) -> None:
    assert filter_chromatic(catalog) == []


def test_load_css_catalog_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.css"
    path.write_text(":root {}\n")

    with pytest.raises(CatalogError):
        load_catalog(path)


def test_load_catalog_unknown_suffix(tmp_path: Path) -> None:
    path = tmp_path / "catalog.yaml"
    path.write_text("tokens: []\n")

    with pytest.raises(CatalogError):
        load_catalog(path)
