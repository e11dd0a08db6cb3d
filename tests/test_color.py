"""Tests for hex parsing and OKLab/OKLCH helpers."""

from __future__ import annotations

import pytest

from tokensnap.color import (
    delta_e_hex,
    delta_e_ok,
    hex_to_oklab,
    hex_to_oklch,
    hue_distance,
    is_light,
    is_literal_hex,
    mix_oklch,
    oklch_to_hex,
    parse_hex,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("#FFAABB", "#ffaabb"),
        ("ffaabb", "#ffaabb"),
        ("#abc", "#aabbcc"),
        ("  #0066cc ", "#0066cc"),
        ("var(--color-primitive-red-600)", None),
        ("#12345", None),
        ("", None),
        (None, None),
        (123, None),
    ],
)
def test_parse_hex(value, expected) -> None:
    assert parse_hex(value) == expected


def test_is_literal_hex_rejects_references() -> None:
    assert is_literal_hex("#0066CC")
    assert not is_literal_hex("0066CC")
    assert not is_literal_hex("var(--x)")


def test_hue_distance_scenarios() -> None:
    assert hue_distance(0, 180) == 180
    assert hue_distance(350, 10) == 20
    assert hue_distance(0, 30) == 30
    assert hue_distance(180, 180) == 0


def test_hue_distance_symmetric_and_bounded() -> None:
    hues = [0, 1, 29.5, 90, 179, 180, 181, 270, 359.9, 720, -45]
    for a in hues:
        assert hue_distance(a, a) == 0
        for b in hues:
            d = hue_distance(a, b)
            assert d == hue_distance(b, a)
            assert 0 <= d <= 180


@pytest.mark.parametrize("bad", [None, "red", float("nan"), float("inf")])
def test_hue_distance_unusable_hue_is_zero(bad) -> None:
    assert hue_distance(bad, 10) == 0.0
    assert hue_distance(10, bad) == 0.0


def test_white_and_black_oklab() -> None:
    L, a, b = hex_to_oklab("#ffffff")
    assert L == pytest.approx(1.0, abs=1e-3)
    assert a == pytest.approx(0.0, abs=1e-3)
    assert b == pytest.approx(0.0, abs=1e-3)

    assert hex_to_oklch("#000000")[0] == pytest.approx(0.0, abs=1e-3)


def test_gray_has_zero_hue() -> None:
    _, C, h = hex_to_oklch("#777777")
    assert C < 1e-3
    assert h == 0.0


def test_unparsable_conversions_return_none() -> None:
    assert hex_to_oklab("nope") is None
    assert hex_to_oklch("var(--x)") is None
    assert delta_e_hex("#ffffff", "nope") is None


@pytest.mark.parametrize("hex_color", ["#0066cc", "#35a16b", "#ff9900", "#6a5acd"])
def test_oklch_round_trip(hex_color: str) -> None:
    assert oklch_to_hex(*hex_to_oklch(hex_color)) == hex_color


def test_oklch_to_hex_clamps_lightness() -> None:
    assert oklch_to_hex(1.5, 0.0, 0.0) == "#ffffff"
    assert oklch_to_hex(-0.2, 0.0, 0.0) == "#000000"


def test_delta_e() -> None:
    assert delta_e_ok((0.5, 0.1, 0.0), (0.5, 0.1, 0.0)) == 0.0
    assert delta_e_ok((0.0, 0.0, 0.0), (0.0, 0.3, 0.4)) == pytest.approx(0.5)
    assert delta_e_hex("#0066cc", "#0066CC") == pytest.approx(0.0, abs=1e-9)
    assert delta_e_hex("#000000", "#ffffff") == pytest.approx(1.0, abs=1e-3)


def test_mix_oklch_endpoints() -> None:
    assert mix_oklch("#0066cc", "#ff9900", 0.0) == "#0066cc"
    assert mix_oklch("#0066cc", "#ff9900", 1.0) == "#ff9900"
    # ratio is clamped
    assert mix_oklch("#0066cc", "#ff9900", 3.0) == "#ff9900"


def test_mix_oklch_from_white_keeps_tint_hue() -> None:
    mixed = mix_oklch("#ffffff", "#0066cc", 0.5)
    _, _, h_mixed = hex_to_oklch(mixed)
    _, _, h_tint = hex_to_oklch("#0066cc")
    assert hue_distance(h_mixed, h_tint) < 5
    assert hex_to_oklch(mixed)[0] > hex_to_oklch("#0066cc")[0]


def test_mix_oklch_unparsable_returns_tint() -> None:
    assert mix_oklch("nope", "#0066cc", 0.3) == "#0066cc"
    assert mix_oklch("#ffffff", "nope", 0.3) == "nope"


def test_is_light() -> None:
    assert is_light("#ffffff")
    assert not is_light("#111111")
    # unparsable counts as mid-gray, which is not light
    assert not is_light("nope")
