"""Shared pytest fixtures for tokensnap tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List

import numpy as np
import pytest

from tokensnap.catalog import Token, TokenClassification, chromatic_token


def semantic_token(token_id: str, ref: str) -> Token:
    return Token(
        id=token_id,
        hex=ref,
        name="Semantic Token",
        classification=TokenClassification("semantic"),
    )


# ============================================================================
# Catalog Fixtures
# ============================================================================


@pytest.fixture
def mock_tokens() -> List[Token]:
    """Small palette: 13 chromatic tokens across six hues plus two semantic aliases."""
    return [
        chromatic_token("blue", 500, "#0066CC"),
        chromatic_token("blue", 600, "#0055AA"),
        chromatic_token("blue", 700, "#004488"),
        chromatic_token("green", 500, "#35A16B"),
        chromatic_token("green", 600, "#259063"),
        chromatic_token("red", 600, "#FF2800"),
        chromatic_token("red", 700, "#CC2200"),
        chromatic_token("orange", 500, "#FF9900"),
        chromatic_token("orange", 600, "#DD8800"),
        chromatic_token("purple", 500, "#6A5ACD"),
        chromatic_token("purple", 600, "#5A4ABD"),
        chromatic_token("yellow", 600, "#D7C447"),
        chromatic_token("yellow", 700, "#C7B437"),
        semantic_token("semantic-error", "var(--color-primitive-red-600)"),
        semantic_token("semantic-success", "var(--color-primitive-green-600)"),
    ]


@pytest.fixture
def gray_scale() -> list:
    """Neutral tonal scale, light to dark, with known WCAG contrasts."""
    return [
        (50, "#f2f2f2"),
        (100, "#cccccc"),
        (200, "#999999"),  # 2.85 on white
        (250, "#888888"),  # 3.54 on white
        (300, "#767676"),  # 4.54 on white, 4.62 on black
        (350, "#6a6a6a"),  # 3.88 on black
        (400, "#555555"),  # 2.77 on black
        (500, "#333333"),
        (600, "#000000"),
    ]


@pytest.fixture
def catalog_json(tmp_path: Path, mock_tokens: List[Token]) -> Path:
    """Write mock_tokens as a JSON catalog file."""
    records = [
        {
            "id": t.id,
            "hex": t.hex,
            "name": t.name,
            "classification": {
                "category": t.classification.category,
                "hue": t.classification.hue,
                "scale": t.classification.scale,
            },
        }
        for t in mock_tokens
    ]
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"tokens": records}))
    return path


# ============================================================================
# Randomness
# ============================================================================


@pytest.fixture
def seeded_rng():
    """Factory for rng_next closures backed by numpy's default_rng."""

    def make(seed: int):
        rng = np.random.default_rng(seed)
        return lambda: float(rng.random())

    return make
