"""Tests for funnel.mime: the fixed Content-Type table."""

from pathlib import Path

import pytest

from funnel.mime import CONTENT_TYPES, DEFAULT_CONTENT_TYPE, content_type_for


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("index.html", "text/html; charset=utf-8"),
        ("index-3f2a.js", "application/javascript; charset=utf-8"),
        ("worker.mjs", "application/javascript; charset=utf-8"),
        ("styles.css", "text/css; charset=utf-8"),
        ("logo.svg", "image/svg+xml"),
        ("basemap.wasm", "application/wasm"),
        ("site.webmanifest", "application/manifest+json"),
        ("index.js.map", "application/json"),
    ],
)
def test_known_extensions(name: str, expected: str) -> None:
    assert content_type_for(name) == expected


@pytest.mark.parametrize("name", ["tiles.pbf", "README", "archive.tar.gz", "LOGO.PNG"])
def test_unknown_extensions_fall_back(name: str) -> None:
    assert content_type_for(name) == DEFAULT_CONTENT_TYPE


def test_accepts_paths() -> None:
    assert content_type_for(Path("/srv/dist/assets/app.css")) == "text/css; charset=utf-8"


def test_table_is_fixed() -> None:
    assert len(CONTENT_TYPES) == 20
