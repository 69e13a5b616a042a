"""Shared fixtures: throwaway handler trees and static bundles."""

from collections.abc import Callable
from pathlib import Path
from textwrap import dedent

import pytest

from funnel.app import App
from funnel.config import AppConfig


def echo_unit(name: str) -> str:
    """Source for a unit that reports which unit answered and what it saw."""
    return dedent(
        f"""
        from funnel import json_response


        def handler(request):
            return json_response(
                {{"unit": {name!r}, "method": request.method, "path": request.path}}
            )
        """
    )


@pytest.fixture
def api_dir(tmp_path: Path) -> Path:
    path = tmp_path / "api"
    path.mkdir()
    return path


@pytest.fixture
def dist_dir(tmp_path: Path) -> Path:
    path = tmp_path / "dist"
    path.mkdir()
    (path / "index.html").write_text("<!doctype html><div id=app></div>")
    return path


@pytest.fixture
def write_unit(api_dir: Path) -> Callable[..., Path]:
    """Write a handler unit at a path relative to ``api_dir``.

    Without explicit *source* the unit echoes its own name.
    """

    def _write(relative: str, source: str | None = None) -> Path:
        file = api_dir / relative
        file.parent.mkdir(parents=True, exist_ok=True)
        file.write_text(dedent(source) if source is not None else echo_unit(relative))
        return file

    return _write


@pytest.fixture
def make_app(api_dir: Path, dist_dir: Path) -> Callable[..., App]:
    def _make(**overrides: object) -> App:
        config = AppConfig(api_dir=api_dir, static_dir=dist_dir, **overrides)  # type: ignore[arg-type]
        return App(config)

    return _make
