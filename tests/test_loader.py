"""Tests for funnel.routing.loader: lazy import and caching of units."""

import sys
from pathlib import Path

import pytest

from funnel.errors import HandlerError, HandlerLoadError
from funnel.routing.loader import HandlerLoader, load_handler


class TestLoadHandler:
    def test_returns_handler_export(self, write_unit) -> None:
        file = write_unit(
            "ping.py",
            """
            def handler(request):
                return "pong"
            """,
        )
        func = load_handler(str(file))
        assert func(None) == "pong"

    def test_module_globals_are_visible_to_handler(self, write_unit) -> None:
        file = write_unit(
            "constants.py",
            """
            LIMIT = 5

            def handler(request):
                return LIMIT
            """,
        )
        assert load_handler(str(file))(None) == 5

    def test_same_stem_in_different_directories_are_distinct(self, write_unit) -> None:
        a = write_unit("a/[id].py", "def handler(request):\n    return 'a'\n")
        b = write_unit("b/[id].py", "def handler(request):\n    return 'b'\n")
        assert load_handler(str(a))(None) == "a"
        assert load_handler(str(b))(None) == "b"

    def test_missing_export_raises(self, write_unit) -> None:
        file = write_unit("empty.py", "VALUE = 1\n")
        with pytest.raises(HandlerLoadError, match="no callable 'handler'"):
            load_handler(str(file))

    def test_non_callable_export_raises(self, write_unit) -> None:
        file = write_unit("odd.py", "handler = 42\n")
        with pytest.raises(HandlerLoadError):
            load_handler(str(file))

    def test_import_failure_is_chained(self, write_unit) -> None:
        file = write_unit("boom.py", "raise ValueError('bad module')\n")
        with pytest.raises(HandlerLoadError) as exc_info:
            load_handler(str(file))

        assert isinstance(exc_info.value.__cause__, ValueError)
        assert "ValueError: bad module" in exc_info.value.reason
        assert exc_info.value.handler_id == str(file)

    def test_failed_import_leaves_no_module_behind(self, write_unit) -> None:
        file = write_unit("syntax.py", "def handler(:\n")
        before = set(sys.modules)
        with pytest.raises(HandlerLoadError):
            load_handler(str(file))
        assert not {m for m in set(sys.modules) - before if m.startswith("_funnel_unit_")}

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(HandlerLoadError):
            load_handler(str(tmp_path / "gone.py"))

    def test_load_error_is_a_handler_error(self) -> None:
        assert issubclass(HandlerLoadError, HandlerError)


class TestHandlerLoader:
    async def test_resolve_imports_once(self, write_unit) -> None:
        file = write_unit(
            "counter.py",
            """
            import itertools

            _calls = itertools.count(1)

            def handler(request):
                return next(_calls)
            """,
        )
        loader = HandlerLoader()

        first = await loader.resolve(str(file))
        second = await loader.resolve(str(file))

        assert first is second
        assert (first(None), second(None)) == (1, 2)
        assert len(loader) == 1
        assert str(file) in loader

    async def test_nothing_is_loaded_up_front(self, write_unit) -> None:
        write_unit("health.py")
        loader = HandlerLoader()
        assert len(loader) == 0

    async def test_failure_is_not_cached(self, write_unit) -> None:
        file = write_unit("flaky.py", "raise RuntimeError('not yet')\n")
        loader = HandlerLoader()

        with pytest.raises(HandlerLoadError):
            await loader.resolve(str(file))
        assert str(file) not in loader

        file.write_text("def handler(request):\n    return 'ready'\n")
        handler = await loader.resolve(str(file))
        assert handler(None) == "ready"
