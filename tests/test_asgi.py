"""Tests for funnel._internal.asgi: typed ASGI definitions."""

from funnel._internal.asgi import HTTPScope


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope dict."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


class TestHTTPScope:
    def test_from_scope_basic(self) -> None:
        scope = _make_scope(method="POST", path="/api/items/42", raw_path=b"/api/items/42")
        parsed = HTTPScope.from_scope(scope)
        assert parsed.method == "POST"
        assert parsed.path == "/api/items/42"
        assert parsed.server == ("localhost", 8000)

    def test_headers_become_tuple(self) -> None:
        parsed = HTTPScope.from_scope(_make_scope(headers=[(b"host", b"h")]))
        assert parsed.headers == ((b"host", b"h"),)

    def test_optional_keys_missing(self) -> None:
        scope = _make_scope()
        for key in ("raw_path", "query_string", "headers", "server"):
            del scope[key]
        parsed = HTTPScope.from_scope(scope)
        assert parsed.raw_path == b""
        assert parsed.query_string == b""
        assert parsed.headers == ()
        assert parsed.server is None


class TestTarget:
    def test_path_only(self) -> None:
        assert HTTPScope.from_scope(_make_scope()).target == "/"

    def test_with_query(self) -> None:
        parsed = HTTPScope.from_scope(_make_scope(path="/api/x", raw_path=b"/api/x", query_string=b"a=1"))
        assert parsed.target == "/api/x?a=1"

    def test_prefers_raw_path(self) -> None:
        parsed = HTTPScope.from_scope(_make_scope(path="/api/a b", raw_path=b"/api/a%20b"))
        assert parsed.target == "/api/a%20b"

    def test_decoded_path_without_raw_path(self) -> None:
        parsed = HTTPScope.from_scope(_make_scope(path="/api/x", raw_path=None))
        assert parsed.target == "/api/x"


class TestRequestPath:
    def test_keeps_percent_escapes(self) -> None:
        parsed = HTTPScope.from_scope(_make_scope(path="/api/items/a/b", raw_path=b"/api/items/a%2Fb"))
        assert parsed.request_path == "/api/items/a%2Fb"

    def test_excludes_query(self) -> None:
        parsed = HTTPScope.from_scope(_make_scope(path="/api/x", raw_path=b"/api/x", query_string=b"a=1"))
        assert parsed.request_path == "/api/x"

    def test_decoded_path_without_raw_path(self) -> None:
        parsed = HTTPScope.from_scope(_make_scope(path="/api/x", raw_path=None))
        assert parsed.request_path == "/api/x"


class TestBoundHost:
    def test_host_and_port(self) -> None:
        assert HTTPScope.from_scope(_make_scope()).bound_host == "localhost:8000"

    def test_port_missing(self) -> None:
        assert HTTPScope.from_scope(_make_scope(server=("sock", None))).bound_host == "sock"

    def test_no_server(self) -> None:
        assert HTTPScope.from_scope(_make_scope(server=None)).bound_host is None
