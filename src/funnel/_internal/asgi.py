"""Typed ASGI definitions.

Replaces the standard Scope = MutableMapping[str, Any] with typed
dataclasses for internal use. Handlers never see these.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias

# Raw ASGI 3.0 types
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class HTTPScope:
    """Typed HTTP scope parsed from raw ASGI scope dict.

    Internal only -- handlers interact with Request, not this.
    """

    method: str
    path: str
    raw_path: bytes
    query_string: bytes
    headers: tuple[tuple[bytes, bytes], ...]
    server: tuple[str, int | None] | None

    @classmethod
    def from_scope(cls, scope: Scope) -> "HTTPScope":
        """Parse raw ASGI scope into typed object."""
        server = scope.get("server")
        return cls(
            method=scope["method"],
            path=scope["path"],
            raw_path=scope.get("raw_path") or b"",
            query_string=scope.get("query_string", b""),
            headers=tuple(scope.get("headers", ())),
            server=tuple(server) if server else None,
        )

    @property
    def request_path(self) -> str:
        """Path as sent by the client, percent-escapes intact.

        Falls back to the decoded ``path`` when the server gave no ``raw_path``.
        """
        return self.raw_path.decode("latin-1") if self.raw_path else self.path

    @property
    def target(self) -> str:
        """Request target as sent by the client: raw path plus query string."""
        if self.query_string:
            return f"{self.request_path}?{self.query_string.decode('latin-1')}"
        return self.request_path

    @property
    def bound_host(self) -> str | None:
        """``host[:port]`` of the listening socket, if the server reported it."""
        if self.server is None:
            return None
        host, port = self.server
        if port is None:
            return host
        return f"{host}:{port}"
