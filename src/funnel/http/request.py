"""Immutable HTTP request handed to handler units.

The request is honest about what it is: received data that doesn't
change. The body is buffered in full before the handler runs, so it is
a plain ``bytes`` field rather than an async stream.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qsl, urlsplit

from funnel._internal.asgi import HTTPScope, Receive, Scope
from funnel.http.headers import Headers

# Methods that conventionally carry no payload; their body is never read
NO_BODY_METHODS = frozenset({"GET", "HEAD"})


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable, transport-independent HTTP request.

    ``url`` is absolute: scheme and host are rebuilt from forwarding
    headers so handlers see the client-visible origin, not the proxy's.
    ``body`` is ``None`` for GET and HEAD.
    """

    method: str
    url: str
    headers: Headers
    body: bytes | None = None

    # -- Computed properties --

    @property
    def path(self) -> str:
        """URL path component."""
        return urlsplit(self.url).path

    @property
    def query(self) -> dict[str, str]:
        """Query parameters (first value wins for repeated names)."""
        params: dict[str, str] = {}
        for key, value in parse_qsl(urlsplit(self.url).query, keep_blank_values=True):
            params.setdefault(key, value)
        return params

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    # -- Body helpers --

    def text(self) -> str:
        """The body decoded as UTF-8 (empty for bodiless requests)."""
        return (self.body or b"").decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body or b"")

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, body: bytes | None, *, default_host: str) -> Request:
        """Create a Request from an ASGI scope and an already-buffered body.

        Host resolution order: ``X-Forwarded-Host``, ``Host``, the bound
        server address, then *default_host*.
        """
        http = HTTPScope.from_scope(scope)
        headers = Headers.from_asgi(http.headers)

        scheme = headers.get("x-forwarded-proto") or "http"
        host = (
            headers.get("x-forwarded-host")
            or headers.get("host")
            or http.bound_host
            or default_host
        )

        return cls(
            method=http.method,
            url=f"{scheme}://{host}{http.target}",
            headers=headers,
            body=None if http.method in NO_BODY_METHODS else (body or b""),
        )


async def read_body(receive: Receive) -> bytes:
    """Drain every ``http.request`` message and return the joined body."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        body = message.get("body", b"")
        if body:
            chunks.append(body)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)
