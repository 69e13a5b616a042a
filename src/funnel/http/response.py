"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response.

The body may be a complete payload (``bytes`` / ``str``) or a finite,
single-pass iterable of chunks. Chunked bodies are streamed to the
client as they are produced.
"""

import json as json_module
from collections.abc import AsyncIterable, Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any, TypeAlias

Chunk: TypeAlias = bytes | str
Body: TypeAlias = bytes | str | Iterable[Chunk] | AsyncIterable[Chunk] | None

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Headers are sent exactly as given; funnel adds nothing except a
    ``content-length`` for complete payloads that lack one.
    """

    body: Body = None
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> "Response":
        """Return a new Response with additional headers."""
        new = tuple(headers.items())
        return replace(self, headers=(*self.headers, *new))

    # -- Introspection --

    @property
    def is_streaming(self) -> bool:
        """True when the body is a chunk iterable rather than a payload."""
        return self.body is not None and not isinstance(self.body, (bytes, str))

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or ``None``."""
        name_lower = name.lower()
        for key, value in self.headers:
            if key.lower() == name_lower:
                return value
        return None

    @property
    def body_bytes(self) -> bytes:
        """Complete body as bytes. Not available for streaming bodies."""
        if self.body is None:
            return b""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        if isinstance(self.body, bytes):
            return self.body
        msg = "Streaming response bodies can only be read by the sender."
        raise TypeError(msg)


def json_response(payload: Any, status: int = 200) -> Response:
    """Build a JSON response with compact separators."""
    body = json_module.dumps(payload, separators=(",", ":"))
    return Response(body=body, status=status, headers=(("Content-Type", JSON_CONTENT_TYPE),))


def error_response(status: int, message: str) -> Response:
    """The ``{"error": ...}`` body used for every dispatcher error."""
    return json_response({"error": message}, status=status)
