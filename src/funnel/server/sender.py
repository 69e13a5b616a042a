"""ASGI response sending: translates funnel Responses to ASGI messages.

Complete payloads go out as a single body message. Chunked bodies are
pulled one chunk at a time and forwarded as soon as they are produced;
the next chunk is only requested after the previous ``send()`` returned.
"""

import inspect
import logging
from collections.abc import AsyncIterable, AsyncIterator, Iterator
from typing import Any

from funnel._internal.asgi import Send
from funnel.http.response import Chunk, Response
from funnel.server.terminal_errors import log_error

logger = logging.getLogger("funnel.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def _encode_chunk(chunk: Chunk) -> bytes:
    return chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk)


def _raw_headers(response: Response) -> list[tuple[bytes, bytes]]:
    return [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
    ]


async def send_response(response: Response, send: Send) -> None:
    """Translate a funnel Response into ASGI send() calls."""
    if response.is_streaming:
        await send_streaming_response(response, send)
        return

    raw_headers = _raw_headers(response)
    body = response.body_bytes if _body_allowed(response.status) else b""
    if response.header("content-length") is None:
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )


async def send_streaming_response(response: Response, send: Send) -> None:
    """Stream a chunked body, closing the chunk source on every exit path.

    Headers are sent before the first chunk is pulled. A failure in the
    chunk source after that point cannot change the status, so it is
    logged and the body is terminated early.
    """
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _raw_headers(response),
        }
    )

    chunks: Any = response.body
    iterator: AsyncIterator[Chunk] | Iterator[Chunk]
    if isinstance(chunks, AsyncIterable):
        iterator = aiter(chunks)
    else:
        iterator = iter(chunks)

    try:
        if isinstance(iterator, AsyncIterator):
            async for chunk in iterator:
                if chunk:
                    await send(
                        {
                            "type": "http.response.body",
                            "body": _encode_chunk(chunk),
                            "more_body": True,
                        }
                    )
        else:
            for chunk in iterator:
                if chunk:
                    await send(
                        {
                            "type": "http.response.body",
                            "body": _encode_chunk(chunk),
                            "more_body": True,
                        }
                    )
    except Exception as exc:
        log_error(exc)
        logger.warning("Response stream aborted after headers were sent")
    finally:
        await _close_iterator(iterator)

    await send(
        {
            "type": "http.response.body",
            "body": b"",
            "more_body": False,
        }
    )


async def _close_iterator(iterator: object) -> None:
    """Release a chunk source (generator ``close`` / ``aclose``) if it has one."""
    aclose = getattr(iterator, "aclose", None)
    if aclose is not None:
        result = aclose()
        if inspect.isawaitable(result):
            await result
        return
    close = getattr(iterator, "close", None)
    if close is not None:
        close()
