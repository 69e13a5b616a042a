"""ASGI handler: translates ASGI scope/messages to funnel types.

The only component that touches raw ASGI directly. Splits traffic
between the function handlers (API prefix) and the static bundle,
converts scope dicts to Requests, and sends Responses back through
ASGI send().
"""

import logging

import anyio

from funnel._internal.asgi import HTTPScope, Receive, Scope, Send
from funnel._internal.invoke import invoke
from funnel.errors import HandlerError, HTTPError
from funnel.http.request import NO_BODY_METHODS, Request, read_body
from funnel.http.response import Response
from funnel.routing.loader import HandlerLoader
from funnel.routing.route import RouteMatch
from funnel.routing.table import RouteTable
from funnel.server.errors import handle_http_error, handle_internal_error
from funnel.server.sender import send_response
from funnel.server.static import StaticSite

logger = logging.getLogger("funnel.server")


def is_api_path(path: str, api_prefix: str) -> bool:
    """Whether *path* belongs to the function handlers."""
    return path.startswith(api_prefix.rstrip("/") + "/")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    table: RouteTable,
    loader: HandlerLoader,
    site: StaticSite,
    api_prefix: str = "/api",
    default_host: str = "localhost",
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    # Routing sees the path as sent, so %2F inside a segment stays one segment
    request_path = HTTPScope.from_scope(scope).request_path
    if is_api_path(request_path, api_prefix):
        await dispatch(
            scope,
            receive,
            send,
            table=table,
            loader=loader,
            default_host=default_host,
        )
    else:
        await serve_static(scope["path"], send, site=site)


async def dispatch(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    table: RouteTable,
    loader: HandlerLoader,
    default_host: str,
) -> None:
    """Route an API request to its handler unit and send the result.

    Exactly one outcome per request: the matched handler's response, a
    404 when nothing matches, or a 500 when loading or running the
    handler fails. Failures never escape to the server.
    """
    method: str = scope["method"]
    path = HTTPScope.from_scope(scope).request_path

    body = None if method in NO_BODY_METHODS else await read_body(receive)
    request = Request.from_asgi(scope, body, default_host=default_host)

    try:
        match = table.match(path)
    except HTTPError as exc:
        response = handle_http_error(exc, method, path)
    else:
        # Whatever the unit raises, HTTPError included, is a 500
        try:
            response = await _invoke_handler(match, request, loader)
        except Exception as exc:
            response = handle_internal_error(exc, method, path)

    await send_response(response, send)


async def _invoke_handler(match: RouteMatch, request: Request, loader: HandlerLoader) -> Response:
    """Resolve the matched unit, call it, and check what it returned."""
    handler = await loader.resolve(match.entry.handler_id)
    result = await invoke(handler, request)
    if not isinstance(result, Response):
        msg = (
            f"Handler {match.entry.source!r} returned {type(result).__name__}, "
            "expected a Response"
        )
        raise HandlerError(msg)
    return result


async def serve_static(path: str, send: Send, *, site: StaticSite) -> None:
    """Serve from the bundle, then the root document, then a plain 404."""
    if await site.serve(path, send):
        return

    try:
        html = await anyio.Path(site.index_path).read_bytes()
    except OSError:
        logger.debug("No index document at %s", site.index_path)
        await send_response(
            Response(
                body="Not found",
                status=404,
                headers=(("Content-Type", "text/plain; charset=utf-8"),),
            ),
            send,
        )
        return

    await send_response(
        Response(body=html, headers=(("Content-Type", "text/html; charset=utf-8"),)),
        send,
    )
