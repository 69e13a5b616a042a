"""Funnel: serve a single-page app and filesystem-routed function handlers.

One process, one ASGI app. Paths under ``/api/`` are dispatched to Python
handler units discovered from an ``api/`` directory; everything else is
served from the built ``dist/`` bundle with single-page-app fallback.

Basic usage::

    # api/hello.py
    from funnel import Request, Response

    def handler(request: Request) -> Response:
        return Response("hello", headers=(("Content-Type", "text/plain"),))

    # serve.py
    from funnel import App

    App.from_env().run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "FunnelError",
    "HTTPError",
    "HandlerError",
    "HandlerLoadError",
    "Headers",
    "NotFound",
    "Request",
    "Response",
    "error_response",
    "json_response",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import funnel`` fast inside handler units that only need
    ``Request`` and ``Response``.
    """
    if name == "App":
        from funnel.app import App

        return App

    if name == "AppConfig":
        from funnel.config import AppConfig

        return AppConfig

    if name in ("Headers", "Request", "Response", "error_response", "json_response"):
        from funnel import http as _http

        return getattr(_http, name)

    if name in (
        "ConfigurationError",
        "FunnelError",
        "HTTPError",
        "HandlerError",
        "HandlerLoadError",
        "NotFound",
    ):
        from funnel import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
