"""Funnel exception hierarchy.

Shared across the route table, loader, and request handler so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class FunnelError(Exception):
    """Base for all funnel-specific errors."""


class ConfigurationError(FunnelError):
    """Raised when app configuration is invalid.

    Typically raised by ``AppConfig.from_env()`` or ``App._freeze()`` at startup.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(FunnelError):
    """An error that maps directly to an HTTP status code.

    The request handler catches these and answers with a JSON error body.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(status=404, detail=detail)


class HandlerError(FunnelError):
    """A handler unit failed to produce a response."""


class HandlerLoadError(HandlerError):
    """A handler unit could not be imported or has no ``handler`` export."""

    def __init__(self, handler_id: str, reason: str) -> None:
        super().__init__(f"Cannot load handler {handler_id!r}: {reason}")
        self.handler_id = handler_id
        self.reason = reason
