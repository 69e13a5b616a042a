"""Error handling pipeline for API requests.

Maps HTTPError exceptions and unexpected failures to the JSON error
bodies handler clients expect. Internal details are logged, never sent.
"""

import logging

from funnel.errors import HTTPError
from funnel.http.response import Response, error_response
from funnel.server.terminal_errors import log_error

logger = logging.getLogger("funnel.server")

INTERNAL_ERROR_MESSAGE = "Internal server error"


def handle_http_error(exc: HTTPError, method: str, path: str) -> Response:
    """Map an HTTPError to ``{"error": detail}``. Expected; logged at debug."""
    logger.debug("%d %s %s: %s", exc.status, method, path, exc.detail)
    return error_response(exc.status, exc.detail or f"Error {exc.status}")


def handle_internal_error(exc: Exception, method: str, path: str) -> Response:
    """Log an unexpected failure with its path and answer a generic 500."""
    log_error(exc, method=method, path=path)
    return error_response(500, INTERNAL_ERROR_MESSAGE)
