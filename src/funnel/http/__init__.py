"""HTTP value types shared by the adapters and handler units."""

from funnel.http.headers import Headers
from funnel.http.request import Request
from funnel.http.response import Response, error_response, json_response

__all__ = ["Headers", "Request", "Response", "error_response", "json_response"]
