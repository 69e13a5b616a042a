"""Shared type aliases used across funnel modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Handler unit entry point: ``handler(request) -> Response`` (sync or async)
Handler: TypeAlias = Callable[..., Any]
