"""Invoke helpers: call sync or async handlers uniformly.

Handler units can define ``handler`` as ``def`` or ``async def``. Any code
that calls a unit must handle both cases. This module provides a single
helper so the sync/async check lives in exactly one place.

Usage::

    from funnel._internal.invoke import invoke

    response = await invoke(handler, request)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
