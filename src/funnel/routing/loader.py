"""Lazy handler loading with a process-lifetime cache.

A unit is imported the first time one of its routes is hit, never at
discovery time. The import runs in a worker thread (``anyio.to_thread``)
so a slow module body does not stall other requests.

Two concurrent first requests for the same unit may both import it.
Only the first stored callable is kept (``dict.setdefault``), so callers
always observe a single handler per unit.
"""

from __future__ import annotations

import hashlib
import importlib.util
import logging
import re
import sys
from pathlib import Path

import anyio.to_thread

from funnel._internal.types import Handler
from funnel.errors import HandlerLoadError

logger = logging.getLogger("funnel.routing")

# Module attribute a unit exports as its entry point
HANDLER_EXPORT = "handler"


def _module_name(handler_id: str) -> str:
    stem = re.sub(r"\W", "_", Path(handler_id).stem).strip("_") or "unit"
    digest = hashlib.sha1(handler_id.encode("utf-8")).hexdigest()[:10]
    return f"_funnel_unit_{stem}_{digest}"


def load_handler(handler_id: str) -> Handler:
    """Import the unit at *handler_id* and return its ``handler`` export.

    Raises:
        HandlerLoadError: If the file cannot be imported or exports no
            callable ``handler``.
    """
    module_name = _module_name(handler_id)
    spec = importlib.util.spec_from_file_location(module_name, handler_id)
    if spec is None or spec.loader is None:
        raise HandlerLoadError(handler_id, "not an importable Python file")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise HandlerLoadError(handler_id, f"{type(exc).__name__}: {exc}") from exc

    func = getattr(module, HANDLER_EXPORT, None)
    if func is None or not callable(func):
        sys.modules.pop(module_name, None)
        raise HandlerLoadError(handler_id, f"module has no callable {HANDLER_EXPORT!r}")
    return func


class HandlerLoader:
    """Resolves handler ids to callables, importing each unit at most once.

    Usage::

        loader = HandlerLoader()
        handler = await loader.resolve(match.entry.handler_id)
    """

    __slots__ = ("_cache",)

    def __init__(self) -> None:
        self._cache: dict[str, Handler] = {}

    async def resolve(self, handler_id: str) -> Handler:
        """Return the cached handler for *handler_id*, importing on first use."""
        cached = self._cache.get(handler_id)
        if cached is not None:
            return cached

        handler = await anyio.to_thread.run_sync(load_handler, handler_id)
        logger.debug("Loaded handler %s", handler_id)
        return self._cache.setdefault(handler_id, handler)

    def __contains__(self, handler_id: object) -> bool:
        return handler_id in self._cache

    def __len__(self) -> int:
        return len(self._cache)
