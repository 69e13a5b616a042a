"""Terminal error formatting for handler failures.

Replaces raw ``logger.exception()`` with clean diagnostics that point at
the failing handler unit instead of funnel's own frames::

    500 POST /api/summarize
    KeyError: 'text'
      Trace (app frames):
        /srv/api/summarize.py:12 in handler
          text = payload["text"]

Verbosity is controlled by the ``FUNNEL_TRACEBACK`` environment variable:
``compact`` (default), ``full``, or ``minimal``.
"""

from __future__ import annotations

import logging
import os
import traceback as _traceback

logger = logging.getLogger("funnel.server")

# Root of the funnel package; its frames are framework internals
_FUNNEL_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _is_app_frame(filename: str) -> bool:
    """True if the frame is from a handler unit (not stdlib/site-packages/funnel)."""
    if filename.startswith("<"):
        return False
    if "site-packages" in filename or filename.startswith(_FUNNEL_DIR):
        return False
    stdlib_prefix = os.path.dirname(os.__file__)
    return not filename.startswith(stdlib_prefix)


def format_compact_traceback(exc: BaseException) -> str:
    """Format an error with handler-unit frames only.

    Falls back to the last three frames when no unit frame is present
    (e.g. an import failure raised inside ``importlib``).
    """
    parts: list[str] = []

    tb = exc.__traceback__
    frames = _traceback.extract_tb(tb) if tb else []
    app_frames = [f for f in frames if _is_app_frame(f.filename)]
    display_frames = app_frames if app_frames else frames[-3:]

    parts.append(f"{type(exc).__name__}: {exc}")

    if display_frames:
        parts.append("  Trace (app frames):")
        for frame in display_frames[-5:]:
            parts.append(f"    {frame.filename}:{frame.lineno} in {frame.name}")
            if frame.line:
                parts.append(f"      {frame.line.strip()}")

    cause = exc.__cause__
    if cause is not None:
        parts.append("  Caused by:")
        parts.extend(f"  {line}" for line in format_compact_traceback(cause).splitlines())

    return "\n".join(parts)


def format_minimal_error(exc: BaseException) -> str:
    """One-line error summary for minimal verbosity."""
    tb = exc.__traceback__
    frames = _traceback.extract_tb(tb) if tb else []
    last = frames[-1] if frames else None
    location = f" at {last.filename}:{last.lineno}" if last else ""
    return f"{type(exc).__name__}{location}: {exc}"


def log_error(exc: BaseException, *, method: str | None = None, path: str | None = None) -> None:
    """Log an internal error, always naming the offending path when known.

    Args:
        exc: The exception that caused the 500 error.
        method: Request method, if a request was in flight.
        path: Request path, if a request was in flight.
    """
    if path is not None:
        prefix = f"500 {method} {path}" if method else f"500 {path}"
    else:
        prefix = "Server error"

    traceback_style = os.environ.get("FUNNEL_TRACEBACK", "compact").lower()

    if traceback_style == "full":
        logger.error(prefix, exc_info=exc)
    elif traceback_style == "minimal":
        logger.error("%s - %s", prefix, format_minimal_error(exc))
    else:
        logger.error("%s\n%s", prefix, format_compact_traceback(exc))
