"""Filesystem route discovery for the handler-unit directory.

Walks the ``api/`` tree once at startup. Every public ``.py`` file is a
handler unit; its directory path becomes the URL prefix and its stem
decides the route kind:

- ``[[...name]].py`` / ``[...name].py``: catch-all on the directory prefix
- ``[name].py``: exactly one more segment under the directory prefix
- ``foo.py``: the literal path ``<prefix>/foo``

Units are not imported here. The loader imports them lazily on first use.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from funnel.routing.route import RouteEntry, RouteKind
from funnel.routing.table import RouteTable

logger = logging.getLogger("funnel.routing")

# Directories that hold bundled data or third-party code, never routes
SKIP_DIRS = frozenset({"data", "node_modules", "__pycache__", "site-packages", "venv", ".venv"})

# Regex matching [name] stems (single dynamic segment)
_PARAM_RE = re.compile(r"^\[([^\[\]]+)\]$")

# Regex extracting the name from [[...name]] / [...name] stems
_CATCH_ALL_RE = re.compile(r"\[\.\.\.(\w*)\]")


def discover_routes(api_dir: str | Path, prefix: str = "/api") -> RouteTable:
    """Walk a handler directory and return a compiled route table.

    A missing or unreadable directory yields an empty table; discovery
    never aborts startup.

    Args:
        api_dir: Root of the handler-unit tree.
        prefix: URL prefix the root directory maps to.
    """
    root = Path(api_dir).resolve()
    table = RouteTable()
    url_prefix = "/" + prefix.strip("/") if prefix.strip("/") else ""
    _walk_directory(root, root, url_prefix=url_prefix, table=table)
    table.compile()
    logger.debug("Discovered %d route(s) under %s", len(table), root)
    return table


def is_route_file(name: str) -> bool:
    """Whether a filename is a routable handler unit."""
    if not name.endswith(".py"):
        return False
    if name.startswith(("_", ".")):
        return False
    stem = name[:-3]
    return not (stem.startswith("test_") or stem.endswith("_test") or stem == "conftest")


def _walk_directory(directory: Path, root: Path, *, url_prefix: str, table: RouteTable) -> None:
    """Recursively add every unit under *directory* to *table*."""
    try:
        children = sorted(directory.iterdir())
    except OSError as exc:
        logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        return

    for item in children:
        try:
            is_dir = item.is_dir()
        except OSError:
            continue

        if is_dir:
            if item.name in SKIP_DIRS or item.name.startswith(("_", ".")):
                continue
            _walk_directory(item, root, url_prefix=f"{url_prefix}/{item.name}", table=table)
            continue

        if is_route_file(item.name):
            table.add(classify(item, root, url_prefix))


def classify(file: Path, root: Path, url_prefix: str) -> RouteEntry:
    """Build the route entry for one handler unit."""
    stem = file.stem
    source = file.relative_to(root).as_posix()
    handler_id = str(file)

    if "[[..." in stem or "[..." in stem:
        name_match = _CATCH_ALL_RE.search(stem)
        return RouteEntry(
            kind=RouteKind.CATCH_ALL,
            path=url_prefix,
            handler_id=handler_id,
            prefix=url_prefix,
            source=source,
            pattern=re.compile(f"^{re.escape(url_prefix)}(/.*)?$"),
            param_name=(name_match.group(1) if name_match else "") or "path",
        )

    param_match = _PARAM_RE.match(stem)
    if param_match:
        return RouteEntry(
            kind=RouteKind.PARAMETERIZED,
            path=url_prefix,
            handler_id=handler_id,
            prefix=url_prefix,
            source=source,
            pattern=re.compile(f"^{re.escape(url_prefix)}/[^/]+$"),
            param_name=param_match.group(1),
        )

    return RouteEntry(
        kind=RouteKind.EXACT,
        path=f"{url_prefix}/{stem}",
        handler_id=handler_id,
        prefix=url_prefix,
        source=source,
    )
