"""Static bundle serving with single-page-app fallback.

Serves files from the built bundle (``dist/``). Unknown paths get the
root ``index.html`` so the client application can do its own routing.
Files under the hashed-assets prefix are content-addressed and cached
for a year.

File access goes through ``anyio.Path`` so disk reads never block the
event loop.
"""

import logging
import re
from pathlib import Path

import anyio

from funnel._internal.asgi import Send
from funnel.http.response import Response
from funnel.mime import content_type_for
from funnel.server.sender import send_response

logger = logging.getLogger("funnel.server")

IMMUTABLE_CACHE_CONTROL = "public, max-age=31536000, immutable"

_REPEATED_SLASHES = re.compile(r"/{2,}")


def sanitize_path(path: str) -> str:
    """Remove ``..`` sequences and collapse repeated slashes."""
    return _REPEATED_SLASHES.sub("/", path.replace("..", ""))


class StaticSite:
    """Serves a built single-page application from a directory.

    Security: strips traversal sequences, then resolves symlinks and
    verifies the final path is within the configured directory.

    Usage::

        site = StaticSite("dist")
        if not await site.serve("/assets/app.3f2a.js", send):
            ...
    """

    __slots__ = ("_assets_prefix", "_directory", "_index")

    def __init__(
        self,
        directory: str | Path,
        *,
        index: str = "index.html",
        assets_prefix: str = "/assets/",
    ) -> None:
        self._directory = Path(directory).resolve()
        self._index = index
        self._assets_prefix = assets_prefix

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def index_path(self) -> Path:
        """The root document served for unknown paths."""
        return self._directory / self._index

    async def resolve(self, path: str) -> Path:
        """Map a request path to the file that should answer it.

        Directories map to their index document; anything missing (or
        outside the bundle) maps to the root index document.
        """
        safe_path = sanitize_path(path)
        try:
            resolved = await anyio.Path(self._directory / safe_path.lstrip("/")).resolve()
            candidate = Path(resolved)
            if not candidate.is_relative_to(self._directory):
                return self.index_path

            file_path = anyio.Path(candidate)
            if await file_path.is_dir():
                return candidate / self._index
            if await file_path.exists():
                return candidate
        except (OSError, ValueError) as exc:
            # ValueError: the path cannot name a file at all (e.g. an embedded NUL)
            logger.debug("Unresolvable static path %r: %s", path, exc)
        return self.index_path

    async def serve(self, path: str, send: Send) -> bool:
        """Send the file answering *path*. Returns ``False`` if none was readable.

        Nothing is sent when ``False`` is returned, so the caller can still
        answer the request itself.
        """
        file_path = await self.resolve(path)
        try:
            data = await anyio.Path(file_path).read_bytes()
        except OSError as exc:
            logger.debug("Static miss for %s (%s): %s", path, file_path, exc)
            return False

        headers: list[tuple[str, str]] = []
        # The fallback document is never cached as an asset
        if file_path != self.index_path and sanitize_path(path).startswith(self._assets_prefix):
            headers.append(("Cache-Control", IMMUTABLE_CACHE_CONTROL))
        headers.append(("Content-Type", content_type_for(file_path)))

        await send_response(Response(body=data, headers=tuple(headers)), send)
        return True
