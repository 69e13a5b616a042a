"""Funnel application class.

Holds configuration until the first request (or ``freeze()``), then
scans the handler tree once and serves from the resulting immutable
route table for the rest of the process lifetime.
"""

import logging
import threading
from collections import Counter

from funnel._internal.asgi import Receive, Scope, Send
from funnel.config import AppConfig
from funnel.routing.discovery import discover_routes
from funnel.routing.loader import HandlerLoader
from funnel.routing.route import RouteKind
from funnel.routing.table import RouteTable
from funnel.server.handler import handle_request
from funnel.server.static import StaticSite

logger = logging.getLogger("funnel.app")


class App:
    """The funnel application: an ASGI 3.0 callable.

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        caller scans the handler tree, even if the server invokes
        ``__call__()`` from several threads on first request.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_loader",
        "_site",
        "_table",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._table: RouteTable | None = None
        self._loader: HandlerLoader = HandlerLoader()
        self._site: StaticSite | None = None

    @classmethod
    def from_env(cls) -> "App":
        """Build an App configured from the process environment."""
        return cls(AppConfig.from_env())

    # -- Introspection --

    @property
    def routes(self) -> RouteTable:
        """The compiled route table (freezes the app if needed)."""
        self.freeze()
        assert self._table is not None
        return self._table

    @property
    def loader(self) -> HandlerLoader:
        return self._loader

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the server and block until it stops."""
        from funnel.server.serve import run_server

        run_server(self, host, port)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan directly, then delegates HTTP scopes to the
        request handler pipeline. Other scope types are ignored.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self.freeze()

        assert self._table is not None
        assert self._site is not None

        await handle_request(
            scope,
            receive,
            send,
            table=self._table,
            loader=self._loader,
            site=self._site,
            api_prefix=self.config.api_prefix,
            default_host=self.config.default_host,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup, before the first HTTP request.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self.freeze()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def freeze(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Discover routes (one filesystem scan per process)
        table = discover_routes(self.config.api_dir, self.config.api_prefix)
        self._table = table

        # 2. Static bundle
        self._site = StaticSite(
            self.config.static_dir,
            index=self.config.index,
            assets_prefix=self.config.assets_prefix,
        )

        self._frozen = True

        counts = Counter(entry.kind for entry in table.entries)
        logger.info(
            "Routes: %d exact, %d parameterized, %d catch-all",
            counts[RouteKind.EXACT],
            counts[RouteKind.PARAMETERIZED],
            counts[RouteKind.CATCH_ALL],
        )

        # 3. Warn about ambiguous routes. First match still wins.
        for winner, shadowed in table.overlaps():
            logger.warning(
                "Route %s (%s) overlaps %s (%s); %s is matched first",
                shadowed.describe(),
                shadowed.source,
                winner.describe(),
                winner.source,
                winner.source,
            )
