"""Server startup.

Runs the funnel App under a single-worker pounce ASGI server. One process,
one event loop, one routing table.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from funnel.app import App

logger = logging.getLogger("funnel.server")


def run_server(app: App, host: str | None = None, port: int | None = None) -> None:
    """Start pounce with the given App and block until it stops.

    Freezes the app first so route discovery problems surface before the
    port is bound.

    Args:
        app: Funnel App instance.
        host: Override bind host (default: ``app.config.host``).
        port: Override bind port (default: ``app.config.port``).
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    app.freeze()
    config = app.config
    _host = host or config.host
    _port = port or config.port

    server_config = ServerConfig(
        host=_host,
        port=_port,
        workers=1,
        log_format=config.log_format,
        log_level=config.log_level,
        keep_alive_timeout=config.keep_alive_timeout,
        request_timeout=config.request_timeout,
    )

    logger.info("Listening on http://%s:%d", _host, _port)
    logger.info("Variant: %s", config.variant)

    server = Server(server_config, app)
    server.run()
