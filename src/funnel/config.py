"""Application configuration.

AppConfig is a frozen dataclass, immutable after creation. The environment
is read exactly once, by ``AppConfig.from_env()`` at process start.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from funnel.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=8080, api_dir="functions", static_dir="build")
    """

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Build variant of the static bundle (informational, logged at startup)
    variant: str = "full"

    # Function handlers
    api_dir: str | Path = "api"
    api_prefix: str = "/api"

    # Static bundle
    static_dir: str | Path = "dist"
    assets_prefix: str = "/assets/"
    index: str = "index.html"

    # Logging
    log_level: str = "info"
    log_format: str = "text"

    # Connection handling (forwarded to the ASGI server)
    keep_alive_timeout: float = 5.0
    request_timeout: float = 30.0

    @property
    def default_host(self) -> str:
        """Host used to rebuild request URLs when the client sent none."""
        return f"localhost:{self.port}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: object) -> "AppConfig":
        """Build a config from ``PORT`` and ``VITE_VARIANT``.

        Raises ``ConfigurationError`` if ``PORT`` is not a valid port number.
        """
        env = os.environ if environ is None else environ
        raw_port = env.get("PORT", "") or "3000"
        try:
            port = int(raw_port)
        except ValueError:
            msg = f"PORT must be an integer, got {raw_port!r}"
            raise ConfigurationError(msg) from None
        if not 0 <= port <= 65535:
            msg = f"PORT out of range: {port}"
            raise ConfigurationError(msg)

        variant = env.get("VITE_VARIANT", "") or "full"
        return cls(port=port, variant=variant, **overrides)  # type: ignore[arg-type]
