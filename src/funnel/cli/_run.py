"""``funnel``: start the server from environment configuration.

Startup errors (bad configuration, missing server package) are reported
on stderr with exit status 1. Failures while serving are the server's
to report.
"""

import sys

from funnel.errors import ConfigurationError


def run_server() -> None:
    """Build the App from the environment and serve until interrupted."""
    from funnel.app import App

    try:
        app = App.from_env()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        app.run()
    except ModuleNotFoundError as exc:
        if not (exc.name or "").startswith("pounce"):
            raise
        print(f"Error: {exc}. Install the server with: pip install bengal-pounce", file=sys.stderr)
        raise SystemExit(1) from exc
