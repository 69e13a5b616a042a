"""Funnel CLI: a single blocking run command.

Entry point registered as ``funnel`` in ``pyproject.toml``::

    [project.scripts]
    funnel = "funnel.cli:main"

All configuration comes from the environment (``PORT``, ``VITE_VARIANT``)
and the working directory (``api/``, ``dist/``).
"""

import argparse


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``funnel`` command."""
    parser = argparse.ArgumentParser(
        prog="funnel",
        description=(
            "Serve ./dist as a single-page app and ./api handler units under /api. "
            "Configured by the PORT and VITE_VARIANT environment variables."
        ),
    )
    parser.parse_args(argv)

    from funnel.cli._run import run_server

    run_server()
