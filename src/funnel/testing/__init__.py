"""Test utilities for funnel applications.

Provides an ASGI-level test client that records every body message, so
tests can assert on streaming as well as on the final payload::

    from funnel.testing import TestClient
"""

from funnel.testing.client import ClientResponse, TestClient

__all__ = ["ClientResponse", "TestClient"]
