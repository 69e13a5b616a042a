"""Routing: filesystem-discovered route table with ordered pattern matching.

Routes are discovered once at startup and compiled into an immutable
lookup structure when the app freezes.

Conventions::

    api/
      health.py              # /api/health            (exact)
      items/
        [id].py              # /api/items/<one segment>
      eia/
        [[...path]].py       # /api/eia, /api/eia/<anything>
      _shared.py             # private, never routed
      test_health.py         # test unit, never routed
      data/                  # bundled data, never scanned
"""

from funnel.routing.discovery import discover_routes
from funnel.routing.loader import HandlerLoader
from funnel.routing.route import RouteEntry, RouteKind, RouteMatch
from funnel.routing.table import RouteTable

__all__ = [
    "HandlerLoader",
    "RouteEntry",
    "RouteKind",
    "RouteMatch",
    "RouteTable",
    "discover_routes",
]
