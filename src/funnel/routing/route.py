"""RouteEntry and RouteMatch frozen dataclasses."""

import re
from dataclasses import dataclass
from enum import Enum


class RouteKind(Enum):
    """How a route's URL shape was declared by its unit's filename."""

    EXACT = "exact"  # foo.py
    PARAMETERIZED = "parameterized"  # [name].py
    CATCH_ALL = "catch_all"  # [[...name]].py or [...name].py


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A discovered route. Immutable once the table is built.

    ``path`` is the literal URL for exact routes and the declared prefix
    for pattern routes. ``handler_id`` locates the unit for the loader and
    is otherwise opaque. ``source`` is the unit's path relative to the
    handler root and fixes the route's place in discovery order.
    """

    kind: RouteKind
    path: str
    handler_id: str
    prefix: str
    source: str
    pattern: re.Pattern[str] | None = None
    param_name: str | None = None

    def matches(self, path: str) -> bool:
        """Whether this entry accepts *path*."""
        if self.pattern is None:
            return path == self.path
        return self.pattern.match(path) is not None

    def describe(self) -> str:
        """Human-readable URL shape, e.g. ``/api/items/{id}``."""
        if self.kind is RouteKind.PARAMETERIZED:
            return f"{self.prefix}/{{{self.param_name}}}"
        if self.kind is RouteKind.CATCH_ALL:
            return f"{self.prefix}/{{{self.param_name}*}}"
        return self.path


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    entry: RouteEntry
    path: str
