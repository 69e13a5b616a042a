"""Compiled route table: O(1) exact lookup, ordered pattern scan.

Entries are added during discovery and frozen by ``compile()``. After
that the table is read-only and safe to share between concurrent
requests without locking.
"""

from funnel.errors import NotFound
from funnel.routing.route import RouteEntry, RouteKind, RouteMatch


def _covers(prefix: str, path: str) -> bool:
    """True if a catch-all on *prefix* accepts *path*."""
    return path == prefix or path.startswith(prefix + "/")


def _parent(path: str) -> str:
    return path.rsplit("/", 1)[0]


def _intersects(a: RouteEntry, b: RouteEntry) -> bool:
    """Whether some request path is accepted by both *a* and *b*."""
    kinds = {a.kind, b.kind}
    if a.kind is RouteKind.EXACT or b.kind is RouteKind.EXACT:
        exact, other = (a, b) if a.kind is RouteKind.EXACT else (b, a)
        if other.kind is RouteKind.EXACT:
            return exact.path == other.path
        return other.matches(exact.path)
    if kinds == {RouteKind.CATCH_ALL}:
        return _covers(a.prefix, b.prefix) or _covers(b.prefix, a.prefix)
    if kinds == {RouteKind.PARAMETERIZED}:
        return a.prefix == b.prefix
    catch_all, param = (a, b) if a.kind is RouteKind.CATCH_ALL else (b, a)
    return _covers(catch_all.prefix, param.prefix) or _parent(catch_all.prefix) == param.prefix


class RouteTable:
    """Immutable-after-compile mapping from URL shapes to handler units.

    Usage::

        table = RouteTable()
        table.add(entry)
        table.compile()
        match = table.match("/api/items/42")

    Lookup order is fixed: the exact map first, then pattern entries in
    discovery order (sorted by source path), first match wins.
    """

    __slots__ = ("_compiled", "_exact", "_patterns", "_pending")

    def __init__(self) -> None:
        self._exact: dict[str, RouteEntry] = {}
        self._pending: list[RouteEntry] = []
        self._patterns: tuple[RouteEntry, ...] = ()
        self._compiled = False

    def add(self, entry: RouteEntry) -> None:
        """Add an entry. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        if entry.kind is RouteKind.EXACT:
            self._exact[entry.path] = entry
        else:
            self._pending.append(entry)

    def compile(self) -> None:
        """Freeze the table. Pattern order becomes lexicographic by source."""
        if self._compiled:
            return
        self._patterns = tuple(sorted(self._pending, key=lambda e: e.source))
        self._pending = []
        self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def exact(self) -> dict[str, RouteEntry]:
        """Exact entries keyed by literal path (a copy)."""
        return dict(self._exact)

    @property
    def patterns(self) -> tuple[RouteEntry, ...]:
        """Pattern entries in match order."""
        return self._patterns if self._compiled else tuple(self._pending)

    @property
    def entries(self) -> list[RouteEntry]:
        """Every entry: exact routes by path, then patterns in match order."""
        return [*(self._exact[p] for p in sorted(self._exact)), *self.patterns]

    def __len__(self) -> int:
        return len(self._exact) + len(self._patterns) + len(self._pending)

    def match(self, path: str) -> RouteMatch:
        """Select the single entry that handles *path*.

        Raises ``NotFound`` if no entry accepts the path.
        """
        entry = self._exact.get(path)
        if entry is not None:
            return RouteMatch(entry=entry, path=path)

        for entry in self._patterns:
            if entry.pattern is not None and entry.pattern.match(path):
                return RouteMatch(entry=entry, path=path)

        raise NotFound()

    def overlaps(self) -> list[tuple[RouteEntry, RouteEntry]]:
        """Pairs ``(winner, shadowed)`` of entries that accept a common path.

        The table never rejects overlaps; this report exists so the app can
        warn at startup. Exact entries always win over patterns. Between
        two patterns the earlier one in match order wins.
        """
        result: list[tuple[RouteEntry, RouteEntry]] = []
        patterns = list(self._patterns)
        for exact in self.entries[: len(self._exact)]:
            result.extend((exact, entry) for entry in patterns if _intersects(exact, entry))
        for i, first in enumerate(patterns):
            result.extend(
                (first, later) for later in patterns[i + 1 :] if _intersects(first, later)
            )
        return result
