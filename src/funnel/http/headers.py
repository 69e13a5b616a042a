"""Request headers as handler units see them.

Built once per request by ``Request.from_asgi`` from the scope's header
list, with repeated names already folded. The test client also uses it to
expose response headers. Values are decoded as latin-1 on access, so
forwarding headers such as ``X-Forwarded-Host`` come back exactly as sent.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Read-only, case-insensitive view over raw ASGI header pairs.

    Handlers normally read ``request.headers.get("x-api-key")``. Lookups
    return the first stored value; after ``from_asgi`` folding there is
    only one value per name. ``get_list`` is for raw pairs that were not
    folded, such as repeated ``set-cookie`` on a recorded response.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)

    @classmethod
    def from_asgi(cls, raw: tuple[tuple[bytes, bytes], ...] | list[tuple[bytes, bytes]]) -> "Headers":
        """Build headers from an ASGI header list, folding repeated names.

        Repeated values are joined with ``", "`` in arrival order and the
        folded header keeps the position of its first occurrence.
        """
        folded: dict[bytes, list[bytes]] = {}
        for name, value in raw:
            folded.setdefault(name.lower(), []).append(value)
        return cls(tuple((name, b", ".join(values)) for name, values in folded.items()))

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower().encode("latin-1")
        for name, value in self._raw:
            if name.lower() == key_lower:
                return value.decode("latin-1")
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower().encode("latin-1")
        return any(name.lower() == key_lower for name, _ in self._raw)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.decode("latin-1").lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values stored for *key*."""
        key_lower = key.lower().encode("latin-1")
        return [value.decode("latin-1") for name, value in self._raw if name.lower() == key_lower]

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """The byte pairs this view was built from."""
        return self._raw
