from __future__ import annotations

from typing import Iterator, Tuple

from .db import Store, decode
from .models import Protocol

# Built once after the store has been checked; shared read-only by every request.
class CatalogCache:
    __slots__ = ("_protocols",)

    def __init__(self, protocols):
        self._protocols: Tuple[Protocol, ...] = tuple(protocols)

    @classmethod
    def load(cls, store: Store) -> "CatalogCache":
        # DecodeFailure propagates: a store that passed the guard must decode.
        return cls(decode(raw) for _, raw in store.scan_all())

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(p.protocol_id for p in self._protocols)

    def __len__(self) -> int:
        return len(self._protocols)

    def __iter__(self) -> Iterator[Protocol]:
        return iter(self._protocols)
