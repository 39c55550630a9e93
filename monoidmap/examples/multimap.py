"""A lawful multimap: every key maps to a (possibly empty) set of values.

Backed by a MonoidMap over frozensets under union. The empty set is the
identity, so keys whose set becomes empty disappear on their own; no
method needs to special-case them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import monoidmap as mm
from monoidmap.basis import set_monoid

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class MultiMap(Generic[K, V]):
    entries: mm.MonoidMap[K, frozenset[V]]

    # -----------------------------------------------------------------
    # Construction and deconstruction
    # -----------------------------------------------------------------

    @classmethod
    def empty(cls) -> MultiMap[Any, Any]:
        return cls(mm.empty(set_monoid()))

    @classmethod
    def from_list(cls, pairs: Iterable[tuple[K, Iterable[V]]]) -> MultiMap[K, V]:
        """Build from ``(key, values)`` pairs; repeated keys are unioned."""
        return cls(
            mm.from_list_with(
                set_monoid(), frozenset.union, ((k, frozenset(vs)) for k, vs in pairs)
            )
        )

    def to_list(self) -> list[tuple[K, frozenset[V]]]:
        return mm.to_list(self.entries)

    # -----------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------

    def lookup(self, key: K) -> frozenset[V]:
        return mm.get(self.entries, key)

    def null(self) -> bool:
        return mm.null(self.entries)

    def non_null(self) -> bool:
        return mm.non_null(self.entries)

    def non_null_key(self, key: K) -> bool:
        return mm.non_null_key(self.entries, key)

    def non_null_keys(self) -> frozenset[K]:
        return mm.non_null_keys(self.entries)

    def non_null_count(self) -> int:
        return mm.non_null_count(self.entries)

    def is_submap_of(self, other: MultiMap[K, V]) -> bool:
        return mm.is_submap_of(self.entries, other.entries)

    # -----------------------------------------------------------------
    # Modification
    # -----------------------------------------------------------------

    def update(self, key: K, values: Iterable[V]) -> MultiMap[K, V]:
        """Replace the set at ``key``."""
        return MultiMap(mm.set(self.entries, key, frozenset(values)))

    def insert(self, key: K, values: Iterable[V]) -> MultiMap[K, V]:
        """Add ``values`` to the set at ``key``."""
        return MultiMap(mm.adjust(self.entries, key, lambda s: s | frozenset(values)))

    def remove(self, key: K, values: Iterable[V]) -> MultiMap[K, V]:
        """Remove ``values`` from the set at ``key``."""
        return MultiMap(mm.adjust(self.entries, key, lambda s: s - frozenset(values)))

    # -----------------------------------------------------------------
    # Combination
    # -----------------------------------------------------------------

    def union(self, other: MultiMap[K, V]) -> MultiMap[K, V]:
        return MultiMap(mm.union(self.entries, other.entries))

    def intersection(self, other: MultiMap[K, V]) -> MultiMap[K, V]:
        return MultiMap(mm.intersection(self.entries, other.entries))
