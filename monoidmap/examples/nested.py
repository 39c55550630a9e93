"""A two-level map ``(k1, k2) → v`` built as a map of maps.

The outer map's values are inner maps over the value monoid. Because an
empty inner map is the outer identity, clearing the last entry of an inner
map removes the outer key too.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import monoidmap as mm

K1 = TypeVar("K1")
K2 = TypeVar("K2")
V = TypeVar("V")


@dataclass(frozen=True)
class NestedMonoidMap(Generic[K1, K2, V]):
    outer: mm.MonoidMap[K1, mm.MonoidMap[K2, V]]

    @property
    def value_monoid(self) -> mm.Monoid[V]:
        return self.outer.monoid.identity.monoid

    # -----------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------

    @classmethod
    def empty(cls, monoid: mm.Monoid[V]) -> NestedMonoidMap[Any, Any, V]:
        return cls(mm.empty(mm.monoid_map_monoid(monoid)))

    @classmethod
    def from_flat_list(
        cls, monoid: mm.Monoid[V], entries: Iterable[tuple[tuple[K1, K2], V]]
    ) -> NestedMonoidMap[K1, K2, V]:
        """Build from ``((k1, k2), v)`` entries; repeated keys are combined."""
        m: NestedMonoidMap[K1, K2, V] = cls.empty(monoid)
        for k, v in entries:
            m = m.set(k, monoid.combine(m.get(k), v))
        return m

    @classmethod
    def from_nested_list(
        cls, monoid: mm.Monoid[V], entries: Iterable[tuple[K1, Iterable[tuple[K2, V]]]]
    ) -> NestedMonoidMap[K1, K2, V]:
        return cls.from_flat_list(
            monoid, (((k1, k2), v) for k1, inner in entries for k2, v in inner)
        )

    # -----------------------------------------------------------------
    # Deconstruction
    # -----------------------------------------------------------------

    def to_flat_list(self) -> list[tuple[tuple[K1, K2], V]]:
        return [((k1, k2), v) for k1, inner in self.to_nested_list() for k2, v in inner]

    def to_nested_list(self) -> list[tuple[K1, list[tuple[K2, V]]]]:
        return [(k1, mm.to_list(inner)) for k1, inner in mm.to_list(self.outer)]

    # -----------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------

    def get(self, key: tuple[K1, K2]) -> V:
        k1, k2 = key
        return mm.get(mm.get(self.outer, k1), k2)

    def keys(self) -> frozenset[tuple[K1, K2]]:
        return frozenset(k for k, _ in self.to_flat_list())

    def size(self) -> int:
        return sum(mm.non_null_count(inner) for inner in mm.values(self.outer))

    # -----------------------------------------------------------------
    # Modification
    # -----------------------------------------------------------------

    def set(self, key: tuple[K1, K2], value: V) -> NestedMonoidMap[K1, K2, V]:
        k1, k2 = key
        inner = mm.set(mm.get(self.outer, k1), k2, value)
        return NestedMonoidMap(mm.set(self.outer, k1, inner))

    def adjust(
        self, key: tuple[K1, K2], f: Callable[[V], V]
    ) -> NestedMonoidMap[K1, K2, V]:
        return self.set(key, f(self.get(key)))

    def delete(self, key: tuple[K1, K2]) -> NestedMonoidMap[K1, K2, V]:
        return self.set(key, self.value_monoid.identity)

    # -----------------------------------------------------------------
    # Monoidal operations (forwarded to the outer map)
    # -----------------------------------------------------------------

    def append(self, other: NestedMonoidMap[K1, K2, V]) -> NestedMonoidMap[K1, K2, V]:
        return NestedMonoidMap(mm.append(self.outer, other.outer))

    def monus(self, other: NestedMonoidMap[K1, K2, V]) -> NestedMonoidMap[K1, K2, V]:
        return NestedMonoidMap(mm.monus(self.outer, other.outer))

    def is_submap_of(self, other: NestedMonoidMap[K1, K2, V]) -> bool:
        return mm.is_submap_of(self.outer, other.outer)

    def is_prefix_of(self, other: NestedMonoidMap[K1, K2, V]) -> bool:
        return mm.is_prefix_of(self.outer, other.outer)

    def strip_prefix(
        self, other: NestedMonoidMap[K1, K2, V]
    ) -> NestedMonoidMap[K1, K2, V] | None:
        """The map ``r`` with ``self.append(r) == other``, or None."""
        rest = mm.strip_prefix(self.outer, other.outer)
        return None if rest is None else NestedMonoidMap(rest)

    def is_suffix_of(self, other: NestedMonoidMap[K1, K2, V]) -> bool:
        return mm.is_suffix_of(self.outer, other.outer)

    def strip_suffix(
        self, other: NestedMonoidMap[K1, K2, V]
    ) -> NestedMonoidMap[K1, K2, V] | None:
        """The map ``r`` with ``r.append(self) == other``, or None."""
        rest = mm.strip_suffix(self.outer, other.outer)
        return None if rest is None else NestedMonoidMap(rest)

    def overlap(self, other: NestedMonoidMap[K1, K2, V]) -> NestedMonoidMap[K1, K2, V]:
        return NestedMonoidMap(mm.overlap(self.outer, other.outer))

    def strip_overlap(
        self, other: NestedMonoidMap[K1, K2, V]
    ) -> tuple[
        NestedMonoidMap[K1, K2, V],
        NestedMonoidMap[K1, K2, V],
        NestedMonoidMap[K1, K2, V],
    ]:
        r1, o, r2 = mm.strip_overlap(self.outer, other.outer)
        return NestedMonoidMap(r1), NestedMonoidMap(o), NestedMonoidMap(r2)
