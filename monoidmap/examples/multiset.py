"""A multiset (bag) as a map from elements to positive counts.

Built over natural numbers under addition: adding is ``append``, removal is
truncated subtraction, union takes the larger count and intersection the
smaller. Elements whose count drops to zero vanish.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import monoidmap as mm
from monoidmap.basis import natural_sum

T = TypeVar("T")


@dataclass(frozen=True)
class MultiSet(Generic[T]):
    counts: mm.MonoidMap[T, int]

    @classmethod
    def empty(cls) -> MultiSet[Any]:
        return cls(mm.empty(natural_sum()))

    @classmethod
    def from_list(cls, elements: Iterable[T]) -> MultiSet[T]:
        return cls(mm.from_list_with(natural_sum(), int.__add__, ((e, 1) for e in elements)))

    @classmethod
    def from_counts(cls, counts: Iterable[tuple[T, int]]) -> MultiSet[T]:
        """Build from ``(element, count)`` pairs; counts for repeats add up."""
        pairs = list(counts)
        for element, n in pairs:
            if n < 0:
                raise ValueError(f"Negative count {n} for {element!r}")
        return cls(mm.from_list_with(natural_sum(), int.__add__, pairs))

    def to_counts(self) -> list[tuple[T, int]]:
        return mm.to_list(self.counts)

    def elements(self) -> Iterator[T]:
        """Every element, repeated by its count, in ascending order."""
        for element, n in mm.to_list(self.counts):
            for _ in range(n):
                yield element

    def count(self, element: T) -> int:
        return mm.get(self.counts, element)

    def size(self) -> int:
        """Total number of elements, counting repeats."""
        return sum(mm.values(self.counts))

    def distinct(self) -> int:
        return mm.non_null_count(self.counts)

    def insert(self, element: T, n: int = 1) -> MultiSet[T]:
        return MultiSet(mm.adjust(self.counts, element, lambda c: c + n))

    def remove(self, element: T, n: int = 1) -> MultiSet[T]:
        """Remove up to ``n`` copies of ``element``."""
        return MultiSet(mm.adjust(self.counts, element, lambda c: max(c - n, 0)))

    def sum(self, other: MultiSet[T]) -> MultiSet[T]:
        return MultiSet(mm.append(self.counts, other.counts))

    def union(self, other: MultiSet[T]) -> MultiSet[T]:
        return MultiSet(mm.union(self.counts, other.counts))

    def intersection(self, other: MultiSet[T]) -> MultiSet[T]:
        return MultiSet(mm.intersection(self.counts, other.counts))

    def difference(self, other: MultiSet[T]) -> MultiSet[T]:
        return MultiSet(mm.monus(self.counts, other.counts))

    def is_subset_of(self, other: MultiSet[T]) -> bool:
        return mm.is_submap_of(self.counts, other.counts)

    def disjoint(self, other: MultiSet[T]) -> bool:
        return mm.disjoint(self.counts, other.counts)
