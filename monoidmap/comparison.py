"""Submap and disjointness tests.

    is_submap_of_by(leq, m1, m2)  ⇔  ∀ k. leq(get(m1, k), get(m2, k))
    disjoint_by(meet, m1, m2)     ⇔  ∀ k. is_identity(meet(get(m1, k), get(m2, k)))

The ``_by`` variants visit every key stored in either map, so ``leq`` and
``meet`` may be arbitrary functions. The default comparisons use the
descriptor's own lawful ``leq`` (with ``leq(identity, x)``) and ``meet``
(with ``meet(x, identity) = identity``) and only visit the keys that can
matter.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from . import tree
from .core import MonoidMap, _check_compatible, _zip_intersection, _zip_union, get
from .monoid import Capability

K = TypeVar("K")
V = TypeVar("V")


def is_submap_of(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> bool:
    """Pointwise ``leq`` from the value type's partial order."""
    monoid = m1.monoid
    monoid.require(Capability.PARTIAL_ORDER, operation="is_submap_of")
    _check_compatible(m1, m2, "is_submap_of")
    leq = monoid.leq
    assert leq is not None
    # leq(identity, x) holds, so keys stored only in m2 always pass.
    return all(leq(v1, get(m2, k)) for k, v1 in tree.items(m1.root))


def is_submap_of_by(
    leq: Callable[[V, V], bool], m1: MonoidMap[K, V], m2: MonoidMap[K, V]
) -> bool:
    _check_compatible(m1, m2, "is_submap_of_by")
    return all(leq(v1, v2) for _, v1, v2 in _zip_union(m1, m2))


def disjoint(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> bool:
    """True when no key holds a shared non-trivial value.

    Uses the value type's ``meet`` when it declares one; otherwise two maps
    are disjoint when no key is stored in both.
    """
    _check_compatible(m1, m2, "disjoint")
    if m1.monoid.has(Capability.GCD):
        meet = m1.monoid.meet
        assert meet is not None
        is_identity = m1.monoid.is_identity
        return all(
            is_identity(meet(v1, v2)) for _, v1, v2 in _zip_intersection(m1, m2)
        )
    return next(_zip_intersection(m1, m2), None) is None


def disjoint_by(
    meet: Callable[[V, V], V], m1: MonoidMap[K, V], m2: MonoidMap[K, V]
) -> bool:
    _check_compatible(m1, m2, "disjoint_by")
    is_identity = m1.monoid.is_identity
    return all(is_identity(meet(v1, v2)) for _, v1, v2 in _zip_union(m1, m2))
