"""Prefixes, suffixes and overlaps of maps.

These operations lift the reductive capabilities of the value type key by
key. ``m1`` is a prefix of ``m2`` when every value of ``m1`` is a prefix of
the value of ``m2`` at the same key:

    is_prefix_of(m1, m2)  ⇔  ∀ k. ∃ w. combine(get(m1, k), w) = get(m2, k)

Stripping is all-or-nothing: if any key fails, the whole operation returns
None. Restrict the maps to the keys of interest first when a partial
answer is wanted.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from . import tree
from .core import (
    MonoidMap,
    _build,
    _check_compatible,
    _zip_intersection,
    _zip_union,
    get,
)
from .errors import InvariantError
from .monoid import Capability

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


def _strip_all(
    strip: Callable[[V, V], V | None],
    m1: MonoidMap[K, V],
    m2: MonoidMap[K, V],
    operation: str,
) -> MonoidMap[K, V] | None:
    entries: list[tuple[K, V]] = []
    for k, v1, v2 in _zip_union(m1, m2):
        r = strip(v1, v2)
        if r is None:
            logger.debug("%s failed at key %r: %r, %r", operation, k, v1, v2)
            return None
        entries.append((k, r))
    return _build(m1.monoid, entries)


_OVERLAP = (
    Capability.OVERLAPPING_GCD,
    Capability.LEFT_REDUCTIVE,
    Capability.RIGHT_REDUCTIVE,
)


def _expect(value: V | None, law: str, *args: object) -> V:
    if value is None:
        raise InvariantError(f"{law} does not hold for {args!r}")
    return value


# ---------------------------------------------------------------------------
# Prefixes
# ---------------------------------------------------------------------------


def is_prefix_of(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> bool:
    monoid = m1.monoid
    monoid.require(Capability.LEFT_REDUCTIVE, operation="is_prefix_of")
    _check_compatible(m1, m2, "is_prefix_of")
    # The identity is a prefix of everything, so only keys of m1 matter.
    return all(monoid.is_prefix_of(v1, get(m2, k)) for k, v1 in tree.items(m1.root))


def strip_prefix(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> MonoidMap[K, V] | None:
    """The map ``r`` with ``append(m1, r) == m2``, or None."""
    m1.monoid.require(Capability.LEFT_REDUCTIVE, operation="strip_prefix")
    _check_compatible(m1, m2, "strip_prefix")
    assert m1.monoid.strip_prefix is not None
    return _strip_all(m1.monoid.strip_prefix, m1, m2, "strip_prefix")


def common_prefix(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> MonoidMap[K, V]:
    """Greatest common prefix key by key."""
    monoid = m1.monoid
    monoid.require(Capability.LEFT_GCD, operation="common_prefix")
    _check_compatible(m1, m2, "common_prefix")
    f = monoid.common_prefix
    assert f is not None
    # The common prefix of anything with the identity is the identity.
    return _build(monoid, ((k, f(v1, v2)) for k, v1, v2 in _zip_intersection(m1, m2)))


def strip_common_prefix(
    m1: MonoidMap[K, V], m2: MonoidMap[K, V]
) -> tuple[MonoidMap[K, V], MonoidMap[K, V], MonoidMap[K, V]]:
    """Split into ``(p, r1, r2)`` with ``m1 = p ⋆ r1`` and ``m2 = p ⋆ r2``."""
    monoid = m1.monoid
    monoid.require(
        Capability.LEFT_GCD,
        Capability.LEFT_REDUCTIVE,
        operation="strip_common_prefix",
    )
    _check_compatible(m1, m2, "strip_common_prefix")
    gcd, strip = monoid.common_prefix, monoid.strip_prefix
    assert gcd is not None and strip is not None
    prefixes: list[tuple[K, V]] = []
    rest1: list[tuple[K, V]] = []
    rest2: list[tuple[K, V]] = []
    for k, v1, v2 in _zip_union(m1, m2):
        p = gcd(v1, v2)
        prefixes.append((k, p))
        rest1.append((k, _expect(strip(p, v1), "common_prefix_law", p, v1)))
        rest2.append((k, _expect(strip(p, v2), "common_prefix_law", p, v2)))
    return _build(monoid, prefixes), _build(monoid, rest1), _build(monoid, rest2)


# ---------------------------------------------------------------------------
# Suffixes
# ---------------------------------------------------------------------------


def is_suffix_of(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> bool:
    monoid = m1.monoid
    monoid.require(Capability.RIGHT_REDUCTIVE, operation="is_suffix_of")
    _check_compatible(m1, m2, "is_suffix_of")
    return all(monoid.is_suffix_of(v1, get(m2, k)) for k, v1 in tree.items(m1.root))


def strip_suffix(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> MonoidMap[K, V] | None:
    """The map ``r`` with ``append(r, m1) == m2``, or None."""
    m1.monoid.require(Capability.RIGHT_REDUCTIVE, operation="strip_suffix")
    _check_compatible(m1, m2, "strip_suffix")
    assert m1.monoid.strip_suffix is not None
    return _strip_all(m1.monoid.strip_suffix, m1, m2, "strip_suffix")


def common_suffix(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> MonoidMap[K, V]:
    """Greatest common suffix key by key."""
    monoid = m1.monoid
    monoid.require(Capability.RIGHT_GCD, operation="common_suffix")
    _check_compatible(m1, m2, "common_suffix")
    f = monoid.common_suffix
    assert f is not None
    return _build(monoid, ((k, f(v1, v2)) for k, v1, v2 in _zip_intersection(m1, m2)))


def strip_common_suffix(
    m1: MonoidMap[K, V], m2: MonoidMap[K, V]
) -> tuple[MonoidMap[K, V], MonoidMap[K, V], MonoidMap[K, V]]:
    """Split into ``(r1, r2, s)`` with ``m1 = r1 ⋆ s`` and ``m2 = r2 ⋆ s``."""
    monoid = m1.monoid
    monoid.require(
        Capability.RIGHT_GCD,
        Capability.RIGHT_REDUCTIVE,
        operation="strip_common_suffix",
    )
    _check_compatible(m1, m2, "strip_common_suffix")
    gcd, strip = monoid.common_suffix, monoid.strip_suffix
    assert gcd is not None and strip is not None
    rest1: list[tuple[K, V]] = []
    rest2: list[tuple[K, V]] = []
    suffixes: list[tuple[K, V]] = []
    for k, v1, v2 in _zip_union(m1, m2):
        s = gcd(v1, v2)
        suffixes.append((k, s))
        rest1.append((k, _expect(strip(s, v1), "common_suffix_law", s, v1)))
        rest2.append((k, _expect(strip(s, v2), "common_suffix_law", s, v2)))
    return _build(monoid, rest1), _build(monoid, rest2), _build(monoid, suffixes)


# ---------------------------------------------------------------------------
# Overlap
# ---------------------------------------------------------------------------


def overlap(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> MonoidMap[K, V]:
    """Key by key, the largest suffix of ``m1`` that is a prefix of ``m2``."""
    monoid = m1.monoid
    monoid.require(Capability.OVERLAPPING_GCD, operation="overlap")
    _check_compatible(m1, m2, "overlap")
    f = monoid.overlap
    assert f is not None
    return _build(monoid, ((k, f(v1, v2)) for k, v1, v2 in _zip_intersection(m1, m2)))


def strip_prefix_overlap(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> MonoidMap[K, V]:
    """``m2`` without its prefix that overlaps a suffix of ``m1``."""
    m1.monoid.require(*_OVERLAP, operation="strip_prefix_overlap")
    _check_compatible(m1, m2, "strip_prefix_overlap")
    f = m1.monoid.strip_prefix_overlap
    return _build(m1.monoid, ((k, f(v1, v2)) for k, v1, v2 in _zip_union(m1, m2)))


def strip_suffix_overlap(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> MonoidMap[K, V]:
    """``m2`` without its suffix that overlaps a prefix of ``m1``."""
    m1.monoid.require(*_OVERLAP, operation="strip_suffix_overlap")
    _check_compatible(m1, m2, "strip_suffix_overlap")
    f = m1.monoid.strip_suffix_overlap
    return _build(m1.monoid, ((k, f(v1, v2)) for k, v1, v2 in _zip_union(m1, m2)))


def strip_overlap(
    m1: MonoidMap[K, V], m2: MonoidMap[K, V]
) -> tuple[MonoidMap[K, V], MonoidMap[K, V], MonoidMap[K, V]]:
    """Split into ``(r1, o, r2)`` with ``m1 = r1 ⋆ o`` and ``m2 = o ⋆ r2``."""
    monoid = m1.monoid
    monoid.require(*_OVERLAP, operation="strip_overlap")
    _check_compatible(m1, m2, "strip_overlap")
    rest1: list[tuple[K, V]] = []
    overlaps: list[tuple[K, V]] = []
    rest2: list[tuple[K, V]] = []
    for k, v1, v2 in _zip_union(m1, m2):
        r1, o, r2 = monoid.strip_overlap(v1, v2)
        rest1.append((k, r1))
        overlaps.append((k, o))
        rest2.append((k, r2))
    return _build(monoid, rest1), _build(monoid, overlaps), _build(monoid, rest2)
