"""Pointwise combinators over pairs of maps.

Every binary operation here lifts a per-value operation ``f`` to maps so
that, for every key (including keys stored in neither map):

    get(f(m1, m2), k) = f(get(m1, k), get(m2, k))

Only keys stored in at least one input are ever visited; the rest are
covered by ``f(identity, identity) = identity``. Identity results are
dropped, so every result is minimally encoded.

union vs. append: ``append`` always uses ``combine``. ``union`` uses the
value type's ``join`` when it declares one (LCM capability) and falls back
to ``combine`` otherwise. The two coincide for idempotent types such as
sets; for natural numbers ``union`` is a pointwise max and ``append`` a
pointwise sum.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from .core import (
    MonoidMap,
    _build,
    _check_compatible,
    _zip_intersection,
    _zip_union,
    empty,
    map_values,
    null,
)
from .monoid import Capability
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")
E = TypeVar("E")


# ---------------------------------------------------------------------------
# Association
# ---------------------------------------------------------------------------


def append(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> MonoidMap[K, V]:
    """Combine values key by key: ``combine(get(m1, k), get(m2, k))``."""
    _check_compatible(m1, m2, "append")
    if null(m2):
        return m1
    if null(m1):
        return m2
    combine = m1.monoid.combine
    return _build(m1.monoid, ((k, combine(v1, v2)) for k, v1, v2 in _zip_union(m1, m2)))


# ---------------------------------------------------------------------------
# Union
# ---------------------------------------------------------------------------


def union(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> MonoidMap[K, V]:
    """Join values key by key (``join`` if declared, else ``combine``)."""
    monoid = m1.monoid
    if monoid.join is not None:
        return union_with(monoid.join, m1, m2)
    return union_with(monoid.combine, m1, m2)


def union_with(
    f: Callable[[V, V], V], m1: MonoidMap[K, V], m2: MonoidMap[K, V]
) -> MonoidMap[K, V]:
    """Apply ``f`` to the values of every key stored in either map.

    ``f(identity, identity)`` must be the identity.
    """
    _check_compatible(m1, m2, "union_with")
    return _build(m1.monoid, ((k, f(v1, v2)) for k, v1, v2 in _zip_union(m1, m2)))


def union_with_a(
    f: Callable[[V, V], Result[V, E]], m1: MonoidMap[K, V], m2: MonoidMap[K, V]
) -> Result[MonoidMap[K, V], E]:
    """Like :func:`union_with`, but ``f`` may fail.

    Keys are visited in ascending order; the first ``Err`` is returned as is
    and no map is built.
    """
    _check_compatible(m1, m2, "union_with_a")
    entries: list[tuple[K, V]] = []
    for k, v1, v2 in _zip_union(m1, m2):
        match f(v1, v2):
            case Ok(value=v):
                entries.append((k, v))
            case Err() as err:
                logger.debug("union_with_a stopped at key %r: %r", k, err.error)
                return err
    return Ok(_build(m1.monoid, entries))


# ---------------------------------------------------------------------------
# Intersection
# ---------------------------------------------------------------------------


def intersection(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> MonoidMap[K, V]:
    """Greatest common value (``meet``) key by key."""
    m1.monoid.require(Capability.GCD, operation="intersection")
    assert m1.monoid.meet is not None
    return intersection_with(m1.monoid.meet, m1, m2)


def intersection_with(
    f: Callable[[V, V], V], m1: MonoidMap[K, V], m2: MonoidMap[K, V]
) -> MonoidMap[K, V]:
    """Apply ``f`` to the values of every key stored in both maps.

    Keys stored in only one map are absent from the result.
    """
    _check_compatible(m1, m2, "intersection_with")
    return _build(
        m1.monoid, ((k, f(v1, v2)) for k, v1, v2 in _zip_intersection(m1, m2))
    )


def intersection_with_a(
    f: Callable[[V, V], Result[V, E]], m1: MonoidMap[K, V], m2: MonoidMap[K, V]
) -> Result[MonoidMap[K, V], E]:
    """Like :func:`intersection_with`, but ``f`` may fail.

    Keys are visited in ascending order; the first ``Err`` is returned as is
    and no map is built.
    """
    _check_compatible(m1, m2, "intersection_with_a")
    entries: list[tuple[K, V]] = []
    for k, v1, v2 in _zip_intersection(m1, m2):
        match f(v1, v2):
            case Ok(value=v):
                entries.append((k, v))
            case Err() as err:
                logger.debug("intersection_with_a stopped at key %r: %r", k, err.error)
                return err
    return Ok(_build(m1.monoid, entries))


# ---------------------------------------------------------------------------
# Subtraction
# ---------------------------------------------------------------------------


def minus(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> MonoidMap[K, V]:
    """Exact subtraction: ``combine(get(m1, k), invert(get(m2, k)))``.

    Needs a group; raises CapabilityError otherwise.
    """
    monoid = m1.monoid
    monoid.require(Capability.GROUP, operation="minus")
    _check_compatible(m1, m2, "minus")
    assert monoid.invert is not None
    if null(m2):
        return m1
    combine, inv = monoid.combine, monoid.invert
    return _build(monoid, ((k, combine(v1, inv(v2))) for k, v1, v2 in _zip_union(m1, m2)))


def minus_maybe(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> MonoidMap[K, V] | None:
    """Reductive subtraction: the map ``r`` with ``append(r, m2) == m1``.

    Returns None if ``get(m2, k)`` cannot be removed from the right of
    ``get(m1, k)`` for some key.
    """
    monoid = m1.monoid
    monoid.require(Capability.RIGHT_REDUCTIVE, operation="minus_maybe")
    _check_compatible(m1, m2, "minus_maybe")
    assert monoid.strip_suffix is not None
    entries: list[tuple[K, V]] = []
    for k, v1, v2 in _zip_union(m1, m2):
        r = monoid.strip_suffix(v2, v1)
        if r is None:
            logger.debug("minus_maybe: %r cannot be removed from %r at key %r", v2, v1, k)
            return None
        entries.append((k, r))
    return _build(monoid, entries)


def monus(m1: MonoidMap[K, V], m2: MonoidMap[K, V]) -> MonoidMap[K, V]:
    """Truncated subtraction key by key. Never fails."""
    monoid = m1.monoid
    monoid.require(Capability.MONUS, operation="monus")
    _check_compatible(m1, m2, "monus")
    assert monoid.monus is not None
    if null(m2):
        return m1
    f = monoid.monus
    return _build(monoid, ((k, f(v1, v2)) for k, v1, v2 in _zip_union(m1, m2)))


# ---------------------------------------------------------------------------
# Inversion and exponentiation
# ---------------------------------------------------------------------------


def invert(m: MonoidMap[K, V]) -> MonoidMap[K, V]:
    m.monoid.require(Capability.GROUP, operation="invert")
    assert m.monoid.invert is not None
    return map_values(m, m.monoid.invert)


def power(m: MonoidMap[K, V], n: int) -> MonoidMap[K, V]:
    """Combine every value with itself ``n`` times.

    ``power(m, 0)`` is empty; negative ``n`` needs a group.
    """
    monoid = m.monoid
    if n < 0:
        monoid.require(Capability.GROUP, operation="power")
    if n == 0:
        return empty(monoid)
    if n == 1:
        return m
    return map_values(m, lambda v: monoid.power(v, n))
