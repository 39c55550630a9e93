"""Maps as monoidal values.

A ``MonoidMap`` is itself a monoid: ``append`` is associative, the empty
map is its identity, and an empty map is exactly a null map. Every
capability of the value type lifts pointwise to the map type, so a map of
maps supports the same operations as a map of plain values.

    outer = from_list(monoid_map_monoid(natural_sum()), [...])

An inner map that becomes empty is the identity of the outer map and is
dropped like any other identity value.
"""

from __future__ import annotations

from functools import cache
from typing import Any, TypeVar

from . import combinators, comparison, reduction
from .core import MonoidMap, empty, null
from .monoid import Capability, Monoid

V = TypeVar("V")


@cache
def monoid_map_monoid(value: Monoid[V]) -> Monoid[MonoidMap[Any, V]]:
    """Describe maps over ``value`` as a monoid, lifting its capabilities."""
    has = value.has
    return Monoid(
        name=f"MonoidMap[{value.name}]",
        identity=empty(value),
        combine=combinators.append,
        null=null,
        commutative=value.commutative,
        idempotent=value.idempotent,
        invert=combinators.invert if has(Capability.GROUP) else None,
        strip_prefix=reduction.strip_prefix if has(Capability.LEFT_REDUCTIVE) else None,
        strip_suffix=reduction.strip_suffix if has(Capability.RIGHT_REDUCTIVE) else None,
        common_prefix=reduction.common_prefix if has(Capability.LEFT_GCD) else None,
        common_suffix=reduction.common_suffix if has(Capability.RIGHT_GCD) else None,
        overlap=reduction.overlap if has(Capability.OVERLAPPING_GCD) else None,
        monus=combinators.monus if has(Capability.MONUS) else None,
        meet=combinators.intersection if has(Capability.GCD) else None,
        join=combinators.union if has(Capability.LCM) else None,
        leq=comparison.is_submap_of if has(Capability.PARTIAL_ORDER) else None,
    )
