"""Basis library of standard monoidal value types.

These are the value types most maps are built over. Each descriptor
declares every capability its carrier lawfully supports:

- Sum: integers under addition (a group)
- NaturalSum: non-negative integers under addition (monus, gcd = min, lcm = max)
- NaturalProduct: positive integers under multiplication (gcd, lcm, divisibility)
- String, Tuple: sequences under concatenation (prefix/suffix/overlap)
- Set: frozensets under union (idempotent; gcd = intersection)
- Max: non-negative integers under max (a join semilattice)
- Any: booleans under disjunction

Descriptors are cached, so every call returns the same object.

Usage:
    from monoidmap.basis import natural_sum
    m = from_list(natural_sum(), [("a", 3), ("b", 0)])
"""

from __future__ import annotations

import math
import operator
from collections.abc import Callable, Sequence
from functools import cache
from typing import TypeVar

from .monoid import Monoid

Seq = TypeVar("Seq", bound=Sequence)  # type: ignore[type-arg]


# =====================================================================
# Sequence helpers (shared by String and Tuple)
# =====================================================================


def _seq_strip_prefix(a: Seq, b: Seq) -> Seq | None:
    n = len(a)
    if b[:n] == a:
        return b[n:]  # type: ignore[return-value]
    return None


def _seq_strip_suffix(a: Seq, b: Seq) -> Seq | None:
    n = len(b) - len(a)
    if n >= 0 and b[n:] == a:
        return b[:n]  # type: ignore[return-value]
    return None


def _seq_common_prefix(a: Seq, b: Seq) -> Seq:
    n = 0
    for x, y in zip(a, b):
        if x != y:
            break
        n += 1
    return a[:n]  # type: ignore[return-value]


def _seq_common_suffix(a: Seq, b: Seq) -> Seq:
    n = 0
    for x, y in zip(reversed(a), reversed(b)):
        if x != y:
            break
        n += 1
    return a[len(a) - n :]  # type: ignore[return-value]


def _seq_overlap(a: Seq, b: Seq) -> Seq:
    # Longest suffix of a that is also a prefix of b.
    for n in range(min(len(a), len(b)), 0, -1):
        if a[len(a) - n :] == b[:n]:
            return b[:n]  # type: ignore[return-value]
    return b[:0]  # type: ignore[return-value]


def _sequence_monoid(name: str, identity: Sequence) -> Monoid:  # type: ignore[type-arg]
    return Monoid(
        name=name,
        identity=identity,
        combine=operator.add,
        strip_prefix=_seq_strip_prefix,
        strip_suffix=_seq_strip_suffix,
        common_prefix=_seq_common_prefix,
        common_suffix=_seq_common_suffix,
        overlap=_seq_overlap,
    )


# =====================================================================
# Numbers
# =====================================================================


@cache
def sum_monoid() -> Monoid[int]:
    """Integers under addition. Every difference exists, so reduction never fails."""
    return Monoid(
        name="Sum",
        identity=0,
        combine=operator.add,
        commutative=True,
        invert=operator.neg,
        strip_prefix=lambda a, b: b - a,
        strip_suffix=lambda a, b: b - a,
    )


def _nat_strip(a: int, b: int) -> int | None:
    return b - a if b >= a else None


@cache
def natural_sum() -> Monoid[int]:
    """Non-negative integers under addition, with truncated subtraction."""
    return Monoid(
        name="NaturalSum",
        identity=0,
        combine=operator.add,
        commutative=True,
        strip_prefix=_nat_strip,
        strip_suffix=_nat_strip,
        common_prefix=min,
        common_suffix=min,
        overlap=min,
        monus=lambda a, b: max(a - b, 0),
        meet=min,
        join=max,
        leq=operator.le,
    )


def _divide(a: int, b: int) -> int | None:
    return b // a if b % a == 0 else None


@cache
def natural_product() -> Monoid[int]:
    """Positive integers under multiplication.

    Reduction is exact division, gcd/lcm are the meet and join, and the
    order is divisibility. Zero is not a valid value.
    """
    return Monoid(
        name="NaturalProduct",
        identity=1,
        combine=operator.mul,
        commutative=True,
        strip_prefix=_divide,
        strip_suffix=_divide,
        common_prefix=math.gcd,
        common_suffix=math.gcd,
        overlap=math.gcd,
        monus=lambda a, b: a // math.gcd(a, b),
        meet=math.gcd,
        join=math.lcm,
        leq=lambda a, b: b % a == 0,
    )


@cache
def max_monoid() -> Monoid[int]:
    """Non-negative integers under max, with 0 as identity."""
    return Monoid(
        name="Max",
        identity=0,
        combine=max,
        commutative=True,
        idempotent=True,
        meet=min,
        join=max,
        leq=operator.le,
    )


@cache
def any_monoid() -> Monoid[bool]:
    """Booleans under ``or``."""
    return Monoid(
        name="Any",
        identity=False,
        combine=operator.or_,
        commutative=True,
        idempotent=True,
        monus=lambda a, b: a and not b,
        meet=operator.and_,
        join=operator.or_,
        leq=operator.le,
    )


# =====================================================================
# Sequences
# =====================================================================


@cache
def string_monoid() -> Monoid[str]:
    """Strings under concatenation."""
    return _sequence_monoid("String", "")


@cache
def tuple_monoid() -> Monoid[tuple]:  # type: ignore[type-arg]
    """Tuples under concatenation."""
    return _sequence_monoid("Tuple", ())


# =====================================================================
# Sets
# =====================================================================


def _set_strip(a: frozenset, b: frozenset) -> frozenset | None:  # type: ignore[type-arg]
    return b - a if a <= b else None


@cache
def set_monoid() -> Monoid[frozenset]:  # type: ignore[type-arg]
    """Frozensets under union.

    A set ``a`` is a prefix of ``b`` when it is a subset; the residual is
    the difference ``b - a``.
    """
    return Monoid(
        name="Set",
        identity=frozenset(),
        combine=operator.or_,
        null=lambda s: len(s) == 0,
        commutative=True,
        idempotent=True,
        strip_prefix=_set_strip,
        strip_suffix=_set_strip,
        common_prefix=operator.and_,
        common_suffix=operator.and_,
        overlap=operator.and_,
        monus=operator.sub,
        meet=operator.and_,
        join=operator.or_,
        leq=operator.le,
    )


ALL_BASIS_MONOIDS: list[Callable[[], Monoid]] = [  # type: ignore[type-arg]
    sum_monoid,
    natural_sum,
    natural_product,
    max_monoid,
    any_monoid,
    string_monoid,
    tuple_monoid,
    set_monoid,
]
