"""Capability descriptors for monoidal value types.

A :class:`Monoid` bundles the operations a value type supplies. Only
``identity`` and ``combine`` are mandatory; every other operation is an
optional *capability* that unlocks a family of map operations:

    capability        field(s)                  unlocks
    ----------------  ------------------------  ------------------------------
    GROUP             invert                    minus, invert, power (n < 0)
    LEFT_REDUCTIVE    strip_prefix              is_prefix_of, strip_prefix
    RIGHT_REDUCTIVE   strip_suffix              is_suffix_of, strip_suffix,
                                                minus_maybe
    LEFT_GCD          common_prefix             common_prefix
    RIGHT_GCD         common_suffix             common_suffix
    OVERLAPPING_GCD   overlap                   overlap, strip_*_overlap
    MONUS             monus                     monus
    GCD               meet                      intersection, disjoint
    LCM               join                      union
    PARTIAL_ORDER     leq                       is_submap_of

Laws (checked by :func:`monoidmap.check.check_monoid`, not enforced here):

    combine(identity, a) = a = combine(a, identity)
    combine(a, combine(b, c)) = combine(combine(a, b), c)
    is_identity(a) ⇔ a = identity
    combine(a, invert(a)) = identity
    strip_prefix(a, b) = c  ⇒  combine(a, c) = b
    strip_suffix(a, b) = c  ⇒  combine(c, a) = b
    overlap(a, b) is a suffix of a and a prefix of b
    leq(identity, a)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from .errors import CapabilityError, InvariantError

logger = logging.getLogger(__name__)

V = TypeVar("V")


class Capability(Enum):
    GROUP = "group"
    LEFT_REDUCTIVE = "left_reductive"
    RIGHT_REDUCTIVE = "right_reductive"
    LEFT_GCD = "left_gcd"
    RIGHT_GCD = "right_gcd"
    OVERLAPPING_GCD = "overlapping_gcd"
    MONUS = "monus"
    GCD = "gcd"
    LCM = "lcm"
    PARTIAL_ORDER = "partial_order"


# Capability → the descriptor field that provides it.
_CAPABILITY_FIELDS: dict[Capability, str] = {
    Capability.GROUP: "invert",
    Capability.LEFT_REDUCTIVE: "strip_prefix",
    Capability.RIGHT_REDUCTIVE: "strip_suffix",
    Capability.LEFT_GCD: "common_prefix",
    Capability.RIGHT_GCD: "common_suffix",
    Capability.OVERLAPPING_GCD: "overlap",
    Capability.MONUS: "monus",
    Capability.GCD: "meet",
    Capability.LCM: "join",
    Capability.PARTIAL_ORDER: "leq",
}


@dataclass(frozen=True, eq=False)
class Monoid(Generic[V]):
    """Operations and capabilities of a monoidal value type.

    Descriptors compare by identity. Maps built over two descriptors are
    considered compatible when the descriptors share a ``name``.

    Example:
        Monoid(
            name="Sum",
            identity=0,
            combine=operator.add,
            commutative=True,
            invert=operator.neg,
        )
    """

    name: str
    identity: V
    combine: Callable[[V, V], V]
    null: Callable[[V], bool] | None = None
    commutative: bool = False
    idempotent: bool = False
    invert: Callable[[V], V] | None = None
    strip_prefix: Callable[[V, V], V | None] | None = None
    strip_suffix: Callable[[V, V], V | None] | None = None
    common_prefix: Callable[[V, V], V] | None = None
    common_suffix: Callable[[V, V], V] | None = None
    overlap: Callable[[V, V], V] | None = None
    monus: Callable[[V, V], V] | None = None
    meet: Callable[[V, V], V] | None = None
    join: Callable[[V, V], V] | None = None
    leq: Callable[[V, V], bool] | None = None

    def __post_init__(self) -> None:
        if not self.is_identity(self.identity):
            raise ValueError(
                f"Monoid '{self.name}': is_identity(identity) must hold "
                f"for identity {self.identity!r}"
            )

    def __repr__(self) -> str:
        return f"Monoid({self.name!r})"

    def is_identity(self, value: V) -> bool:
        if self.null is not None:
            return self.null(value)
        return bool(value == self.identity)

    # -----------------------------------------------------------------
    # Capabilities
    # -----------------------------------------------------------------

    @property
    def capabilities(self) -> frozenset[Capability]:
        return frozenset(
            cap
            for cap, attr in _CAPABILITY_FIELDS.items()
            if getattr(self, attr) is not None
        )

    def has(self, capability: Capability) -> bool:
        return getattr(self, _CAPABILITY_FIELDS[capability]) is not None

    def require(self, *capabilities: Capability, operation: str) -> None:
        """Raise CapabilityError unless every capability is declared."""
        missing = [c.value for c in capabilities if not self.has(c)]
        if missing:
            logger.debug(
                "Rejected %s on monoid %r: missing %s", operation, self.name, missing
            )
            raise CapabilityError(operation, self.name, missing)

    # -----------------------------------------------------------------
    # Derived value-level operations
    # -----------------------------------------------------------------

    def reduce(self, values: Iterable[V]) -> V:
        """Combine values left to right, starting from the identity."""
        acc = self.identity
        for v in values:
            acc = self.combine(acc, v)
        return acc

    def power(self, value: V, n: int) -> V:
        """Combine ``value`` with itself ``n`` times.

        Negative exponents need an inverse: power(v, -n) = power(invert(v), n).
        """
        if n < 0:
            self.require(Capability.GROUP, operation="power")
            assert self.invert is not None
            value = self.invert(value)
            n = -n
        result = self.identity
        base = value
        while n:
            if n & 1:
                result = self.combine(result, base)
            n >>= 1
            if n:
                base = self.combine(base, base)
        return result

    def is_prefix_of(self, a: V, b: V) -> bool:
        self.require(Capability.LEFT_REDUCTIVE, operation="is_prefix_of")
        assert self.strip_prefix is not None
        return self.strip_prefix(a, b) is not None

    def is_suffix_of(self, a: V, b: V) -> bool:
        self.require(Capability.RIGHT_REDUCTIVE, operation="is_suffix_of")
        assert self.strip_suffix is not None
        return self.strip_suffix(a, b) is not None

    def strip_overlap(self, a: V, b: V) -> tuple[V, V, V]:
        """Split ``a`` and ``b`` around their overlap.

        Returns ``(a', o, b')`` with ``a = a' ⋆ o`` and ``b = o ⋆ b'``.
        """
        self.require(
            Capability.OVERLAPPING_GCD,
            Capability.LEFT_REDUCTIVE,
            Capability.RIGHT_REDUCTIVE,
            operation="strip_overlap",
        )
        assert self.overlap is not None
        assert self.strip_prefix is not None and self.strip_suffix is not None
        o = self.overlap(a, b)
        a_rest = self.strip_suffix(o, a)
        b_rest = self.strip_prefix(o, b)
        if a_rest is None or b_rest is None:
            raise InvariantError(
                f"Monoid '{self.name}': overlap {o!r} of {a!r} and {b!r} "
                "is not a suffix of the first and a prefix of the second"
            )
        return a_rest, o, b_rest

    def strip_prefix_overlap(self, a: V, b: V) -> V:
        """``b`` without its prefix that overlaps a suffix of ``a``."""
        return self.strip_overlap(a, b)[2]

    def strip_suffix_overlap(self, a: V, b: V) -> V:
        """``b`` without its suffix that overlaps a prefix of ``a``."""
        return self.strip_overlap(b, a)[0]
