"""MonoidMap: a total function from keys to monoidal values.

A ``MonoidMap`` associates *every* key with a value. Keys that were never
set map to the identity of the value type, and only keys with a
non-identity value are stored: the map is a minimal difference set.

    get(k, empty) = identity                    for all k
    k ∈ entries(m)  ⇒  not is_identity(get(k, m))

Every operation in this module and the modules built on it re-establishes
that invariant. Maps are immutable; operations return new maps that share
unchanged structure with their inputs.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from . import tree
from .check import validate
from .config import get_settings
from .monoid import Monoid

K = TypeVar("K")
V = TypeVar("V")
W = TypeVar("W")


@dataclass(frozen=True, eq=False)
class MonoidMap(Generic[K, V]):
    """A minimal encoding of a total function ``K → V``.

    Build maps with :func:`empty`, :func:`singleton`, :func:`from_list`,
    :func:`from_list_with` or :func:`from_map` rather than directly.

    Python protocols follow the non-null entries: ``len(m)`` counts them,
    iteration yields their keys in ascending order, ``k in m`` tests for a
    non-identity value, and ``m[k]`` is :func:`get`.
    """

    monoid: Monoid[V]
    root: tree.Tree = field(default=None, repr=False)

    def __len__(self) -> int:
        return tree.size(self.root)

    def __iter__(self) -> Iterator[K]:
        return (k for k, _ in tree.items(self.root))

    def __contains__(self, key: object) -> bool:
        return tree.member(self.root, key)

    def __getitem__(self, key: K) -> V:
        return get(self, key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MonoidMap):
            return NotImplemented
        if self.root is other.root:
            return self.monoid.name == other.monoid.name
        return (
            self.monoid.name == other.monoid.name
            and len(self) == len(other)
            and all(
                k1 == k2 and v1 == v2
                for (k1, v1), (k2, v2) in zip(
                    tree.items(self.root), tree.items(other.root)
                )
            )
        )

    def __hash__(self) -> int:
        return hash((self.monoid.name, tuple(tree.items(self.root))))

    def __repr__(self) -> str:
        entries = ", ".join(f"{k!r}: {v!r}" for k, v in tree.items(self.root))
        return f"MonoidMap({self.monoid.name}, {{{entries}}})"


# ---------------------------------------------------------------------------
# Internal constructors
# ---------------------------------------------------------------------------


def _make(monoid: Monoid[V], root: tree.Tree) -> MonoidMap[Any, V]:
    m: MonoidMap[Any, V] = MonoidMap(monoid, root)
    if get_settings().check_invariants:
        validate(m)
    return m


def _with_root(m: MonoidMap[K, V], root: tree.Tree) -> MonoidMap[K, V]:
    if root is m.root:
        return m
    return _make(m.monoid, root)


def _build(monoid: Monoid[V], entries: Iterable[tuple[K, V]]) -> MonoidMap[K, V]:
    """Build from strictly ascending entries, dropping identity values."""
    is_identity = monoid.is_identity
    kept = [(k, v) for k, v in entries if not is_identity(v)]
    return _make(monoid, tree.from_sorted(kept))


def _check_compatible(m1: MonoidMap[Any, Any], m2: MonoidMap[Any, Any], operation: str) -> None:
    if m1.monoid.name != m2.monoid.name:
        raise TypeError(
            f"'{operation}' needs maps over the same monoid, "
            f"got '{m1.monoid.name}' and '{m2.monoid.name}'"
        )


def _zip_union(
    m1: MonoidMap[K, V], m2: MonoidMap[K, W]
) -> Iterator[tuple[K, V, W]]:
    """Every key non-null in either map, with both values, in key order."""
    identity1 = m1.monoid.identity
    identity2 = m2.monoid.identity
    it1 = tree.items(m1.root)
    it2 = tree.items(m2.root)
    e1 = next(it1, None)
    e2 = next(it2, None)
    while e1 is not None or e2 is not None:
        if e2 is None or (e1 is not None and e1[0] < e2[0]):
            assert e1 is not None
            yield e1[0], e1[1], identity2
            e1 = next(it1, None)
        elif e1 is None or e2[0] < e1[0]:
            yield e2[0], identity1, e2[1]
            e2 = next(it2, None)
        else:
            yield e1[0], e1[1], e2[1]
            e1 = next(it1, None)
            e2 = next(it2, None)


def _zip_intersection(
    m1: MonoidMap[K, V], m2: MonoidMap[K, W]
) -> Iterator[tuple[K, V, W]]:
    """Every key non-null in both maps, with both values, in key order."""
    if len(m2) < len(m1):
        for k, v2 in tree.items(m2.root):
            v1 = tree.lookup(m1.root, k, tree.MISSING)
            if v1 is not tree.MISSING:
                yield k, v1, v2
    else:
        for k, v1 in tree.items(m1.root):
            v2 = tree.lookup(m2.root, k, tree.MISSING)
            if v2 is not tree.MISSING:
                yield k, v1, v2


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def empty(monoid: Monoid[V]) -> MonoidMap[Any, V]:
    return _make(monoid, None)


def singleton(monoid: Monoid[V], key: K, value: V) -> MonoidMap[K, V]:
    return set(empty(monoid), key, value)


def from_list(monoid: Monoid[V], pairs: Iterable[tuple[K, V]]) -> MonoidMap[K, V]:
    """Build a map from key-value pairs; later pairs overwrite earlier ones.

    Identity values are dropped (and erase any earlier value for the key).
    """
    root: tree.Tree = None
    is_identity = monoid.is_identity
    for k, v in pairs:
        if is_identity(v):
            root = tree.delete(root, k)
        else:
            root = tree.insert(root, k, v)
    return _make(monoid, root)


def from_list_with(
    monoid: Monoid[V], f: Callable[[V, V], V], pairs: Iterable[tuple[K, V]]
) -> MonoidMap[K, V]:
    """Build a map from key-value pairs, folding duplicates with ``f``.

    The first pair for a key stores its value as is; every later pair
    ``(k, v)`` replaces the value ``old`` seen so far with ``f(old, v)``,
    strictly from left to right. Identity results are dropped at the end.
    """
    # Intermediate values may be the identity; they are stripped once folded.
    root: tree.Tree = None
    for k, v in pairs:
        old = tree.lookup(root, k, tree.MISSING)
        root = tree.insert(root, k, v if old is tree.MISSING else f(old, v))
    is_identity = monoid.is_identity
    return _make(monoid, tree.filter_tree(root, lambda _k, v: not is_identity(v)))


def from_map(monoid: Monoid[V], mapping: Mapping[K, V]) -> MonoidMap[K, V]:
    """Build a map from a dict, dropping entries whose value is the identity."""
    is_identity = monoid.is_identity
    kept = sorted(
        ((k, v) for k, v in mapping.items() if not is_identity(v)),
        key=lambda e: e[0],
    )
    return _make(monoid, tree.from_sorted(kept))


# ---------------------------------------------------------------------------
# Deconstruction
# ---------------------------------------------------------------------------


def to_list(m: MonoidMap[K, V]) -> list[tuple[K, V]]:
    """Non-null entries in ascending key order."""
    return list(tree.items(m.root))


def to_map(m: MonoidMap[K, V]) -> dict[K, V]:
    """Non-null entries as a plain dict (absent key = identity)."""
    return dict(tree.items(m.root))


def keys(m: MonoidMap[K, V]) -> list[K]:
    return [k for k, _ in tree.items(m.root)]


def values(m: MonoidMap[K, V]) -> list[V]:
    return [v for _, v in tree.items(m.root)]


def fold_with_key(
    m: MonoidMap[K, V], f: Callable[[W, K, V], W], initial: W
) -> W:
    """Strict left fold over non-null entries in ascending key order."""
    acc = initial
    for k, v in tree.items(m.root):
        acc = f(acc, k, v)
    return acc


def lookup_min(m: MonoidMap[K, V]) -> tuple[K, V] | None:
    return tree.min_entry(m.root)


def lookup_max(m: MonoidMap[K, V]) -> tuple[K, V] | None:
    return tree.max_entry(m.root)


# ---------------------------------------------------------------------------
# Lookup and modification
# ---------------------------------------------------------------------------


def get(m: MonoidMap[K, V], key: K) -> V:
    """The value at ``key``; the identity when no value is stored."""
    return tree.lookup(m.root, key, m.monoid.identity)


def set(m: MonoidMap[K, V], key: K, value: V) -> MonoidMap[K, V]:
    """Associate ``key`` with ``value``; an identity value removes the entry."""
    if m.monoid.is_identity(value):
        return _with_root(m, tree.delete(m.root, key))
    return _make(m.monoid, tree.insert(m.root, key, value))


def adjust(m: MonoidMap[K, V], key: K, f: Callable[[V], V]) -> MonoidMap[K, V]:
    return set(m, key, f(get(m, key)))


def nullify(m: MonoidMap[K, V], key: K) -> MonoidMap[K, V]:
    return _with_root(m, tree.delete(m.root, key))


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------


def null(m: MonoidMap[K, V]) -> bool:
    """True when every key maps to the identity."""
    return m.root is None


def non_null(m: MonoidMap[K, V]) -> bool:
    return m.root is not None


def null_key(m: MonoidMap[K, V], key: K) -> bool:
    return not tree.member(m.root, key)


def non_null_key(m: MonoidMap[K, V], key: K) -> bool:
    return tree.member(m.root, key)


def non_null_keys(m: MonoidMap[K, V]) -> frozenset[K]:
    return frozenset(k for k, _ in tree.items(m.root))


def non_null_count(m: MonoidMap[K, V]) -> int:
    return tree.size(m.root)


# ---------------------------------------------------------------------------
# Slicing (by ascending key position)
# ---------------------------------------------------------------------------


def take(m: MonoidMap[K, V], n: int) -> MonoidMap[K, V]:
    return _with_root(m, tree.take(m.root, n))


def drop(m: MonoidMap[K, V], n: int) -> MonoidMap[K, V]:
    return _with_root(m, tree.drop(m.root, n))


def split_at(m: MonoidMap[K, V], n: int) -> tuple[MonoidMap[K, V], MonoidMap[K, V]]:
    return take(m, n), drop(m, n)


# ---------------------------------------------------------------------------
# Filtering and partitioning
# ---------------------------------------------------------------------------


def filter_with_key(
    m: MonoidMap[K, V], predicate: Callable[[K, V], bool]
) -> MonoidMap[K, V]:
    return _with_root(m, tree.filter_tree(m.root, predicate))


def filter_values(m: MonoidMap[K, V], predicate: Callable[[V], bool]) -> MonoidMap[K, V]:
    return filter_with_key(m, lambda _k, v: predicate(v))


def filter_keys(m: MonoidMap[K, V], predicate: Callable[[K], bool]) -> MonoidMap[K, V]:
    return filter_with_key(m, lambda k, _v: predicate(k))


def partition_with_key(
    m: MonoidMap[K, V], predicate: Callable[[K, V], bool]
) -> tuple[MonoidMap[K, V], MonoidMap[K, V]]:
    """Split into (entries satisfying ``predicate``, the rest)."""
    return (
        filter_with_key(m, predicate),
        filter_with_key(m, lambda k, v: not predicate(k, v)),
    )


def partition_values(
    m: MonoidMap[K, V], predicate: Callable[[V], bool]
) -> tuple[MonoidMap[K, V], MonoidMap[K, V]]:
    return partition_with_key(m, lambda _k, v: predicate(v))


def partition_keys(
    m: MonoidMap[K, V], predicate: Callable[[K], bool]
) -> tuple[MonoidMap[K, V], MonoidMap[K, V]]:
    return partition_with_key(m, lambda k, _v: predicate(k))


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------


def map_values(
    m: MonoidMap[K, V], f: Callable[[V], W], monoid: Monoid[W] | None = None
) -> MonoidMap[K, W]:
    """Apply ``f`` to every non-null value.

    ``monoid`` describes the result values and defaults to the source
    monoid. Results equal to its identity are dropped. For the mapped map to
    agree with ``f`` at every key, ``f`` should send identity to identity.
    """
    target: Monoid[Any] = m.monoid if monoid is None else monoid
    return _build(target, ((k, f(v)) for k, v in tree.items(m.root)))


def map_keys_with(
    m: MonoidMap[K, V], combine: Callable[[V, V], V], f: Callable[[K], Any]
) -> MonoidMap[Any, V]:
    """Re-key every entry with ``f``, folding collisions with ``combine``.

    Colliding values are combined in ascending order of their source keys.
    """
    return from_list_with(m.monoid, combine, ((f(k), v) for k, v in tree.items(m.root)))


def map_keys(m: MonoidMap[K, V], f: Callable[[K], Any]) -> MonoidMap[Any, V]:
    return map_keys_with(m, m.monoid.combine, f)
