"""Persistent weight-balanced binary search trees.

The storage layer beneath MonoidMap. Trees are immutable: every update
returns a new root that shares all untouched subtrees with the old one, so
a point update costs O(log n) new nodes.

Balance follows Adams' weight-balanced trees with the parameters used by
Haskell's Data.Map (delta = 3, ratio = 2): for every node,

    size(left) + size(right) <= 1
    or  size(left) <= DELTA * size(right) and size(right) <= DELTA * size(left)

The empty tree is ``None``. Keys only need ``<``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

DELTA = 3
RATIO = 2


@dataclass(frozen=True)
class Node:
    key: Any
    value: Any
    left: Node | None
    right: Node | None
    size: int


Tree = Node | None


# ---------------------------------------------------------------------------
# Construction and balancing
# ---------------------------------------------------------------------------


def size(t: Tree) -> int:
    return 0 if t is None else t.size


def node(key: Any, value: Any, left: Tree, right: Tree) -> Node:
    return Node(key, value, left, right, size(left) + size(right) + 1)


def _single_left(k: Any, v: Any, l: Tree, r: Node) -> Node:
    return node(r.key, r.value, node(k, v, l, r.left), r.right)


def _double_left(k: Any, v: Any, l: Tree, r: Node) -> Node:
    rl = r.left
    assert rl is not None
    return node(
        rl.key,
        rl.value,
        node(k, v, l, rl.left),
        node(r.key, r.value, rl.right, r.right),
    )


def _single_right(k: Any, v: Any, l: Node, r: Tree) -> Node:
    return node(l.key, l.value, l.left, node(k, v, l.right, r))


def _double_right(k: Any, v: Any, l: Node, r: Tree) -> Node:
    lr = l.right
    assert lr is not None
    return node(
        lr.key,
        lr.value,
        node(l.key, l.value, l.left, lr.left),
        node(k, v, lr.right, r),
    )


def balance(key: Any, value: Any, left: Tree, right: Tree) -> Node:
    """Build a node, rotating once if the subtrees are out of balance.

    Valid when the subtrees were balanced and their sizes drifted by at
    most one insertion or deletion.
    """
    sl, sr = size(left), size(right)
    if sl + sr <= 1:
        return node(key, value, left, right)
    if sr > DELTA * sl:
        assert right is not None
        if size(right.left) < RATIO * size(right.right):
            return _single_left(key, value, left, right)
        return _double_left(key, value, left, right)
    if sl > DELTA * sr:
        assert left is not None
        if size(left.right) < RATIO * size(left.left):
            return _single_right(key, value, left, right)
        return _double_right(key, value, left, right)
    return node(key, value, left, right)


def from_sorted(entries: Sequence[tuple[Any, Any]]) -> Tree:
    """Build a perfectly balanced tree from strictly ascending entries."""

    def build(lo: int, hi: int) -> Tree:
        if lo >= hi:
            return None
        mid = (lo + hi) // 2
        k, v = entries[mid]
        return node(k, v, build(lo, mid), build(mid + 1, hi))

    return build(0, len(entries))


# ---------------------------------------------------------------------------
# Point operations
# ---------------------------------------------------------------------------


MISSING = object()


def lookup(t: Tree, key: Any, default: Any = None) -> Any:
    while t is not None:
        if key < t.key:
            t = t.left
        elif t.key < key:
            t = t.right
        else:
            return t.value
    return default


def member(t: Tree, key: Any) -> bool:
    return lookup(t, key, MISSING) is not MISSING


def insert(t: Tree, key: Any, value: Any) -> Node:
    if t is None:
        return Node(key, value, None, None, 1)
    if key < t.key:
        return balance(t.key, t.value, insert(t.left, key, value), t.right)
    if t.key < key:
        return balance(t.key, t.value, t.left, insert(t.right, key, value))
    return Node(key, value, t.left, t.right, t.size)


def delete(t: Tree, key: Any) -> Tree:
    if t is None:
        return None
    if key < t.key:
        left = delete(t.left, key)
        if left is t.left:
            return t
        return balance(t.key, t.value, left, t.right)
    if t.key < key:
        right = delete(t.right, key)
        if right is t.right:
            return t
        return balance(t.key, t.value, t.left, right)
    return _glue(t.left, t.right)


def _delete_min(t: Node) -> tuple[Any, Any, Tree]:
    if t.left is None:
        return t.key, t.value, t.right
    k, v, left = _delete_min(t.left)
    return k, v, balance(t.key, t.value, left, t.right)


def _delete_max(t: Node) -> tuple[Any, Any, Tree]:
    if t.right is None:
        return t.key, t.value, t.left
    k, v, right = _delete_max(t.right)
    return k, v, balance(t.key, t.value, t.left, right)


def _glue(left: Tree, right: Tree) -> Tree:
    # Joins two balanced trees whose sizes are within balance of each other.
    if left is None:
        return right
    if right is None:
        return left
    if left.size > right.size:
        k, v, rest = _delete_max(left)
        return balance(k, v, rest, right)
    k, v, rest = _delete_min(right)
    return balance(k, v, left, rest)


def _insert_min(key: Any, value: Any, t: Tree) -> Node:
    if t is None:
        return Node(key, value, None, None, 1)
    return balance(t.key, t.value, _insert_min(key, value, t.left), t.right)


def _insert_max(key: Any, value: Any, t: Tree) -> Node:
    if t is None:
        return Node(key, value, None, None, 1)
    return balance(t.key, t.value, t.left, _insert_max(key, value, t.right))


def link(key: Any, value: Any, left: Tree, right: Tree) -> Node:
    """Join ``left``, an entry, and ``right``; all keys of left < key < right."""
    if left is None:
        return _insert_min(key, value, right)
    if right is None:
        return _insert_max(key, value, left)
    if DELTA * left.size < right.size:
        return balance(
            right.key, right.value, link(key, value, left, right.left), right.right
        )
    if DELTA * right.size < left.size:
        return balance(
            left.key, left.value, left.left, link(key, value, left.right, right)
        )
    return node(key, value, left, right)


def merge(left: Tree, right: Tree) -> Tree:
    """Join two trees with all keys of ``left`` below all keys of ``right``."""
    if left is None:
        return right
    if right is None:
        return left
    if DELTA * left.size < right.size:
        return balance(right.key, right.value, merge(left, right.left), right.right)
    if DELTA * right.size < left.size:
        return balance(left.key, left.value, left.left, merge(left.right, right))
    return _glue(left, right)


# ---------------------------------------------------------------------------
# Bulk operations
# ---------------------------------------------------------------------------


def take(t: Tree, n: int) -> Tree:
    """The first ``n`` entries in key order."""
    if t is None or n <= 0:
        return None
    if n >= t.size:
        return t
    sl = size(t.left)
    if n <= sl:
        return take(t.left, n)
    return link(t.key, t.value, t.left, take(t.right, n - sl - 1))


def drop(t: Tree, n: int) -> Tree:
    """All but the first ``n`` entries in key order."""
    if t is None or n <= 0:
        return t
    if n >= t.size:
        return None
    sl = size(t.left)
    if n <= sl:
        return link(t.key, t.value, drop(t.left, n), t.right)
    return drop(t.right, n - sl - 1)


def filter_tree(t: Tree, keep: Callable[[Any, Any], bool]) -> Tree:
    if t is None:
        return None
    left = filter_tree(t.left, keep)
    right = filter_tree(t.right, keep)
    if keep(t.key, t.value):
        if left is t.left and right is t.right:
            return t
        return link(t.key, t.value, left, right)
    return merge(left, right)


def items(t: Tree) -> Iterator[tuple[Any, Any]]:
    """In-order traversal."""
    stack: list[Node] = []
    while stack or t is not None:
        while t is not None:
            stack.append(t)
            t = t.left
        n = stack.pop()
        yield n.key, n.value
        t = n.right


def min_entry(t: Tree) -> tuple[Any, Any] | None:
    if t is None:
        return None
    while t.left is not None:
        t = t.left
    return t.key, t.value


def max_entry(t: Tree) -> tuple[Any, Any] | None:
    if t is None:
        return None
    while t.right is not None:
        t = t.right
    return t.key, t.value


def nodes(t: Tree) -> Iterator[Node]:
    """Pre-order traversal of nodes (for structural checks)."""
    stack = [t]
    while stack:
        n = stack.pop()
        if n is None:
            continue
        yield n
        stack.append(n.right)
        stack.append(n.left)
