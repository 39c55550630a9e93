from hypothesis import given, settings, strategies as st

from monoidmap import tree


def build(keys) -> tree.Tree:
    t: tree.Tree = None
    for k in keys:
        t = tree.insert(t, k, k * 10)
    return t


def assert_valid(t: tree.Tree) -> None:
    for n in tree.nodes(t):
        sl, sr = tree.size(n.left), tree.size(n.right)
        assert n.size == sl + sr + 1
        assert sl + sr <= 1 or (sl <= tree.DELTA * sr and sr <= tree.DELTA * sl)
    ks = [k for k, _ in tree.items(t)]
    assert ks == sorted(set(ks))


# ---------------------------------------------------------------------------
# Point operations
# ---------------------------------------------------------------------------


def test_insert_ascending_stays_balanced() -> None:
    t = build(range(500))
    assert tree.size(t) == 500
    assert_valid(t)


def test_insert_replaces_value() -> None:
    t = tree.insert(build([1, 2, 3]), 2, "x")
    assert tree.lookup(t, 2) == "x"
    assert tree.size(t) == 3


def test_lookup_default() -> None:
    t = build([1, 2, 3])
    assert tree.lookup(t, 4, "none") == "none"
    assert tree.lookup(t, 4, tree.MISSING) is tree.MISSING
    assert tree.member(t, 3)
    assert not tree.member(t, 4)


def test_delete_absent_returns_same_tree() -> None:
    t = build([1, 2, 3])
    assert tree.delete(t, 7) is t
    assert tree.delete(None, 7) is None


@given(
    st.lists(
        st.tuples(st.booleans(), st.integers(min_value=0, max_value=300)),
        max_size=400,
    )
)
@settings(max_examples=50)
def test_inserts_and_deletes_keep_balance(ops) -> None:
    t: tree.Tree = None
    present: set[int] = set()
    for is_insert, k in ops:
        if is_insert:
            t = tree.insert(t, k, k)
            present.add(k)
        else:
            t = tree.delete(t, k)
            present.discard(k)
    assert_valid(t)
    assert [k for k, _ in tree.items(t)] == sorted(present)


# ---------------------------------------------------------------------------
# Bulk operations
# ---------------------------------------------------------------------------


def test_from_sorted() -> None:
    entries = [(k, str(k)) for k in range(100)]
    t = tree.from_sorted(entries)
    assert list(tree.items(t)) == entries
    assert_valid(t)


def test_take_and_drop_match_slicing() -> None:
    keys = list(range(0, 60, 3))
    t = build(keys)
    for n in range(-1, len(keys) + 2):
        taken = [k for k, _ in tree.items(tree.take(t, n))]
        dropped = [k for k, _ in tree.items(tree.drop(t, n))]
        assert taken == keys[: max(n, 0)]
        assert dropped == keys[max(n, 0):]
        assert_valid(tree.take(t, n))
        assert_valid(tree.drop(t, n))


def test_filter_tree() -> None:
    t = build(range(100))
    evens = tree.filter_tree(t, lambda k, _v: k % 2 == 0)
    assert [k for k, _ in tree.items(evens)] == list(range(0, 100, 2))
    assert_valid(evens)


def test_filter_tree_keeping_everything_shares_the_tree() -> None:
    t = build(range(50))
    assert tree.filter_tree(t, lambda _k, _v: True) is t


def test_link_and_merge() -> None:
    left = build(range(10))
    right = build(range(20, 200))
    linked = tree.link(15, 150, left, right)
    assert [k for k, _ in tree.items(linked)] == [*range(10), 15, *range(20, 200)]
    assert_valid(linked)
    merged = tree.merge(left, right)
    assert [k for k, _ in tree.items(merged)] == [*range(10), *range(20, 200)]
    assert_valid(merged)


def test_min_and_max_entry() -> None:
    t = build([5, 3, 9, 1])
    assert tree.min_entry(t) == (1, 10)
    assert tree.max_entry(t) == (9, 90)
    assert tree.min_entry(None) is None
    assert tree.max_entry(None) is None
