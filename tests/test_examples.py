import pytest

from monoidmap.basis import natural_sum, string_monoid
from monoidmap.examples import MultiMap, MultiSet, NestedMonoidMap


# ---------------------------------------------------------------------------
# MultiMap
# ---------------------------------------------------------------------------


class TestMultiMap:
    def test_from_list(self) -> None:
        m = MultiMap.from_list([(1, {"a"}), (2, set()), (1, {"b"})])
        assert m.to_list() == [(1, frozenset({"a", "b"}))]
        assert m.non_null_keys() == frozenset({1})
        assert m.lookup(2) == frozenset()

    def test_removing_last_value_removes_key(self) -> None:
        m = MultiMap.from_list([(1, {"a", "b"}), (2, {"c"})])
        m = m.remove(1, {"a", "b"})
        assert not m.non_null_key(1)
        assert m.non_null_count() == 1

    def test_insert_and_update(self) -> None:
        m = MultiMap.empty().insert("k", {1}).insert("k", {2})
        assert m.lookup("k") == frozenset({1, 2})
        m = m.update("k", [])
        assert m.null()

    def test_union_and_intersection(self) -> None:
        m1 = MultiMap.from_list([(1, {"a", "b"}), (3, {"z"})])
        m2 = MultiMap.from_list([(1, {"b", "c"}), (2, {"x"}), (3, {"y"})])
        assert m1.union(m2).to_list() == [
            (1, frozenset({"a", "b", "c"})),
            (2, frozenset({"x"})),
            (3, frozenset({"y", "z"})),
        ]
        assert m1.intersection(m2).to_list() == [(1, frozenset({"b"}))]

    def test_is_submap_of(self) -> None:
        m1 = MultiMap.from_list([(1, {"a"})])
        m2 = MultiMap.from_list([(1, {"a", "b"}), (2, {"c"})])
        assert m1.is_submap_of(m2)
        assert not m2.is_submap_of(m1)
        assert m1.non_null()


# ---------------------------------------------------------------------------
# MultiSet
# ---------------------------------------------------------------------------


class TestMultiSet:
    def test_counts(self) -> None:
        s = MultiSet.from_list("abracadabra")
        assert s.to_counts() == [("a", 5), ("b", 2), ("c", 1), ("d", 1), ("r", 2)]
        assert s.size() == 11
        assert s.distinct() == 5
        assert s.count("z") == 0

    def test_elements(self) -> None:
        s = MultiSet.from_list("cabbage")
        assert "".join(s.elements()) == "aabbceg"

    def test_insert_and_remove(self) -> None:
        s = MultiSet.from_list("abracadabra").remove("c")
        assert s.distinct() == 4
        s = s.remove("a", 10).insert("q", 2)
        assert s.count("a") == 0
        assert s.count("q") == 2

    def test_set_operations(self) -> None:
        s1 = MultiSet.from_counts([("a", 3), ("b", 1)])
        s2 = MultiSet.from_counts([("a", 1), ("c", 2)])
        assert s1.sum(s2).to_counts() == [("a", 4), ("b", 1), ("c", 2)]
        assert s1.union(s2).to_counts() == [("a", 3), ("b", 1), ("c", 2)]
        assert s1.intersection(s2).to_counts() == [("a", 1)]
        assert s1.difference(s2).to_counts() == [("a", 2), ("b", 1)]

    def test_subset_and_disjoint(self) -> None:
        s1 = MultiSet.from_counts([("a", 1)])
        s2 = MultiSet.from_counts([("a", 2), ("b", 1)])
        assert s1.is_subset_of(s2)
        assert not s2.is_subset_of(s1)
        assert not s1.disjoint(s2)
        assert s1.disjoint(MultiSet.from_list("xyz"))

    def test_negative_count_rejected(self) -> None:
        with pytest.raises(ValueError, match="Negative count"):
            MultiSet.from_counts([("a", -1)])

    def test_equality(self) -> None:
        assert MultiSet.from_list("aab") == MultiSet.from_counts([("b", 1), ("a", 2)])
        assert MultiSet.empty() == MultiSet.from_list("")


# ---------------------------------------------------------------------------
# NestedMonoidMap
# ---------------------------------------------------------------------------


@pytest.fixture
def nested() -> NestedMonoidMap:
    return NestedMonoidMap.from_flat_list(
        natural_sum(),
        [((1, "a"), 2), ((1, "b"), 3), ((2, "a"), 1), ((1, "a"), 4)],
    )


class TestNestedMonoidMap:
    def test_from_flat_list_combines_repeats(self, nested) -> None:
        assert nested.get((1, "a")) == 6
        assert nested.get((3, "z")) == 0
        assert nested.size() == 3
        assert nested.keys() == frozenset({(1, "a"), (1, "b"), (2, "a")})

    def test_to_nested_list(self, nested) -> None:
        assert nested.to_nested_list() == [(1, [("a", 6), ("b", 3)]), (2, [("a", 1)])]
        assert NestedMonoidMap.from_nested_list(natural_sum(), nested.to_nested_list()) == nested

    def test_deleting_last_inner_entry_removes_outer_key(self, nested) -> None:
        m = nested.delete((2, "a"))
        assert [k1 for k1, _ in m.to_nested_list()] == [1]
        assert len(m.outer) == 1

    def test_adjust(self, nested) -> None:
        m = nested.adjust((1, "b"), lambda v: v - 3)
        assert m.to_flat_list() == [((1, "a"), 6), ((2, "a"), 1)]

    def test_append_and_monus(self, nested) -> None:
        other = NestedMonoidMap.from_flat_list(natural_sum(), [((1, "a"), 2), ((1, "b"), 5)])
        assert nested.append(other).get((1, "b")) == 8
        assert nested.monus(other).to_flat_list() == [((1, "a"), 4), ((2, "a"), 1)]

    def test_is_submap_of(self, nested) -> None:
        smaller = NestedMonoidMap.from_flat_list(natural_sum(), [((1, "a"), 1)])
        assert smaller.is_submap_of(nested)
        assert not nested.is_submap_of(smaller)
        assert nested.value_monoid is natural_sum()


def strings(*entries) -> NestedMonoidMap:
    return NestedMonoidMap.from_flat_list(string_monoid(), entries)


class TestNestedReduction:
    def test_prefix(self) -> None:
        a = strings(((1, "x"), "ab"), ((2, "y"), "q"))
        b = strings(((1, "x"), "abcd"), ((2, "y"), "q"), ((2, "z"), "r"))
        assert a.is_prefix_of(b)
        assert not b.is_prefix_of(a)
        rest = a.strip_prefix(b)
        assert rest is not None
        assert rest.to_flat_list() == [((1, "x"), "cd"), ((2, "z"), "r")]
        assert a.append(rest) == b
        assert b.strip_prefix(a) is None

    def test_suffix(self) -> None:
        c = strings(((1, "x"), "cd"))
        b = strings(((1, "x"), "abcd"), ((2, "y"), "q"))
        assert c.is_suffix_of(b)
        rest = c.strip_suffix(b)
        assert rest is not None
        assert rest.to_flat_list() == [((1, "x"), "ab"), ((2, "y"), "q")]
        assert rest.append(c) == b
        assert strings(((1, "x"), "ab")).strip_suffix(b) is None

    def test_overlap(self) -> None:
        p = strings(((1, "x"), "abcd"))
        q = strings(((1, "x"), "cdef"), ((1, "w"), "z"))
        assert p.overlap(q).to_flat_list() == [((1, "x"), "cd")]
        r1, o, r2 = p.strip_overlap(q)
        assert r1.to_flat_list() == [((1, "x"), "ab")]
        assert o.to_flat_list() == [((1, "x"), "cd")]
        assert r2.to_flat_list() == [((1, "w"), "z"), ((1, "x"), "ef")]
        assert r1.append(o) == p
        assert o.append(r2) == q
