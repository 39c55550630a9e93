from hypothesis import given, settings, strategies as st

from monoidmap import (
    MonoidMap,
    append,
    empty,
    from_list,
    get,
    intersection,
    invert,
    is_prefix_of,
    monus,
    strip_prefix,
    strip_suffix,
    to_list,
    union,
)
from monoidmap.basis import natural_sum, set_monoid, string_monoid, sum_monoid
from monoidmap.check import check_map

KEYS = "abcdef"
# One extra key that no generated map ever stores.
CHECKED_KEYS = KEYS + "z"

keys = st.sampled_from(KEYS)


def maps(monoid, values) -> st.SearchStrategy[MonoidMap]:
    return st.lists(st.tuples(keys, values), max_size=8).map(
        lambda pairs: from_list(monoid, pairs)
    )


nat_maps = maps(natural_sum(), st.integers(min_value=0, max_value=20))
int_maps = maps(sum_monoid(), st.integers(min_value=-20, max_value=20))
str_maps = maps(string_monoid(), st.text(alphabet="xy", max_size=4))
set_maps = maps(set_monoid(), st.frozensets(st.integers(min_value=0, max_value=5), max_size=3))


def assert_pointwise(result, m1, m2, f) -> None:
    assert check_map(result).is_lawful
    for k in CHECKED_KEYS:
        assert get(result, k) == f(get(m1, k), get(m2, k))


# ---------------------------------------------------------------------------
# Pointwise laws
# ---------------------------------------------------------------------------


@given(nat_maps, nat_maps)
@settings(max_examples=50)
def test_append_is_pointwise(m1, m2) -> None:
    assert_pointwise(append(m1, m2), m1, m2, lambda a, b: a + b)


@given(str_maps, str_maps)
@settings(max_examples=50)
def test_append_is_pointwise_for_strings(m1, m2) -> None:
    assert_pointwise(append(m1, m2), m1, m2, lambda a, b: a + b)


@given(nat_maps, nat_maps)
@settings(max_examples=50)
def test_union_is_pointwise_max(m1, m2) -> None:
    assert_pointwise(union(m1, m2), m1, m2, max)


@given(set_maps, set_maps)
@settings(max_examples=50)
def test_union_is_pointwise_set_union(m1, m2) -> None:
    assert_pointwise(union(m1, m2), m1, m2, lambda a, b: a | b)


@given(str_maps, str_maps)
@settings(max_examples=50)
def test_union_without_join_is_append(m1, m2) -> None:
    assert union(m1, m2) == append(m1, m2)


@given(nat_maps, nat_maps)
@settings(max_examples=50)
def test_intersection_is_pointwise_min(m1, m2) -> None:
    assert_pointwise(intersection(m1, m2), m1, m2, min)


@given(set_maps, set_maps)
@settings(max_examples=50)
def test_intersection_is_pointwise_set_intersection(m1, m2) -> None:
    assert_pointwise(intersection(m1, m2), m1, m2, lambda a, b: a & b)


@given(nat_maps, nat_maps)
@settings(max_examples=50)
def test_monus_is_pointwise_truncated_subtraction(m1, m2) -> None:
    assert_pointwise(monus(m1, m2), m1, m2, lambda a, b: max(a - b, 0))


@given(set_maps, set_maps)
@settings(max_examples=50)
def test_monus_is_pointwise_set_difference(m1, m2) -> None:
    assert_pointwise(monus(m1, m2), m1, m2, lambda a, b: a - b)


# ---------------------------------------------------------------------------
# Round trips and inverses
# ---------------------------------------------------------------------------


@given(st.one_of(nat_maps, int_maps, str_maps, set_maps))
@settings(max_examples=50)
def test_from_list_to_list_round_trip(m) -> None:
    assert from_list(m.monoid, to_list(m)) == m


@given(int_maps)
@settings(max_examples=50)
def test_append_invert_is_empty(m) -> None:
    assert append(m, invert(m)) == empty(sum_monoid())
    assert append(invert(m), m) == empty(sum_monoid())


@given(str_maps, str_maps)
@settings(max_examples=50)
def test_strip_prefix_then_append_rebuilds(m1, m2) -> None:
    whole = append(m1, m2)
    assert is_prefix_of(m1, whole)
    rest = strip_prefix(m1, whole)
    assert rest == m2
    assert append(m1, rest) == whole


@given(str_maps, str_maps)
@settings(max_examples=50)
def test_strip_prefix_result_always_rebuilds(m1, m2) -> None:
    rest = strip_prefix(m1, m2)
    if rest is None:
        assert not is_prefix_of(m1, m2)
    else:
        assert append(m1, rest) == m2


@given(str_maps, str_maps)
@settings(max_examples=50)
def test_strip_suffix_then_append_rebuilds(m1, m2) -> None:
    whole = append(m1, m2)
    rest = strip_suffix(m2, whole)
    assert rest == m1
    assert append(rest, m2) == whole


@given(nat_maps, nat_maps)
@settings(max_examples=50)
def test_monus_then_append_covers_both(m1, m2) -> None:
    assert append(m2, monus(m1, m2)) == append(m1, monus(m2, m1))
