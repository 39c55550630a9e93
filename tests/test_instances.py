import pytest

from monoidmap import (
    Capability,
    append,
    empty,
    from_list,
    get,
    is_submap_of,
    minus,
    monoid_map_monoid,
    monus,
    null,
    set,
    strip_prefix,
    to_list,
)
from monoidmap.basis import natural_sum, string_monoid, sum_monoid
from monoidmap.check import check_monoid


def nat(*pairs):
    return from_list(natural_sum(), pairs)


@pytest.fixture
def nested():
    return monoid_map_monoid(natural_sum())


def test_descriptor_is_cached(nested) -> None:
    assert monoid_map_monoid(natural_sum()) is nested
    assert nested.name == "MonoidMap[NaturalSum]"


def test_identity_is_the_empty_map(nested) -> None:
    assert nested.is_identity(empty(natural_sum()))
    assert not nested.is_identity(nat(("a", 1)))


def test_capabilities_are_lifted() -> None:
    assert monoid_map_monoid(natural_sum()).capabilities == natural_sum().capabilities
    caps = monoid_map_monoid(string_monoid()).capabilities
    assert Capability.LEFT_REDUCTIVE in caps
    assert Capability.GCD not in caps
    assert Capability.GROUP in monoid_map_monoid(sum_monoid()).capabilities


def test_markers_are_lifted() -> None:
    assert monoid_map_monoid(natural_sum()).commutative
    assert not monoid_map_monoid(string_monoid()).commutative


def test_empty_inner_map_is_dropped(nested) -> None:
    outer = from_list(nested, [("x", nat(("a", 1))), ("y", nat())])
    assert [k for k, _ in to_list(outer)] == ["x"]
    outer = set(outer, "x", nat())
    assert null(outer)


def test_nested_append(nested) -> None:
    o1 = from_list(nested, [("x", nat(("a", 1))), ("y", nat(("b", 2)))])
    o2 = from_list(nested, [("x", nat(("a", 2), ("c", 1)))])
    result = append(o1, o2)
    assert get(result, "x") == nat(("a", 3), ("c", 1))
    assert get(result, "y") == nat(("b", 2))


def test_nested_monus_and_order(nested) -> None:
    o1 = from_list(nested, [("x", nat(("a", 3)))])
    o2 = from_list(nested, [("x", nat(("a", 3))), ("y", nat(("b", 1)))])
    assert null(monus(o1, o2))
    assert is_submap_of(o1, o2)
    assert not is_submap_of(o2, o1)
    assert strip_prefix(o1, o2) == from_list(nested, [("y", nat(("b", 1)))])


def test_nested_minus() -> None:
    nested = monoid_map_monoid(sum_monoid())
    inner = from_list(sum_monoid(), [("a", 2)])
    o = from_list(nested, [("x", inner)])
    assert null(minus(o, o))


def test_nested_descriptor_is_lawful(nested) -> None:
    samples = [nat(("a", 1)), nat(("a", 2), ("b", 1)), nat(("b", 3))]
    result = check_monoid(nested, samples)
    assert result.is_lawful, result.errors
