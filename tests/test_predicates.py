import pytest

from memdb.errors import InvalidFilter
from memdb.predicates import build_predicate, matches, normalize_filter
from memdb.types import loose_equals, strict_equals

REC = {"id": 1, "name": "a", "age": 30}


def test_scalar_wraps_primary_key():
    assert normalize_filter(1, "id") == [{"id": 1}]
    assert normalize_filter("x", "name") == [{"name": "x"}]


def test_sequence_mixes_scalars_and_mappings():
    assert normalize_filter([1, {"name": "b"}], "id") == [{"id": 1}, {"name": "b"}]
    assert normalize_filter((2,), "id") == [{"id": 2}]


def test_and_within_clause():
    assert matches(REC, {"name": "a", "age": 30})
    assert not matches(REC, {"name": "a", "age": 31})


def test_or_across_clauses():
    assert matches(REC, [99, {"name": "a"}])
    assert not matches(REC, [99, {"name": "z"}])


def test_empty_clause_matches_everything():
    assert matches(REC, {})
    assert matches({}, {})


def test_empty_sequence_matches_nothing():
    assert not matches(REC, [])


def test_missing_attribute_never_matches():
    assert not matches(REC, {"email": None})
    assert matches({"email": None}, {"email": None})


def test_custom_primary_key():
    assert matches(REC, "a", primary_key="name")
    assert not matches(REC, 1, primary_key="name")


@pytest.mark.parametrize("bad", [None, True, 3 + 4j, {1, 2}, [[1]], [None], object(), {1: "x"}])
def test_invalid_filters(bad):
    with pytest.raises(InvalidFilter):
        build_predicate(bad)


def test_invalid_filter_is_value_error():
    with pytest.raises(ValueError):
        normalize_filter(None, "id")


def test_strict_equality_does_not_coerce():
    assert not matches(REC, "1")
    assert not matches({"id": True}, 1)
    assert matches({"id": 1.0}, 1)
    assert not strict_equals(1, True)


def test_loose_equality_coerces_numeric_strings():
    assert matches(REC, "1", equality="loose")
    assert matches({"id": "2"}, 2, equality="loose")
    assert not matches({"id": "2a"}, 2, equality="loose")
    assert loose_equals(True, 1)
    assert not loose_equals(None, 0)
    assert loose_equals(None, None)
    assert not loose_equals("1", "1.0")


def test_unknown_equality_mode():
    with pytest.raises(ValueError):
        build_predicate(1, equality="fuzzy")
