"""
Unit tests for comparator predicates.

Tests loose equality across the transport boundary, inclusive ranges,
the +/-1 inclusive ordering and boolean presence predicates.
"""

import pytest

from driver_assertions import comparators


class TestShallowEquals:
    """Test loose equality."""

    @pytest.mark.parametrize("a,b", [
        (4, 4),
        ("Home", "Home"),
        ("4", 4),
        (4, "4"),
        ("4.5", 4.5),
        ("true", True),
        (False, "false"),
        (None, None),
    ])
    def test_equal_pairs(self, a, b):
        assert comparators.shallow_equals(a, b) is True
        assert comparators.shallow_unequals(a, b) is False

    @pytest.mark.parametrize("a,b", [
        (3, 4),
        ("Home", "home"),
        ("abc", 4),
        ("false", True),
        ("1", True),
        (None, 0),
        ([4], 4),
    ])
    def test_unequal_pairs(self, a, b):
        assert comparators.shallow_equals(a, b) is False
        assert comparators.shallow_unequals(a, b) is True


class TestBetween:
    """Test the inclusive range predicate."""

    def test_bounds_are_inclusive(self):
        assert comparators.between([2, 6], 2) is True
        assert comparators.between([2, 6], 6) is True
        assert comparators.between([2, 6], 4) is True

    def test_outside_range(self):
        assert comparators.between([2, 6], 1) is False
        assert comparators.between([2, 6], 7) is False

    def test_stringified_value(self):
        assert comparators.between([2, 6], "4") is True

    def test_malformed_bounds_do_not_raise(self):
        assert comparators.between([2], 4) is False
        assert comparators.between(None, 4) is False
        assert comparators.between([2, 6], "four") is False


class TestOrdering:
    """Test gt/gte/lt/lte with the bound first."""

    def test_greater_than(self):
        assert comparators.greater_than(1, 2) is True
        assert comparators.greater_than(2, 2) is False

    def test_greater_than_equal_includes_bound(self):
        assert comparators.greater_than_equal(2, 2) is True
        assert comparators.greater_than_equal(2, 3) is True
        assert comparators.greater_than_equal(2, 1) is False

    def test_lower_than(self):
        assert comparators.lower_than(6, 5) is True
        assert comparators.lower_than(5, 5) is False

    def test_lower_than_equal_includes_bound(self):
        assert comparators.lower_than_equal(5, 5) is True
        assert comparators.lower_than_equal(5, 6) is False

    def test_stringified_numbers(self):
        assert comparators.greater_than("1", "2") is True
        assert comparators.lower_than_equal(5, "5") is True

    @pytest.mark.parametrize("predicate", [
        comparators.greater_than,
        comparators.greater_than_equal,
        comparators.lower_than,
        comparators.lower_than_equal,
    ])
    def test_not_comparable_is_false(self, predicate):
        assert predicate(2, "many") is False
        assert predicate(2, None) is False
        assert predicate(2, True) is False


class TestPresence:
    """Test truthy/falsy predicates."""

    @pytest.mark.parametrize("value,expected", [
        (True, True),
        ("true", True),
        (False, False),
        ("false", False),
        (1, False),
        (None, False),
    ])
    def test_truthy(self, value, expected):
        assert comparators.truthy(value) is expected

    @pytest.mark.parametrize("value,expected", [
        (False, True),
        ("false", True),
        (True, False),
        (0, False),
        (None, False),
    ])
    def test_falsy(self, value, expected):
        assert comparators.falsy(value) is expected

    def test_expected_argument_is_ignored(self):
        assert comparators.truthy("true", None) is True
        assert comparators.falsy(False, "anything") is True
