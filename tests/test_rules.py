"""Tests for rule kinds, rule variants and value predicates."""

import math
from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from fvalidator import ConfigurationError, ValidatorSettings, validator
from fvalidator.rules import (
    MISSING,
    Enum,
    Equal,
    IsArray,
    IsDate,
    IsEmail,
    IsObject,
    Length,
    Max,
    Min,
    Regex,
    Required,
    RuleKind,
    compare_numbers,
    is_empty,
    is_numeric,
    loosely_equal,
    parse_date,
    property_of,
)


@pytest.fixture
def settings():
    return ValidatorSettings()


class TestRuleKind:
    """Test the rule kind enumeration."""

    def test_evaluation_order(self):
        """Test that member order is the evaluation order."""
        assert [kind.value for kind in RuleKind] == [
            "required", "string", "number", "boolean", "array", "object",
            "date", "email", "min", "max", "equal", "length", "regex", "enum",
        ]
        assert RuleKind.REQUIRED.order == 0
        assert RuleKind.ENUM.order == 13

    def test_parse(self):
        """Test looking up kinds by name."""
        assert RuleKind.parse("min") is RuleKind.MIN
        assert RuleKind.parse("REGEX") is RuleKind.REGEX
        assert RuleKind.parse(RuleKind.EMAIL) is RuleKind.EMAIL

    def test_parse_unknown(self):
        """Test that unknown names are configuration errors."""
        with pytest.raises(ConfigurationError, match="Unknown rule kind"):
            RuleKind.parse("uuid")

    def test_kind_compares_as_text(self):
        assert RuleKind.MIN == "min"


class TestPredicates:
    """Test the value predicates shared by rules."""

    def test_missing_marker(self):
        """Test the missing-property marker."""
        assert not MISSING
        assert repr(MISSING) == "MISSING"

    def test_is_empty(self):
        """Test the emptiness predicate."""
        for value in (MISSING, None, "", [], (), set()):
            assert is_empty(value), value

        # False, zero and mappings are present values
        for value in (0, 0.0, False, " ", [0], {}, {"a": None}):
            assert not is_empty(value), value

    def test_is_numeric(self):
        """Test numeric detection including numeric text."""
        for value in (0, -3, 2.5, Decimal("1.5"), "12", " 7 ", "-0.5", ".5", "1e3"):
            assert is_numeric(value), value

        for value in (True, False, None, "", "abc", "1,5", "12abc", math.nan, [1]):
            assert not is_numeric(value), value

    def test_compare_numbers(self):
        """Test mixed-type numeric comparison."""
        assert compare_numbers(5, 5) == 0
        assert compare_numbers("5", 4) == 1
        assert compare_numbers(0.1, "0.2") == -1
        assert compare_numbers(Decimal("2.50"), 2.5) == 0

    def test_loosely_equal(self):
        """Test equality between numbers and numeric text."""
        assert loosely_equal("5", 5)
        assert loosely_equal("5.0", 5)
        assert loosely_equal("abc", "abc")
        assert not loosely_equal("abc", "ABC")
        assert not loosely_equal("6", 5)
        assert not loosely_equal(None, 0)

    def test_parse_date(self):
        """Test date parsing from instances and text."""
        today = date(2024, 1, 15)
        assert parse_date(today) is today
        assert parse_date("2024-01-15") == datetime(2024, 1, 15)
        assert parse_date("2024-01-15T10:30:00Z").hour == 10
        assert parse_date("15/01/2024", ("%d/%m/%Y",)) == datetime(2024, 1, 15)

        assert parse_date("15/01/2024") is None  # no formats given
        assert parse_date("2024-02-30") is None
        assert parse_date("not a date") is None
        assert parse_date(20240115) is None
        assert parse_date("   ") is None

    def test_property_of(self):
        """Test property lookup on mappings and objects."""
        assert property_of({"a": 1}, "a") == 1
        assert property_of({"a": None}, "a") is None
        assert property_of({}, "a") is MISSING
        assert property_of(SimpleNamespace(a=2), "a") == 2
        assert property_of(SimpleNamespace(), "a") is MISSING


class TestRules:
    """Test individual rule variants."""

    def test_required(self, settings):
        rule = Required("obligatorio")
        assert rule.kind is RuleKind.REQUIRED
        assert rule.check("x", settings)
        assert rule.check(0, settings)
        assert not rule.check(None, settings)
        assert not rule.check(MISSING, settings)

    def test_min_max_inclusive(self, settings):
        """Test that bounds are inclusive."""
        assert Min("m", bound=5).check(5, settings)
        assert not Min("m", bound=5).check(4.99, settings)
        assert Max("m", bound=5).check(5, settings)
        assert not Max("m", bound=5).check("6", settings)

    def test_min_max_skip_non_numeric(self, settings):
        """Test that bounds ignore non-numeric values."""
        assert Min("m", bound=5).check("abc", settings)
        assert Max("m", bound=5).check([1, 2, 3, 4, 5, 6], settings)

    def test_length_exact(self, settings):
        rule = Length("l", length=3)
        assert rule.check("abc", settings)
        assert not rule.check("ab", settings)
        assert not rule.check("abcd", settings)
        assert rule.check(12345, settings)  # not text

    def test_regex_search(self, settings):
        """Test that patterns may match anywhere in the text."""
        import re

        rule = Regex("r", pattern=re.compile(r"\d{3}"))
        assert rule.check("abc123def", settings)
        assert not rule.check("abc", settings)
        assert rule.check(42, settings)  # not text

    def test_enum_and_equal(self, settings):
        assert Enum("e", values=("a", "b")).check("a", settings)
        assert not Enum("e", values=("a", "b")).check("c", settings)
        assert Enum("e", values=(1, 2)).check("2", settings)
        assert Equal("q", target=10).check("10", settings)
        assert not Equal("q", target=10).check(11, settings)

    def test_email(self, settings):
        rule = IsEmail("correo")
        assert rule.check("ana.perez@gmail.com", settings)
        assert not rule.check("not-an-email", settings)
        assert not rule.check("ana@", settings)
        assert not rule.check(42, settings)

    def test_date_uses_configured_formats(self):
        rule = IsDate("fecha")
        assert rule.check("15/01/2024", ValidatorSettings())
        assert not rule.check("15/01/2024", ValidatorSettings(date_formats=()))

    def test_array_children(self):
        """Test that array rules expose every element in order."""
        child = validator().is_number()
        rule = IsArray("a", schema=child)
        assert list(rule.children([1, "x"])) == [("[0]", child, 1), ("[1]", child, "x")]
        assert list(IsArray("a").children([1, 2])) == []

    def test_object_children(self):
        """Test that object rules expose declared properties only."""
        age = validator().is_number()
        rule = IsObject("o", schema={"age": age})
        assert list(rule.children({"age": 3, "extra": 1})) == [(".age", age, 3)]
        assert list(rule.children({})) == [(".age", age, MISSING)]
        assert rule.schema == (("age", age),)

    def test_object_accepts_attribute_objects(self, settings):
        rule = IsObject("o")
        assert rule.check({}, settings)
        assert rule.check(SimpleNamespace(a=1), settings)
        assert not rule.check([1], settings)
        assert not rule.check("text", settings)
        assert not rule.check(5, settings)

    def test_rules_are_immutable(self):
        rule = Min("m", bound=1)
        with pytest.raises(AttributeError):
            rule.bound = 2
