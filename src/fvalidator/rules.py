"""Rule variants, one class per rule kind, with composable checks.

Each rule is an immutable value carrying its own parameter and the message
raised when it fails. ``check`` answers whether a single value satisfies the
rule; composition rules (``IsArray``, ``IsObject``) additionally expose the
child values to descend into through ``children``.
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum as _Enum
from numbers import Number
from re import Pattern as RegexPattern
from typing import TYPE_CHECKING, Any, ClassVar

from email_validator import EmailNotValidError, validate_email

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .ruleset import RuleSet
    from .settings import ValidatorSettings


class RuleKind(str, _Enum):
    """The fixed rule kinds. Member order is the evaluation order."""

    REQUIRED = "required"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    DATE = "date"
    EMAIL = "email"
    MIN = "min"
    MAX = "max"
    EQUAL = "equal"
    LENGTH = "length"
    REGEX = "regex"
    ENUM = "enum"

    @property
    def order(self) -> int:
        return _KIND_ORDER[self]

    @classmethod
    def parse(cls, value: RuleKind | str) -> RuleKind:
        """Look up a kind by member or by (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(
                f"Unknown rule kind: {value}",
                context={"known": [k.value for k in cls]},
            ) from None


_KIND_ORDER = {kind: index for index, kind in enumerate(RuleKind)}


class _Missing:
    """Marker for an object property that is not present."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

_NUMERIC_TEXT = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def is_empty(value: Any) -> bool:
    """Emptiness predicate used by the required check.

    A value is empty when it is ``MISSING``, ``None``, the empty string, or
    an empty list, tuple or set. ``False``, ``0`` and mappings (even empty
    ones, so their declared properties are still checked) are present
    values.
    """
    if value is MISSING or value is None:
        return True
    if isinstance(value, (str, list, tuple, set, frozenset)):
        return len(value) == 0
    return False


def is_numeric(value: Any) -> bool:
    """True for real numbers (never bools or NaN) and decimal numeric text."""
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return not math.isnan(value)
    if isinstance(value, Decimal):
        return not value.is_nan()
    if isinstance(value, int):
        return True
    if isinstance(value, str):
        return _NUMERIC_TEXT.match(value) is not None
    return False


def to_number(value: Any) -> Number:
    """Convert a numeric value (see ``is_numeric``) to a comparable number."""
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation as e:
            raise ValueError(f"Not numeric text: {value!r}") from e
    return value


def _as_comparable(number: Any) -> Any:
    # Decimal does not compare with float
    if isinstance(number, Decimal):
        return number
    if isinstance(number, float):
        return Decimal(repr(number))
    return Decimal(number)


def compare_numbers(left: Any, right: Any) -> int:
    """Three-way comparison of two numeric values."""
    a = _as_comparable(to_number(left))
    b = _as_comparable(to_number(right))
    return (a > b) - (a < b)


def loosely_equal(left: Any, right: Any) -> bool:
    """Equality that treats numeric text and numbers as comparable.

    ``"5" == 5`` and ``"5.0" == 5`` hold; anything else falls back to ``==``.
    """
    if left == right:
        return True
    if is_numeric(left) and is_numeric(right):
        return compare_numbers(left, right) == 0
    return False


def parse_date(value: Any, formats: tuple[str, ...] = ()) -> datetime | date | None:
    """Parse a date/time, returning None when the value is not one.

    Accepts ``date``/``datetime`` instances and text in ISO-8601 or one of
    ``formats``.
    """
    if isinstance(value, (datetime, date)):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def property_of(value: Any, key: str) -> Any:
    """Read a named property from a mapping or attribute-bearing object."""
    if isinstance(value, Mapping):
        return value.get(key, MISSING)
    return getattr(value, key, MISSING)


def is_object_value(value: Any) -> bool:
    if isinstance(value, Mapping):
        return True
    if isinstance(value, (str, bytes, list, tuple, set, frozenset, type)):
        return False
    return hasattr(value, "__dict__")


@dataclass(frozen=True)
class Rule(ABC):
    """Base class for all rule variants."""

    kind: ClassVar[RuleKind]

    message: str

    @abstractmethod
    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        """Return True when ``value`` satisfies this rule."""

    def children(self, value: Any) -> Iterator[tuple[str, RuleSet, Any]]:
        """Yield ``(path segment, child rule set, child value)`` to descend into."""
        return iter(())


@dataclass(frozen=True)
class Required(Rule):
    """Value must be present and non-empty."""

    kind = RuleKind.REQUIRED

    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        return not is_empty(value)


@dataclass(frozen=True)
class IsString(Rule):
    """Value must be text."""

    kind = RuleKind.STRING

    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        return isinstance(value, str)


@dataclass(frozen=True)
class IsNumber(Rule):
    """Value must be a number or numeric text, never a boolean."""

    kind = RuleKind.NUMBER

    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        return is_numeric(value)


@dataclass(frozen=True)
class IsBoolean(Rule):
    """Value must be True or False."""

    kind = RuleKind.BOOLEAN

    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        return isinstance(value, bool)


@dataclass(frozen=True)
class IsArray(Rule):
    """Sequence check; every element is evaluated against ``schema`` if set."""

    kind = RuleKind.ARRAY

    schema: RuleSet | None = None

    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        return isinstance(value, (list, tuple))

    def children(self, value: Any) -> Iterator[tuple[str, RuleSet, Any]]:
        if self.schema is None:
            return
        for index, element in enumerate(value):
            yield f"[{index}]", self.schema, element


@dataclass(frozen=True)
class IsObject(Rule):
    """Structured-value check; each declared property is evaluated against its schema.

    Properties absent from the value are evaluated as ``MISSING``; properties
    not named in the schema are ignored.
    """

    kind = RuleKind.OBJECT

    schema: tuple[tuple[str, RuleSet], ...] | None = None

    def __post_init__(self) -> None:
        # Stored as (name, rule set) pairs so the rule stays hashable
        if isinstance(self.schema, Mapping):
            object.__setattr__(self, "schema", tuple(self.schema.items()))

    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        return is_object_value(value)

    def children(self, value: Any) -> Iterator[tuple[str, RuleSet, Any]]:
        if not self.schema:
            return
        for key, child in self.schema:
            yield f".{key}", child, property_of(value, key)


@dataclass(frozen=True)
class IsDate(Rule):
    """Value must be a date instance or text in a recognized date format."""

    kind = RuleKind.DATE

    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        return parse_date(value, settings.date_formats) is not None


@dataclass(frozen=True)
class IsEmail(Rule):
    """Value must be a syntactically valid email address."""

    kind = RuleKind.EMAIL

    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        if not isinstance(value, str):
            return False
        try:
            validate_email(value, check_deliverability=settings.check_email_deliverability)
        except EmailNotValidError:
            return False
        return True


@dataclass(frozen=True)
class Min(Rule):
    """Inclusive lower bound; skipped for non-numeric values."""

    kind = RuleKind.MIN

    bound: Any = 0

    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        if not is_numeric(value):
            return True
        return compare_numbers(value, self.bound) >= 0


@dataclass(frozen=True)
class Max(Rule):
    """Inclusive upper bound; skipped for non-numeric values."""

    kind = RuleKind.MAX

    bound: Any = 0

    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        if not is_numeric(value):
            return True
        return compare_numbers(value, self.bound) <= 0


@dataclass(frozen=True)
class Equal(Rule):
    """Value must loosely equal ``target``."""

    kind = RuleKind.EQUAL

    target: Any = None

    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        return loosely_equal(value, self.target)


@dataclass(frozen=True)
class Length(Rule):
    """Exact character length; skipped for non-text values."""

    kind = RuleKind.LENGTH

    length: int = 0

    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        if not isinstance(value, str):
            return True
        return len(value) == self.length


@dataclass(frozen=True)
class Regex(Rule):
    """Pattern search; skipped for non-text values."""

    kind = RuleKind.REGEX

    pattern: RegexPattern | None = None

    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        if not isinstance(value, str) or self.pattern is None:
            return True
        return self.pattern.search(value) is not None


@dataclass(frozen=True)
class Enum(Rule):
    """Value must loosely equal one of ``values``."""

    kind = RuleKind.ENUM

    values: tuple[Any, ...] = ()

    def check(self, value: Any, settings: ValidatorSettings) -> bool:
        return any(loosely_equal(value, allowed) for allowed in self.values)


__all__ = [
    "RuleKind",
    "Rule",
    "Required",
    "IsString",
    "IsNumber",
    "IsBoolean",
    "IsArray",
    "IsObject",
    "IsDate",
    "IsEmail",
    "Min",
    "Max",
    "Equal",
    "Length",
    "Regex",
    "Enum",
    "MISSING",
    "is_empty",
    "is_numeric",
    "to_number",
    "compare_numbers",
    "loosely_equal",
    "parse_date",
    "property_of",
]
