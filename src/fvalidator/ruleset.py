"""Rule sets with a fluent declaration API and a fail-fast evaluator.

A ``RuleSet`` is an immutable value. Every declaration returns a new rule set
with the rule added (or replaced, when the same kind was already declared),
so partially built rule sets can be shared and extended freely:

    ```python
    from fvalidator import validator

    base = validator("age").is_number()
    adult = base.is_min(18, "Debe ser mayor de edad")

    adult.evaluate(30)   # passes
    adult.evaluate(12)   # raises ValidationError("Debe ser mayor de edad")
    base.evaluate(12)    # passes, base is unchanged
    ```

Evaluation visits the declared rules in the fixed order given by
``RuleKind`` and raises on the first violation. Array and object rules
descend into their child rule sets after the container check itself passes.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from .exceptions import ConfigurationError, SchemaDepthError, ValidationError
from .messages import MessageCatalog
from .result import ValidationResult
from .rules import (
    Enum,
    Equal,
    IsArray,
    IsBoolean,
    IsDate,
    IsEmail,
    IsNumber,
    IsObject,
    IsString,
    Length,
    Max,
    Min,
    Regex,
    Required,
    Rule,
    RuleKind,
    is_empty,
    is_numeric,
)
from .settings import ValidatorSettings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleSet:
    """Ordered collection of declared rules for one value.

    Attributes:
        name: Optional label, reported in error context only
        rules: Declared rules, sorted in evaluation order
        settings: Settings used for default messages and evaluation;
            the process-wide defaults when None
    """

    name: str | None = None
    rules: tuple[Rule, ...] = ()
    settings: ValidatorSettings | None = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.settings is None:
            object.__setattr__(self, "settings", get_settings())

    # Declaration API

    def with_name(self, name: str) -> RuleSet:
        """Return a copy labelled ``name``."""
        return replace(self, name=name)

    def is_required(self, message: str | None = None) -> RuleSet:
        """Value must be present and non-empty (see ``rules.is_empty``)."""
        return self._declare(Required(self._message(RuleKind.REQUIRED, message)))

    def is_string(self, message: str | None = None) -> RuleSet:
        return self._declare(IsString(self._message(RuleKind.STRING, message)))

    def is_number(self, message: str | None = None) -> RuleSet:
        """Value must be a number or numeric text."""
        return self._declare(IsNumber(self._message(RuleKind.NUMBER, message)))

    def is_boolean(self, message: str | None = None) -> RuleSet:
        return self._declare(IsBoolean(self._message(RuleKind.BOOLEAN, message)))

    def is_array(self, schema: RuleSet | None = None, message: str | None = None) -> RuleSet:
        """Value must be a list or tuple.

        Args:
            schema: Rule set applied to every element, in order
            message: Error message when the value is not a sequence

        Raises:
            ConfigurationError: If ``schema`` is not a RuleSet
        """
        if schema is not None and not isinstance(schema, RuleSet):
            raise ConfigurationError(
                f"Array schema must be a RuleSet, got {type(schema).__name__}",
                context={"rule": RuleKind.ARRAY.value, "name": self.name},
            )
        return self._declare(IsArray(self._message(RuleKind.ARRAY, message), schema=schema))

    def is_object(
        self,
        schema: Mapping[str, RuleSet] | None = None,
        message: str | None = None,
    ) -> RuleSet:
        """Value must be a mapping or an attribute-bearing object.

        Args:
            schema: Rule set per property name. Absent properties are
                evaluated as ``MISSING``; undeclared properties are ignored.
            message: Error message when the value is not structured

        Raises:
            ConfigurationError: If ``schema`` is not a mapping of names to RuleSets
        """
        if schema is not None:
            if not isinstance(schema, Mapping):
                raise ConfigurationError(
                    f"Object schema must be a mapping, got {type(schema).__name__}",
                    context={"rule": RuleKind.OBJECT.value, "name": self.name},
                )
            invalid = [
                key for key, child in schema.items()
                if not isinstance(key, str) or not isinstance(child, RuleSet)
            ]
            if invalid:
                raise ConfigurationError(
                    f"Object schema entries must map names to RuleSets: {invalid}",
                    context={"rule": RuleKind.OBJECT.value, "name": self.name},
                )
            schema = tuple(schema.items())
        return self._declare(IsObject(self._message(RuleKind.OBJECT, message), schema=schema))

    def is_date(self, message: str | None = None) -> RuleSet:
        """Value must be a date/datetime or parse as one."""
        return self._declare(IsDate(self._message(RuleKind.DATE, message)))

    def is_email(self, message: str | None = None) -> RuleSet:
        return self._declare(IsEmail(self._message(RuleKind.EMAIL, message)))

    def is_min(self, bound: Any, message: str | None = None) -> RuleSet:
        """Numeric value must be >= ``bound``. Non-numeric values are skipped."""
        self._require_number(RuleKind.MIN, bound)
        return self._declare(Min(self._message(RuleKind.MIN, message, min=bound), bound=bound))

    def is_max(self, bound: Any, message: str | None = None) -> RuleSet:
        """Numeric value must be <= ``bound``. Non-numeric values are skipped."""
        self._require_number(RuleKind.MAX, bound)
        return self._declare(Max(self._message(RuleKind.MAX, message, max=bound), bound=bound))

    def is_equal(self, target: Any, message: str | None = None) -> RuleSet:
        """Value must loosely equal ``target`` (see ``rules.loosely_equal``)."""
        return self._declare(
            Equal(self._message(RuleKind.EQUAL, message, value=target), target=target)
        )

    def is_length(self, length: int, message: str | None = None) -> RuleSet:
        """Text value must have exactly ``length`` characters. Non-text values are skipped."""
        if isinstance(length, bool) or not isinstance(length, int) or length < 0:
            raise ConfigurationError(
                f"Length must be a non-negative integer, got {length!r}",
                context={"rule": RuleKind.LENGTH.value, "name": self.name},
            )
        return self._declare(
            Length(self._message(RuleKind.LENGTH, message, length=length), length=length)
        )

    def is_regex(self, pattern: str | re.Pattern, message: str | None = None) -> RuleSet:
        """Text value must contain a match of ``pattern``. Non-text values are skipped."""
        try:
            compiled = re.compile(pattern)
        except (re.error, TypeError) as e:
            raise ConfigurationError(
                f"Invalid regular expression {pattern!r}: {e}",
                context={"rule": RuleKind.REGEX.value, "name": self.name},
            ) from e
        return self._declare(Regex(self._message(RuleKind.REGEX, message), pattern=compiled))

    def is_enum(self, values: Iterable[Any], message: str | None = None) -> RuleSet:
        """Value must loosely equal one of ``values``."""
        if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
            raise ConfigurationError(
                f"Enum values must be a collection, got {type(values).__name__}",
                context={"rule": RuleKind.ENUM.value, "name": self.name},
            )
        allowed = tuple(values)
        if not allowed:
            raise ConfigurationError(
                "Enum requires at least one allowed value",
                context={"rule": RuleKind.ENUM.value, "name": self.name},
            )
        return self._declare(Enum(self._message(RuleKind.ENUM, message), values=allowed))

    # Introspection

    @property
    def kinds(self) -> tuple[RuleKind, ...]:
        return tuple(rule.kind for rule in self.rules)

    @property
    def messages(self) -> dict[RuleKind, str]:
        """Message raised per declared rule kind."""
        return {rule.kind: rule.message for rule in self.rules}

    @property
    def array_schema(self) -> RuleSet | None:
        rule = self.get(RuleKind.ARRAY)
        return rule.schema if isinstance(rule, IsArray) else None

    @property
    def object_schema(self) -> Mapping[str, RuleSet] | None:
        rule = self.get(RuleKind.OBJECT)
        if not isinstance(rule, IsObject) or rule.schema is None:
            return None
        return MappingProxyType(dict(rule.schema))

    def get(self, kind: RuleKind | str) -> Rule | None:
        """Return the declared rule of ``kind``, or None."""
        kind = RuleKind.parse(kind)
        for rule in self.rules:
            if rule.kind is kind:
                return rule
        return None

    def __contains__(self, kind: object) -> bool:
        return kind in self.kinds

    def __len__(self) -> int:
        return len(self.rules)

    # Evaluation

    def evaluate(self, value: Any) -> None:
        """Check ``value`` against every declared rule.

        Raises:
            ValidationError: With the message of the first violated rule
            SchemaDepthError: If nesting exceeds ``settings.max_depth``
        """
        self._evaluate(value, "", 0, self.settings)

    def check(self, value: Any) -> ValidationResult:
        """Like ``evaluate`` but returns a ValidationResult instead of raising."""
        try:
            self.evaluate(value)
        except ValidationError as e:
            return ValidationResult.from_error(value, e)
        return ValidationResult.success(value)

    def is_valid(self, value: Any) -> bool:
        return self.check(value).valid

    def check_many(self, values: Iterable[Any], stop_on_error: bool = False) -> list[ValidationResult]:
        """Check multiple values independently.

        Args:
            values: Values to check
            stop_on_error: If True, stop after the first failed value

        Returns:
            List of ValidationResults, one per checked value
        """
        results = []
        for value in values:
            result = self.check(value)
            results.append(result)
            if not result.valid and stop_on_error:
                break
        return results

    def _evaluate(self, value: Any, path: str, depth: int, settings: ValidatorSettings) -> None:
        if depth > settings.max_depth:
            raise SchemaDepthError(
                f"Maximum validation depth of {settings.max_depth} exceeded",
                context={"path": path, "name": self.name, "max_depth": settings.max_depth},
            )

        for rule in self.rules:
            # An empty value that passed (or had no) required check is accepted as-is
            if rule.kind is not RuleKind.REQUIRED and is_empty(value):
                return
            if not rule.check(value, settings):
                self._fail(rule, value, path)
            for segment, child, child_value in rule.children(value):
                child._evaluate(child_value, _join(path, segment), depth + 1, settings)

    def _fail(self, rule: Rule, value: Any, path: str) -> None:
        logger.debug(f"Rule '{rule.kind.value}' failed at '{path or '<root>'}' ({self.name or 'unnamed'})")
        raise ValidationError(
            rule.message,
            context={"rule": rule.kind.value, "path": path, "name": self.name, "value": value},
        )

    # Helpers

    def _declare(self, rule: Rule) -> RuleSet:
        rules = [existing for existing in self.rules if existing.kind is not rule.kind]
        rules.append(rule)
        rules.sort(key=lambda r: r.kind.order)
        return replace(self, rules=tuple(rules))

    def _message(self, kind: RuleKind, message: str | None, **params: Any) -> str:
        if message is not None:
            return message
        return MessageCatalog(self.settings.messages).render(kind, **params)

    def _require_number(self, kind: RuleKind, bound: Any) -> None:
        if not is_numeric(bound):
            raise ConfigurationError(
                f"Bound for '{kind.value}' must be numeric, got {bound!r}",
                context={"rule": kind.value, "name": self.name},
            )


def _join(path: str, segment: str) -> str:
    if not path and segment.startswith("."):
        return segment[1:]
    return path + segment


def validator(name: str | None = None, settings: ValidatorSettings | None = None) -> RuleSet:
    """Create an empty rule set, optionally named.

    Args:
        name: Label for the validated field
        settings: Settings to use instead of the process-wide defaults

    Returns:
        New RuleSet with no rules declared
    """
    return RuleSet(name, settings=settings)
