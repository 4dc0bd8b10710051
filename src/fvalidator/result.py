"""Non-raising validation result type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .exceptions import ValidationError


@dataclass
class ValidationResult:
    """Outcome of checking one value against a rule set.

    Evaluation is fail-fast, so a failed result holds exactly one error: the
    message of the first violated rule.
    """

    valid: bool
    value: Any
    errors: list[str] = field(default_factory=list)
    rule: str | None = None
    path: str = ""

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    @property
    def error(self) -> str | None:
        """The first error message, if any."""
        return self.errors[0] if self.errors else None

    def raise_for_error(self) -> None:
        """Raise the failure as a ValidationError; no-op for valid results."""
        if not self.valid:
            raise ValidationError(
                self.error or "",
                context={"rule": self.rule, "path": self.path, "value": self.value},
            )

    @classmethod
    def success(cls, value: Any) -> ValidationResult:
        """Create a successful validation result.

        Args:
            value: The validated value

        Returns:
            Successful ValidationResult
        """
        return cls(valid=True, value=value)

    @classmethod
    def failure(
        cls,
        value: Any,
        errors: list[str],
        rule: str | None = None,
        path: str = "",
    ) -> ValidationResult:
        """Create a failed validation result.

        Args:
            value: The value that failed validation
            errors: List of error messages
            rule: Kind of the violated rule
            path: Location of the failing value

        Returns:
            Failed ValidationResult
        """
        return cls(valid=False, value=value, errors=errors, rule=rule, path=path)

    @classmethod
    def from_error(cls, value: Any, error: ValidationError) -> ValidationResult:
        return cls.failure(value, [str(error)], rule=error.rule, path=error.path)
