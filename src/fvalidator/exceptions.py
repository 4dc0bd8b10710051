"""Exception hierarchy for the fvalidator package.

Every error raised by the package extends ``FValidatorError``, which carries
an optional context dictionary alongside the human-readable message.

Example:
    ```python
    from fvalidator import validator
    from fvalidator.exceptions import ValidationError

    email = validator("email").is_required().is_email()

    try:
        email.evaluate("not-an-email")
    except ValidationError as e:
        print(e)          # Debe ser un correo electrónico válido
        print(e.rule)     # email
        print(e.context)  # {'rule': 'email', 'path': '', ...}
    ```
"""

from typing import Any, Dict


class FValidatorError(Exception):
    """Base exception for the fvalidator package.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (takes precedence if both are given)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = details or context or {}
        self.details = self.context


class ValidationError(FValidatorError):
    """Raised when a value violates a declared rule.

    ``str(error)`` is always the violated rule's message, verbatim. The
    position of the failing node inside nested arrays/objects is only
    available through the context.

    Example:
        ```python
        raise ValidationError(
            "Debe ser un número",
            context={"rule": "number", "path": "items[2]"}
        )
        ```
    """

    @property
    def rule(self) -> str | None:
        """Kind of the violated rule (e.g. ``"min"``)."""
        return self.context.get("rule")

    @property
    def path(self) -> str:
        """Location of the failing value, ``""`` for the top-level value."""
        return self.context.get("path", "")


class ConfigurationError(FValidatorError):
    """Raised when a rule declaration or settings value is invalid.

    Example:
        ```python
        raise ConfigurationError(
            "Length must be a non-negative integer",
            context={"rule": "length", "parameter": -1}
        )
        ```
    """

    pass


class SchemaDepthError(FValidatorError):
    """Raised when nested evaluation exceeds the configured maximum depth."""

    pass


__all__ = [
    "FValidatorError",
    "ValidationError",
    "ConfigurationError",
    "SchemaDepthError",
]
