"""fvalidator - Fluent, composable value validation.

Build a validator by chaining rule declarations, then evaluate it against
any runtime value. Evaluation is fail-fast: the first violated rule raises a
``ValidationError`` carrying that rule's message.

Modules:
    ruleset: RuleSet declaration API and evaluator, ``validator()`` factory
    rules: Rule kinds, rule variants and the value predicates they use
    messages: Default (Spanish) error messages
    result: Non-raising ValidationResult
    settings: ValidatorSettings and process-wide defaults
    exceptions: Exception hierarchy

Quick Examples:

    ```python
    from fvalidator import validator, ValidationError

    user = validator("user").is_required().is_object({
        "name": validator("name").is_required().is_string(),
        "age": validator("age").is_number().is_min(0),
        "tags": validator("tags").is_array(validator().is_string()),
    })

    try:
        user.evaluate({"name": "Ana", "age": -1})
    except ValidationError as e:
        print(e)         # Debe ser mayor o igual a 0
        print(e.path)    # age
    ```
"""

from .exceptions import (
    ConfigurationError,
    FValidatorError,
    SchemaDepthError,
    ValidationError,
)
from .messages import DEFAULT_MESSAGES, MessageCatalog
from .result import ValidationResult
from .rules import MISSING, Rule, RuleKind, is_empty
from .ruleset import RuleSet, validator
from .settings import ValidatorSettings, configure, get_settings, reset_settings

__version__ = "0.1.0"

__all__ = [
    # Core
    "RuleSet",
    "validator",
    "Rule",
    "RuleKind",
    "MISSING",
    "is_empty",
    # Results and errors
    "ValidationResult",
    "FValidatorError",
    "ValidationError",
    "ConfigurationError",
    "SchemaDepthError",
    # Messages
    "DEFAULT_MESSAGES",
    "MessageCatalog",
    # Settings
    "ValidatorSettings",
    "configure",
    "get_settings",
    "reset_settings",
]
