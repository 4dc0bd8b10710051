"""Validator settings and process-wide defaults.

Settings can be built from a dictionary, a YAML or JSON file, or environment
variables:

    FVALIDATOR_MAX_DEPTH=16
    FVALIDATOR_CHECK_EMAIL_DELIVERABILITY=false
    FVALIDATOR_DATE_FORMATS=%d/%m/%Y;%Y/%m/%d
    FVALIDATOR_MESSAGES__MIN="Debe ser al menos {min}"
"""

from __future__ import annotations

import json
import logging
import os
import string
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Union

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigurationError
from .rules import RuleKind

logger = logging.getLogger(__name__)


DEFAULT_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%m/%d/%Y",
    "%d %B %Y",
    "%B %d, %Y",
)


@dataclass(frozen=True)
class ValidatorSettings:
    """Options consulted while declaring and evaluating rules.

    Attributes:
        max_depth: Maximum nesting depth of array/object evaluation
        date_formats: ``strptime`` formats tried after ISO-8601 by the date rule
        check_email_deliverability: Whether the email rule resolves the domain
        messages: Default message template overrides keyed by rule kind name
    """

    max_depth: int = 64
    date_formats: tuple[str, ...] = DEFAULT_DATE_FORMATS
    check_email_deliverability: bool = False
    messages: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ConfigurationError(
                f"max_depth must be a positive integer, got {self.max_depth!r}",
                context={"setting": "max_depth"},
            )
        if isinstance(self.date_formats, str):
            object.__setattr__(self, "date_formats", tuple(
                fmt.strip() for fmt in self.date_formats.split(";") if fmt.strip()
            ))
        else:
            object.__setattr__(self, "date_formats", tuple(self.date_formats))
        if not isinstance(self.check_email_deliverability, bool):
            raise ConfigurationError(
                "check_email_deliverability must be a boolean",
                context={"setting": "check_email_deliverability"},
            )
        # Normalizes keys and rejects unknown rule kinds
        messages = {
            RuleKind.parse(kind).value: str(template)
            for kind, template in dict(self.messages).items()
        }
        for kind, template in messages.items():
            _check_template(kind, template)
        object.__setattr__(self, "messages", messages)

    @classmethod
    def from_dict(cls, data: dict) -> ValidatorSettings:
        """Create settings from a dictionary.

        Raises:
            ConfigurationError: If the dictionary contains unknown settings
        """
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Settings must be a mapping, got {type(data).__name__}"
            )
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown settings: {', '.join(sorted(unknown))}",
                context={"known": sorted(known)},
            )
        return cls(**data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> ValidatorSettings:
        """Create settings from a YAML or JSON file.

        Raises:
            ConfigurationError: If the file is missing or in an unsupported format
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Settings file not found: {path}", context={"path": str(path)})

        suffix = path.suffix.lower()
        with open(path, encoding="utf-8") as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigurationError(f"Unsupported file format: {suffix}", context={"path": str(path)})

        logger.debug(f"Loaded validator settings from {path}")
        return cls.from_dict(data or {})

    @classmethod
    def from_env(cls, prefix: str = "FVALIDATOR_", base: ValidatorSettings | None = None) -> ValidatorSettings:
        """Create settings from environment variables layered over ``base``.

        ``<PREFIX><SETTING>`` sets a top-level setting and
        ``<PREFIX>MESSAGES__<KIND>`` overrides one message template.
        """
        base = base or cls()
        changes: dict[str, Any] = {}
        messages = dict(base.messages)

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            name = key[len(prefix):].lower()
            if name.startswith("messages__"):
                messages[name[len("messages__"):]] = value
            elif name == "date_formats":
                changes[name] = value
            else:
                changes[name] = _parse_value(value)

        if messages != base.messages:
            changes["messages"] = messages
        if changes:
            logger.debug(f"Applying environment overrides: {sorted(changes)}")
        return base.merged(**changes)

    def merged(self, **changes: Any) -> ValidatorSettings:
        """Return a copy with ``changes`` applied."""
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown settings: {', '.join(sorted(unknown))}",
                context={"known": sorted(known)},
            )
        return replace(self, **changes)


def _check_template(kind: str, template: str) -> None:
    """Reject message templates that `str.format` cannot parse."""
    try:
        list(string.Formatter().parse(template))
    except ValueError as e:
        raise ConfigurationError(
            f"Message template for '{kind}' is malformed: {e}",
            context={"setting": "messages", "rule": kind, "template": template},
        ) from e


def _parse_value(value: str) -> Any:
    """Parse an environment variable value to bool, int, float or string."""
    if value.lower() in ["true", "yes"]:
        return True
    elif value.lower() in ["false", "no"]:
        return False

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value


_default_settings = ValidatorSettings()


def get_settings() -> ValidatorSettings:
    """Settings used by rule sets created without explicit settings."""
    return _default_settings


def configure(settings: ValidatorSettings | None = None, **changes: Any) -> ValidatorSettings:
    """Replace the process-wide default settings.

    Args:
        settings: New defaults (the current defaults if omitted)
        **changes: Individual settings applied on top

    Returns:
        The new default settings
    """
    global _default_settings
    _default_settings = (settings or _default_settings).merged(**changes)
    return _default_settings


def reset_settings() -> ValidatorSettings:
    """Restore the built-in default settings."""
    global _default_settings
    _default_settings = ValidatorSettings()
    return _default_settings
