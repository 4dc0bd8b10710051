"""Default error messages for each rule kind."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .exceptions import ConfigurationError
from .rules import RuleKind


DEFAULT_MESSAGES: dict[RuleKind, str] = {
    RuleKind.REQUIRED: "Este campo es obligatorio",
    RuleKind.STRING: "Debe ser una cadena de texto",
    RuleKind.NUMBER: "Debe ser un número",
    RuleKind.BOOLEAN: "Debe ser un valor booleano",
    RuleKind.ARRAY: "Debe ser un array",
    RuleKind.OBJECT: "Debe ser un objeto",
    RuleKind.DATE: "Debe ser una fecha válida",
    RuleKind.EMAIL: "Debe ser un correo electrónico válido",
    RuleKind.MIN: "Debe ser mayor o igual a {min}",
    RuleKind.MAX: "Debe ser menor o igual a {max}",
    RuleKind.EQUAL: "Debe ser igual a {value}",
    RuleKind.LENGTH: "Debe tener una longitud de {length} caracteres",
    RuleKind.REGEX: "Formato inválido",
    RuleKind.ENUM: "Valor no permitido",
}


class MessageCatalog:
    """Renders the default message of a rule kind.

    Templates use ``str.format`` placeholders named after the rule
    parameter. Overrides replace individual templates and are keyed by
    rule kind or by its string value (``"min"``).
    """

    def __init__(self, overrides: Mapping[RuleKind | str, str] | None = None):
        self.templates = dict(DEFAULT_MESSAGES)
        for key, template in (overrides or {}).items():
            self.templates[RuleKind.parse(key)] = template

    def template(self, kind: RuleKind) -> str:
        return self.templates[kind]

    def render(self, kind: RuleKind, **params: Any) -> str:
        """Render the template for ``kind`` with the rule parameters.

        Raises:
            ConfigurationError: If the template is malformed or references an
                unknown placeholder
        """
        template = self.templates[kind]
        try:
            return template.format(**params)
        except (KeyError, IndexError) as e:
            raise ConfigurationError(
                f"Message template for '{kind.value}' has an unknown placeholder: {e}",
                context={"rule": kind.value, "template": template},
            ) from e
        except ValueError as e:
            raise ConfigurationError(
                f"Message template for '{kind.value}' is malformed: {e}",
                context={"rule": kind.value, "template": template},
            ) from e
