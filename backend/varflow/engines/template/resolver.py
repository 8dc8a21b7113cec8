"""
Chart template resolver: substitute ``${name}`` placeholders, then parse JSON.

For every variable, in the order of the mapping given, the quoted form
``"${name}"`` is replaced first and then the bare form ``${name}``, both with
the compact JSON of the value. Placeholders naming unknown variables are left
as they are; any placeholder still unresolved, quoted or bare, fails resolution.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from ..errors import ParseError, TemplateError
from ..values import JsonValue, dumps, normalize_value, parse_json

_log = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\$\{(?P<name>[^{}]+)\}")

_PREVIEW_LIMIT = 500


def substitute(template_text: str, variables: Mapping[str, Any]) -> str:
    """Placeholder substitution only; no parsing."""
    result = template_text
    for name, value in variables.items():
        replacement = dumps(normalize_value(value))
        placeholder = "${" + name + "}"
        result = result.replace('"' + placeholder + '"', replacement)
        result = result.replace(placeholder, replacement)
    return result


def find_placeholders(template_text: str) -> list[str]:
    """Variable names referenced by ``${...}`` in *template_text*, first occurrence order."""
    seen: dict[str, None] = {}
    for match in _PLACEHOLDER_RE.finditer(template_text):
        seen.setdefault(match.group("name"), None)
    return list(seen)


def missing_placeholders(template_text: str, variables: Mapping[str, Any]) -> list[str]:
    """Placeholders that *variables* cannot satisfy."""
    return [name for name in find_placeholders(template_text) if name not in variables]


class TemplateResolver:
    """Resolves JSON-shaped chart templates against variable values."""

    def resolve(self, template_text: str, variables: Mapping[str, Any]) -> JsonValue:
        """
        Substitute every placeholder and parse the result.

        Raises TemplateError carrying the JSON diagnostic, or naming the
        unresolved placeholders when the text parsed; the substituted text is
        never returned on failure.
        """
        substituted = substitute(template_text, variables)
        missing = missing_placeholders(template_text, variables)
        try:
            resolved = parse_json(substituted)
        except ParseError as e:
            if missing:
                _log.debug("Template has unresolved placeholders: %s", missing)
            raise TemplateError(str(e)) from e
        if missing:
            raise TemplateError(
                "Unresolved placeholders: " + ", ".join("${" + name + "}" for name in missing)
            )
        _log.debug(
            "Template resolved with %d variables: %s",
            len(variables),
            substituted[:_PREVIEW_LIMIT],
        )
        return resolved
