"""
ValueCoercion: turn stored text into a structured value.

Order, first success wins:
1. strict JSON (no ``NaN`` / ``Infinity``);
2. a free-standing Python expression evaluated in the sandbox with no bindings,
   not even builtins (covers ``[1, 2, 3]``, ``{'a': 1}``, ``(1, 2)``,
   ``2 * 21``, ``True``);
3. the original text.

coerce never raises.
"""

import logging
from typing import Any

from .errors import TranspileError
from .script.sandbox import build_expression_globals, compile_expression
from .values import JsonValue, loads_strict, normalize_value

_log = logging.getLogger(__name__)


def _evaluate_expression(text: str) -> Any:
    code = compile_expression(text, filename="<coerce>")
    return eval(code, build_expression_globals())  # noqa: S307 - restricted environment


def coerce(text: Any) -> JsonValue:
    """Return the structured value of *text*; falls back to the text itself."""
    if not isinstance(text, str):
        return normalize_value(text)
    try:
        return normalize_value(loads_strict(text))
    except (ValueError, RecursionError):
        pass
    try:
        return normalize_value(_evaluate_expression(text))
    except TranspileError:
        pass
    except Exception as e:
        _log.debug("coerce: expression evaluation failed: %s", e)
    return text
