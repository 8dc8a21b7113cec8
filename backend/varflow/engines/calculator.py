"""
Remote executor side of a calculation: evaluate ``logic`` against existing
variables and return one value.

``logic`` is either a single expression (``[x * 2 for x in data]``) or a
function body that ends with ``return``. Both run in the same restricted
globals as scripts.
"""

import ast
import logging
import textwrap
from collections.abc import Mapping
from typing import Any

from .errors import CalculationError, TranspileError
from .script.console import ScriptConsole
from .script.sandbox import build_restricted_globals, compile_expression, compile_script
from .values import JsonValue, normalize_value

_log = logging.getLogger(__name__)

_FUNCTION_NAME = "calculate"


def _is_expression(logic: str) -> bool:
    try:
        ast.parse(logic, mode="eval")
    except SyntaxError:
        return False
    return True


def _as_function(logic: str) -> str:
    return f"def {_FUNCTION_NAME}():\n" + textwrap.indent(textwrap.dedent(logic), "    ")


def evaluate_calculation(logic: str, variables: Mapping[str, Any] | None = None) -> JsonValue:
    """Run *logic* and return its value. Raises CalculationError with the underlying message."""
    if not logic or not logic.strip():
        raise CalculationError("Calculation logic is empty")

    console = ScriptConsole(logger_instance=_log)
    context: dict[str, Any] = dict(variables or {})
    context["console"] = console
    context["_print_"] = console.printer()
    g = build_restricted_globals(context)

    try:
        if _is_expression(logic.strip()):
            value = eval(compile_expression(logic.strip(), "<calculation>"), g)  # noqa: S307
        else:
            exec(compile_script(_as_function(logic), "<calculation>"), g)  # noqa: S102
            value = g[_FUNCTION_NAME]()
    except TranspileError as e:
        raise CalculationError(str(e)) from e
    except Exception as e:
        _log.info("Calculation failed: %s", e)
        raise CalculationError(f"{type(e).__name__}: {e}") from e
    return normalize_value(value)
