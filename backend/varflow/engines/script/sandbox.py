"""
RestrictedPython sandbox for user scripts and expressions.

Allowed: RestrictedPython safe_builtins plus pure helpers (list, dict, set,
sum, min, max, map, filter, enumerate, any, all, reversed, ...), and whatever
names the caller passes in (named inputs, console, result collector).

Blocked: open, exec, eval, __import__, compile, os, subprocess, names and
attributes starting with an underscore.
"""

import builtins
import logging
from typing import Any

from RestrictedPython import compile_restricted_eval, compile_restricted_exec
from RestrictedPython.Eval import default_guarded_getitem, default_guarded_getiter
from RestrictedPython.Guards import (
    full_write_guard,
    guarded_iter_unpack_sequence,
    guarded_unpack_sequence,
    safe_builtins,
    safer_getattr,
)

from ..errors import TranspileError

_log = logging.getLogger(__name__)

# Pure helpers exposed as top-level names; none of them touches the filesystem,
# network or clock.
_HELPER_NAMES = (
    "list",
    "dict",
    "set",
    "frozenset",
    "tuple",
    "len",
    "range",
    "min",
    "max",
    "sum",
    "abs",
    "sorted",
    "reversed",
    "enumerate",
    "map",
    "filter",
    "any",
    "all",
    "round",
    "isinstance",
)

_INPLACE_OPS = {
    "+=": lambda x, y: x + y,
    "-=": lambda x, y: x - y,
    "*=": lambda x, y: x * y,
    "/=": lambda x, y: x / y,
    "//=": lambda x, y: x // y,
    "%=": lambda x, y: x % y,
    "**=": lambda x, y: x**y,
    "<<=": lambda x, y: x << y,
    ">>=": lambda x, y: x >> y,
    "|=": lambda x, y: x | y,
    "^=": lambda x, y: x ^ y,
    "&=": lambda x, y: x & y,
    "@=": lambda x, y: x @ y,
}


def _inplacevar(op: str, x: Any, y: Any) -> Any:
    """Target of ``a += b`` after RestrictedPython rewrites augmented assignment."""
    fn = _INPLACE_OPS.get(op)
    if fn is None:
        raise SyntaxError(f"Unsupported in-place operator: {op}")
    return fn(x, y)


def _apply(f: Any, *args: Any, **kwargs: Any) -> Any:
    """Target of calls using ``*args`` / ``**kwargs``."""
    return f(*args, **kwargs)


def _make_safe_builtins() -> dict[str, Any]:
    """safe_builtins already has bool, int, str, range, zip, exceptions, etc."""
    return dict(safe_builtins)


def _make_guard_globals() -> dict[str, Any]:
    """Guards required by RestrictedPython's rewritten bytecode."""
    return {
        "_getattr_": safer_getattr,
        "_getiter_": default_guarded_getiter,
        "_getitem_": default_guarded_getitem,
        "_iter_unpack_sequence_": guarded_iter_unpack_sequence,
        "_unpack_sequence_": guarded_unpack_sequence,
        "_write_": full_write_guard,
        "_inplacevar_": _inplacevar,
        "_apply_": _apply,
    }


def _format_errors(errors: tuple[str, ...] | list[str]) -> str:
    return "; ".join(errors) if errors else "compile failed"


def compile_script(script: str, filename: str = "<script>") -> Any:
    """
    Compile *script* with RestrictedPython (exec mode).

    Raises TranspileError carrying RestrictedPython's diagnostics; returns a
    code object suitable for exec(code, globals).
    """
    result = compile_restricted_exec(script, filename)
    if result.code is None or result.errors:
        raise TranspileError(_format_errors(result.errors))
    for warning in result.warnings:
        _log.debug("%s: %s", filename, warning)
    return result.code


def compile_expression(expression: str, filename: str = "<expression>") -> Any:
    """Compile a single expression (eval mode). Raises TranspileError."""
    result = compile_restricted_eval(expression, filename)
    if result.code is None or result.errors:
        raise TranspileError(_format_errors(result.errors))
    return result.code


def build_expression_globals() -> dict[str, Any]:
    """
    Globals for evaluating a free-standing expression with no bindings at all:
    only the guard hooks, and no builtins or helpers.
    """
    g: dict[str, Any] = {"__builtins__": {}, "__name__": "expression"}
    g.update(_make_guard_globals())
    return g


def build_restricted_globals(context_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Build the globals dict for exec(compiled, globals): safe builtins, guards,
    helpers, and *context_dict* (named inputs, console, collector).
    """
    safe = _make_safe_builtins()
    g: dict[str, Any] = {
        "__builtins__": safe,
        "__name__": "script",
        "__metaclass__": type,
    }
    g.update(_make_guard_globals())
    for name in _HELPER_NAMES:
        obj = safe.get(name, getattr(builtins, name, None))
        if obj is not None:
            g[name] = obj
    g.update(context_dict)
    return g
