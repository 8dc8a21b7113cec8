"""
Script engine (Python, RestrictedPython).

Exports: ScriptSandbox, ScriptRunResult, compile_script, build_restricted_globals,
find_top_level_bindings.
"""

from .analysis import find_top_level_bindings
from .executor import ScriptRunResult, ScriptSandbox, ScriptTimeoutError
from .sandbox import build_restricted_globals, compile_expression, compile_script

__all__ = [
    "ScriptSandbox",
    "ScriptRunResult",
    "ScriptTimeoutError",
    "compile_script",
    "compile_expression",
    "build_restricted_globals",
    "find_top_level_bindings",
]
