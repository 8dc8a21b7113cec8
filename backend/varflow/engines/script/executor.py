"""
ScriptSandbox: run(source, named_inputs) -> ScriptRunResult.

Compiles with RestrictedPython, finds top-level bindings in the original
source, appends a generated capture step, and runs body + capture in
restricted globals. Runtime failures are recovered into the log.

Optional: SCRIPT_EXEC_TIMEOUT (signal.SIGALRM on Unix, main thread only)
aborts long-running scripts.
Optional: SCRIPT_EXTRA_MODULES (comma-separated) exposes whitelisted modules
(e.g. math, statistics) in script globals.
"""

import importlib
import logging
import re
import signal
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from varflow.core.config import settings

from ..errors import ScriptRuntimeError
from ..values import JsonValue, normalize_value
from .analysis import find_top_level_bindings
from .console import ScriptConsole
from .sandbox import build_restricted_globals, compile_script

_log = logging.getLogger(__name__)

# Only allow top-level module names (e.g. math, statistics), no submodules
_SAFE_MODULE_NAME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9_]*$")

# Dunder names cannot be written by user code, so they never collide.
COLLECTOR_NAME = "__result_collector__"
CONSOLE_NAME = "console"


class ScriptTimeoutError(TimeoutError):
    """Raised when script execution exceeds SCRIPT_EXEC_TIMEOUT."""

    pass


@dataclass
class ScriptRunResult:
    """Output of one ScriptSandbox.run call; not retained by the engine."""

    log_lines: list[str] = field(default_factory=list)
    bindings: dict[str, JsonValue] = field(default_factory=dict)
    error: str | None = None
    exception: ScriptRuntimeError | None = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.error is None


def build_capture_source(names: list[str]) -> str:
    """
    Generate the closing capture step: copy each name into the collector,
    or None when the name was declared but never assigned.
    """
    lines: list[str] = []
    for name in names:
        lines.append("try:")
        lines.append(f"    {COLLECTOR_NAME}[{name!r}] = {name}")
        lines.append("except NameError:")
        lines.append(f"    {COLLECTOR_NAME}[{name!r}] = None")
    return "\n".join(lines) + "\n"


def _inject_extra_modules(g: dict[str, Any]) -> None:
    """Expose whitelisted modules named in SCRIPT_EXTRA_MODULES. Scripts cannot import."""
    raw = (settings.SCRIPT_EXTRA_MODULES or "").strip()
    if not raw:
        return
    for name in (s.strip() for s in raw.split(",") if s.strip()):
        if not _SAFE_MODULE_NAME_RE.match(name):
            continue
        try:
            g[name] = importlib.import_module(name)
        except ImportError:
            _log.warning("SCRIPT_EXTRA_MODULES: cannot import %s", name)


def _exec_with_timeout(codes: tuple[Any, ...], g: dict[str, Any], timeout_sec: int) -> None:
    """Run exec for each code object under signal.SIGALRM."""

    def _handler(signum: int, frame: Any) -> None:
        raise ScriptTimeoutError(f"Script execution timed out after {timeout_sec}s")

    old = signal.signal(signal.SIGALRM, _handler)
    try:
        signal.alarm(timeout_sec)
        try:
            for code in codes:
                exec(code, g)  # noqa: S102 - restricted environment
        finally:
            signal.alarm(0)
    finally:
        signal.signal(signal.SIGALRM, old)


def _can_use_alarm(timeout: int | None) -> bool:
    return (
        timeout is not None
        and timeout > 0
        and hasattr(signal, "SIGALRM")
        and threading.current_thread() is threading.main_thread()
    )


class ScriptSandbox:
    """
    Run a user script with only the named inputs, ``console`` and the result
    collector visible, and harvest every top-level binding.
    """

    def __init__(self, *, timeout: int | None = None) -> None:
        self._timeout = timeout if timeout is not None else settings.SCRIPT_EXEC_TIMEOUT

    def run(self, source_code: str, named_inputs: Mapping[str, Any] | None = None) -> ScriptRunResult:
        """
        Transpile, analyse, execute. TranspileError propagates and nothing runs.
        A runtime exception becomes one ``Runtime error: ...`` log line; every
        declared name then maps to None since the capture step never ran.
        """
        body = compile_script(source_code)
        names = find_top_level_bindings(source_code)
        capture = compile(build_capture_source(names), "<capture>", "exec")
        _log.debug("Script top-level bindings: %s", names)

        console = ScriptConsole(logger_instance=_log)
        collector: dict[str, Any] = {}
        context: dict[str, Any] = dict(named_inputs or {})
        context[CONSOLE_NAME] = console
        context["_print_"] = console.printer()
        context[COLLECTOR_NAME] = collector
        g = build_restricted_globals(context)
        _inject_extra_modules(g)

        failure: ScriptRuntimeError | None = None
        try:
            if _can_use_alarm(self._timeout):
                _exec_with_timeout((body, capture), g, self._timeout)
            else:
                exec(body, g)  # noqa: S102 - restricted environment
                exec(capture, g)  # noqa: S102 - generated code
        except Exception as e:
            failure = ScriptRuntimeError(f"{type(e).__name__}: {e}")
            failure.__cause__ = e
            console._record_failure(f"Runtime error: {failure}")
            collector = {name: None for name in names}

        bindings = {name: normalize_value(collector.get(name)) for name in names}
        return ScriptRunResult(
            log_lines=console.lines,
            bindings=bindings,
            error=str(failure) if failure is not None else None,
            exception=failure,
        )
