"""
Console object for script execution: console.log collects lines instead of printing.

``print(...)`` inside a script is routed to the same collector through
RestrictedPython's ``_print_`` hook.
"""

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def format_log_arg(arg: Any) -> str:
    """Containers render as indented JSON, everything else via str()."""
    if isinstance(arg, (dict, list, tuple)):
        try:
            return json.dumps(arg, indent=2, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            return str(arg)
    return str(arg)


class ScriptConsole:
    """The ``console`` name visible inside a script."""

    __slots__ = ("_lines", "_logger")

    def __init__(self, *, logger_instance: logging.Logger | None = None) -> None:
        self._lines: list[str] = []
        self._logger = logger_instance or logger

    def log(self, *args: Any) -> None:
        line = " ".join(format_log_arg(a) for a in args)
        self._lines.append(line)
        self._logger.debug("script console: %s", line)

    def _record_failure(self, message: str) -> None:
        """Runtime-error line appended by the sandbox; not reachable from scripts."""
        self._lines.append(message)
        self._logger.info("script error: %s", message)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def printer(self) -> Any:
        """Factory bound to ``_print_`` in script globals."""
        console = self

        class _ConsolePrinter:
            def __init__(self, _getattr_: Any = None) -> None:
                self._getattr_ = _getattr_

            def _call_print(self, *objects: Any, **kwargs: Any) -> None:
                sep = kwargs.get("sep")
                if sep is None:
                    console.log(*objects)
                else:
                    console.log(str(sep).join(format_log_arg(o) for o in objects))

            def __call__(self) -> str:
                return "\n".join(console.lines)

        return _ConsolePrinter
