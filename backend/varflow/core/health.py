"""
Health-check helpers for liveness and readiness probes.

Liveness: the process is alive and responsive (no I/O).
Readiness: the script compiler works and the session registry is reachable.
"""

import logging

from varflow.core.sessions import get_session_registry
from varflow.engines.errors import TranspileError
from varflow.engines.script import compile_script

logger = logging.getLogger(__name__)


def check_script_compiler() -> bool:
    """Compile a trivial script with RestrictedPython. Returns True if ok."""
    try:
        compile_script("ok = 1", filename="<health>")
        return True
    except TranspileError:
        logger.warning("Script compiler check failed", exc_info=True)
        return False


def check_session_registry() -> bool:
    try:
        len(get_session_registry())
        return True
    except Exception:
        logger.warning("Session registry check failed", exc_info=True)
        return False


def liveness_check() -> tuple[bool, list[str]]:
    """
    Lightweight liveness probe; confirms the Python process is responsive.
    Return format matches readiness_check for consistency.
    """
    return (True, [])


def readiness_check() -> tuple[bool, list[str]]:
    """Returns (ok, list of failure messages)."""
    failures: list[str] = []

    if not check_script_compiler():
        failures.append("script_compiler")

    if not check_session_registry():
        failures.append("session_registry")

    return (len(failures) == 0, failures)
