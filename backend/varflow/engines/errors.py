"""
Engine error taxonomy.

Every error carries the original diagnostic message verbatim so callers can
show it to the user as-is.
"""


class EngineError(ValueError):
    """Base class for all engine failures."""

    pass


class ParseError(EngineError):
    """Raised when text is not valid JSON where JSON is required."""

    pass


class TranspileError(EngineError):
    """Raised when a script cannot be compiled by RestrictedPython. Nothing was executed."""

    pass


class ScriptRuntimeError(EngineError):
    """An exception raised while a script body was running.

    Recovered inside ScriptSandbox.run: it only surfaces as a log line and
    ScriptRunResult.error, never propagates to the caller.
    """

    pass


class CalculationError(EngineError):
    """Raised when the remote executor fails (transport, non-2xx or remote exception)."""

    pass


class TemplateError(EngineError):
    """Raised when a template is not valid JSON after placeholder substitution."""

    pass


class InvalidNameError(EngineError):
    """Raised for data source / variable names that cannot be bound inside a script."""

    pass


class UnknownDataSourceError(EngineError, LookupError):
    """Raised when a data source name has not been registered."""

    pass
