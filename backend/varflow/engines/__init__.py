"""
Engines: script sandbox (RestrictedPython), value coercion, variable store,
chart template resolution, remote calculation.
"""

from varflow.engines.calculator import evaluate_calculation
from varflow.engines.coercion import coerce
from varflow.engines.remote import RemoteCalculationBridge
from varflow.engines.script import ScriptRunResult, ScriptSandbox
from varflow.engines.session import EngineSession
from varflow.engines.store import DataSourceStore, VariableStore
from varflow.engines.template import ChartBoard, TemplateResolver

__all__ = [
    "ChartBoard",
    "DataSourceStore",
    "EngineSession",
    "RemoteCalculationBridge",
    "ScriptRunResult",
    "ScriptSandbox",
    "TemplateResolver",
    "VariableStore",
    "coerce",
    "evaluate_calculation",
]
