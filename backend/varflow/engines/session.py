"""
EngineSession: everything one user session works with.

Data sources, variables and charts are scoped to the session object instead
of process-wide registries, so sessions never see each other's names.
"""

import json
import logging
import threading
from collections.abc import Iterable

from varflow.core.config import settings

from .remote import RemoteCalculationBridge
from .script import ScriptRunResult, ScriptSandbox
from .store import DataSource, DataSourceStore, VariableStore
from .tables import InMemoryTableProvider, TableProvider
from .template import ChartBoard, TemplateResolver
from .values import JsonValue

_log = logging.getLogger(__name__)

QUERY_SOURCE_PREFIX = "query_"


class EngineSession:
    def __init__(
        self,
        session_id: str,
        *,
        data_source_names: Iterable[str] | None = None,
        table_provider: TableProvider | None = None,
        bridge: RemoteCalculationBridge | None = None,
        sandbox: ScriptSandbox | None = None,
    ) -> None:
        self.id = session_id
        names = settings.default_data_source_names if data_source_names is None else data_source_names
        self.data_sources = DataSourceStore(names)
        self.variables = VariableStore()
        self.resolver = TemplateResolver()
        self.charts = ChartBoard(self.variables, resolver=self.resolver)
        self.tables: TableProvider = table_provider or InMemoryTableProvider()
        self.sandbox = sandbox or ScriptSandbox()
        self.bridge = bridge or RemoteCalculationBridge(
            self.variables,
            url=settings.REMOTE_CALC_URL,
            timeout=settings.REMOTE_CALC_TIMEOUT,
        )
        self._query_counter = 0
        self._counter_lock = threading.Lock()

    def run_script(self, source_code: str) -> ScriptRunResult:
        """
        Run *source_code* against the coerced data sources and publish its
        bindings. A run that hit a runtime error publishes nothing.
        TranspileError propagates.
        """
        result = self.sandbox.run(source_code, self.data_sources.named_inputs())
        if result.ok:
            self.variables.set_many(result.bindings)
        else:
            _log.info("Session %s: script failed, variables unchanged: %s", self.id, result.error)
        return result

    async def calculate(self, logic: str, variable_name: str) -> JsonValue:
        """Remote calculation; raises CalculationError."""
        return await self.bridge.invoke(logic, variable_name)

    def resolve(self, template_text: str) -> JsonValue:
        """Resolve an ad-hoc template against the current variables; raises TemplateError."""
        return self.resolver.resolve(template_text, self.variables.get_all())

    def _next_query_name(self) -> str:
        with self._counter_lock:
            while True:
                self._query_counter += 1
                name = f"{QUERY_SOURCE_PREFIX}{self._query_counter}"
                if name not in self.data_sources:
                    return name

    def import_table(self, table_name: str, source_name: str | None = None) -> DataSource:
        """
        Copy a table into a data source as indented JSON rows. Without
        *source_name*, a fresh ``query_<n>`` source is created.
        Raises UnknownTableError / InvalidNameError.
        """
        rows = self.tables.fetch_table(table_name)
        name = source_name or self._next_query_name()
        self.data_sources.create(name)
        return self.data_sources.set_text(name, json.dumps(rows, indent=2, default=str))

    def close(self) -> None:
        self.charts.close()
