"""
ChartBoard: the chart templates of one session, kept resolved.

Every chart is re-resolved when its text changes and whenever the
VariableStore publishes a new revision. A failed resolution records the
error message and keeps the last good document.
"""

import logging
import threading
from dataclasses import dataclass, replace

from ..errors import TemplateError
from ..store.variables import VariableStore
from ..values import JsonValue
from .resolver import TemplateResolver

_log = logging.getLogger(__name__)


class UnknownChartError(LookupError):
    """Raised when a chart id has not been registered."""

    pass


@dataclass(frozen=True)
class ChartTemplate:
    id: str
    template_text: str
    last_resolved: JsonValue = None
    last_error: str | None = None
    resolved_revision: int = -1


class ChartBoard:
    def __init__(
        self,
        variables: VariableStore,
        *,
        resolver: TemplateResolver | None = None,
        subscribe: bool = True,
    ) -> None:
        self._variables = variables
        self._resolver = resolver or TemplateResolver()
        self._charts: dict[str, ChartTemplate] = {}
        self._lock = threading.RLock()
        self._unsubscribe = variables.subscribe(self._on_revision) if subscribe else None

    def close(self) -> None:
        """Stop following the VariableStore."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _resolve(self, chart: ChartTemplate) -> ChartTemplate:
        revision, variables = self._variables.snapshot()
        try:
            resolved = self._resolver.resolve(chart.template_text, variables)
        except TemplateError as e:
            _log.info("Chart %s failed to resolve: %s", chart.id, e)
            return replace(chart, last_error=str(e), resolved_revision=revision)
        return replace(
            chart, last_resolved=resolved, last_error=None, resolved_revision=revision
        )

    def put(self, chart_id: str, template_text: str) -> ChartTemplate:
        """Create or replace the template of *chart_id* and resolve it now."""
        with self._lock:
            current = self._charts.get(chart_id)
            if current is None:
                chart = ChartTemplate(id=chart_id, template_text=template_text)
            else:
                chart = replace(current, template_text=template_text)
            chart = self._resolve(chart)
            self._charts[chart_id] = chart
            return chart

    def get(self, chart_id: str) -> ChartTemplate:
        with self._lock:
            chart = self._charts.get(chart_id)
        if chart is None:
            raise UnknownChartError(f"Chart {chart_id!r} not found")
        return chart

    def charts(self) -> list[ChartTemplate]:
        with self._lock:
            return list(self._charts.values())

    def remove(self, chart_id: str) -> None:
        with self._lock:
            if self._charts.pop(chart_id, None) is None:
                raise UnknownChartError(f"Chart {chart_id!r} not found")

    def refresh(self) -> list[ChartTemplate]:
        """Re-resolve charts that are behind the current revision. Returns those refreshed."""
        current = self._variables.revision()
        refreshed: list[ChartTemplate] = []
        with self._lock:
            for chart_id, chart in list(self._charts.items()):
                if chart.resolved_revision >= current:
                    continue
                chart = self._resolve(chart)
                self._charts[chart_id] = chart
                refreshed.append(chart)
        return refreshed

    def _on_revision(self, revision: int) -> None:
        _log.debug("Variables at revision %d, refreshing charts", revision)
        self.refresh()
