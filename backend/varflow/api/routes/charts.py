"""
Chart templates: ad-hoc resolution and the session's resolved charts.

Charts are re-resolved automatically whenever the session's variables change.
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from varflow.api.deps import SessionDep
from varflow.engines.errors import TemplateError
from varflow.engines.template import ChartTemplate, UnknownChartError, find_placeholders
from varflow.schemas import (
    ChartIn,
    ChartPublic,
    Message,
    TemplateResolveIn,
    TemplateResolveOut,
)

router = APIRouter(prefix="/sessions/{session_id}", tags=["charts"])


def _to_public(chart: ChartTemplate) -> ChartPublic:
    return ChartPublic(
        id=chart.id,
        template_text=chart.template_text,
        last_resolved=chart.last_resolved,
        last_error=chart.last_error,
        resolved_revision=chart.resolved_revision,
    )


@router.post("/templates/resolve", response_model=TemplateResolveOut)
def resolve_template(session: SessionDep, body: TemplateResolveIn) -> Any:
    """Resolve ``template_text`` against the current variables; 400 with the JSON error on failure."""
    revision, variables = session.variables.snapshot()
    try:
        resolved = session.resolver.resolve(body.template_text, variables)
    except TemplateError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return TemplateResolveOut(
        resolved=resolved,
        placeholders=find_placeholders(body.template_text),
        revision=revision,
    )


@router.get("/charts", response_model=list[ChartPublic])
def list_charts(session: SessionDep) -> Any:
    return [_to_public(c) for c in session.charts.charts()]


@router.put("/charts/{chart_id}", response_model=ChartPublic)
def put_chart(session: SessionDep, chart_id: str, body: ChartIn) -> Any:
    """Create or update a chart template. Resolution errors land in ``last_error``."""
    return _to_public(session.charts.put(chart_id, body.template_text))


@router.get("/charts/{chart_id}", response_model=ChartPublic)
def get_chart(session: SessionDep, chart_id: str) -> Any:
    try:
        return _to_public(session.charts.get(chart_id))
    except UnknownChartError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.delete("/charts/{chart_id}", response_model=Message)
def delete_chart(session: SessionDep, chart_id: str) -> Any:
    try:
        session.charts.remove(chart_id)
    except UnknownChartError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return Message(message="Chart deleted successfully")
