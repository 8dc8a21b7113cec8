"""
Data sources of a session.

Endpoints: list, create, get, update text, coerced value, delete.
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from varflow.api.deps import SessionDep
from varflow.engines.coercion import coerce
from varflow.engines.errors import InvalidNameError, UnknownDataSourceError
from varflow.engines.store import DataSource
from varflow.schemas import (
    DataSourceCreate,
    DataSourcePublic,
    DataSourceUpdate,
    DataSourceValue,
    Message,
)

router = APIRouter(prefix="/sessions/{session_id}/datasources", tags=["datasources"])


def _to_public(ds: DataSource) -> DataSourcePublic:
    return DataSourcePublic(name=ds.name, raw_text=ds.raw_text)


def _get_or_404(session: SessionDep, name: str) -> DataSource:
    try:
        return session.data_sources.get(name)
    except UnknownDataSourceError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.get("", response_model=list[DataSourcePublic])
def list_datasources(session: SessionDep) -> Any:
    return [_to_public(ds) for ds in session.data_sources.sources()]


@router.post("", response_model=DataSourcePublic, status_code=201)
def create_datasource(session: SessionDep, body: DataSourceCreate) -> Any:
    """Register a data source; an existing name keeps its text unless raw_text is given."""
    try:
        ds = session.data_sources.create(body.name)
    except InvalidNameError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    if body.raw_text is not None:
        ds = session.data_sources.set_text(body.name, body.raw_text)
    return _to_public(ds)


@router.get("/{name}", response_model=DataSourcePublic)
def get_datasource(session: SessionDep, name: str) -> Any:
    return _to_public(_get_or_404(session, name))


@router.get("/{name}/value", response_model=DataSourceValue)
def get_datasource_value(session: SessionDep, name: str) -> Any:
    """The value a script would see for this source."""
    ds = _get_or_404(session, name)
    return DataSourceValue(name=ds.name, value=coerce(ds.raw_text))


@router.put("/{name}", response_model=DataSourcePublic)
def update_datasource(session: SessionDep, name: str, body: DataSourceUpdate) -> Any:
    try:
        ds = session.data_sources.set_text(name, body.raw_text)
    except UnknownDataSourceError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return _to_public(ds)


@router.delete("/{name}", response_model=Message)
def delete_datasource(session: SessionDep, name: str) -> Any:
    try:
        session.data_sources.remove(name)
    except UnknownDataSourceError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return Message(message="Data source deleted successfully")
