"""
Tabular data: list tables, preview rows, import a table as a data source.
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from varflow.api.deps import SessionDep
from varflow.engines.errors import InvalidNameError
from varflow.engines.tables import UnknownTableError
from varflow.schemas import DataSourcePublic, TableImportIn

router = APIRouter(prefix="/sessions/{session_id}/tables", tags=["tables"])


@router.get("", response_model=list[str])
def list_tables(session: SessionDep) -> Any:
    return session.tables.table_names()


@router.get("/{table_name}", response_model=list[dict[str, Any]])
def get_table(session: SessionDep, table_name: str) -> Any:
    try:
        return session.tables.fetch_table(table_name)
    except UnknownTableError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


@router.post("/{table_name}/import", response_model=DataSourcePublic, status_code=201)
def import_table(session: SessionDep, table_name: str, body: TableImportIn | None = None) -> Any:
    """Copy the rows into a data source (``query_<n>`` unless ``source_name`` is given)."""
    source_name = body.source_name if body is not None else None
    try:
        ds = session.import_table(table_name, source_name)
    except UnknownTableError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except InvalidNameError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return DataSourcePublic(name=ds.name, raw_text=ds.raw_text)
