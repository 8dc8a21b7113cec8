"""
Engine sessions: create, inspect, delete.

Every other resource (data sources, variables, charts) hangs off a session.
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from varflow.api.deps import RegistryDep, SessionDep
from varflow.core.sessions import SessionNotFoundError
from varflow.engines.session import EngineSession
from varflow.schemas import Message, SessionPublic

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _to_public(session: EngineSession) -> SessionPublic:
    revision, variables = session.variables.snapshot()
    return SessionPublic(
        id=session.id,
        data_sources=session.data_sources.names(),
        variables=list(variables),
        revision=revision,
    )


@router.post("", response_model=SessionPublic, status_code=201)
def create_session(registry: RegistryDep) -> Any:
    """Start a session with the default data sources."""
    return _to_public(registry.create())


@router.get("/{session_id}", response_model=SessionPublic)
def get_session(session: SessionDep) -> Any:
    return _to_public(session)


@router.delete("/{session_id}", response_model=Message)
def delete_session(session_id: str, registry: RegistryDep) -> Any:
    try:
        registry.delete(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return Message(message="Session deleted successfully")
