from typing import Annotated

from fastapi import Depends, HTTPException

from varflow.core.sessions import SessionNotFoundError, SessionRegistry, get_session_registry
from varflow.engines.session import EngineSession


def get_registry() -> SessionRegistry:
    return get_session_registry()


RegistryDep = Annotated[SessionRegistry, Depends(get_registry)]


def get_engine_session(session_id: str, registry: RegistryDep) -> EngineSession:
    try:
        return registry.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


SessionDep = Annotated[EngineSession, Depends(get_engine_session)]
