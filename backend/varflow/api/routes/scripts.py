"""
Script execution: run a script against the session's data sources and
publish its top-level bindings as variables.
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from varflow.api.deps import SessionDep
from varflow.engines.errors import TranspileError
from varflow.schemas import ScriptRunIn, ScriptRunOut

router = APIRouter(prefix="/sessions/{session_id}/scripts", tags=["scripts"])


@router.post("/run", response_model=ScriptRunOut)
def run_script(session: SessionDep, body: ScriptRunIn) -> Any:
    """
    Compile and run ``code``. A compile error is a 400 and nothing runs; a
    runtime error is reported in ``error`` / ``log_lines`` with status 200.
    """
    try:
        result = session.run_script(body.code)
    except TranspileError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return ScriptRunOut(
        log_lines=result.log_lines,
        bindings=result.bindings,
        error=result.error,
        revision=session.variables.revision(),
    )
