"""
Variables of a session: read all / one, delete, and remote calculations.
"""

from typing import Any

from fastapi import APIRouter, HTTPException

from varflow.api.deps import SessionDep
from varflow.engines.errors import CalculationError
from varflow.schemas import (
    CalculationIn,
    CalculationOut,
    Message,
    VariablePublic,
    VariablesOut,
)

router = APIRouter(prefix="/sessions/{session_id}", tags=["variables"])


@router.get("/variables", response_model=VariablesOut)
def list_variables(session: SessionDep) -> Any:
    revision, variables = session.variables.snapshot()
    return VariablesOut(revision=revision, variables=variables)


@router.get("/variables/{name}", response_model=VariablePublic)
def get_variable(session: SessionDep, name: str) -> Any:
    if name not in session.variables:
        raise HTTPException(status_code=404, detail=f"Variable {name!r} not found")
    return VariablePublic(name=name, value=session.variables.get(name))


@router.delete("/variables/{name}", response_model=Message)
def delete_variable(session: SessionDep, name: str) -> Any:
    if not session.variables.remove(name):
        raise HTTPException(status_code=404, detail=f"Variable {name!r} not found")
    return Message(message="Variable deleted successfully")


@router.post("/calculations", response_model=CalculationOut)
async def create_calculation(session: SessionDep, body: CalculationIn) -> Any:
    """Evaluate ``logic`` on the remote executor and bind the result to ``variable_name``."""
    try:
        value = await session.calculate(body.logic, body.variable_name)
    except CalculationError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
    return CalculationOut(
        name=body.variable_name,
        value=value,
        revision=session.variables.revision(),
    )
