"""
Remote executor endpoint: POST /api/calculate.

Evaluates ``logic`` against ``existingVariables`` and returns one value. This
is the service a RemoteCalculationBridge talks to; errors are reported as
``{"message": ...}`` with status 400.
"""

import logging
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from varflow.engines.calculator import evaluate_calculation
from varflow.engines.errors import CalculationError
from varflow.schemas import RemoteCalculationIn, RemoteCalculationOut

_log = logging.getLogger(__name__)

router = APIRouter(tags=["calculate"])


@router.post("/calculate", response_model=RemoteCalculationOut)
def calculate(body: RemoteCalculationIn) -> Any:
    try:
        value = evaluate_calculation(body.logic, body.existing_variables or {})
    except CalculationError as e:
        _log.info("Calculation for %s failed: %s", body.variable_name, e)
        return JSONResponse(status_code=400, content={"success": False, "message": str(e)})
    return RemoteCalculationOut(success=True, value=value)
