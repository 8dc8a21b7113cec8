"""
RemoteCalculationBridge: send a script body to the remote executor and bind
the single value it returns to one variable.

Wire format (POST, JSON):
    request  {"logic": str, "variableName": str, "existingVariables": {...}}
    success  2xx {"success": true, "value": any}
    failure  non-2xx {"message": str}

Two invokes for the same name are not ordered; the last response wins.
"""

import logging
from typing import Any

import httpx

from .coercion import coerce
from .errors import CalculationError
from .store.datasources import validate_name
from .store.variables import VariableStore
from .values import JsonValue

_log = logging.getLogger(__name__)

DEFAULT_REMOTE_TIMEOUT = 30.0


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail")
        if message:
            return str(message)
    return f"HTTP error {resp.status_code}"


class RemoteCalculationBridge:
    """Async client for the remote executor; writes results into a VariableStore."""

    def __init__(
        self,
        variables: VariableStore,
        *,
        url: str,
        timeout: float = DEFAULT_REMOTE_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
        send_existing_variables: bool = True,
    ) -> None:
        self._variables = variables
        self._url = url
        self._timeout = timeout
        self._transport = transport
        self._send_existing = send_existing_variables

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def invoke(self, script_body: str, target_name: str) -> JsonValue:
        """
        Evaluate *script_body* remotely and store the value as *target_name*.
        Raises CalculationError with the remote message; the store is untouched then.
        """
        try:
            validate_name(target_name, kind="Variable")
        except ValueError as e:
            raise CalculationError(str(e)) from e

        payload: dict[str, Any] = {"logic": script_body, "variableName": target_name}
        if self._send_existing:
            payload["existingVariables"] = self._variables.get_all()

        try:
            async with self._client() as client:
                resp = await client.post(self._url, json=payload)
        except httpx.HTTPError as e:
            _log.warning("Remote calculation request failed: %s", e)
            raise CalculationError(f"Remote calculation request failed: {e}") from e

        if not resp.is_success:
            message = _error_message(resp)
            _log.warning("Remote calculation failed (%s): %s", resp.status_code, message)
            raise CalculationError(message)

        try:
            body = resp.json()
        except ValueError as e:
            raise CalculationError(f"Remote calculation returned invalid JSON: {e}") from e
        if not isinstance(body, dict):
            raise CalculationError("Remote calculation returned no value")
        if body.get("success") is False:
            raise CalculationError(str(body.get("message") or "Remote calculation failed"))
        if "value" not in body:
            raise CalculationError("Remote calculation returned no value")

        value = body["value"]
        if isinstance(value, str):
            value = coerce(value)
        self._variables.set_many({target_name: value})
        return self._variables.get(target_name)
