"""
Value model shared by the engine: a closed JSON-shaped variant.

Anything a script produces is folded into ``JsonValue`` before it reaches the
VariableStore, so structural equality and JSON serialisation always hold.
"""

import json
import logging
import math
from collections.abc import Iterator, Mapping, Set
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from pydantic import JsonValue

from .errors import ParseError

_log = logging.getLogger(__name__)

__all__ = ["JsonValue", "dumps", "loads_strict", "normalize_value", "parse_json"]


def _key(k: Any) -> str:
    """Mapping keys follow json.dumps conversion rules."""
    if isinstance(k, str):
        return k
    if k is True:
        return "true"
    if k is False:
        return "false"
    if k is None:
        return "null"
    return str(k)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def normalize_value(value: Any) -> JsonValue:
    """
    Fold an arbitrary Python object into JsonValue.

    tuples/sets/iterators -> list, mappings -> dict (str keys), NaN/inf -> None,
    date/datetime/time -> ISO string, bytes -> str, Decimal -> float.
    Anything else (functions, modules, class instances) becomes None, and so
    does a structure nested deeper than the interpreter can recurse.
    """
    try:
        return _normalize(value)
    except RecursionError:
        _log.warning("Dropping value nested too deeply to normalise")
        return None


def _normalize(value: Any) -> JsonValue:
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Decimal):
        return _normalize(float(value))
    if isinstance(value, Mapping):
        return {_key(k): _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, Set, range, Iterator)):
        return [_normalize(v) for v in value]
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    _log.debug("Dropping non-JSON value of type %s", type(value).__name__)
    return None


def dumps(value: JsonValue) -> str:
    """Compact JSON, the form substituted into templates."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def loads_strict(text: str) -> Any:
    """json.loads without the NaN / Infinity extensions."""
    return json.loads(text, parse_constant=_reject_constant)


def parse_json(text: str) -> JsonValue:
    """Strict JSON parse; raises ParseError with the decoder diagnostic."""
    try:
        return loads_strict(text)
    except (TypeError, ValueError, RecursionError) as e:
        raise ParseError(str(e)) from e
