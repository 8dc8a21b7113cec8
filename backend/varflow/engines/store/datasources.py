"""
DataSourceStore: named raw text inputs for scripts.

Each source is independently settable; values are coerced on read and fed
to ScriptSandbox.run as named inputs.
"""

import keyword
import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..coercion import coerce
from ..errors import InvalidNameError, UnknownDataSourceError

_log = logging.getLogger(__name__)

RESERVED_NAMES = frozenset({"console"})


def validate_name(name: str, *, kind: str = "Data source") -> str:
    """Names must be bindable inside a restricted script."""
    if not isinstance(name, str) or not name.isidentifier():
        raise InvalidNameError(f"{kind} name {name!r} is not a valid identifier")
    if keyword.iskeyword(name):
        raise InvalidNameError(f"{kind} name {name!r} is a Python keyword")
    if name.startswith("_"):
        raise InvalidNameError(f"{kind} name {name!r} must not start with an underscore")
    if name in RESERVED_NAMES:
        raise InvalidNameError(f"{kind} name {name!r} is reserved")
    return name


@dataclass(frozen=True)
class DataSource:
    name: str
    raw_text: str = ""


class DataSourceStore:
    """Owns every DataSource of a session; callers always get copies."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._sources: dict[str, str] = {}
        self._lock = threading.Lock()
        for name in names:
            self.create(name)

    def create(self, name: str) -> DataSource:
        """Register *name* with empty text. Registering an existing name is a no-op."""
        validate_name(name)
        with self._lock:
            self._sources.setdefault(name, "")
            return DataSource(name, self._sources[name])

    def remove(self, name: str) -> None:
        with self._lock:
            if self._sources.pop(name, None) is None:
                raise UnknownDataSourceError(f"Data source {name!r} not found")

    def set_text(self, name: str, text: str) -> DataSource:
        with self._lock:
            if name not in self._sources:
                raise UnknownDataSourceError(f"Data source {name!r} not found")
            self._sources[name] = text
        _log.debug("Data source %s updated (%d chars)", name, len(text))
        return DataSource(name, text)

    def get(self, name: str) -> DataSource:
        with self._lock:
            if name not in self._sources:
                raise UnknownDataSourceError(f"Data source {name!r} not found")
            return DataSource(name, self._sources[name])

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._sources

    def names(self) -> list[str]:
        with self._lock:
            return list(self._sources)

    def sources(self) -> list[DataSource]:
        with self._lock:
            return [DataSource(n, t) for n, t in self._sources.items()]

    def named_inputs(self) -> dict[str, Any]:
        """Coerced values of all sources; sources whose value is empty text are skipped."""
        values: dict[str, Any] = {}
        for source in self.sources():
            value = coerce(source.raw_text)
            if value != "":
                values[source.name] = value
        return values
