"""
Bulk tabular data collaborator.

A TableProvider returns a table as an ordered list of row dicts. The real
CSV-backed provider lives outside this package; InMemoryTableProvider is used
by default and in tests.
"""

import copy
from collections.abc import Mapping
from typing import Any, Protocol

Row = dict[str, Any]


class UnknownTableError(LookupError):
    """Raised when a table name is not known to the provider."""

    pass


class TableProvider(Protocol):
    def fetch_table(self, table_name: str) -> list[Row]: ...

    def table_names(self) -> list[str]: ...


# Sample rows served when no provider is configured
SAMPLE_TABLES: dict[str, list[Row]] = {
    "people": [
        {"id": 1, "name": "John", "age": 25, "city": "New York"},
        {"id": 2, "name": "Jane", "age": 30, "city": "Los Angeles"},
        {"id": 3, "name": "Bob", "age": 35, "city": "Chicago"},
    ],
}


class InMemoryTableProvider:
    def __init__(self, tables: Mapping[str, list[Row]] | None = None) -> None:
        self._tables = {
            name: [dict(row) for row in rows]
            for name, rows in (SAMPLE_TABLES if tables is None else tables).items()
        }

    def fetch_table(self, table_name: str) -> list[Row]:
        rows = self._tables.get(table_name)
        if rows is None:
            raise UnknownTableError(f"Table {table_name!r} not found")
        return copy.deepcopy(rows)

    def table_names(self) -> list[str]:
        return sorted(self._tables)
