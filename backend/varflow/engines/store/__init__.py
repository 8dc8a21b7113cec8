"""
Session-scoped stores: data sources (raw text) and variables (structured values).
"""

from .datasources import DataSource, DataSourceStore, validate_name
from .variables import VariableStore

__all__ = [
    "DataSource",
    "DataSourceStore",
    "VariableStore",
    "validate_name",
]
