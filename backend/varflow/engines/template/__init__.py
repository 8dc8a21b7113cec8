"""
Chart templates: ``${name}`` placeholder resolution and the per-session ChartBoard.
"""

from .charts import ChartBoard, ChartTemplate, UnknownChartError
from .resolver import TemplateResolver, find_placeholders, missing_placeholders

__all__ = [
    "ChartBoard",
    "ChartTemplate",
    "TemplateResolver",
    "UnknownChartError",
    "find_placeholders",
    "missing_placeholders",
]
