"""
Pydantic schemas for the HTTP API.

Sessions, data sources, scripts, variables, templates/charts, tables, and the
remote executor wire format.
"""

from pydantic import BaseModel, ConfigDict, Field, JsonValue

# ---------------------------------------------------------------------------
# Common
# ---------------------------------------------------------------------------


class Message(BaseModel):
    message: str


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------


class SessionPublic(BaseModel):
    id: str
    data_sources: list[str]
    variables: list[str]
    revision: int


# ---------------------------------------------------------------------------
# Data sources
# ---------------------------------------------------------------------------


class DataSourceCreate(BaseModel):
    """Body for POST /sessions/{session_id}/datasources."""

    name: str = Field(..., min_length=1, max_length=255)
    raw_text: str | None = None


class DataSourceUpdate(BaseModel):
    """Body for PUT /sessions/{session_id}/datasources/{name}."""

    raw_text: str


class DataSourcePublic(BaseModel):
    name: str
    raw_text: str


class DataSourceValue(BaseModel):
    name: str
    value: JsonValue


# ---------------------------------------------------------------------------
# Scripts
# ---------------------------------------------------------------------------


class ScriptRunIn(BaseModel):
    code: str


class ScriptRunOut(BaseModel):
    log_lines: list[str]
    bindings: dict[str, JsonValue]
    error: str | None = None
    revision: int


# ---------------------------------------------------------------------------
# Variables
# ---------------------------------------------------------------------------


class VariablesOut(BaseModel):
    revision: int
    variables: dict[str, JsonValue]


class VariablePublic(BaseModel):
    name: str
    value: JsonValue


class CalculationIn(BaseModel):
    """Body for POST /sessions/{session_id}/calculations."""

    logic: str = Field(..., min_length=1)
    variable_name: str = Field(..., min_length=1, max_length=255)


class CalculationOut(BaseModel):
    name: str
    value: JsonValue
    revision: int


# ---------------------------------------------------------------------------
# Templates / charts
# ---------------------------------------------------------------------------


class TemplateResolveIn(BaseModel):
    template_text: str


class TemplateResolveOut(BaseModel):
    resolved: JsonValue
    placeholders: list[str]
    revision: int


class ChartIn(BaseModel):
    template_text: str


class ChartPublic(BaseModel):
    id: str
    template_text: str
    last_resolved: JsonValue = None
    last_error: str | None = None
    resolved_revision: int


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


class TableImportIn(BaseModel):
    source_name: str | None = Field(default=None, min_length=1, max_length=255)


# ---------------------------------------------------------------------------
# Remote executor wire format (camelCase on the wire)
# ---------------------------------------------------------------------------


class RemoteCalculationIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    logic: str
    variable_name: str = Field(alias="variableName")
    existing_variables: dict[str, JsonValue] | None = Field(
        default=None, alias="existingVariables"
    )


class RemoteCalculationOut(BaseModel):
    success: bool = True
    value: JsonValue
