from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, HttpUrl, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Use top level .env file (one level above ./backend/)
        env_file="../.env",
        env_ignore_empty=True,
        extra="ignore",
    )
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "varflow"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    SENTRY_DSN: HttpUrl | None = None

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Script engine: seconds before a running script is aborted (None = no limit)
    SCRIPT_EXEC_TIMEOUT: int | None = None
    # Comma-separated module names exposed to scripts, e.g. "math,statistics"
    SCRIPT_EXTRA_MODULES: str = ""

    # Remote executor for calculations (default: this service's own endpoint)
    REMOTE_CALC_URL: str = "http://localhost:8000/api/calculate"
    REMOTE_CALC_TIMEOUT: float = 30.0

    # Data sources every new session starts with
    DEFAULT_DATA_SOURCES: str = "ds1,ds2,ds3"
    # In-memory sessions kept before the least recently used one is dropped
    SESSION_MAX_COUNT: int = 256

    @computed_field  # type: ignore[prop-decorator]
    @property
    def default_data_source_names(self) -> list[str]:
        return [n.strip() for n in self.DEFAULT_DATA_SOURCES.split(",") if n.strip()]


settings = Settings()  # type: ignore
