from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from varflow.core.sessions import get_session_registry
from varflow.main import app


@pytest.fixture(scope="module")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session_id(client: TestClient) -> Generator[str, None, None]:
    """A fresh session created through the registry; deleted afterwards if still present."""
    session = get_session_registry().create()
    yield session.id
    try:
        get_session_registry().delete(session.id)
    except LookupError:
        pass

