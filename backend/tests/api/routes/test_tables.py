"""Tests for table API."""

import json

from fastapi.testclient import TestClient

from varflow.core.config import settings


def _base(session_id: str) -> str:
    return f"{settings.API_V1_STR}/sessions/{session_id}/tables"


def test_list_tables(client: TestClient, session_id: str) -> None:
    r = client.get(_base(session_id))
    assert r.status_code == 200
    assert r.json() == ["people"]


def test_get_table(client: TestClient, session_id: str) -> None:
    r = client.get(f"{_base(session_id)}/people")
    assert r.status_code == 200
    assert [row["name"] for row in r.json()] == ["John", "Jane", "Bob"]


def test_get_unknown_table(client: TestClient, session_id: str) -> None:
    assert client.get(f"{_base(session_id)}/nope").status_code == 404


def test_import_table_without_body(client: TestClient, session_id: str) -> None:
    r = client.post(f"{_base(session_id)}/people/import")
    assert r.status_code == 201
    data = r.json()
    assert data["name"] == "query_1"
    assert json.loads(data["raw_text"])[2]["city"] == "Chicago"


def test_import_table_then_script(client: TestClient, session_id: str) -> None:
    r = client.post(f"{_base(session_id)}/people/import", json={"source_name": "ds1"})
    assert r.status_code == 201
    r = client.post(
        f"{settings.API_V1_STR}/sessions/{session_id}/scripts/run",
        json={"code": "ages = [row['age'] for row in ds1]"},
    )
    assert r.json()["bindings"] == {"ages": [25, 30, 35]}


def test_import_table_invalid_source_name(client: TestClient, session_id: str) -> None:
    r = client.post(f"{_base(session_id)}/people/import", json={"source_name": "bad name"})
    assert r.status_code == 400


def test_import_unknown_table(client: TestClient, session_id: str) -> None:
    assert client.post(f"{_base(session_id)}/nope/import").status_code == 404
