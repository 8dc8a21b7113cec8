"""Tests for the remote executor endpoint POST /api/calculate."""

from fastapi.testclient import TestClient

URL = "/api/calculate"


def test_calculate_expression(client: TestClient) -> None:
    r = client.post(
        URL,
        json={
            "logic": "[x * 2 for x in data]",
            "variableName": "doubled",
            "existingVariables": {"data": [1, 2, 3]},
        },
    )
    assert r.status_code == 200
    assert r.json() == {"success": True, "value": [2, 4, 6]}


def test_calculate_function_body(client: TestClient) -> None:
    r = client.post(
        URL,
        json={"logic": "total = 0\nfor v in data:\n    total += v\nreturn total", "variableName": "t", "existingVariables": {"data": [1, 2]}},
    )
    assert r.status_code == 200
    assert r.json()["value"] == 3


def test_calculate_without_existing_variables(client: TestClient) -> None:
    r = client.post(URL, json={"logic": "6 * 7", "variableName": "answer"})
    assert r.status_code == 200
    assert r.json()["value"] == 42


def test_calculate_error(client: TestClient) -> None:
    r = client.post(URL, json={"logic": "1 / 0", "variableName": "x"})
    assert r.status_code == 400
    data = r.json()
    assert data["success"] is False
    assert "ZeroDivisionError" in data["message"]


def test_calculate_missing_field(client: TestClient) -> None:
    r = client.post(URL, json={"logic": "1"})
    assert r.status_code == 422
