"""Tests for the HTTP shell around the parser and reconciler."""

import pytest
from fastapi.testclient import TestClient

from fitlog import storage
from fitlog.main import app, NO_ITEMS_MESSAGE

PLAN = """
Café da manhã
- 3 ovos cozidos: 210 Kcal | 18g proteína | 1g carboidrato | 15g gordura
- 1 ovo: 70 Kcal | 6g proteína | 0g carboidrato | 5g gordura
- 30g de whey: 120 Kcal | 24g proteína | 3g carboidrato | 1g gordura
- 100g de ovos: 155 Kcal | 13g proteína | 1g carboidrato | 11g gordura
"""


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(storage, "DATA_DIR", tmp_path)
    return TestClient(app)


def test_parse_nutrition(client):
    r = client.post("/v1/parse/nutrition", json={"content": PLAN})
    assert r.status_code == 200
    body = r.json()
    assert body["message"] is None
    assert [i["original_name"] for i in body["items"]] == ["ovos cozidos", "ovo", "whey", "ovos"]


def test_parse_nutrition_empty(client):
    r = client.post("/v1/parse/nutrition", json={"content": "só texto"})
    assert r.json() == {"items": [], "message": NO_ITEMS_MESSAGE}


def test_parse_workout(client):
    r = client.post("/v1/parse/workout", json={"content": "Supino Reto Barra 4x6-10\nParalelas 3xfalha"})
    items = r.json()["items"]
    assert items[0] == {"name": "Supino Reto Barra", "sets": 4, "reps": 6, "notes": "Reps: 6-10", "technique": ""}
    assert items[1]["reps"] == 0


def test_import_is_deduplicated(client):
    items = client.post("/v1/parse/nutrition", json={"content": PLAN}).json()["items"]
    first = client.post("/v1/users/u1/templates/meals/import", json=items).json()
    assert len(first["added"]) == 3
    assert first["skipped"] == ["ovos"]
    second = client.post("/v1/users/u1/templates/meals/import", json=items).json()
    assert second["added"] == []
    assert len(client.get("/v1/users/u1/templates/meals").json()) == 3


def test_import_exercises(client):
    items = client.post("/v1/parse/workout", json={"content": "Crucifixo 3x12\ncrucifixo 4x10"}).json()["items"]
    result = client.post("/v1/users/u1/templates/exercises/import", json=items).json()
    assert [t["name"] for t in result["templates"]] == ["Crucifixo"]
    assert len(client.get("/v1/users/u1/templates/exercises").json()) == 1


def test_log_meal_reuses_or_creates(client):
    r = client.post("/v1/users/u1/meals", json={"name": "whey", "quantity": 30, "unit": "g", "calories": 120})
    assert r.json()["created"] is True
    tpl_id = r.json()["template"]["id"]

    r = client.post("/v1/users/u1/meals", json={"name": "Whey", "quantity": 60, "unit": "g", "calories": 245})
    assert r.json()["created"] is False
    assert r.json()["template"]["id"] == tpl_id

    r = client.post("/v1/users/u1/meals", json={"name": "whey", "quantity": 15, "unit": "g", "calories": 30})
    assert r.json()["created"] is True
    assert len(client.get("/v1/users/u1/templates/meals").json()) == 2


def test_log_meal_validation(client):
    r = client.post("/v1/users/u1/meals", json={"name": "", "quantity": 1})
    assert r.status_code == 422
    r = client.post("/v1/users/u1/meals", json={"name": "x", "quantity": 100, "calories": -100})
    assert r.status_code == 422
    assert client.get("/v1/users/u1/templates/meals").json() == []


def test_delete_template(client):
    tpl_id = client.post("/v1/users/u1/meals", json={"name": "banana", "quantity": 1, "calories": 90}).json()["template"]["id"]
    assert client.delete(f"/v1/users/u1/templates/meals/{tpl_id}").status_code == 204
    assert client.delete(f"/v1/users/u1/templates/meals/{tpl_id}").status_code == 404
    assert client.get("/v1/users/u1/templates/meals").json() == []


def test_run_serves_the_app(monkeypatch):
    from fitlog import main

    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kw: calls.append((app, kw)))
    monkeypatch.delenv("FITLOG_HOST", raising=False)
    monkeypatch.setenv("FITLOG_PORT", "9001")
    main.run()
    assert calls == [(app, {"host": "127.0.0.1", "port": 9001})]
