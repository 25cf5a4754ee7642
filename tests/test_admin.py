from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def _attempt_id():
    r = client.post("/mark", json={"question": "6 × 7 - 2 = ?", "correct_answer": 40, "answer": "41"})
    return r.json()["attempt_id"]


def test_admin_delete_unauthorized(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    attempt_id = _attempt_id()
    r = client.delete(f"/admin/attempts/{attempt_id}")
    assert r.status_code == 401
    assert client.get(f"/attempts/{attempt_id}").status_code == 200


def test_admin_delete_unconfigured(monkeypatch):
    monkeypatch.delenv("ADMIN_TOKEN", raising=False)
    r = client.delete("/admin/attempts/1", headers={"x-admin-token": "secret"})
    assert r.status_code == 500


def test_admin_delete_ok(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    attempt_id = _attempt_id()
    r = client.delete(f"/admin/attempts/{attempt_id}", headers={"x-admin-token": "secret"})
    assert r.status_code == 200 and r.json() == {"ok": True, "id": attempt_id}
    assert client.get(f"/attempts/{attempt_id}").status_code == 404

    r = client.delete(f"/admin/attempts/{attempt_id}", headers={"x-admin-token": "secret"})
    assert r.status_code == 404
