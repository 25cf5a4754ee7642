from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def _mark(question, correct_answer, answer, **extra):
    body = {"question": question, "correct_answer": correct_answer, "answer": answer, **extra}
    r = client.post("/mark", json=body)
    assert r.status_code == 200
    return r.json()["attempt_id"]


def test_get_attempt_roundtrip():
    attempt_id = _mark("45 + 12 × 3 = ?", 81, "80", difficulty=3, duration_ms=1500)
    assert isinstance(attempt_id, int)

    r = client.get(f"/attempts/{attempt_id}")
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == attempt_id
    assert body["question"] == "45 + 12 × 3 = ?"
    assert body["user_answer"] == 80
    assert body["is_correct"] is False
    assert body["operators"] == ["+", "×"]
    assert body["duration_ms"] == 1500
    assert "created_at" in body


def test_get_attempt_404():
    assert client.get("/attempts/999999").status_code == 404


def test_recent_list_requires_key(monkeypatch):
    monkeypatch.setenv("TRAINER_API_KEY", "k")
    monkeypatch.delenv("ADMIN_TOKEN", raising=False)
    assert client.get("/attempts/recent-list").status_code == 401

    _mark("2 + 3 × 4 = ?", 14, "14")
    r = client.get("/attempts/recent-list", headers={"x-api-key": "k"})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True and body["count"] == 1


def test_recent_list_unconfigured(monkeypatch):
    monkeypatch.delenv("TRAINER_API_KEY", raising=False)
    monkeypatch.delenv("ADMIN_TOKEN", raising=False)
    assert client.get("/attempts/recent-list").status_code == 500


def test_mistakes_one_per_question(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    _mark("45 + 12 × 3 = ?", 81, "80")
    _mark("45 + 12 × 3 = ?", 81, "79")
    _mark("(20 - 8) ÷ 4 = ?", 3, "3")
    _mark("100 ÷ 5 - 7 = ?", 13, "12")

    r = client.get("/attempts/mistakes", headers={"x-admin-token": "secret"})
    assert r.status_code == 200
    items = r.json()["items"]
    assert [i["question"] for i in items] == ["100 ÷ 5 - 7 = ?", "45 + 12 × 3 = ?"]
    # latest wrong answer for the repeated question
    assert items[1]["user_answer"] == 79
