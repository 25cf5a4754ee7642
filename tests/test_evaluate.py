from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_health():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json().get("ok") is True


def test_evaluate_valid():
    r = client.post("/evaluate", json={"expr": "45 + 12 * 3"})
    assert r.status_code == 200
    data = r.json()
    assert data["ok"] is True
    assert abs(data["value"] - 81.0) < 1e-9


def test_evaluate_display_glyphs():
    r = client.post("/evaluate", json={"expr": "(120 ÷ 4) - 2 × 5"})
    data = r.json()
    assert data["ok"] is True
    assert abs(data["value"] - 20.0) < 1e-9


def test_evaluate_invalid_chars():
    r = client.post("/evaluate", json={"expr": "abc"})
    assert r.status_code == 200
    data = r.json()
    assert data["ok"] is False
    assert "allowed" in data.get("feedback", "").lower()


def test_evaluate_division_by_zero():
    data = client.post("/evaluate", json={"expr": "1/0"}).json()
    assert data["ok"] is False
    assert "finite" in data["feedback"]


def test_evaluate_len_limit():
    r = client.post("/evaluate", json={"expr": "1" * 101})
    data = r.json()
    assert data["ok"] is False


def test_check():
    assert client.post("/check", json={"submitted": 81, "correct": 81.0009}).json() == {"correct": True}
    assert client.post("/check", json={"submitted": 81, "correct": 82}).json() == {"correct": False}


def test_check_rejects_non_numbers():
    r = client.post("/check", json={"submitted": "eighty", "correct": 81})
    assert r.status_code == 422
