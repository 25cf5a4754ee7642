from fastapi.testclient import TestClient

from engine.evaluator import parse_display_text
from helpers import evaluate_display_text
from main import app

client = TestClient(app)


def _assert_problem(p, max_number):
    assert 0 < p["correct_answer"] <= max_number
    assert evaluate_display_text(p["display_text"]) == p["correct_answer"]
    assert set(p["operators"]) <= {"+", "-", "×", "÷"}


def test_generate_easy():
    r = client.get("/problems/generate", params={"difficulty": 3, "seed": 1})
    assert r.status_code == 200
    p = r.json()
    _assert_problem(p, 100)
    assert p["difficulty"] == 3
    assert len(parse_display_text(p["display_text"])[1]) == 2


def test_generate_hard_with_more_operators():
    r = client.get("/problems/generate", params={"difficulty": 8, "min_operators": 4, "seed": 7})
    assert r.status_code == 200
    p = r.json()
    _assert_problem(p, 1000)
    assert len(parse_display_text(p["display_text"])[1]) == 4


def test_generate_seed_is_reproducible():
    a = client.get("/problems/generate", params={"difficulty": 8, "seed": 11}).json()
    b = client.get("/problems/generate", params={"difficulty": 8, "seed": 11}).json()
    assert a == b


def test_generate_rejects_too_many_operators():
    r = client.get("/problems/generate", params={"difficulty": 8, "min_operators": 20})
    assert r.status_code == 422


def test_practice_set():
    r = client.get("/problems", params={"level": "easy", "count": 5, "seed": 3})
    assert r.status_code == 200
    body = r.json()
    assert body["level"] == "easy"
    assert body["count"] == 5 and len(body["problems"]) == 5
    assert (body["max_number"], body["min_operators"], body["difficulty"]) == (100, 2, 3)
    for p in body["problems"]:
        _assert_problem(p, 100)


def test_practice_set_unknown_level():
    assert client.get("/problems", params={"level": "extreme"}).status_code == 422


def test_adaptive_without_history():
    r = client.get("/problems/difficulty", params={"level": "adaptive"})
    assert r.status_code == 200
    body = r.json()
    assert (body["max_number"], body["min_operators"]) == (500, 2)
    assert body["correct_rate"] == 0.5
    assert body["difficulty"] == 5


def test_adaptive_follows_recorded_accuracy():
    for _ in range(19):
        client.post("/mark", json={"question": "6 × 7 - 2 = ?", "correct_answer": 40, "answer": "40"})
    client.post("/mark", json={"question": "6 × 7 - 2 = ?", "correct_answer": 40, "answer": "41"})

    body = client.get("/problems/difficulty", params={"level": "adaptive"}).json()
    assert body["correct_rate"] == 0.95
    assert (body["max_number"], body["min_operators"]) == (1000, 3)

    body = client.get("/problems", params={"level": "adaptive", "count": 3, "seed": 5}).json()
    assert body["min_operators"] == 3
    for p in body["problems"]:
        # adaptive sets are generated at difficulty 5 with the adaptive operator count
        _assert_problem(p, 500)
        assert len(parse_display_text(p["display_text"])[1]) == 3


def test_fixed_level_ignores_history():
    client.post("/mark", json={"question": "1 + 2 × 3 = ?", "correct_answer": 7, "answer": "9"})
    body = client.get("/problems/difficulty", params={"level": "hard"}).json()
    assert (body["max_number"], body["min_operators"], body["difficulty"]) == (1000, 3, 8)
    assert body["correct_rate"] is None
