from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_mark_batch_basic():
    r = client.post(
        "/mark-batch",
        json={
            "items": [
                {"question": "45 + 12 × 3 = ?", "correct_answer": 81, "answer": "81"},
                {"question": "(20 - 8) ÷ 4 = ?", "correct_answer": 3, "answer": "4"},
                {"question": "7 × 3 - 1 = ?", "correct_answer": 20, "answer": "x"},
            ]
        },
    )
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["total"] == 3
    assert body["correct"] == 1
    assert [res["correct"] for res in body["results"]] == [True, False, False]
    assert body["results"][2]["ok"] is False
