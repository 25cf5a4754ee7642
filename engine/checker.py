# engine/checker.py
from __future__ import annotations

ANSWER_TOLERANCE = 0.001


def is_answer_correct(submitted: float, correct: float) -> bool:
    # answers are integers; the tolerance only absorbs float parsing noise
    return abs(submitted - correct) < ANSWER_TOLERANCE
