# engine/difficulty.py
from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from engine.problem import DifficultyParameters


class DifficultyLevel(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    ADAPTIVE = "adaptive"


EASY = DifficultyParameters(max_number=100, min_operators=2)
MEDIUM = DifficultyParameters(max_number=500, min_operators=2)
HARD = DifficultyParameters(max_number=1000, min_operators=3)

# Accuracy assumed before anything has been answered
DEFAULT_CORRECT_RATE = 0.5

# Per-question difficulty numbers used when a practice set is generated
_DIFFICULTY_NUMBERS = {
    DifficultyLevel.EASY: 3,
    DifficultyLevel.MEDIUM: 5,
    DifficultyLevel.HARD: 8,
    DifficultyLevel.ADAPTIVE: 5,
}


def correct_rate(correct: int, total: int) -> float:
    """
    Ratio for display. With nothing answered this is 0.5, which the adaptive
    bands read as easy; pick parameters with ``history_settings`` instead.
    """
    if total <= 0:
        return DEFAULT_CORRECT_RATE
    return correct / total


def history_settings(correct: int, total: int) -> DifficultyParameters:
    """Adaptive parameters from raw answer counts."""
    if total <= 0:
        return adaptive_settings(None)
    return adaptive_settings(correct / total)


def adaptive_settings(rate: Optional[float]) -> DifficultyParameters:
    """``rate=None`` means nothing has been answered yet: start in the middle band."""
    if rate is None:
        return MEDIUM
    if rate > 0.9:
        return HARD
    if rate > 0.7:
        return MEDIUM
    return EASY


def difficulty_settings(
    level: DifficultyLevel | str, rate: Optional[float] = None
) -> DifficultyParameters:
    """
    Generation parameters for a named level. ``rate`` is the learner's
    correct/total ratio and is only read for the adaptive level.
    """
    level = DifficultyLevel(level)
    if level is DifficultyLevel.EASY:
        return EASY
    if level is DifficultyLevel.MEDIUM:
        return MEDIUM
    if level is DifficultyLevel.HARD:
        return HARD
    return adaptive_settings(rate)


def difficulty_number(level: DifficultyLevel | str) -> int:
    return _DIFFICULTY_NUMBERS[DifficultyLevel(level)]


def resolve_generation(difficulty: int, min_operators: int = 2) -> Tuple[int, int]:
    """Map a difficulty number to ``(max_number, operator_count)``."""
    if difficulty >= 7:
        return 1000, max(3, min_operators)
    if difficulty >= 4:
        return 500, max(2, min_operators)
    return 100, min_operators
