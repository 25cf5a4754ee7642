from __future__ import annotations

import logging
import random
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

import config
import progress
from db import get_db
from engine.difficulty import (
    DifficultyLevel,
    correct_rate,
    difficulty_number,
    difficulty_settings,
    history_settings,
)
from engine.generator import GenerationError, generate
from engine.problem import Problem
from schemas.problems import DifficultyOut, ProblemOut, ProblemSetOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/problems", tags=["problems"])

# More operators than this stops being mental arithmetic
MAX_OPERATORS = 6


def _rng(seed: Optional[int]) -> random.Random:
    return random.Random(seed) if seed is not None else random.Random()


def _problem_out(p: Problem, difficulty: int) -> ProblemOut:
    return ProblemOut(
        display_text=p.display_text,
        correct_answer=p.correct_answer,
        operators=p.operators,
        difficulty=difficulty,
    )


def _generate_or_422(difficulty: int, min_operators: int, rng: random.Random) -> Problem:
    try:
        return generate(
            difficulty,
            min_operators,
            rng=rng,
            max_attempts=config.generation_attempt_cap(),
            exact_division=config.EXACT_DIVISION,
        )
    except GenerationError as e:
        logger.warning("problem generation failed: %s", e)
        raise HTTPException(status_code=422, detail=str(e))


def _difficulty_for(level: DifficultyLevel, db: Session) -> DifficultyOut:
    rate: Optional[float] = None
    # Only the adaptive level looks at recorded history
    if level is DifficultyLevel.ADAPTIVE:
        total, correct = progress.totals(db)
        params = history_settings(correct, total)
        rate = correct_rate(correct, total)
    else:
        params = difficulty_settings(level)
    return DifficultyOut(
        level=level.value,
        max_number=params.max_number,
        min_operators=params.min_operators,
        difficulty=difficulty_number(level),
        correct_rate=rate,
    )


@router.get("/generate", response_model=ProblemOut)
def generate_one(
    difficulty: int = Query(default=5, ge=1, le=10),
    min_operators: int = Query(default=2, ge=2, le=MAX_OPERATORS),
    seed: Optional[int] = None,
):
    p = _generate_or_422(difficulty, min_operators, _rng(seed))
    return _problem_out(p, difficulty)


@router.get("/difficulty", response_model=DifficultyOut)
def get_difficulty(
    level: DifficultyLevel = DifficultyLevel.MEDIUM,
    db: Session = Depends(get_db),
):
    return _difficulty_for(level, db)


@router.get("", response_model=ProblemSetOut)
def practice_set(
    level: DifficultyLevel = DifficultyLevel.MEDIUM,
    count: Optional[int] = Query(default=None, ge=1, le=200),
    seed: Optional[int] = None,
    db: Session = Depends(get_db),
):
    info = _difficulty_for(level, db)
    n = count if count is not None else min(config.QUESTIONS_PER_DAY, 200)

    # one generator stream for the whole set so a seed reproduces it
    rng = _rng(seed)
    problems = [
        _problem_out(_generate_or_422(info.difficulty, info.min_operators, rng), info.difficulty)
        for _ in range(n)
    ]
    logger.info("generated %d %s problems (difficulty %d)", n, level.value, info.difficulty)
    return ProblemSetOut(**info.model_dump(), count=n, problems=problems)
