# schemas/problems.py
from typing import List, Optional

from pydantic import BaseModel


class ProblemOut(BaseModel):
    display_text: str
    correct_answer: int
    operators: List[str]
    difficulty: int


class DifficultyOut(BaseModel):
    level: str
    max_number: int
    min_operators: int
    difficulty: int
    correct_rate: Optional[float] = None


class ProblemSetOut(DifficultyOut):
    count: int
    problems: List[ProblemOut]
