from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict


class AttemptOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime | None
    question: str
    correct_answer: int
    user_answer: float
    is_correct: bool
    operators: List[str] = []
    difficulty: int | None = None
    duration_ms: int | None = None
