# schemas/marking.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

# ---------- Evaluate ----------


class EvaluateRequest(BaseModel):
    expr: str


class EvaluateResponse(BaseModel):
    ok: bool
    value: Optional[float] = None
    feedback: Optional[str] = None


# ---------- Check ----------


class CheckRequest(BaseModel):
    submitted: float
    correct: float


class CheckResponse(BaseModel):
    correct: bool


# ---------- Mark single ----------


class MarkRequest(BaseModel):
    question: str = Field(min_length=1, max_length=200)
    correct_answer: int
    answer: str
    difficulty: Optional[int] = None
    duration_ms: Optional[int] = Field(default=None, ge=0)


class MarkResponse(BaseModel):
    ok: bool
    correct: bool
    score: int
    feedback: str
    expected: Optional[str] = None
    operators: List[str] = []
    attempt_id: Optional[int] = None


# ---------- Mark batch ----------


class MarkBatchRequest(BaseModel):
    items: List[MarkRequest]


class MarkBatchResponse(BaseModel):
    ok: bool
    total: int
    correct: int
    results: List[MarkResponse]
