from typing import Dict, List, Optional

from pydantic import BaseModel


class OperatorStats(BaseModel):
    correct: int
    total: int


class DayStats(BaseModel):
    date: str
    correct: int
    total: int
    average_time_ms: Optional[float] = None


class StatsOut(BaseModel):
    total: int
    correct: int
    incorrect: int
    correct_rate: float
    average_time_ms: Optional[float] = None
    by_operator: Dict[str, OperatorStats]
    history: List[DayStats]
