# engine/problem.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from engine.operators import operators_used


class Problem(BaseModel):
    model_config = ConfigDict(frozen=True)

    display_text: str
    correct_answer: int

    @property
    def operators(self) -> list[str]:
        return sorted(operators_used(self.display_text))


class DifficultyParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_number: int = Field(gt=0)
    min_operators: int = Field(ge=2)


class GenerationFailed(BaseModel):
    """Returned instead of a Problem when the retry cap runs out."""

    model_config = ConfigDict(frozen=True)

    max_number: int
    operator_count: int
    attempts: int

    @property
    def message(self) -> str:
        return (
            f"no valid problem with {self.operator_count} operators and answer "
            f"<= {self.max_number} after {self.attempts} attempts"
        )
