# engine/operators.py
from __future__ import annotations

from enum import Enum
from typing import Set


class Operator(str, Enum):
    ADDITION = "+"
    SUBTRACTION = "-"
    MULTIPLICATION = "*"
    DIVISION = "/"

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]

    @property
    def is_high_precedence(self) -> bool:
        return self in (Operator.MULTIPLICATION, Operator.DIVISION)

    def apply(self, a: int, b: int) -> int:
        if self is Operator.ADDITION:
            return a + b
        if self is Operator.SUBTRACTION:
            return a - b
        if self is Operator.MULTIPLICATION:
            return a * b
        # floor division keeps every intermediate an integer
        return a // b


_GLYPHS = {
    Operator.ADDITION: "+",
    Operator.SUBTRACTION: "-",
    Operator.MULTIPLICATION: "×",
    Operator.DIVISION: "÷",
}

DISPLAY_GLYPHS = tuple(_GLYPHS.values())
ALL_OPERATORS = tuple(Operator)


def from_glyph(glyph: str) -> Operator:
    for op, g in _GLYPHS.items():
        if g == glyph:
            return op
    raise ValueError(f"unknown operator glyph: {glyph!r}")


def operators_used(display_text: str) -> Set[str]:
    """Glyphs of the four operators that appear anywhere in ``display_text``."""
    return {g for g in DISPLAY_GLYPHS if g in display_text}
