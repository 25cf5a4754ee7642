# engine/generator.py
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from engine.difficulty import resolve_generation
from engine.evaluator import Bracket, InexactDivisionError, evaluate_expression
from engine.operators import ALL_OPERATORS, Operator
from engine.problem import GenerationFailed, Problem

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10000

# Operand ranges per operator role
MULTIPLICAND_RANGE = (1, 20)
DIVIDEND_RANGE = (10, 200)
DIVISOR_RANGE = (2, 10)


class OperandRole(str, Enum):
    FIRST = "first"  # left / dividend-like
    LATER = "later"  # right / divisor-like


class ExpressionType(str, Enum):
    LEFT_GROUPED = "left_grouped"  # (a OP1 b) OP2 c
    RIGHT_GROUPED = "right_grouped"  # a OP1 (b OP2 c)
    UNGROUPED = "ungrouped"  # a OP1 b OP2 c


class GenerationError(RuntimeError):
    def __init__(self, failure: GenerationFailed):
        super().__init__(failure.message)
        self.failure = failure


# --- Operands & operators ---------------------------------------------------------


def synthesize_operand(
    operator: Operator,
    role: OperandRole | bool,
    max_number: int,
    rng: random.Random,
) -> int:
    """
    Draw an operand suited to ``operator``. ``role`` may be an OperandRole or a
    bool meaning "is this the operator's first (left) operand".
    """
    is_first = role is True or role == OperandRole.FIRST

    if operator in (Operator.ADDITION, Operator.SUBTRACTION):
        return rng.randint(1, max(1, max_number // 3))
    if operator is Operator.MULTIPLICATION:
        return rng.randint(*MULTIPLICAND_RANGE)
    if operator is Operator.DIVISION:
        return rng.randint(*(DIVIDEND_RANGE if is_first else DIVISOR_RANGE))
    return 1


def choose_operator(rng: random.Random) -> Operator:
    return rng.choice(ALL_OPERATORS)


def choose_operator_pair(rng: random.Random) -> Tuple[Operator, Operator]:
    first = choose_operator(rng)
    second = choose_operator(rng)
    while second is first:
        second = choose_operator(rng)
    return first, second


def choose_operator_sequence(count: int, rng: random.Random) -> List[Operator]:
    ops: List[Operator] = []
    for _ in range(count):
        op = choose_operator(rng)
        while ops and op is ops[-1]:
            op = choose_operator(rng)
        ops.append(op)
    return ops


# --- Rendering --------------------------------------------------------------------


def render_expression(
    numbers: Sequence[int],
    operators: Sequence[Operator],
    bracket: Optional[Bracket] = None,
) -> str:
    parts: List[str] = []
    for i, n in enumerate(numbers):
        text = str(n)
        if bracket is not None and i == bracket[0]:
            text = f"({text}"
        elif bracket is not None and i == bracket[1]:
            text = f"{text})"
        parts.append(text)
        if i < len(operators):
            parts.append(operators[i].glyph)
    return " ".join(parts) + " = ?"


# --- Composers --------------------------------------------------------------------


@dataclass(frozen=True)
class Candidate:
    numbers: Tuple[int, ...]
    operators: Tuple[Operator, ...]
    bracket: Optional[Bracket]

    @property
    def display_text(self) -> str:
        return render_expression(self.numbers, self.operators, self.bracket)

    def evaluate(self, exact: bool = False) -> int:
        return evaluate_expression(self.numbers, self.operators, self.bracket, exact=exact)


class ExpressionGenerator:
    """Composes one unvalidated candidate expression per call."""

    operator_count: int

    def __init__(self, max_number: int):
        self.max_number = max_number

    def compose(self, rng: random.Random) -> Candidate:
        raise NotImplementedError


class TwoOperatorGenerator(ExpressionGenerator):
    operator_count = 2

    def compose(self, rng: random.Random) -> Candidate:
        op1, op2 = choose_operator_pair(rng)
        shape = rng.choice(list(ExpressionType))

        a = synthesize_operand(op1, OperandRole.FIRST, self.max_number, rng)
        b = synthesize_operand(op1, OperandRole.LATER, self.max_number, rng)
        c = synthesize_operand(op2, OperandRole.LATER, self.max_number, rng)

        bracket: Optional[Bracket] = None
        if shape is ExpressionType.LEFT_GROUPED:
            bracket = (0, 1)
        elif shape is ExpressionType.RIGHT_GROUPED:
            bracket = (1, 2)
        return Candidate((a, b, c), (op1, op2), bracket)


class MultiOperatorGenerator(ExpressionGenerator):
    def __init__(self, max_number: int, operator_count: int):
        if operator_count < 3:
            raise ValueError("MultiOperatorGenerator needs at least 3 operators")
        super().__init__(max_number)
        self.operator_count = operator_count

    def _interior_operand(self, prev_op: Operator, next_op: Operator, rng: random.Random) -> int:
        if prev_op.is_high_precedence and not next_op.is_high_precedence:
            return synthesize_operand(prev_op, OperandRole.LATER, self.max_number, rng)
        # keep the value small enough for both neighbours
        left = synthesize_operand(prev_op, OperandRole.LATER, self.max_number, rng)
        right = synthesize_operand(next_op, OperandRole.FIRST, self.max_number, rng)
        return min(left, right)

    def compose(self, rng: random.Random) -> Candidate:
        n = self.operator_count
        ops = choose_operator_sequence(n, rng)

        numbers: List[int] = []
        for i in range(n + 1):
            if i == 0:
                numbers.append(synthesize_operand(ops[0], OperandRole.FIRST, self.max_number, rng))
            elif i == n:
                numbers.append(synthesize_operand(ops[-1], OperandRole.LATER, self.max_number, rng))
            else:
                numbers.append(self._interior_operand(ops[i - 1], ops[i], rng))

        bracket: Optional[Bracket] = None
        if rng.random() < 0.5:
            start = rng.randrange(n - 1)
            end = start + 1 + rng.randrange(n - start - 1)
            bracket = (start, end)
        return Candidate(tuple(numbers), tuple(ops), bracket)


def generator_for(max_number: int, operator_count: int) -> ExpressionGenerator:
    if operator_count <= 2:
        return TwoOperatorGenerator(max_number)
    return MultiOperatorGenerator(max_number, operator_count)


# --- Constraint gate --------------------------------------------------------------


def is_acceptable(value: object, max_number: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 < value <= max_number


def try_generate(
    generator: ExpressionGenerator,
    rng: Optional[random.Random] = None,
    max_attempts: Optional[int] = DEFAULT_MAX_ATTEMPTS,
    exact_division: bool = False,
) -> Problem | GenerationFailed:
    """
    Rejection-sample candidates until one has an integer answer in
    ``1..max_number``. ``max_attempts=None`` retries forever.
    """
    rng = rng or random.Random()
    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        candidate = generator.compose(rng)
        try:
            value = candidate.evaluate(exact=exact_division)
        except InexactDivisionError:
            logger.debug("rejected %s: inexact division", candidate.display_text)
            continue
        except ZeroDivisionError:
            # e.g. a ÷ (b - b)
            logger.debug("rejected %s: division by zero", candidate.display_text)
            continue
        if is_acceptable(value, generator.max_number):
            return Problem(display_text=candidate.display_text, correct_answer=value)
        logger.debug("rejected %s = %s", candidate.display_text, value)

    failure = GenerationFailed(
        max_number=generator.max_number,
        operator_count=generator.operator_count,
        attempts=attempts,
    )
    logger.warning("generation gave up: %s", failure.message)
    return failure


def generate_problem(
    generator: ExpressionGenerator,
    rng: Optional[random.Random] = None,
    max_attempts: Optional[int] = DEFAULT_MAX_ATTEMPTS,
    exact_division: bool = False,
) -> Problem:
    outcome = try_generate(generator, rng, max_attempts, exact_division)
    if isinstance(outcome, GenerationFailed):
        raise GenerationError(outcome)
    return outcome


def generate(
    difficulty: int,
    min_operators: int = 2,
    rng: Optional[random.Random] = None,
    max_attempts: Optional[int] = DEFAULT_MAX_ATTEMPTS,
    exact_division: bool = False,
) -> Problem:
    """Generate one problem for a per-question difficulty number (3/5/8 scale)."""
    max_number, operator_count = resolve_generation(difficulty, min_operators)
    return generate_problem(
        generator_for(max_number, operator_count),
        rng=rng,
        max_attempts=max_attempts,
        exact_division=exact_division,
    )
