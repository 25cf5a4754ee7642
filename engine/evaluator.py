# engine/evaluator.py
from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from engine.operators import Operator, from_glyph

Bracket = Tuple[int, int]

_TOKEN_RE = re.compile(r"\d+|[()+\-×÷]")
_SUFFIX_RE = re.compile(r"\s*=\s*\?\s*$")


class InexactDivisionError(ValueError):
    pass


def _apply(op: Operator, a: int, b: int, exact: bool) -> int:
    if exact and op is Operator.DIVISION and a % b != 0:
        raise InexactDivisionError(f"{a} is not divisible by {b}")
    return op.apply(a, b)


def evaluate_flat(
    numbers: Sequence[int], operators: Sequence[Operator], exact: bool = False
) -> int:
    """
    Evaluate a bracket-free operand/operator sequence with standard precedence.

    Pass 1 splices out every multiplication/division left to right; pass 2 folds
    the remaining additions/subtractions left to right.
    """
    if len(numbers) != len(operators) + 1:
        raise ValueError("expected exactly one more operand than operators")

    nums: List[int] = list(numbers)
    ops: List[Operator] = list(operators)

    i = 0
    while i < len(ops):
        if ops[i].is_high_precedence:
            nums[i] = _apply(ops[i], nums[i], nums[i + 1], exact)
            del nums[i + 1]
            del ops[i]
            # same position now holds the next operator
            continue
        i += 1

    result = nums[0]
    for op, n in zip(ops, nums[1:]):
        result = _apply(op, result, n, exact)
    return result


def reduce_bracket(
    numbers: Sequence[int],
    operators: Sequence[Operator],
    bracket: Bracket,
    exact: bool = False,
) -> Tuple[List[int], List[Operator]]:
    """Collapse operands ``start..end`` into one scalar and drop their operators."""
    start, end = bracket
    if not 0 <= start < end < len(numbers):
        raise ValueError(f"invalid bracket range: {bracket}")

    inner = evaluate_flat(numbers[start : end + 1], operators[start:end], exact=exact)
    new_numbers = list(numbers[:start]) + [inner] + list(numbers[end + 1 :])
    new_operators = list(operators[:start]) + list(operators[end:])
    return new_numbers, new_operators


def evaluate_expression(
    numbers: Sequence[int],
    operators: Sequence[Operator],
    bracket: Optional[Bracket] = None,
    exact: bool = False,
) -> int:
    if bracket is None:
        return evaluate_flat(numbers, operators, exact=exact)
    nums, ops = reduce_bracket(numbers, operators, bracket, exact=exact)
    return evaluate_flat(nums, ops, exact=exact)


def parse_display_text(text: str) -> Tuple[List[int], List[Operator], Optional[Bracket]]:
    """
    Split a rendered problem such as ``"(12 + 3) × 4 = ?"`` back into operands,
    operators and the (start, end) operand indices of its single bracket pair.
    """
    body = _SUFFIX_RE.sub("", text)
    tokens = _TOKEN_RE.findall(body)
    if "".join(tokens) != re.sub(r"\s+", "", body):
        raise ValueError(f"unexpected characters in expression: {text!r}")

    numbers: List[int] = []
    operators: List[Operator] = []
    start: Optional[int] = None
    end: Optional[int] = None

    expect_number = True
    for tok in tokens:
        if tok == "(":
            if not expect_number or start is not None:
                raise ValueError(f"misplaced '(' in {text!r}")
            start = len(numbers)
        elif tok == ")":
            if expect_number or start is None or end is not None:
                raise ValueError(f"misplaced ')' in {text!r}")
            end = len(numbers) - 1
        elif tok.isdigit():
            if not expect_number:
                raise ValueError(f"missing operator in {text!r}")
            numbers.append(int(tok))
            expect_number = False
        else:
            if expect_number:
                raise ValueError(f"missing operand in {text!r}")
            operators.append(from_glyph(tok))
            expect_number = True

    if expect_number or (start is None) != (end is None):
        raise ValueError(f"incomplete expression: {text!r}")

    bracket = (start, end) if start is not None and end is not None else None
    if bracket is not None and bracket[0] >= bracket[1]:
        raise ValueError(f"bracket must enclose at least two operands: {text!r}")
    return numbers, operators, bracket
