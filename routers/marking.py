from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sympy import nan, oo, preorder_traversal, zoo
from sympy.core.power import Pow
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)

from db import get_db
from engine.checker import is_answer_correct
from engine.evaluator import evaluate_expression, parse_display_text
from engine.operators import operators_used
from models import Attempt
from schemas.marking import (
    CheckRequest,
    CheckResponse,
    EvaluateRequest,
    EvaluateResponse,
    MarkBatchRequest,
    MarkBatchResponse,
    MarkRequest,
    MarkResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["marking"])

# --- Parsing / validation helpers ------------------------------------------------
LEN_LIMIT = 100
_INVALID_CHARS_MSG = (
    "Only numeric expressions using digits, spaces, + - * / × ÷ ^ . and parentheses are allowed."
)
_NON_FINITE_MSG = "Expression is not finite (e.g., division by zero)."
_TOO_COMPLEX_MSG = "Expression is too complex."
_ALLOWED_RE = re.compile(r"^[0-9+\-*/×÷^().\s]{1,100}$")

TRANSFORMS = standard_transformations + (
    convert_xor,
    implicit_multiplication_application,
)

_MAX_OPS = 200
_MAX_INT_DIGITS = 200
_MAX_EXPONENT_ABS = 2000


def _validate_answer_text(s: Optional[str]) -> Optional[str]:
    if s is None or not isinstance(s, str) or not s.strip():
        return "Answer required."
    if len(s) > LEN_LIMIT:
        return "Answer too long (> 100)."
    if _ALLOWED_RE.fullmatch(s) is None:
        return _INVALID_CHARS_MSG
    return None


def _to_sympy_syntax(s: str) -> str:
    return s.replace("×", "*").replace("÷", "/")


def _assert_expr_complexity(sym: Any) -> None:
    if getattr(sym, "is_Number", False):
        return
    if sym.count_ops() > _MAX_OPS:
        raise ValueError(_TOO_COMPLEX_MSG)
    for node in preorder_traversal(sym):
        if getattr(node, "is_Integer", False) and len(str(abs(int(node)))) > _MAX_INT_DIGITS:
            raise ValueError(_TOO_COMPLEX_MSG)
        if isinstance(node, Pow) and getattr(node.exp, "is_number", False):
            if abs(float(node.exp)) > _MAX_EXPONENT_ABS:
                raise ValueError(_TOO_COMPLEX_MSG)


def _eval_numeric(expr: str) -> float:
    sym = parse_expr(_to_sympy_syntax(expr), transformations=TRANSFORMS, evaluate=True)
    _assert_expr_complexity(sym)
    if sym in (oo, -oo, zoo, nan) or getattr(sym, "is_finite", None) is False:
        raise ValueError(_NON_FINITE_MSG)
    val = float(sym.evalf())
    if not math.isfinite(val):
        raise ValueError(_NON_FINITE_MSG)
    return val


_BAD_QUESTION_MSG = "Question is not a valid arithmetic problem."
_ANSWER_MISMATCH_MSG = "correct_answer does not match the question."


def _question_value(question: str) -> int:
    """Re-derive the answer of a rendered problem; ValueError if it has none."""
    numbers, ops, bracket = parse_display_text(question)
    try:
        return evaluate_expression(numbers, ops, bracket)
    except ZeroDivisionError:
        raise ValueError(_BAD_QUESTION_MSG)


# --- Core marking -----------------------------------------------------------------


def _mark_one(item: MarkRequest, db: Session) -> Dict[str, Any]:
    expected = str(item.correct_answer)
    operators = sorted(operators_used(item.question))

    def _fail(feedback: str) -> Dict[str, Any]:
        return {
            "ok": False,
            "correct": False,
            "score": 0,
            "feedback": feedback,
            "expected": expected,
            "operators": operators,
        }

    # the client-supplied answer key must agree with the question itself
    try:
        derived = _question_value(item.question)
    except ValueError:
        logger.info("rejected unparseable question %r", item.question)
        return _fail(_BAD_QUESTION_MSG)
    if derived != item.correct_answer:
        logger.info("rejected %r: correct_answer %d, derived %d", item.question, item.correct_answer, derived)
        return _fail(_ANSWER_MISMATCH_MSG)

    msg = _validate_answer_text(item.answer)
    if msg:
        return _fail(msg)

    try:
        user_val = _eval_numeric(item.answer)
    except ValueError as e:
        return _fail(str(e))
    except Exception:
        return _fail(_INVALID_CHARS_MSG)

    correct = is_answer_correct(user_val, item.correct_answer)

    attempt = Attempt(
        question=item.question,
        correct_answer=item.correct_answer,
        user_answer=user_val,
        is_correct=correct,
        operators=operators,
        difficulty=item.difficulty,
        duration_ms=item.duration_ms,
    )
    db.add(attempt)
    db.flush()

    feedback = ""
    if correct and item.answer.strip() != expected:
        feedback = f"Correct; simplest form is {expected}."

    return {
        "ok": True,
        "correct": correct,
        "score": 1 if correct else 0,
        "feedback": feedback,
        "expected": expected,
        "operators": operators,
        "attempt_id": attempt.id,
    }


# --- Endpoints --------------------------------------------------------------------


@router.post("/check", response_model=CheckResponse)
def check(req: CheckRequest):
    return {"correct": is_answer_correct(req.submitted, req.correct)}


@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate(req: EvaluateRequest):
    err = _validate_answer_text(req.expr)
    if err:
        return {"ok": False, "value": None, "feedback": err}
    try:
        return {"ok": True, "value": _eval_numeric(req.expr)}
    except ValueError as e:
        return {"ok": False, "value": None, "feedback": str(e)}
    except Exception:
        return {"ok": False, "value": None, "feedback": _INVALID_CHARS_MSG}


@router.post("/mark", response_model=MarkResponse)
def mark(req: MarkRequest, db: Session = Depends(get_db)):
    res = _mark_one(req, db)
    db.commit()
    return res


@router.post("/mark-batch", response_model=MarkBatchResponse)
def mark_batch(req: MarkBatchRequest, db: Session = Depends(get_db)):
    results: List[Dict[str, Any]] = [_mark_one(it, db) for it in req.items]
    db.commit()

    correct_count = sum(1 for r in results if r["correct"])
    logger.info("marked batch: %d/%d correct", correct_count, len(results))
    return {"ok": True, "total": len(results), "correct": correct_count, "results": results}
