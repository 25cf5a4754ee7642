# Learner statistics derived from recorded attempts.
# The engine never reads these directly; routers pass the correct rate in.

from __future__ import annotations

from collections import OrderedDict
from datetime import UTC, datetime, timedelta
from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from engine.difficulty import correct_rate
from engine.operators import DISPLAY_GLYPHS
from models import Attempt

HISTORY_DAYS = 30


def totals(db: Session) -> tuple[int, int]:
    total = db.scalar(select(func.count(Attempt.id))) or 0
    correct = db.scalar(select(func.count(Attempt.id)).where(Attempt.is_correct.is_(True))) or 0
    return int(total), int(correct)


def summary(db: Session, today: datetime | None = None) -> Dict[str, Any]:
    today = today or datetime.now(UTC)
    since = today - timedelta(days=HISTORY_DAYS)

    total, correct = totals(db)
    avg_ms = db.execute(select(func.avg(Attempt.duration_ms))).scalar_one_or_none()

    by_operator = {g: {"correct": 0, "total": 0} for g in DISPLAY_GLYPHS}
    history: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()

    rows = db.execute(
        select(Attempt.created_at, Attempt.is_correct, Attempt.operators, Attempt.duration_ms)
        .order_by(Attempt.created_at.asc())
    ).all()
    for created_at, is_correct, operators, duration_ms in rows:
        for g in operators or []:
            if g in by_operator:
                by_operator[g]["total"] += 1
                if is_correct:
                    by_operator[g]["correct"] += 1

        if created_at is None:
            continue
        if created_at.tzinfo is None:
            # SQLite hands back naive datetimes
            created_at = created_at.replace(tzinfo=UTC)
        if created_at < since:
            continue
        day = created_at.date().isoformat()
        rec = history.setdefault(day, {"date": day, "correct": 0, "total": 0, "_ms": []})
        rec["total"] += 1
        if is_correct:
            rec["correct"] += 1
        if duration_ms is not None:
            rec["_ms"].append(duration_ms)

    days: List[Dict[str, Any]] = []
    for rec in history.values():
        ms = rec.pop("_ms")
        rec["average_time_ms"] = (sum(ms) / len(ms)) if ms else None
        days.append(rec)

    return {
        "total": total,
        "correct": correct,
        "incorrect": total - correct,
        "correct_rate": correct_rate(correct, total),
        "average_time_ms": float(avg_ms) if avg_ms is not None else None,
        "by_operator": by_operator,
        "history": days,
    }
