from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from db import get_db
from deps.auth import require_client
from models import Attempt
from schemas.attempts import AttemptOut

router = APIRouter(prefix="/attempts", tags=["attempts"])


@router.get("/recent-list", dependencies=[Depends(require_client)])
def attempts_recent(limit: int = 20, db: Session = Depends(get_db)):
    limit = max(1, min(limit, 100))
    items = db.scalars(
        select(Attempt).order_by(Attempt.created_at.desc(), Attempt.id.desc()).limit(limit)
    ).all()
    rows = [AttemptOut.model_validate(a).model_dump() for a in items]
    return {"ok": True, "items": rows, "count": len(rows)}


@router.get("/mistakes", dependencies=[Depends(require_client)])
def attempts_mistakes(
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Most recent wrong answers, one per question, for review."""
    wrong = db.scalars(
        select(Attempt)
        .where(Attempt.is_correct.is_(False))
        .order_by(Attempt.created_at.desc(), Attempt.id.desc())
    ).all()

    seen: set[str] = set()
    rows = []
    for a in wrong:
        if a.question in seen:
            continue
        seen.add(a.question)
        rows.append(AttemptOut.model_validate(a).model_dump())
        if len(rows) >= limit:
            break
    return {"ok": True, "items": rows, "count": len(rows)}


@router.get("/{attempt_id}", response_model=AttemptOut)
def get_attempt(attempt_id: int, db: Session = Depends(get_db)):
    # Public endpoint: no key required
    a = db.get(Attempt, attempt_id)
    if not a:
        raise HTTPException(status_code=404, detail="Attempt not found")
    return AttemptOut.model_validate(a)
