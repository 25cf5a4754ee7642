from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from db import get_db
from deps.auth import require_admin
from models import Attempt

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.delete("/attempts/{attempt_id}")
def delete_attempt(attempt_id: int, db: Session = Depends(get_db)):
    a = db.get(Attempt, attempt_id)
    if not a:
        raise HTTPException(status_code=404, detail="Attempt not found")
    db.delete(a)
    db.commit()
    logger.info("deleted attempt %d", attempt_id)
    return {"ok": True, "id": attempt_id}
