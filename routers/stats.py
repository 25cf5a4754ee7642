from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import progress
from db import get_db
from schemas.stats import StatsOut

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsOut)
def get_stats(db: Session = Depends(get_db)):
    return progress.summary(db)
