# routers/health.py
import logging

from fastapi import APIRouter, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from db import engine
from tools.check_alembic_single_head import alembic_heads

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/db")
def health_db():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"ok": True}
    except SQLAlchemyError as e:
        logger.error("db health check failed: %s", e)
        raise HTTPException(status_code=500, detail=f"db_error: {type(e).__name__}: {e}")


def _db_version() -> str | None:
    with engine.connect() as conn:
        try:
            return conn.execute(text("SELECT version_num FROM alembic_version")).scalar_one_or_none()
        except SQLAlchemyError:
            # table absent until the first `alembic upgrade`
            return None


@router.get("/migrations")
def health_migrations():
    try:
        heads = alembic_heads()
    except Exception as e:
        logger.warning("could not read alembic heads: %s", e)
        heads = []

    try:
        db_ver = _db_version()
    except SQLAlchemyError as e:
        return {"ok": False, "error": f"db_connect_failed: {e}", "code_heads": heads, "db_version": None}

    synced = db_ver in heads if heads else False
    return {"ok": synced, "synced": synced, "db_version": db_ver, "code_heads": heads}
