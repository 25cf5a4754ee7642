import os
import tempfile
from pathlib import Path

import pytest

# Must be set before db.py is imported anywhere
_DB_PATH = Path(tempfile.mkdtemp(prefix="trainer-tests-")) / "trainer.db"
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"

from db import SessionLocal, init_db  # noqa: E402
from models import Attempt  # noqa: E402

init_db()


@pytest.fixture(autouse=True)
def _empty_attempts():
    with SessionLocal() as db:
        db.query(Attempt).delete()
        db.commit()
    yield
