from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    if not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Upper bound on rejection-sampling attempts per problem; 0 disables the cap.
MAX_GENERATION_ATTEMPTS = _env_int("TRAINER_MAX_GENERATION_ATTEMPTS", 10000)

# Size of a practice set when the client does not ask for a count
QUESTIONS_PER_DAY = _env_int("TRAINER_QUESTIONS_PER_DAY", 100)

# Reject problems whose divisions leave a remainder (off = floor division)
EXACT_DIVISION = _env_flag("TRAINER_EXACT_DIVISION")


def generation_attempt_cap() -> int | None:
    return MAX_GENERATION_ATTEMPTS if MAX_GENERATION_ATTEMPTS > 0 else None
