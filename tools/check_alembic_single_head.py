#!/usr/bin/env python
import sys
from pathlib import Path

from alembic.config import Config
from alembic.script import ScriptDirectory

ROOT = Path(__file__).resolve().parent.parent


def alembic_heads(root: Path = ROOT) -> list[str]:
    cfg = Config(str(root / "alembic.ini"))
    cfg.set_main_option("script_location", str(root / "alembic"))
    return list(ScriptDirectory.from_config(cfg).get_heads())


def main() -> int:
    heads = alembic_heads()
    if len(heads) != 1:
        print(f"Error: expected 1 Alembic head, found {len(heads)}: {heads}")
        return 1
    print(f"Alembic head OK: {heads[0]}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
