"""Alembic runner for deploys.

A database whose users table was created by `init_db()` has no Alembic
history. Upgrading it would try to create the table again, so such a
database is checked against the mapping and stamped at head instead.

    python -m usermanager.database.migrate_runner
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from usermanager.database.database import Base, DATABASE_URL, build_engine, schema_problems
from usermanager.database import models  # noqa: F401

logger = logging.getLogger(__name__)

UPGRADE = "upgrade"
STAMP = "stamp"


def _alembic_cfg(bind: Engine) -> Config:
    cfg = Config(os.getenv("ALEMBIC_INI", "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", bind.url.render_as_string(hide_password=False))
    return cfg


def plan_migration(conn) -> str:
    """Decide whether the connected database needs `upgrade` or `stamp`.

    Raises:
        RuntimeError: If mapped tables exist untracked but do not match the mapping
    """
    tables = set(inspect(conn).get_table_names())
    if "alembic_version" in tables:
        return UPGRADE
    if not tables & set(Base.metadata.tables):
        return UPGRADE

    problems = schema_problems(conn)
    if problems:
        raise RuntimeError(
            "Untracked schema does not match the users mapping; refusing to stamp head. "
            + "; ".join(problems)
        )
    return STAMP


def main(bind: Optional[Engine] = None) -> int:
    target = bind or build_engine(DATABASE_URL)
    with target.connect() as conn:
        action = plan_migration(conn)

    cfg = _alembic_cfg(target)
    if action == STAMP:
        logger.warning("Schema already present but untracked; stamping Alembic head")
        command.stamp(cfg, "head")
    else:
        command.upgrade(cfg, "head")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    sys.exit(main())
