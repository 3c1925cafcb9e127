"""Engine, sessions and schema bootstrap for the users store.

`DATABASE_URL` picks the backend. SQLite is the default; any other
SQLAlchemy URL (e.g. `postgresql+psycopg://...`) gets a bounded pool.
"""

import logging
import os
from typing import List, Optional
from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import StaticPool
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./usermanager.db")

# Base class for declarative models
Base = declarative_base()


def _is_sqlite(database_url: str) -> bool:
    return make_url(database_url).get_backend_name() == "sqlite"


def _is_sqlite_memory(database_url: str) -> bool:
    return _is_sqlite(database_url) and make_url(database_url).database in (None, "", ":memory:")


def engine_options(database_url: str) -> dict:
    """Return create_engine keyword arguments for `database_url`."""
    options: dict = {"echo": os.getenv("DEBUG", "False").lower() == "true"}

    if _is_sqlite(database_url):
        # Sessions are used from FastAPI's threadpool.
        options["connect_args"] = {"check_same_thread": False}
        if _is_sqlite_memory(database_url):
            # Every new connection would open its own empty database.
            options["poolclass"] = StaticPool
        return options

    options["pool_pre_ping"] = True
    options["pool_size"] = int(os.getenv("DB_POOL_SIZE", "5"))
    options["max_overflow"] = int(os.getenv("DB_MAX_OVERFLOW", "5"))
    options["pool_timeout"] = int(os.getenv("DB_POOL_TIMEOUT_SEC", "30"))
    return options


def _use_wal_journal(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    """Create an engine; file-backed SQLite databases run in WAL mode."""
    built = create_engine(database_url, **engine_options(database_url))
    if _is_sqlite(database_url) and not _is_sqlite_memory(database_url):
        event.listen(built, "connect", _use_wal_journal)
    return built


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Get database session (dependency for FastAPI)."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def schema_problems(conn) -> List[str]:
    """List the mapped tables and columns the connected database lacks."""
    from usermanager.database import models  # noqa: F401

    inspector = inspect(conn)
    existing_tables = set(inspector.get_table_names())
    problems: List[str] = []
    for table in Base.metadata.sorted_tables:
        if table.name not in existing_tables:
            problems.append(f"missing table: {table.name}")
            continue
        existing_columns = {c["name"] for c in inspector.get_columns(table.name)}
        for column in table.columns:
            if column.name not in existing_columns:
                problems.append(f"missing column: {table.name}.{column.name}")
    return problems


def init_db(bind: Optional[Engine] = None) -> None:
    """Make sure the users schema is in place before serving requests.

    With `RUN_MIGRATIONS=true` on a non-SQLite database, Alembic upgrades to
    head. Otherwise missing tables are created. A table that exists but lacks
    mapped columns raises RuntimeError, since `create_all()` never alters
    existing tables.
    """
    target = bind or engine
    url = target.url.render_as_string(hide_password=False)

    run_migrations = os.getenv("RUN_MIGRATIONS", "False").lower() == "true"
    if run_migrations and not _is_sqlite(url):
        from alembic import command
        from alembic.config import Config

        alembic_cfg = Config(os.getenv("ALEMBIC_INI", "alembic.ini"))
        alembic_cfg.set_main_option("sqlalchemy.url", url)
        command.upgrade(alembic_cfg, "head")
        logger.info("Database schema upgraded to head via Alembic")
        return

    from usermanager.database import models  # noqa: F401

    Base.metadata.create_all(bind=target)
    with target.connect() as conn:
        problems = schema_problems(conn)
    if problems:
        raise RuntimeError(
            "Database schema is behind the users mapping ("
            + "; ".join(problems)
            + "); run `python -m usermanager.database.migrate_runner`"
        )
    logger.info(f"Database schema ready: {', '.join(sorted(Base.metadata.tables))}")
