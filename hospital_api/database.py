import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from .config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: Optional[str] = None, config: Optional[Settings] = None) -> Engine:
    """Build the pooled engine the application owns for its whole lifetime."""
    config = config or default_settings
    db_url = database_url or config.DATABASE_URL
    engine_kwargs = {}

    if db_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            # a single shared connection, otherwise every checkout sees an empty database
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs.update({
            "pool_pre_ping": True,
            "pool_recycle": config.DB_POOL_RECYCLE,
            "pool_size": config.DB_POOL_SIZE,
            "max_overflow": config.DB_MAX_OVERFLOW,
            "pool_timeout": config.DB_POOL_TIMEOUT,
        })

    engine = create_engine(db_url, echo=config.DB_ECHO, **engine_kwargs)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_db_and_tables(engine: Engine) -> None:
    # table classes must be registered on the metadata before create_all
    from .db import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def drop_db_and_tables(engine: Engine) -> None:
    from .db import models  # noqa: F401

    SQLModel.metadata.drop_all(engine)


def ping(engine: Engine) -> bool:
    """Return True when a trivial query round-trips through the pool."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database ping failed: {e}")
        return False


@contextmanager
def transaction(engine: Engine) -> Iterator[Session]:
    """Run a batch of writes in one transaction.

    Commits when the block finishes, rolls back if it raises, and always
    closes the session so the connection goes back to the pool.
    """
    session = Session(engine)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_session(request: Request) -> Iterator[Session]:
    with Session(request.app.state.engine) as session:
        yield session
