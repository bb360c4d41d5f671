"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine (a local SQLite
file unless `DATABASE_URL` says otherwise) and provides the helpers
used by the application, the seed script and the tests.
"""

from sqlalchemy import event
from sqlmodel import SQLModel, create_engine, Session

from .config import settings


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def enable_sqlite_foreign_keys(bind):
    """Make SQLite enforce FOREIGN KEY constraints on every new connection.

    SQLite ignores them unless `PRAGMA foreign_keys=ON` is issued per
    connection; other backends are left alone.
    """
    if bind.dialect.name != "sqlite":
        return

    @event.listens_for(bind, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(settings.DATABASE_URL, echo=False, connect_args=_connect_args(settings.DATABASE_URL))
enable_sqlite_foreign_keys(engine)


def create_db_and_tables(bind=None):
    """Create database tables using SQLModel metadata.

    The authority rows every deployment needs are seeded afterwards so
    role checks work against a fresh database. Production deployments
    should still rely on a proper migration tool (alembic).
    """
    # registers the table classes on the metadata
    from . import models  # noqa: F401
    bind = bind if bind is not None else engine
    SQLModel.metadata.create_all(bind)
    _ensure_authorities(bind)


def _ensure_authorities(bind):
    """Insert the default authorities that are missing (idempotent)."""
    from .repositories import AuthorityRepository
    with Session(bind) as session:
        AuthorityRepository(session).ensure_defaults()


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
