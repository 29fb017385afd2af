# File: marketplace/db/session.py

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from marketplace.core.config import settings

SQLALCHEMY_DATABASE_URL = settings.database_url


def _connect_args(url: str, timeout: int) -> dict:
    if url.startswith("sqlite"):
        # sqlite3 "timeout" is the busy-wait bound for locked databases
        return {"check_same_thread": False, "timeout": timeout}
    if url.startswith("postgresql"):
        return {
            "connect_timeout": timeout,
            "options": f"-c statement_timeout={timeout * 1000}",
        }
    return {}


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores FOREIGN KEY clauses unless asked per connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def engine_options(url: str, timeout: int) -> dict:
    options = {"connect_args": _connect_args(url, timeout), "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        options["pool_timeout"] = timeout
    return options


def build_engine(url: str, timeout: int) -> Engine:
    engine = create_engine(url, **engine_options(url, timeout))
    if url.startswith("sqlite"):
        enable_sqlite_foreign_keys(engine)
    return engine


engine = build_engine(SQLALCHEMY_DATABASE_URL, settings.db_timeout_seconds)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

