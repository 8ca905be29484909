"""Database configuration and session management."""

from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from src.config import get_settings
from src.errors import translate_integrity_error

settings = get_settings()


def _enable_sqlite_transactional_ddl(engine: Engine) -> None:
    """Let SQLAlchemy emit BEGIN itself so DDL rolls back with the transaction.

    pysqlite otherwise commits schema changes on its own, leaving a failed
    migration run half applied.
    """

    @event.listens_for(engine, "connect")
    def disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_engine_for(url: str, **kwargs: Any) -> Engine:
    """Create an engine with the connection options the URL's backend needs."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    elif "poolclass" not in kwargs:
        kwargs.setdefault("pool_pre_ping", True)
        kwargs.setdefault("pool_size", settings.database_pool_size)
        kwargs.setdefault("max_overflow", settings.database_max_overflow)
    kwargs.setdefault("echo", settings.database_echo)
    engine = create_engine(url, **kwargs)
    if url.startswith("sqlite"):
        _enable_sqlite_transactional_ddl(engine)
    return engine


engine = create_engine_for(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Provide a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit(db: Session) -> None:
    """Commit the session, raising a ConstraintViolationError on integrity failures."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise translate_integrity_error(exc) from exc


@contextmanager
def session_scope(bind: Engine | None = None) -> Iterator[Session]:
    """Session that commits on success and rolls back on any error."""
    db = SessionLocal(bind=bind) if bind is not None else SessionLocal()
    try:
        yield db
        commit(db)
    except IntegrityError as exc:
        db.rollback()
        raise translate_integrity_error(exc) from exc
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """Create all tables straight from the models, bypassing migrations."""
    # Import all models here so they are registered with Base.metadata
    from src import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
