import contextlib

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from .core.config import settings


def build_engine(url: str, echo: bool = False, **kwargs) -> Engine:
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_size", 5)
        kwargs.setdefault("max_overflow", 10)
        kwargs.setdefault("pool_timeout", 30)
        kwargs.setdefault("pool_recycle", 3600)
        kwargs.setdefault("pool_pre_ping", True)

    engine = create_engine(url, echo=echo, **kwargs)

    if url.startswith("sqlite"):
        # SQLite ignores REFERENCES clauses unless enabled per connection
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)


def create_db_and_tables(bind: Engine = engine) -> None:
    # Importing the models registers their tables on the shared metadata
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(bind)


def get_session(request: Request):
    # Each app carries its own engine (see main.create_app)
    with Session(getattr(request.app.state, "engine", engine)) as session:
        yield session


@contextlib.contextmanager
def session_scope(bind: Engine = engine):
    session = Session(bind)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
