import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base

from brandpipe.settings import DATABASE_URL

log = logging.getLogger(__name__)

ENGINE_URL = DATABASE_URL
engine = create_engine(ENGINE_URL, future=True, echo=False)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
Base = declarative_base()


class DatabaseConnectionError(RuntimeError):
    """The document store could not be reached at startup."""


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def connect_database(url: str | None = None) -> Engine:
    """
    Open an engine, make sure the schema exists and probe it with a trivial query.
    Raises DatabaseConnectionError if any of that fails; nothing is retried.
    """
    eng = create_engine(url, future=True, echo=False) if url else engine
    try:
        # import for side effect: registers the tables on Base.metadata
        from brandpipe import models  # noqa: F401

        Base.metadata.create_all(bind=eng)
        with eng.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        eng.dispose()
        raise DatabaseConnectionError(f"cannot connect to {eng.url!r}: {e}") from e
    log.info("connected to document store: %s", eng.url.render_as_string(hide_password=True))
    return eng


def close_database(eng: Engine | None = None) -> None:
    eng = eng or engine
    eng.dispose()
    log.info("document store connection closed")
