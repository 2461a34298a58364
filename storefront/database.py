from typing import Iterable, Optional

from sqlalchemy import Table, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import declarative_base, sessionmaker

# Base class for models
Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    Create a SQLAlchemy engine with connection pooling.

    The engine is the only handle shared between requests. SQLite gets
    ``check_same_thread=False`` so pooled connections can be used from the
    worker threads that run search queries.

    Args:
        database_url: SQLAlchemy database URL

    Returns:
        Configured engine
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        database_url,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory repositories open their sessions from."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def init_db(engine: Engine, tables: Optional[Iterable[Table]] = None) -> None:
    """
    Create database tables.

    Args:
        engine: Engine bound to the target database
        tables: Only create these tables (defaults to every mapped table)
    """
    Base.metadata.create_all(
        bind=engine,
        tables=list(tables) if tables is not None else None,
    )


def is_unique_violation(error: IntegrityError) -> bool:
    """Tell whether an IntegrityError was raised by a unique index."""
    if getattr(error.orig, "pgcode", None) == "23505":
        return True
    message = str(error.orig).lower()
    return "unique" in message or "duplicate" in message
