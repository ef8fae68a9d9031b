"""
Database engine and session management.
"""
import logging
from contextlib import contextmanager
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi import Request
from fintrack.core.config import Settings
from fintrack.core.exceptions import FintrackError, StoreError
from fintrack.db.base import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> Engine:
    """Create the engine (and its connection pool) for one application."""
    url = settings.database_url
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session gets an empty db
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=settings.DB_ECHO, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(
        url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        pool_recycle=3600
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Session:
    """Dependency for getting database session."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_operation(db: Session, action: str, user_id: int = None):
    """
    Run a unit of store work, turning driver failures into StoreError.

    Domain errors raised inside the block pass through untouched.
    """
    try:
        yield
    except FintrackError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("%s failed (user_id=%s)", action, user_id)
        raise StoreError() from e


def init_db(engine: Engine):
    """Initialize database tables."""
    # Import models so SQLAlchemy registers their tables
    import fintrack.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
