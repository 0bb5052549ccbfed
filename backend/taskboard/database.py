"""
Database configuration and session management.

This module sets up SQLAlchemy (SQLite by default) and provides
database session management for the application.
"""

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.engine import Engine

from taskboard.config import get_settings, DATA_DIR

logger = logging.getLogger(__name__)

settings = get_settings()

DATABASE_URL = settings.database.DATABASE_URL

if DATABASE_URL.startswith("sqlite"):
    if DATABASE_URL.startswith("sqlite:///"):
        # Ensure the data directory exists for file-backed databases
        DATA_DIR.mkdir(parents=True, exist_ok=True)
    connect_args = {"check_same_thread": False}  # Needed for SQLite
else:
    connect_args = {}

# Create SQLAlchemy engine
engine = create_engine(
    DATABASE_URL,
    connect_args=connect_args,
    echo=settings.database.ECHO_SQL,
)


# Enable foreign key constraints for SQLite so todo rows cascade with their owner
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key constraints on SQLite connections."""
    if type(dbapi_conn).__module__.startswith("sqlite3"):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()


def get_db() -> Session:
    """
    Dependency function to get database session.

    Yields:
        Session: Database session that will be automatically closed.

    Usage:
        @router.get("/todos/{todo_id}")
        async def read_todo(todo_id: str, db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """
    Initialise the database.

    Creates all tables defined in the models if they don't exist.
    This is called on application startup.
    """
    # Import all models here so they are registered with Base
    from taskboard.models import user, todo  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info(f"Database initialised at {engine.url.render_as_string(hide_password=True)}")


def dispose_engine() -> None:
    """Release pooled connections on shutdown."""
    engine.dispose()
    logger.info("Database connections released")
