"""Database engine and session management."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from .models import Base

logger = logging.getLogger(__name__)


def normalize_database_url(database_url: str) -> str:
    """
    Turn a bare file path into a SQLite URL; pass real URLs through.

    Args:
        database_url: SQLAlchemy URL or path to a SQLite database file

    Returns:
        SQLAlchemy database URL
    """
    if "://" in database_url:
        return database_url
    return f"sqlite:///{database_url}"


class DatabaseEngine:
    """Manages database connection and session lifecycle."""

    def __init__(self, database_url: str, create_tables: bool = True):
        """
        Initialize database engine.

        Args:
            database_url: SQLAlchemy URL (or a SQLite file path)
            create_tables: Create any missing tables on initialize
        """
        self.database_url = normalize_database_url(database_url)
        self.create_tables = create_tables
        self.engine: Optional[Engine] = None
        self.session_factory: Optional[sessionmaker] = None

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.database_url).get_backend_name() == "sqlite"

    def initialize(self) -> None:
        """Initialize database engine and create tables if needed."""
        url = make_url(self.database_url)
        connect_args = {}

        if self.is_sqlite:
            if url.database and url.database != ":memory:":
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)
            connect_args["check_same_thread"] = False  # requests run in a threadpool

        self.engine = create_engine(
            self.database_url,
            echo=False,
            pool_pre_ping=True,
            connect_args=connect_args,
        )

        if self.is_sqlite:

            @event.listens_for(self.engine, "connect")
            def set_sqlite_pragma(dbapi_conn, connection_record):
                cursor = dbapi_conn.cursor()
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.close()

        if self.create_tables:
            Base.metadata.create_all(self.engine)

        logger.info(f"Database initialized at {url.render_as_string(hide_password=True)}")

        self.session_factory = sessionmaker(bind=self.engine)

    def get_session(self) -> Session:
        """
        Create a new database session.

        Returns:
            SQLAlchemy Session instance

        Raises:
            RuntimeError: If database not initialized
        """
        if not self.session_factory:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self.session_factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope for database operations.

        Yields:
            SQLAlchemy Session

        Example:
            with db_engine.session_scope() as session:
                node = Node.find_by_node_id(session, 2882400004)
        """
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self) -> None:
        """Close database engine."""
        if self.engine:
            self.engine.dispose()
            logger.info("Database engine closed")


# Global database engine instance
_db_engine: Optional[DatabaseEngine] = None


def init_database(database_url: str, create_tables: bool = True) -> DatabaseEngine:
    """
    Initialize global database engine.

    Args:
        database_url: SQLAlchemy URL (or a SQLite file path)
        create_tables: Create any missing tables

    Returns:
        DatabaseEngine instance
    """
    global _db_engine
    _db_engine = DatabaseEngine(database_url, create_tables=create_tables)
    _db_engine.initialize()
    return _db_engine


def get_database() -> DatabaseEngine:
    """
    Get global database engine instance.

    Raises:
        RuntimeError: If database not initialized
    """
    if not _db_engine:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    return _db_engine


def close_database() -> None:
    """Dispose of the global database engine, if any."""
    global _db_engine
    if _db_engine:
        _db_engine.close()
        _db_engine = None


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Provide a transactional scope using global database engine.

    Yields:
        SQLAlchemy Session
    """
    with get_database().session_scope() as session:
        yield session
