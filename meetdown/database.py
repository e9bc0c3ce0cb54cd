"""
Database configuration and session management.

Provides:
- Database: an explicitly constructed storage handle owning one engine
- Scoped sessions that commit on success and roll back on error
- Table creation/teardown utilities

There is no process-wide engine. Callers build a Database (usually via
database_from_settings) and pass it to whatever needs storage.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from meetdown.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_database_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine configured for the database type.

    Args:
        database_url: SQLAlchemy connection URL
        echo: Log SQL statements

    Returns:
        Engine
    """
    if "sqlite" in database_url.lower():
        _ensure_sqlite_directory(database_url)

        # SQLite-specific configuration
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},  # Allow multiple threads (needed for FastAPI)
            poolclass=StaticPool,  # Single connection; keeps :memory: databases alive
            echo=echo,
        )

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            """Enable foreign key constraints in SQLite."""
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    # PostgreSQL-specific configuration
    return create_engine(
        database_url,
        pool_size=5,  # Maximum number of connections in pool
        pool_recycle=3600,  # Recycle connections after 1 hour
        pool_pre_ping=True,  # Test connections before using them
        echo=echo,
    )


def _ensure_sqlite_directory(database_url: str) -> None:
    path = make_url(database_url).database
    if path and path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)


class Database:
    """
    Storage handle wrapping an engine and its session factory.

    Usage:
        database = Database("sqlite:///./data/meetdown.db")
        database.create_all()
        with database.session() as session:
            session.add(proposal)
            # Automatic commit on context exit
        database.dispose()
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.url = database_url
        self.engine = create_database_engine(database_url, echo=echo)
        self._session_factory = sessionmaker(
            autocommit=False,  # Explicit commits required
            autoflush=False,  # Don't flush automatically before queries
            expire_on_commit=False,  # Records stay readable after the scope closes
            bind=self.engine,
        )

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Acquire a session for one unit of work.

        Commits when the block exits normally, rolls back and re-raises on
        any exception, and always releases the session.

        Yields:
            Session: SQLAlchemy database session
        """
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def create_all(self) -> None:
        """
        Create all tables.

        This is useful for development and testing. In production, use Alembic migrations.
        """
        from meetdown.models import Base

        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created successfully")

    def drop_all(self) -> None:
        """
        Drop all tables.

        WARNING: This will delete all data. Primarily for testing.
        """
        from meetdown.models import Base

        logger.warning("Dropping all database tables...")
        Base.metadata.drop_all(bind=self.engine)
        logger.info("All database tables dropped")

    def check_connection(self) -> bool:
        """
        Test database connection.

        Returns:
            bool: True if connection successful, False otherwise
        """
        try:
            with self.session() as db:
                db.execute(text("SELECT 1"))
            logger.info("Database connection successful")
            return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.engine.dispose()

    def __repr__(self) -> str:
        return f"<Database(url={make_url(self.url).render_as_string(hide_password=True)!r})>"


def database_from_settings(settings: Optional[Settings] = None) -> Database:
    """
    Build a Database from application settings.

    Validates production configuration before connecting.
    """
    settings = settings or get_settings()

    if settings.is_production:
        settings.validate_production_config()

    return Database(settings.database_url, echo=settings.log_level == "DEBUG")
