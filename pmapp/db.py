"""SQLAlchemy database setup for Project Manager."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, cast

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

if TYPE_CHECKING:
    import sqlite3

logger = logging.getLogger(__name__)

#: The application directory name.
APP_DIR_NAME: Final[str] = "Project Manager"
#: The default database name.
DEFAULT_DB_NAME: Final[str] = "projects.db"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


def get_project_db_path() -> Path:
    """
    Get the path to the project database.

    - On Windows, the database is created in the user's
        ``AppData/Local/Project Manager/projects`` directory.
    - On macOS, the database is created in the user's
        ``~/Library/Application Support/Project Manager/projects`` directory.
    - On Linux, the database is created in the user's
        ``~/.config/Project Manager/projects`` directory.
    - If the platform is not supported, raise a ValueError.

    Returns:
        Path to the database file

    """
    if sys.platform not in ["win32", "darwin", "linux"]:
        msg = f"Unsupported platform: {sys.platform}"
        raise ValueError(msg)
    if sys.platform == "win32":
        db_path = Path.home() / "AppData" / "Local" / APP_DIR_NAME / "projects"
    elif sys.platform == "darwin":
        db_path = (
            Path.home() / "Library" / "Application Support" / APP_DIR_NAME / "projects"
        )
    elif sys.platform == "linux":
        db_path = Path.home() / ".config" / APP_DIR_NAME / "projects"
    db_path.mkdir(parents=True, exist_ok=True)
    return db_path / DEFAULT_DB_NAME


def create_engine_with_path(db_path: Path | None = None) -> Engine:
    """
    Create SQLAlchemy engine with proper SQLite settings.

    Args:
        db_path: Optional path to database file. If None, uses default path.

    Returns:
        SQLAlchemy engine

    """
    if db_path is None:
        db_path = get_project_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)
    db_path.touch(exist_ok=True)

    engine = create_engine(
        f"sqlite:///{db_path}",
        # The page worker thread issues queries too
        connect_args={"check_same_thread": False},
        echo=False,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(
        dbapi_conn: sqlite3.Connection | Any, _connection_record: Any
    ) -> None:
        """Set SQLite pragmas on connection."""
        cursor = cast("sqlite3.Cursor", dbapi_conn.cursor())
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def init_db(engine: Engine) -> None:
    """
    Create any missing tables.

    Args:
        engine: SQLAlchemy engine

    """
    # Importing the models registers their tables on Base.metadata
    import pmapp.models  # noqa: F401, PLC0415

    Base.metadata.create_all(engine)
    logger.info(f"Database ready at {engine.url.database}")


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    """
    Build the session factory used by the data access layer.

    Records stay loaded after commit so they can be handed to the UI thread
    once their session is closed.

    Args:
        engine: SQLAlchemy engine

    Returns:
        Session factory bound to ``engine``

    """
    return sessionmaker(
        bind=engine, autocommit=False, autoflush=False, expire_on_commit=False
    )
