"""Data access for projects."""

from __future__ import annotations

import builtins
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError

from pmapp.db import make_session_factory
from pmapp.exc import PersistenceError
from pmapp.models.project import Project

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import date

    from sqlalchemy import Engine
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class ProjectGateway:
    """
    Executes project reads and writes against the database.

    Each operation runs in its own session, which is closed when the operation
    finishes whether it succeeded or not.  Database errors are logged here and
    re-raised as :class:`~pmapp.exc.PersistenceError`.  Nothing is retried.

    Records returned by this class are detached from any session but keep all
    their attributes loaded.

    Args:
        engine: SQLAlchemy engine

    """

    def __init__(self, engine: Engine) -> None:
        #: The SQLAlchemy engine.
        self.engine = engine
        #: The session factory.
        self.session_factory = make_session_factory(engine)

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        """
        Open a session for one operation, translating database errors.

        Args:
            action: What the operation is doing, for the error message

        Yields:
            SQLAlchemy session

        """
        session = self.session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            msg = f"Database error while {action}."
            logger.exception(msg)
            raise PersistenceError(msg) from e
        finally:
            session.close()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, record: Project) -> None:
        """
        Insert or update a project.

        If ``record`` has no ID, it is inserted, and the generated ID is set on
        ``record`` itself.  Its ``created_at`` is set to now if it is empty.

        If ``record`` has an ID, the name, description and due date of the
        matching row are updated.  ``created_at`` is never changed.

        Args:
            record: The project to save

        Raises:
            PersistenceError: the database operation failed

        """
        if record.id is None:
            had_created_at = record.created_at is not None
            try:
                with self._session("adding the project") as session:
                    if not had_created_at:
                        record.created_at = datetime.now()
                    session.add(record)
                    session.commit()
            except PersistenceError:
                # A failed insert leaves the record unsaved
                record.id = None  # type: ignore[assignment]
                if not had_created_at:
                    record.created_at = None  # type: ignore[assignment]
                raise
            logger.debug(f"Inserted {record!r}")
            return

        with self._session("updating the project") as session:
            session.execute(
                update(Project)
                .where(Project.id == record.id)
                .values(
                    name=record.name,
                    description=record.description,
                    due_date=record.due_date,
                )
            )
            session.commit()
        logger.debug(f"Updated {record!r}")

    def delete_by_id(self, project_id: int) -> None:
        """
        Delete a project.  Deleting a project that does not exist is not an
        error.

        Args:
            project_id: Project ID

        Raises:
            PersistenceError: the database operation failed

        """
        with self._session("deleting the project") as session:
            result = session.execute(delete(Project).where(Project.id == project_id))
            session.commit()
        logger.debug(f"Deleted project {project_id} ({result.rowcount} rows)")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find_by_id(self, project_id: int) -> Project | None:
        """
        Get a project by ID.

        Args:
            project_id: Project ID

        Returns:
            The project, or None if there is no such project

        """
        with self._session("loading the project") as session:
            return Project.get(session, project_id)

    def list_filtered(
        self,
        name_contains: str | None = None,
        due_date: date | None = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> builtins.list[Project]:
        """
        List projects newest first, optionally filtered and paginated.

        Keyword Args:
            name_contains: Only include projects whose name contains this text.
                ``%`` and ``_`` are matched literally; letter case follows
                SQLite's ``LIKE`` (ASCII letters ignore case).
            due_date: Only include projects due on this date
            offset: Number of leading projects to skip; no offset if None
            limit: Maximum number of projects to return; unbounded if None

        Returns:
            List of projects

        """
        with self._session("loading the project list") as session:
            return Project.list(
                session,
                name_contains=name_contains,
                due_date=due_date,
                offset=offset,
                limit=limit,
            )

    def count_filtered(
        self, name_contains: str | None = None, due_date: date | None = None
    ) -> int:
        """
        Count the projects :meth:`list_filtered` would return without
        pagination.
        """
        with self._session("counting projects") as session:
            return Project.count(
                session, name_contains=name_contains, due_date=due_date
            )

    def list(
        self, offset: int | None = None, limit: int | None = None
    ) -> builtins.list[Project]:
        """List all projects, newest first."""
        return self.list_filtered(offset=offset, limit=limit)

    def list_by_name_contains(
        self, substring: str, offset: int | None = None, limit: int | None = None
    ) -> builtins.list[Project]:
        """List projects whose name contains ``substring``, newest first."""
        return self.list_filtered(name_contains=substring, offset=offset, limit=limit)

    def list_by_due_date(
        self, due_date: date, offset: int | None = None, limit: int | None = None
    ) -> builtins.list[Project]:
        """List projects due on ``due_date``, newest first."""
        return self.list_filtered(due_date=due_date, offset=offset, limit=limit)

    def count(self) -> int:
        return self.count_filtered()

    def count_by_name_contains(self, substring: str) -> int:
        return self.count_filtered(name_contains=substring)

    def count_by_due_date(self, due_date: date) -> int:
        return self.count_filtered(due_date=due_date)
