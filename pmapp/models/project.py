"""Project model."""

from __future__ import annotations

import builtins
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Index, Integer, Select, String, func, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from pmapp.db import Base


class Project(Base):
    """
    Represents a project.

    A project has these characteristics:

    - A name
    - A description
    - The date and time it was created, assigned once when it is first saved
    - A due date

    A project has an ID only once it has been saved.  Lists of projects are
    always ordered newest first.
    """

    __tablename__ = "project"
    __table_args__ = (Index("ix_project_created_at", "created_at"),)

    #: The project ID.
    id: Mapped[int] = mapped_column(
        "project_id", Integer, primary_key=True, autoincrement=True
    )
    #: The project name.
    name: Mapped[str] = mapped_column(String, nullable=False)
    #: The project description.
    description: Mapped[str] = mapped_column(String, nullable=False)
    #: The date and time the project was created.
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    #: The date the project is due.
    due_date: Mapped[date] = mapped_column(Date, nullable=False)

    def __repr__(self) -> str:
        return f"<Project id={self.id!r} name={self.name!r}>"

    @classmethod
    def get(cls, session: Session, project_id: int) -> Project | None:
        """
        Get a project by ID.

        Args:
            session: SQLAlchemy session
            project_id: Project ID

        Returns:
            Project or None if not found

        """
        return session.get(cls, project_id)

    @classmethod
    def _apply_filters(
        cls,
        stmt: Select,
        name_contains: str | None = None,
        due_date: date | None = None,
    ) -> Select:
        if name_contains is not None:
            # ``%`` and ``_`` in the search text match literally
            stmt = stmt.where(cls.name.contains(name_contains, autoescape=True))
        if due_date is not None:
            stmt = stmt.where(cls.due_date == due_date)
        return stmt

    @classmethod
    def filtered(
        cls, name_contains: str | None = None, due_date: date | None = None
    ) -> Select:
        """
        Build a select for projects, newest first.

        Ties on ``created_at`` are broken by ID so that the ordering is total
        and pages never overlap.

        Keyword Args:
            name_contains: Only include projects whose name contains this text
            due_date: Only include projects due on this date

        Returns:
            The select statement

        """
        stmt = cls._apply_filters(select(cls), name_contains, due_date)
        return stmt.order_by(cls.created_at.desc(), cls.id.desc())

    @classmethod
    def list(
        cls,
        session: Session,
        *,
        name_contains: str | None = None,
        due_date: date | None = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> builtins.list[Project]:
        """
        List projects, newest first.

        Args:
            session: SQLAlchemy session

        Keyword Args:
            name_contains: Only include projects whose name contains this text
            due_date: Only include projects due on this date
            offset: Number of leading projects to skip; no offset if None
            limit: Maximum number of projects to return; unbounded if None

        Returns:
            List of projects

        """
        stmt = cls.filtered(name_contains=name_contains, due_date=due_date)
        if offset is not None:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return builtins.list(session.scalars(stmt).all())

    @classmethod
    def count(
        cls,
        session: Session,
        *,
        name_contains: str | None = None,
        due_date: date | None = None,
    ) -> int:
        """
        Count projects matching the same filters as :meth:`list`.
        """
        stmt = cls._apply_filters(
            select(func.count()).select_from(cls), name_contains, due_date
        )
        return session.scalar(stmt) or 0
