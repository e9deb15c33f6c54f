"""Shared pytest fixtures and test helpers for Project Manager tests."""

from datetime import date, datetime, timedelta

import pytest
from PySide6.QtWidgets import QApplication

from pmapp.db import create_engine_with_path, init_db, make_session_factory
from pmapp.models.project import Project
from pmapp.services.gateway import ProjectGateway


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for testing PySide6 widgets."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def engine(tmp_path):
    """Create a temporary database with the schema in place."""
    engine = create_engine_with_path(tmp_path / "test.db")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Create a session on the temporary database."""
    session = make_session_factory(engine)()
    yield session
    session.close()


@pytest.fixture
def gateway(engine):
    """Create a gateway on the temporary database."""
    return ProjectGateway(engine)


# Test helper functions (not fixtures, but available for import)

#: Creation time of the first project made by :func:`create_test_projects`.
BASE_TIME = datetime(2025, 1, 1, 9, 0, 0)


def create_test_project(
    gateway,
    name="Test Project",
    description="A test project",
    due_date=date(2025, 6, 1),
    created_at=None,
):
    """
    Helper to save a project with defaults.

    Args:
        gateway: ProjectGateway
        name: Project name
        description: Project description
        due_date: Due date
        created_at: Creation time; set by the gateway if None

    Returns:
        The saved Project instance
    """
    project = Project(
        name=name, description=description, due_date=due_date, created_at=created_at
    )
    gateway.save(project)
    return project


def create_test_projects(gateway, count, name="Project", due_date=date(2025, 6, 1)):
    """
    Helper to save ``count`` projects created one minute apart.

    Projects are named ``"<name> 1"`` to ``"<name> <count>"``, oldest first.

    Returns:
        The saved projects, newest first (the order lists use)
    """
    projects = [
        create_test_project(
            gateway,
            name=f"{name} {i}",
            description=f"Description {i}",
            due_date=due_date,
            created_at=BASE_TIME + timedelta(minutes=i),
        )
        for i in range(1, count + 1)
    ]
    return list(reversed(projects))
