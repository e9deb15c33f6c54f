"""Unit tests for database setup."""

import sys
from datetime import date, datetime
from pathlib import Path

import pytest
from sqlalchemy import inspect, text

from pmapp.db import (
    APP_DIR_NAME,
    DEFAULT_DB_NAME,
    Base,
    create_engine_with_path,
    get_project_db_path,
    init_db,
    make_session_factory,
)
from pmapp.models.project import Project


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    """Point the home directory at a temporary directory."""
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    return tmp_path


class TestBase:
    """Test cases for Base declarative base."""

    def test_base_has_metadata(self):
        """Test Base has metadata attribute."""
        assert hasattr(Base, "metadata")
        assert Base.metadata is not None

    def test_project_table_registered(self):
        """Test the project table is registered on Base."""
        assert "project" in Base.metadata.tables


class TestGetProjectDbPath:
    """Test cases for get_project_db_path()."""

    def test_returns_path_on_darwin(self, monkeypatch, fake_home):
        """Test returns correct path on macOS."""
        monkeypatch.setattr(sys, "platform", "darwin")
        db_path = get_project_db_path()
        assert db_path == (
            fake_home
            / "Library"
            / "Application Support"
            / APP_DIR_NAME
            / "projects"
            / DEFAULT_DB_NAME
        )

    def test_returns_path_on_linux(self, monkeypatch, fake_home):
        """Test returns correct path on Linux."""
        monkeypatch.setattr(sys, "platform", "linux")
        db_path = get_project_db_path()
        assert db_path == fake_home / ".config" / APP_DIR_NAME / "projects" / "projects.db"

    def test_returns_path_on_windows(self, monkeypatch, fake_home):
        """Test returns correct path on Windows."""
        monkeypatch.setattr(sys, "platform", "win32")
        db_path = get_project_db_path()
        assert "AppData" in db_path.parts
        assert "Local" in db_path.parts
        assert APP_DIR_NAME in db_path.parts
        assert db_path.name == DEFAULT_DB_NAME

    def test_creates_directory(self, monkeypatch, fake_home):
        """Test the parent directory is created."""
        monkeypatch.setattr(sys, "platform", "linux")
        db_path = get_project_db_path()
        assert db_path.parent.is_dir()

    def test_raises_on_unsupported_platform(self, monkeypatch, fake_home):
        """Test raises ValueError on unsupported platform."""
        monkeypatch.setattr(sys, "platform", "sunos5")
        with pytest.raises(ValueError, match="Unsupported platform"):
            get_project_db_path()


class TestCreateEngineWithPath:
    """Test cases for create_engine_with_path()."""

    def test_creates_database_file(self, tmp_path):
        """Test the database file and its directory are created."""
        db_path = tmp_path / "nested" / "dir" / "test.db"
        engine = create_engine_with_path(db_path)
        try:
            assert db_path.exists()
            assert engine.url.database == str(db_path)
        finally:
            engine.dispose()

    def test_sets_pragmas(self, tmp_path):
        """Test foreign keys and WAL mode are enabled on each connection."""
        engine = create_engine_with_path(tmp_path / "test.db")
        try:
            with engine.connect() as conn:
                assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
                assert conn.execute(text("PRAGMA journal_mode")).scalar() == "wal"
        finally:
            engine.dispose()

    def test_uses_default_path(self, monkeypatch, fake_home):
        """Test the default location is used when no path is given."""
        monkeypatch.setattr(sys, "platform", "linux")
        engine = create_engine_with_path()
        try:
            assert engine.url.database == str(get_project_db_path())
        finally:
            engine.dispose()


class TestInitDb:
    """Test cases for init_db()."""

    def test_creates_project_table(self, tmp_path):
        """Test the project table and its index are created."""
        engine = create_engine_with_path(tmp_path / "test.db")
        try:
            init_db(engine)
            inspector = inspect(engine)
            assert "project" in inspector.get_table_names()
            columns = {c["name"] for c in inspector.get_columns("project")}
            assert columns == {
                "project_id",
                "name",
                "description",
                "created_at",
                "due_date",
            }
            indexes = {i["name"] for i in inspector.get_indexes("project")}
            assert "ix_project_created_at" in indexes
        finally:
            engine.dispose()

    def test_is_idempotent(self, tmp_path):
        """Test running init_db() twice keeps existing rows."""
        engine = create_engine_with_path(tmp_path / "test.db")
        try:
            init_db(engine)
            with engine.begin() as conn:
                conn.execute(
                    text(
                        "INSERT INTO project (name, description, created_at, due_date) "
                        "VALUES ('Alpha', 'd', '2025-01-01 09:00:00', '2025-06-01')"
                    )
                )
            init_db(engine)
            with engine.connect() as conn:
                assert conn.execute(text("SELECT COUNT(*) FROM project")).scalar() == 1
        finally:
            engine.dispose()


class TestMakeSessionFactory:
    """Test cases for make_session_factory()."""

    def test_records_stay_loaded_after_commit(self, engine):
        """Test attributes are still readable once the session is closed."""
        factory = make_session_factory(engine)
        project = Project(
            name="Alpha",
            description="d",
            created_at=datetime(2025, 1, 1),
            due_date=date(2025, 6, 1),
        )
        session = factory()
        session.add(project)
        session.commit()
        session.close()

        assert project.id is not None
        assert project.name == "Alpha"
