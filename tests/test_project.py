"""Unit tests for Project model."""

from datetime import date, datetime

from pmapp.models.project import Project


def make_project(name, created_at, due_date=date(2025, 6, 1)):
    return Project(
        name=name, description="d", created_at=created_at, due_date=due_date
    )


class TestProject:
    """Test cases for Project model."""

    def test_new_project_has_no_id(self):
        """Test a project that was never saved has no ID."""
        project = Project(name="New", description="d", due_date=date(2025, 1, 1))
        assert project.id is None
        assert project.created_at is None

    def test_create_model(self, db_session):
        """Test model creation."""
        project = make_project("Test Project", datetime(2025, 1, 1, 12, 0))
        db_session.add(project)
        db_session.commit()

        assert project.id is not None
        assert project.name == "Test Project"
        assert project.created_at == datetime(2025, 1, 1, 12, 0)
        assert project.due_date == date(2025, 6, 1)

    def test_table_and_column_names(self):
        """Test the model maps to the project table and its columns."""
        table = Project.__table__
        assert table.name == "project"
        assert set(table.columns.keys()) == {
            "project_id",
            "name",
            "description",
            "created_at",
            "due_date",
        }

    def test_get_returns_existing(self, db_session):
        """Test get() returns existing project."""
        project = make_project("Test Project", datetime(2025, 1, 1))
        db_session.add(project)
        db_session.commit()

        retrieved = Project.get(db_session, project.id)
        assert retrieved is not None
        assert retrieved.name == "Test Project"

    def test_get_returns_none_for_nonexistent(self, db_session):
        """Test get() returns None for nonexistent project."""
        assert Project.get(db_session, 99999) is None

    def test_list_orders_newest_first(self, db_session):
        """Test list() returns projects newest first."""
        db_session.add_all(
            [
                make_project("Old", datetime(2025, 1, 1)),
                make_project("New", datetime(2025, 3, 1)),
                make_project("Middle", datetime(2025, 2, 1)),
            ]
        )
        db_session.commit()

        names = [p.name for p in Project.list(db_session)]
        assert names == ["New", "Middle", "Old"]

    def test_list_breaks_ties_by_id(self, db_session):
        """Test projects created at the same time are ordered by ID, highest first."""
        same_time = datetime(2025, 1, 1)
        first = make_project("First", same_time)
        second = make_project("Second", same_time)
        db_session.add(first)
        db_session.commit()
        db_session.add(second)
        db_session.commit()

        assert [p.name for p in Project.list(db_session)] == ["Second", "First"]

    def test_list_returns_empty_when_no_projects(self, db_session):
        """Test list() returns empty list when no projects exist."""
        assert Project.list(db_session) == []

    def test_list_with_offset_and_limit(self, db_session):
        """Test list() applies offset and limit."""
        db_session.add_all(
            [make_project(f"P{i}", datetime(2025, 1, i)) for i in range(1, 6)]
        )
        db_session.commit()

        names = [p.name for p in Project.list(db_session, offset=1, limit=2)]
        assert names == ["P4", "P3"]

    def test_list_with_offset_only(self, db_session):
        """Test list() applies an offset without a limit."""
        db_session.add_all(
            [make_project(f"P{i}", datetime(2025, 1, i)) for i in range(1, 4)]
        )
        db_session.commit()

        names = [p.name for p in Project.list(db_session, offset=1)]
        assert names == ["P2", "P1"]

    def test_list_filters_by_name(self, db_session):
        """Test list() filters by name substring."""
        db_session.add_all(
            [
                make_project("Alpha", datetime(2025, 1, 1)),
                make_project("Beta", datetime(2025, 1, 2)),
            ]
        )
        db_session.commit()

        names = [p.name for p in Project.list(db_session, name_contains="pha")]
        assert names == ["Alpha"]

    def test_list_filters_by_due_date(self, db_session):
        """Test list() filters by due date."""
        db_session.add_all(
            [
                make_project("Jan", datetime(2025, 1, 1), due_date=date(2025, 1, 31)),
                make_project("Feb", datetime(2025, 1, 2), due_date=date(2025, 2, 28)),
            ]
        )
        db_session.commit()

        names = [p.name for p in Project.list(db_session, due_date=date(2025, 2, 28))]
        assert names == ["Feb"]

    def test_count_matches_filters(self, db_session):
        """Test count() applies the same filters as list()."""
        db_session.add_all(
            [
                make_project("Alpha", datetime(2025, 1, 1)),
                make_project("Alphabet", datetime(2025, 1, 2)),
                make_project("Beta", datetime(2025, 1, 3)),
            ]
        )
        db_session.commit()

        assert Project.count(db_session) == 3
        assert Project.count(db_session, name_contains="Alpha") == 2
        assert Project.count(db_session, name_contains="zzz") == 0

    def test_repr_shows_id_and_name(self):
        """Test repr() includes the ID and name."""
        project = Project(name="Alpha")
        assert repr(project) == "<Project id=None name='Alpha'>"
