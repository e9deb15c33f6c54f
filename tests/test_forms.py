"""Unit tests for ProjectForm."""

from datetime import date, datetime

import pytest

from pmapp.exc import ValidationError
from pmapp.models.project import Project
from pmapp.services.forms import ProjectForm


class TestMissingFields:
    """Test cases for ProjectForm.missing_fields()."""

    def test_complete_form(self):
        """Test a complete form has no missing fields."""
        form = ProjectForm(name="Alpha", description="d", due_date=date(2025, 1, 1))
        assert form.missing_fields() == []
        form.validate()

    def test_empty_form(self):
        """Test every field is missing on an empty form, in dialog order."""
        assert ProjectForm().missing_fields() == ["Name", "Description", "Due date"]

    def test_whitespace_counts_as_missing(self):
        """Test whitespace-only strings count as missing."""
        form = ProjectForm(name="   ", description="\t", due_date=date(2025, 1, 1))
        assert form.missing_fields() == ["Name", "Description"]

    def test_validate_raises(self):
        """Test validate() raises with the missing fields."""
        form = ProjectForm(name="Alpha", description="")
        with pytest.raises(ValidationError) as excinfo:
            form.validate()
        assert excinfo.value.missing_fields == ["Description", "Due date"]


class TestProjectConversion:
    """Test cases for moving values between forms and projects."""

    def test_from_project(self):
        """Test a form is pre-populated from a project."""
        project = Project(name="Alpha", description="d", due_date=date(2025, 2, 3))
        form = ProjectForm.from_project(project)
        assert form == ProjectForm(
            name="Alpha", description="d", due_date=date(2025, 2, 3)
        )

    def test_apply_to(self):
        """Test applying a form changes only the editable fields."""
        created_at = datetime(2025, 1, 1, 9, 0, 0)
        project = Project(
            id=7,
            name="Alpha",
            description="d",
            due_date=date(2025, 2, 3),
            created_at=created_at,
        )
        ProjectForm(name="Beta", description="e", due_date=date(2026, 1, 1)).apply_to(
            project
        )
        assert project.id == 7
        assert project.name == "Beta"
        assert project.description == "e"
        assert project.due_date == date(2026, 1, 1)
        assert project.created_at == created_at
