"""Validation of the values entered in the project dialog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pmapp.exc import ValidationError

if TYPE_CHECKING:
    from datetime import date

    from pmapp.models.project import Project


@dataclass
class ProjectForm:
    """
    The values entered for a project.  Every field is required; strings that
    are empty or only whitespace count as missing.
    """

    #: The project name.
    name: str = ""
    #: The project description.
    description: str = ""
    #: The due date, or None if no date was picked.
    due_date: date | None = None

    @classmethod
    def from_project(cls, project: Project) -> ProjectForm:
        """
        Build a form pre-populated from an existing project.

        Args:
            project: The project being edited

        Returns:
            A new form

        """
        return cls(
            name=project.name,
            description=project.description,
            due_date=project.due_date,
        )

    def missing_fields(self) -> list[str]:
        """
        Return the labels of the required fields that have no value, in the
        order they appear in the dialog.
        """
        missing = []
        if not self.name.strip():
            missing.append("Name")
        if not self.description.strip():
            missing.append("Description")
        if self.due_date is None:
            missing.append("Due date")
        return missing

    def validate(self) -> None:
        """
        Raise :class:`~pmapp.exc.ValidationError` if any field is missing.
        """
        missing = self.missing_fields()
        if missing:
            raise ValidationError(missing)

    def apply_to(self, project: Project) -> None:
        """
        Copy the form values onto ``project``.  The form must be valid.
        """
        project.name = self.name
        project.description = self.description
        project.due_date = self.due_date  # type: ignore[assignment]
