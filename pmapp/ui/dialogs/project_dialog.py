from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Final

from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QDateEdit,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QVBoxLayout,
)

from pmapp.exc import ValidationError
from pmapp.services.forms import ProjectForm

if TYPE_CHECKING:
    from pmapp.models.project import Project
    from pmapp.ui.main_window import MainWindow


class ProjectDialog:
    """
    Add/edit project dialog.  This gets opened when the user clicks the "Add"
    or "Edit" button in the main window.

    When adding, the fields start empty.  When editing, they are filled in
    from the project.  Clicking "Save" checks that every field has a value; if
    any is missing the dialog stays open and lists the missing fields,
    otherwise the save is handed to the page controller and the dialog closes.

    Args:
        main_window: Main window instance

    Keyword Args:
        project: The project to edit, or None to add a new one

    """

    #: Dialog width
    DIALOG_WIDTH: Final[int] = 420
    #: Dialog height
    DIALOG_HEIGHT: Final[int] = 220
    #: The date shown when no due date has been picked.
    NO_DATE: Final[QDate] = QDate(1900, 1, 1)

    def __init__(self, main_window: MainWindow, project: Project | None = None) -> None:
        self.main_window = main_window
        self.project = project

    def build(self) -> None:
        """
        Build the project dialog.
        """
        self.dialog = QDialog(self.main_window)
        title = "Add Project" if self.project is None else "Edit Project"
        self.dialog.setWindowTitle(title)
        self.dialog.setMinimumSize(self.DIALOG_WIDTH, self.DIALOG_HEIGHT)
        self.layout = QVBoxLayout(self.dialog)

        form_layout = QFormLayout()
        self.name_edit = QLineEdit(self.dialog)
        self.name_edit.setPlaceholderText("Enter project name...")
        form_layout.addRow("Name:", self.name_edit)

        self.description_edit = QLineEdit(self.dialog)
        self.description_edit.setPlaceholderText("Enter description...")
        form_layout.addRow("Description:", self.description_edit)

        self.due_date_edit = QDateEdit(self.dialog)
        self.due_date_edit.setCalendarPopup(True)
        self.due_date_edit.setDisplayFormat("yyyy-MM-dd")
        self.due_date_edit.setMinimumDate(self.NO_DATE)
        # Shown instead of NO_DATE
        self.due_date_edit.setSpecialValueText(" ")
        form_layout.addRow("Due date:", self.due_date_edit)
        self.layout.addLayout(form_layout)

        self.error_label = QLabel(self.dialog)
        self.error_label.setStyleSheet("color: #b00020;")
        self.error_label.setVisible(False)
        self.layout.addWidget(self.error_label)
        self.layout.addStretch()

        self._add_button_box()
        self.set_form(
            ProjectForm() if self.project is None else ProjectForm.from_project(self.project)
        )

    def _add_button_box(self) -> None:
        """
        Add the button box to the dialog.
        """
        self.button_box = QDialogButtonBox(self.dialog)
        self.button_box.addButton(QDialogButtonBox.StandardButton.Save)
        self.button_box.addButton(QDialogButtonBox.StandardButton.Cancel)
        self.button_box.accepted.connect(self.save)
        self.button_box.rejected.connect(self.dialog.reject)
        self.layout.addWidget(self.button_box)

    def set_form(self, form: ProjectForm) -> None:
        """
        Fill in the fields from ``form``.
        """
        self.name_edit.setText(form.name)
        self.description_edit.setText(form.description)
        if form.due_date is None:
            self.due_date_edit.setDate(self.NO_DATE)
        else:
            self.due_date_edit.setDate(
                QDate(form.due_date.year, form.due_date.month, form.due_date.day)
            )

    def get_form(self) -> ProjectForm:
        """
        Read the fields into a form.
        """
        qdate = self.due_date_edit.date()
        due_date = (
            None
            if qdate == self.NO_DATE
            else date(qdate.year(), qdate.month(), qdate.day())
        )
        return ProjectForm(
            name=self.name_edit.text(),
            description=self.description_edit.text(),
            due_date=due_date,
        )

    def save(self) -> None:
        """
        Validate the fields and, if they are all filled in, queue the save and
        close the dialog.
        """
        try:
            self.project = self.main_window.controller.submit(
                self.project, self.get_form()
            )
        except ValidationError as e:
            self.error_label.setText(str(e))
            self.error_label.setVisible(True)
            return
        self.dialog.accept()

    def execute(self) -> None:
        """
        Execute the project dialog.
        """
        self.build()
        self.dialog.exec()
