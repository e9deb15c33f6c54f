"""Main application window."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Final

from PySide6.QtCore import QDate, Qt, QTimer
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QCheckBox,
    QComboBox,
    QDateEdit,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from pmapp.services.controller import PageController
from pmapp.services.paging import PAGE_SIZES, PageState
from pmapp.services.worker import ProjectWorker
from pmapp.ui.dialogs import ProjectDialog, SettingsDialog
from pmapp.ui.project_table import ProjectTableModel

if TYPE_CHECKING:
    from PySide6.QtGui import QCloseEvent

    from pmapp.models.project import Project
    from pmapp.services.gateway import ProjectGateway
    from pmapp.services.paging import Page
    from pmapp.services.settings import SettingsService

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Main application window: a paginated, searchable table of projects.

    The window is the view of a :class:`~pmapp.services.controller.PageController`.
    A timer on the UI thread feeds it the results of the background worker.

    Args:
        gateway: Project data access
        settings_service: Application preferences

    """

    #: Main window geometry
    MAIN_WINDOW_GEOMETRY: Final[tuple[int, int, int, int]] = (100, 100, 1000, 600)
    #: How often to check for finished background work, in milliseconds
    POLL_INTERVAL_MS: Final[int] = 50

    def __init__(
        self, gateway: ProjectGateway, settings_service: SettingsService
    ) -> None:
        super().__init__()
        #: Application preferences
        self.settings_service = settings_service
        #: Displayed projects
        self.table_model = ProjectTableModel(self)
        worker = ProjectWorker(
            gateway, shutdown_grace=settings_service.get_shutdown_grace()
        )
        #: Page controller
        self.controller = PageController(
            worker, self, state=PageState(page_size=settings_service.get_page_size())
        )
        #: Timer that applies background results
        self.poll_timer = QTimer(self)
        self.poll_timer.timeout.connect(self.controller.process_events)

        self.build()

        self.poll_timer.start(self.POLL_INTERVAL_MS)
        self.controller.load()

    def build(self) -> None:
        """
        Build the main window.

        - Setup the main window.
        - Setup the main menu.
        """
        self._setup_main_window()
        self._setup_main_menu()

    def _setup_main_window(self) -> None:
        """
        Set up the main window.
        """
        self.setWindowTitle("Project Manager")
        app = QApplication.instance()
        if isinstance(app, QApplication) and not app.windowIcon().isNull():
            self.setWindowIcon(app.windowIcon())
        self.setGeometry(*self.MAIN_WINDOW_GEOMETRY)

        central_widget = QWidget()
        layout = QVBoxLayout(central_widget)
        layout.addLayout(self._build_search_bar())

        self.table_view = QTableView(central_widget)
        self.table_view.setModel(self.table_model)
        self.table_view.setSelectionBehavior(
            QAbstractItemView.SelectionBehavior.SelectRows
        )
        self.table_view.setSelectionMode(
            QAbstractItemView.SelectionMode.SingleSelection
        )
        self.table_view.setAlternatingRowColors(True)
        self.table_view.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table_view.doubleClicked.connect(lambda _index: self.edit_project())
        header = self.table_view.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(
            ProjectTableModel.COLUMNS["Description"], QHeaderView.ResizeMode.Stretch
        )
        layout.addWidget(self.table_view)

        layout.addLayout(self._build_navigation_bar())
        self.setCentralWidget(central_widget)
        self.show_message("Ready")

    def _build_search_bar(self) -> QHBoxLayout:
        """
        Build the search box, due date filter, and add/edit/delete buttons.
        """
        bar = QHBoxLayout()
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search projects by name...")
        self.search_edit.returnPressed.connect(self.search)
        bar.addWidget(self.search_edit, stretch=1)
        self.search_button = QPushButton("Search")
        self.search_button.clicked.connect(self.search)
        bar.addWidget(self.search_button)

        self.due_date_check = QCheckBox("Due on:")
        self.due_date_check.toggled.connect(self._on_due_date_filter_changed)
        bar.addWidget(self.due_date_check)
        self.due_date_edit = QDateEdit(QDate.currentDate())
        self.due_date_edit.setCalendarPopup(True)
        self.due_date_edit.setDisplayFormat("yyyy-MM-dd")
        self.due_date_edit.setEnabled(False)
        self.due_date_edit.dateChanged.connect(self._on_due_date_filter_changed)
        bar.addWidget(self.due_date_edit)

        self.add_button = QPushButton("Add")
        self.add_button.clicked.connect(self.add_project)
        bar.addWidget(self.add_button)
        self.edit_button = QPushButton("Edit")
        self.edit_button.clicked.connect(self.edit_project)
        bar.addWidget(self.edit_button)
        self.delete_button = QPushButton("Delete")
        self.delete_button.clicked.connect(self.delete_project)
        bar.addWidget(self.delete_button)
        return bar

    def _build_navigation_bar(self) -> QHBoxLayout:
        """
        Build the page size selector and the page navigation buttons.
        """
        bar = QHBoxLayout()
        bar.addWidget(QLabel("Page size:"))
        self.page_size_combo = QComboBox()
        for page_size in PAGE_SIZES:
            self.page_size_combo.addItem(str(page_size), page_size)
        self.page_size_combo.setCurrentIndex(
            PAGE_SIZES.index(self.controller.state.page_size)
        )
        self.page_size_combo.currentIndexChanged.connect(self._on_page_size_changed)
        bar.addWidget(self.page_size_combo)
        bar.addStretch()

        self.first_button = QPushButton("<< First")
        self.first_button.clicked.connect(self.controller.first_page)
        self.previous_button = QPushButton("< Previous")
        self.previous_button.clicked.connect(self.controller.previous_page)
        self.page_label = QLabel("Loading...")
        self.page_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.next_button = QPushButton("Next >")
        self.next_button.clicked.connect(self.controller.next_page)
        self.last_button = QPushButton("Last >>")
        self.last_button.clicked.connect(self.controller.last_page)
        for widget in (
            self.first_button,
            self.previous_button,
            self.page_label,
            self.next_button,
            self.last_button,
        ):
            bar.addWidget(widget)
        return bar

    def _setup_main_menu(self) -> None:
        """Set up the main menu."""
        file_menu = self.menuBar().addMenu("&File")
        add_action = QAction("&Add Project...", self)
        add_action.setShortcut(QKeySequence("Ctrl+N"))
        add_action.triggered.connect(self.add_project)
        file_menu.addAction(add_action)
        settings_action = QAction("&Preferences...", self)
        settings_action.setShortcut(QKeySequence.StandardKey.Preferences)
        settings_action.triggered.connect(self.show_settings_dialog)
        file_menu.addAction(settings_action)
        file_menu.addSeparator()
        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def search(self) -> None:
        """Search for the text in the search box."""
        self.controller.search(self.search_edit.text())

    def _on_due_date_filter_changed(self, *_args: object) -> None:
        enabled = self.due_date_check.isChecked()
        self.due_date_edit.setEnabled(enabled)
        due_date: date | None = None
        if enabled:
            qdate = self.due_date_edit.date()
            due_date = date(qdate.year(), qdate.month(), qdate.day())
        self.controller.filter_due_date(due_date)

    def _on_page_size_changed(self, _index: int) -> None:
        page_size = self.page_size_combo.currentData()
        self.controller.change_page_size(page_size)
        self.settings_service.set_page_size(page_size)

    def selected_project(self) -> Project | None:
        """
        Get the project in the selected row.

        Returns:
            The project, or None if no row is selected

        """
        rows = self.table_view.selectionModel().selectedRows()
        if not rows:
            return None
        return self.table_model.project_at(rows[0].row())

    def add_project(self) -> None:
        """Open the project dialog to add a project."""
        ProjectDialog(self).execute()

    def edit_project(self) -> None:
        """Open the project dialog for the selected project."""
        project = self.selected_project()
        if project is None:
            self.show_information("Select a project to edit.")
            return
        ProjectDialog(self, project).execute()

    def delete_project(self) -> None:
        """
        Delete the selected project, after asking if the user wants to be
        asked.
        """
        project = self.selected_project()
        if project is None:
            self.show_information("Select a project to delete.")
            return
        if self.settings_service.get_confirm_delete():
            reply = QMessageBox.question(
                self,
                "Delete Project",
                f'Delete project "{project.name}"? This cannot be undone.',
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                QMessageBox.StandardButton.No,
            )
            if reply != QMessageBox.StandardButton.Yes:
                return
        self.controller.delete(project)

    def show_settings_dialog(self) -> None:
        """
        Show settings dialog.
        """
        SettingsDialog(self).execute()

    # ------------------------------------------------------------------
    # ProjectListView
    # ------------------------------------------------------------------

    def replace_all(self, records: list[Project]) -> None:
        self.table_model.replace_all(records)

    def append(self, record: Project) -> None:
        self.table_model.append(record)

    def replace(self, record: Project) -> None:
        self.table_model.replace(record)

    def remove(self, record: Project) -> None:
        self.table_model.remove(record)

    def update_navigation(self, page: Page) -> None:
        """
        Show the page position and enable the navigation buttons that lead
        somewhere.
        """
        state = page.state
        self.page_label.setText(
            f"Page {state.page_number + 1} of {page.page_count} "
            f"({page.total_count} projects)"
        )
        self.first_button.setEnabled(page.has_previous)
        self.previous_button.setEnabled(page.has_previous)
        self.next_button.setEnabled(page.has_next)
        self.last_button.setEnabled(page.has_next)

    def show_message(self, message: str, duration: int = 2000) -> None:
        """
        Show a message in the status bar.

        Args:
            message: Message to show

        Keyword Args:
            duration: Duration of the message in milliseconds (default: 2000)

        """
        self.statusBar().showMessage(message, duration)

    def show_error(self, header: str, details: str) -> None:
        """
        Show an error dialog.

        Args:
            header: What failed
            details: Why it failed

        """
        box = QMessageBox(self)
        box.setIcon(QMessageBox.Icon.Critical)
        box.setWindowTitle("Error")
        box.setText(header)
        box.setInformativeText(details)
        box.exec()

    def show_information(self, message: str, title: str = "Information") -> None:
        """
        Show an information message.

        Args:
            message: Message to show

        Keyword Args:
            title: Title of the message (default: "Information")

        """
        QMessageBox.information(self, title, message)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        """
        Stop the background worker before the window closes.
        """
        self.poll_timer.stop()
        self.controller.shutdown()
        self.settings_service.sync()
        super().closeEvent(event)
