"""Page controller: the state behind the project list window."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Protocol

from pmapp.models.project import Project
from pmapp.services.paging import PageState
from pmapp.services.worker import (
    OperationFailed,
    PageLoaded,
    ProjectDeleted,
    ProjectSaved,
)

if TYPE_CHECKING:
    from datetime import date

    from pmapp.services.forms import ProjectForm
    from pmapp.services.paging import Page
    from pmapp.services.worker import ProjectWorker, WorkerResult

logger = logging.getLogger(__name__)


class ProjectListView(Protocol):
    """
    What the controller needs from the window that shows the project list.

    All of these are called on the UI thread, from
    :meth:`PageController.process_events`.
    """

    def replace_all(self, records: list[Project]) -> None:
        """Replace every displayed project with ``records``."""

    def append(self, record: Project) -> None:
        """Add ``record`` to the end of the displayed projects."""

    def replace(self, record: Project) -> None:
        """Redisplay ``record``, which is already displayed, after an edit."""

    def remove(self, record: Project) -> None:
        """Stop displaying ``record``."""

    def update_navigation(self, page: Page) -> None:
        """Show the page position and enable or disable navigation."""

    def show_error(self, header: str, details: str) -> None:
        """Tell the user an operation failed."""

    def show_message(self, message: str) -> None:
        """Tell the user an operation succeeded."""


class PageController:
    """
    Owns the search and pagination state of the project list, sends loads and
    writes to the background worker, and applies their results to the view.

    Nothing in here runs on the worker thread: the UI calls
    :meth:`process_events` regularly, and that is the only place the view is
    changed.

    Args:
        worker: The background worker
        view: The project list window

    Keyword Args:
        state: The initial state; the first page of all projects if None

    """

    #: Acknowledgement shown after a delete.
    DELETED_MESSAGE = "Project deleted successfully!"

    def __init__(
        self,
        worker: ProjectWorker,
        view: ProjectListView,
        *,
        state: PageState | None = None,
    ) -> None:
        #: The background worker.
        self.worker = worker
        #: The project list window.
        self.view = view
        #: What to show.
        self.state = state if state is not None else PageState()
        #: The page currently displayed, if one has been loaded.
        self.page: Page | None = None
        #: Whether results are being applied right now.
        self._processing = False

    @property
    def total_count(self) -> int | None:
        """
        The number of projects matching the current search and due date, or
        None until a page for them has loaded.
        """
        if self.page is None:
            return None
        loaded = self.page.state
        if (loaded.search_text, loaded.due_date) != (
            self.state.search_text,
            self.state.due_date,
        ):
            return None
        return self.page.total_count

    def _go(self, state: PageState) -> bool:
        if state == self.state:
            return False
        self.state = state
        self.load()
        return True

    # ------------------------------------------------------------------
    # Navigation and search
    # ------------------------------------------------------------------

    def load(self) -> int:
        """
        Queue a load of the current page.

        Returns:
            The request token of the load

        """
        token = self.worker.submit_load(self.state)
        logger.debug(f"Requested page {self.state.page_number} (load {token})")
        return token

    def search(self, text: str) -> None:
        """
        Search for projects whose name contains ``text``, from the first page.
        Submitting the same search again reloads it.
        """
        self.state = self.state.with_search(text)
        self.load()

    def filter_due_date(self, due_date: date | None) -> bool:
        """
        Only show projects due on ``due_date``, or on any date if None.
        """
        return self._go(self.state.with_due_date(due_date))

    def change_page_size(self, page_size: int) -> bool:
        """
        Show ``page_size`` projects per page, from the first page.

        Raises:
            ValueError: ``page_size`` is not one of the allowed page sizes

        """
        return self._go(self.state.with_page_size(page_size))

    def next_page(self) -> bool:
        """
        Go to the next page.  Does nothing on the last page, or while the
        number of matching projects is unknown.

        Returns:
            True if a load was queued

        """
        if self.total_count is None:
            return False
        return self._go(self.state.next_page(self.total_count))

    def previous_page(self) -> bool:
        """
        Go to the previous page.  Does nothing on the first page.

        Returns:
            True if a load was queued

        """
        return self._go(self.state.previous_page())

    def first_page(self) -> bool:
        return self._go(self.state.first_page())

    def last_page(self) -> bool:
        """
        Go to the last page.  Does nothing until a page for the current search
        and due date has loaded, because the number of pages is unknown until
        then.
        """
        if self.total_count is None:
            return False
        return self._go(self.state.last_page(self.total_count))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def submit(self, record: Project | None, form: ProjectForm) -> Project:
        """
        Validate ``form`` and queue a save.

        If ``record`` is None a new project is created from the form;
        otherwise the form values are copied onto ``record``, which keeps its
        ID and creation time.

        Args:
            record: The project being edited, or None to add one
            form: The values entered by the user

        Raises:
            ValidationError: a required field is missing; nothing was changed

        Returns:
            The project being saved

        """
        form.validate()
        if record is None:
            record = Project()
        form.apply_to(record)
        self.worker.submit_save(record)
        return record

    def delete(self, record: Project) -> None:
        """Queue the deletion of ``record``."""
        self.worker.submit_delete(record)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def process_events(self, timeout: float | None = None) -> int:
        """
        Apply finished loads and writes to the view.  Call this on the UI
        thread.

        Keyword Args:
            timeout: If given, wait up to this many seconds for a result

        Returns:
            The number of results applied

        """
        # A modal error dialog runs a nested event loop that can call back in
        if self._processing:
            return 0
        self._processing = True
        try:
            results = self.worker.drain(timeout=timeout)
            for result in results:
                self._apply(result)
        finally:
            self._processing = False
        return len(results)

    def _apply(self, result: WorkerResult) -> None:
        if isinstance(result, PageLoaded):
            self.page = result.page
            self.view.replace_all(result.page.records)
            self.view.update_navigation(result.page)
        elif isinstance(result, ProjectSaved):
            if result.created:
                self.view.append(result.record)
                self._adjust_total(1)
                self.view.show_message(f'Project added: "{result.record.name}"')
            else:
                self.view.replace(result.record)
                self.view.show_message(f'Project updated: "{result.record.name}"')
        elif isinstance(result, ProjectDeleted):
            self.view.remove(result.record)
            self._adjust_total(-1)
            self.view.show_message(self.DELETED_MESSAGE)
        elif isinstance(result, OperationFailed):
            # The displayed page is left as it is
            self.view.show_error(result.header, result.details)

    def _adjust_total(self, delta: int) -> None:
        if self.page is None:
            return
        self.page = replace(
            self.page, total_count=max(self.page.total_count + delta, 0)
        )
        self.view.update_navigation(self.page)

    def shutdown(self) -> bool:
        """
        Shut down the background worker.

        Returns:
            True if all work finished within the grace period

        """
        return self.worker.shutdown()
