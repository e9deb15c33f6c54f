"""Background execution of project loads and writes."""

from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import Future, wait
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Literal

from pmapp.exc import PersistenceError, WorkerClosed
from pmapp.services.paging import reload

if TYPE_CHECKING:
    from collections.abc import Callable

    from pmapp.models.project import Project
    from pmapp.services.gateway import ProjectGateway
    from pmapp.services.paging import Page, PageState

logger = logging.getLogger(__name__)

#: Error dialog header for a failed page load.
LOAD_ERROR_HEADER: Final[str] = "Error loading the project list."
#: Error dialog header for a failed save.
SAVE_ERROR_HEADER: Final[str] = "Error saving the project."
#: Error dialog header for a failed delete.
DELETE_ERROR_HEADER: Final[str] = "Error deleting the project."
#: Seconds to wait for in-flight work when shutting down.
DEFAULT_SHUTDOWN_GRACE: Final[float] = 5.0


@dataclass(frozen=True)
class PageLoaded:
    """A page finished loading."""

    #: The request token of the load.
    token: int
    #: The loaded page.
    page: Page


@dataclass(frozen=True)
class ProjectSaved:
    """A project was inserted or updated."""

    #: The saved project; the same instance that was submitted.
    record: Project
    #: True if the project was inserted, False if it was updated.
    created: bool


@dataclass(frozen=True)
class ProjectDeleted:
    """A project was deleted."""

    #: The deleted project; the same instance that was submitted.
    record: Project


@dataclass(frozen=True)
class OperationFailed:
    """A load or write failed."""

    #: What failed.
    operation: Literal["load", "save", "delete"]
    #: The error dialog header.
    header: str
    #: The error.
    error: PersistenceError
    #: The request token, for loads.
    token: int | None = None

    @property
    def details(self) -> str:
        return self.error.details


WorkerResult = PageLoaded | ProjectSaved | ProjectDeleted | OperationFailed


class ProjectWorker:
    """
    Runs project loads and writes one at a time on a background thread.

    Work runs in the order it was submitted.  Results are not delivered by
    callback; they are put on a queue that the UI thread empties with
    :meth:`drain`, so that only the UI thread ever touches the displayed
    list.

    Every load gets a request token, and a load result whose token is older
    than the newest load request is dropped by :meth:`drain`.

    Args:
        gateway: Project data access

    Keyword Args:
        shutdown_grace: Seconds :meth:`shutdown` waits for in-flight work

    """

    def __init__(
        self,
        gateway: ProjectGateway,
        *,
        shutdown_grace: float = DEFAULT_SHUTDOWN_GRACE,
    ) -> None:
        #: Project data access.
        self.gateway = gateway
        #: Seconds :meth:`shutdown` waits for in-flight work.
        self.shutdown_grace = shutdown_grace
        #: Work waiting for the worker thread, first in first out.  None
        #: tells the thread to stop.
        self._work: queue.Queue[
            tuple[Future, Callable[..., None], tuple[object, ...]] | None
        ] = queue.Queue()
        #: Results waiting for the UI thread.
        self._results: queue.Queue[WorkerResult] = queue.Queue()
        #: Submitted work that has not finished yet.
        self._pending: set[Future] = set()
        #: The lock for :attr:`_pending`, :attr:`_latest_token` and :attr:`_closed`.
        self._lock = threading.Lock()
        #: The token of the newest load request.
        self._latest_token = 0
        #: Whether :meth:`shutdown` has been called.
        self._closed = False
        #: The single worker thread.  A daemon, so that a task abandoned by
        #: :meth:`shutdown` cannot keep the process alive.
        self._thread = threading.Thread(
            target=self._worker, name="pmapp-worker", daemon=True
        )
        self._thread.start()

    @property
    def latest_token(self) -> int:
        """The token of the newest load request."""
        return self._latest_token

    @property
    def closed(self) -> bool:
        return self._closed

    def _submit(self, func: Callable[..., None], *args: object) -> None:
        future: Future = Future()
        with self._lock:
            if self._closed:
                msg = "Worker is shut down"
                raise WorkerClosed(msg)
            self._pending.add(future)
            self._work.put((future, func, args))
        future.add_done_callback(self._forget)

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def _worker(self) -> None:
        while True:
            item = self._work.get()
            if item is None:
                return
            future, func, args = item
            if not future.set_running_or_notify_cancel():
                continue
            try:
                func(*args)
            except Exception as e:
                logger.exception(f"Background task {func.__name__} failed")
                future.set_exception(e)
            else:
                future.set_result(None)

    def submit_load(self, state: PageState) -> int:
        """
        Queue a page load.

        Args:
            state: Which page to load

        Raises:
            WorkerClosed: :meth:`shutdown` was already called

        Returns:
            The request token of the load

        """
        with self._lock:
            self._latest_token += 1
            token = self._latest_token
        self._submit(self._run_load, token, state)
        logger.debug(f"Queued load {token} for {state}")
        return token

    def submit_save(self, record: Project) -> None:
        """
        Queue an insert or update of ``record``.

        Raises:
            WorkerClosed: :meth:`shutdown` was already called

        """
        self._submit(self._run_save, record)

    def submit_delete(self, record: Project) -> None:
        """
        Queue the deletion of ``record``.

        Raises:
            WorkerClosed: :meth:`shutdown` was already called

        """
        self._submit(self._run_delete, record)

    def _run_load(self, token: int, state: PageState) -> None:
        try:
            page = reload(self.gateway, state)
        except PersistenceError as e:
            self._results.put(
                OperationFailed(
                    operation="load", header=LOAD_ERROR_HEADER, error=e, token=token
                )
            )
            return
        logger.debug(f"Load {token} returned {len(page.records)} projects")
        self._results.put(PageLoaded(token=token, page=page))

    def _run_save(self, record: Project) -> None:
        created = record.id is None
        try:
            self.gateway.save(record)
        except PersistenceError as e:
            self._results.put(
                OperationFailed(operation="save", header=SAVE_ERROR_HEADER, error=e)
            )
            return
        self._results.put(ProjectSaved(record=record, created=created))

    def _run_delete(self, record: Project) -> None:
        try:
            self.gateway.delete_by_id(record.id)
        except PersistenceError as e:
            self._results.put(
                OperationFailed(
                    operation="delete", header=DELETE_ERROR_HEADER, error=e
                )
            )
            return
        self._results.put(ProjectDeleted(record=record))

    def _is_stale(self, result: WorkerResult) -> bool:
        if isinstance(result, PageLoaded):
            return result.token < self._latest_token
        if isinstance(result, OperationFailed) and result.token is not None:
            return result.token < self._latest_token
        return False

    def drain(self, timeout: float | None = None) -> list[WorkerResult]:
        """
        Take all finished results off the queue, oldest first, leaving out
        stale load results.  Call this from the UI thread.

        Keyword Args:
            timeout: If given, wait up to this many seconds for the first
                result.  If None, return immediately.

        Returns:
            The results

        """
        results: list[WorkerResult] = []
        try:
            if timeout is None:
                results.append(self._results.get_nowait())
            else:
                results.append(self._results.get(timeout=timeout))
            while True:
                results.append(self._results.get_nowait())
        except queue.Empty:
            pass
        fresh = [result for result in results if not self._is_stale(result)]
        if len(fresh) != len(results):
            logger.debug(f"Dropped {len(results) - len(fresh)} stale load results")
        return fresh

    def wait_idle(self, timeout: float | None = None) -> bool:
        """
        Wait until all submitted work has finished.

        Keyword Args:
            timeout: Maximum seconds to wait; forever if None

        Returns:
            True if the worker is idle, False if the timeout expired first

        """
        with self._lock:
            pending = set(self._pending)
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def shutdown(self) -> bool:
        """
        Stop accepting work, cancel work that has not started, and wait up to
        :attr:`shutdown_grace` seconds for the running task.

        A task still running after the grace period is abandoned.  Its thread
        cannot be stopped from the outside, but it is a daemon thread, so it
        does not keep the process from exiting.

        Returns:
            True if all work finished within the grace period

        """
        with self._lock:
            if self._closed:
                return not self._pending
            self._closed = True
        while True:
            try:
                item = self._work.get_nowait()
            except queue.Empty:
                break
            if item is not None:
                item[0].cancel()
        self._work.put(None)
        self._thread.join(timeout=self.shutdown_grace)
        finished = not self._thread.is_alive()
        if finished:
            logger.info("Background worker stopped")
        else:
            logger.warning(
                f"Background worker still busy after {self.shutdown_grace}s; "
                "abandoning it"
            )
        return finished
