"""Pagination and search state for the project list."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from datetime import date

    from pmapp.models.project import Project
    from pmapp.services.gateway import ProjectGateway

#: The page sizes the user can choose from.
PAGE_SIZES: Final[tuple[int, ...]] = (5, 10, 20, 50, 100)
#: The page size used until the user picks another.
DEFAULT_PAGE_SIZE: Final[int] = 10


@dataclass(frozen=True)
class PageState:
    """
    Which page of which projects to show.

    Every transition returns a new :class:`PageState`; changing what is
    searched for, or how many projects fit on a page, goes back to the first
    page.
    """

    #: Only show projects whose name contains this text.  Empty means all.
    search_text: str = ""
    #: The zero-based page number.
    page_number: int = 0
    #: The number of projects on a page; one of :data:`PAGE_SIZES`.
    page_size: int = DEFAULT_PAGE_SIZE
    #: Only show projects due on this date.  None means any date.
    due_date: date | None = None

    def __post_init__(self) -> None:
        if self.page_size not in PAGE_SIZES:
            msg = f"Page size must be one of {PAGE_SIZES}, not {self.page_size}"
            raise ValueError(msg)
        if self.page_number < 0:
            msg = f"Page number must not be negative, not {self.page_number}"
            raise ValueError(msg)

    @property
    def offset(self) -> int:
        """The number of projects before the first one on this page."""
        return self.page_number * self.page_size

    @property
    def has_previous(self) -> bool:
        return self.page_number > 0

    def has_next(self, total_count: int) -> bool:
        """
        Whether there are projects after this page.

        Args:
            total_count: The number of projects matching the current filters

        """
        return self.offset + self.page_size < total_count

    def page_count(self, total_count: int) -> int:
        """
        The number of pages needed for ``total_count`` projects.  There is
        always at least one page, even if it is empty.
        """
        return max(math.ceil(total_count / self.page_size), 1)

    def with_search(self, search_text: str) -> PageState:
        return replace(self, search_text=search_text.strip(), page_number=0)

    def with_due_date(self, due_date: date | None) -> PageState:
        return replace(self, due_date=due_date, page_number=0)

    def with_page_size(self, page_size: int) -> PageState:
        return replace(self, page_size=page_size, page_number=0)

    def next_page(self, total_count: int | None = None) -> PageState:
        """
        Move to the next page.

        Args:
            total_count: The number of matching projects, if known.  When it
                is known and this is the last page, the state is unchanged.

        """
        if total_count is not None and not self.has_next(total_count):
            return self
        return replace(self, page_number=self.page_number + 1)

    def previous_page(self) -> PageState:
        if not self.has_previous:
            return self
        return replace(self, page_number=self.page_number - 1)

    def first_page(self) -> PageState:
        return replace(self, page_number=0)

    def last_page(self, total_count: int) -> PageState:
        return replace(self, page_number=self.page_count(total_count) - 1)


@dataclass(frozen=True)
class Page:
    """One loaded page of projects."""

    #: The state the page was loaded for.
    state: PageState
    #: The projects on the page, newest first.
    records: list[Project] = field(default_factory=list)
    #: The number of projects matching the filters, across all pages.
    total_count: int = 0

    @property
    def has_next(self) -> bool:
        return self.state.has_next(self.total_count)

    @property
    def has_previous(self) -> bool:
        return self.state.has_previous

    @property
    def page_count(self) -> int:
        return self.state.page_count(self.total_count)


def reload(gateway: ProjectGateway, state: PageState) -> Page:
    """
    Load the page of projects described by ``state``.

    Args:
        gateway: Project data access
        state: Which page to load

    Raises:
        PersistenceError: the database operation failed

    Returns:
        The loaded page

    """
    offset = state.offset
    limit = state.page_size
    search_text = state.search_text
    if not search_text and state.due_date is None:
        records = gateway.list(offset, limit)
        total_count = gateway.count()
    elif state.due_date is None:
        records = gateway.list_by_name_contains(search_text, offset, limit)
        total_count = gateway.count_by_name_contains(search_text)
    elif not search_text:
        records = gateway.list_by_due_date(state.due_date, offset, limit)
        total_count = gateway.count_by_due_date(state.due_date)
    else:
        records = gateway.list_filtered(search_text, state.due_date, offset, limit)
        total_count = gateway.count_filtered(search_text, state.due_date)
    return Page(state=state, records=records, total_count=total_count)
