"""Application preferences stored in QSettings."""

from pathlib import Path
from typing import Final, cast

from PySide6.QtCore import QSettings

from pmapp.services.paging import DEFAULT_PAGE_SIZE, PAGE_SIZES
from pmapp.services.worker import DEFAULT_SHUTDOWN_GRACE


class SettingsService:
    """
    Reads and writes the application preferences.

    Keyword Args:
        settings: The settings store; the application's default
            :class:`QSettings` if None

    """

    #: Initial page size.
    PAGE_SIZE_KEY: Final[str] = "paging/page_size"
    #: Whether to ask before deleting a project.
    CONFIRM_DELETE_KEY: Final[str] = "ui/confirm_delete"
    #: Seconds to wait for background work on exit.
    SHUTDOWN_GRACE_KEY: Final[str] = "worker/shutdown_grace_seconds"
    #: Database file overriding the default location.
    DATABASE_PATH_KEY: Final[str] = "database/path"

    def __init__(self, settings: QSettings | None = None) -> None:
        #: The settings store.
        self.settings = settings if settings is not None else QSettings()

    def get_page_size(self) -> int:
        """
        Get the initial page size.  A stored value that is not one of the
        allowed page sizes is ignored.

        Returns:
            Page size (default: 10)

        """
        page_size = cast(
            "int", self.settings.value(self.PAGE_SIZE_KEY, DEFAULT_PAGE_SIZE, type=int)
        )
        if page_size not in PAGE_SIZES:
            return DEFAULT_PAGE_SIZE
        return page_size

    def set_page_size(self, page_size: int) -> None:
        if page_size not in PAGE_SIZES:
            msg = f"Page size must be one of {PAGE_SIZES}, not {page_size}"
            raise ValueError(msg)
        self.settings.setValue(self.PAGE_SIZE_KEY, page_size)

    def get_confirm_delete(self) -> bool:
        """
        Get whether to ask before deleting a project.

        Returns:
            True to ask (default: True)

        """
        return cast(
            "bool", self.settings.value(self.CONFIRM_DELETE_KEY, True, type=bool)
        )

    def set_confirm_delete(self, confirm: bool) -> None:
        self.settings.setValue(self.CONFIRM_DELETE_KEY, confirm)

    def get_shutdown_grace(self) -> float:
        """
        Get how long to wait for background work when the application exits.

        Returns:
            Seconds (default: 5.0)

        """
        return cast(
            "float",
            self.settings.value(
                self.SHUTDOWN_GRACE_KEY, DEFAULT_SHUTDOWN_GRACE, type=float
            ),
        )

    def set_shutdown_grace(self, seconds: float) -> None:
        self.settings.setValue(self.SHUTDOWN_GRACE_KEY, seconds)

    def get_database_path(self) -> Path | None:
        """
        Get the database file configured by the user.

        Returns:
            The path, or None to use the default location

        """
        value = cast("str", self.settings.value(self.DATABASE_PATH_KEY, "", type=str))
        if not value:
            return None
        return Path(value).expanduser()

    def sync(self) -> None:
        """Write pending changes to permanent storage."""
        self.settings.sync()
