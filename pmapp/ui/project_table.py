"""Table model for the project list."""

from typing import Any, ClassVar, Final

from PySide6.QtCore import QAbstractTableModel, QModelIndex, QPersistentModelIndex, Qt

from pmapp.models.project import Project
from pmapp.utils import format_date, format_datetime


class ProjectTableModel(QAbstractTableModel):
    """
    The projects displayed in the main window table.

    :meth:`replace` and :meth:`remove` look for the displayed instance first,
    then for a displayed project with the same ID.
    """

    #: Column headers.
    HEADERS: Final[tuple[str, ...]] = (
        "ID",
        "Name",
        "Description",
        "Created",
        "Due Date",
    )
    #: Column index of each header.
    COLUMNS: ClassVar[dict[str, int]] = {name: i for i, name in enumerate(HEADERS)}

    def __init__(self, parent: Any = None) -> None:
        super().__init__(parent)
        #: The displayed projects, in display order.
        self.records: list[Project] = []

    def rowCount(  # noqa: N802
        self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()  # noqa: B008
    ) -> int:
        if parent.isValid():
            return 0
        return len(self.records)

    def columnCount(  # noqa: N802
        self, parent: QModelIndex | QPersistentModelIndex = QModelIndex()  # noqa: B008
    ) -> int:
        if parent.isValid():
            return 0
        return len(self.HEADERS)

    def headerData(  # noqa: N802
        self,
        section: int,
        orientation: Qt.Orientation,
        role: int = Qt.ItemDataRole.DisplayRole,
    ) -> Any:
        if (
            role == Qt.ItemDataRole.DisplayRole
            and orientation == Qt.Orientation.Horizontal
        ):
            return self.HEADERS[section]
        return None

    def data(
        self,
        index: QModelIndex | QPersistentModelIndex,
        role: int = Qt.ItemDataRole.DisplayRole,
    ) -> Any:
        if not index.isValid() or not 0 <= index.row() < len(self.records):
            return None
        record = self.records[index.row()]
        if role == Qt.ItemDataRole.UserRole:
            return record
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        column = index.column()
        if column == self.COLUMNS["ID"]:
            return "" if record.id is None else str(record.id)
        if column == self.COLUMNS["Name"]:
            return record.name
        if column == self.COLUMNS["Description"]:
            return record.description
        if column == self.COLUMNS["Created"]:
            return format_datetime(record.created_at)
        if column == self.COLUMNS["Due Date"]:
            return format_date(record.due_date)
        return None

    def project_at(self, row: int) -> Project | None:
        """
        Get the project displayed in ``row``.

        Returns:
            The project, or None if ``row`` is out of range

        """
        if 0 <= row < len(self.records):
            return self.records[row]
        return None

    def row_of(self, record: Project) -> int:
        """
        Get the row displaying ``record``.  The same instance is looked for
        first; failing that, a displayed project with the same ID, since a
        reload replaces the displayed instances.

        Returns:
            The row, or -1 if ``record`` is not displayed

        """
        for row, displayed in enumerate(self.records):
            if displayed is record:
                return row
        if record.id is None:
            return -1
        for row, displayed in enumerate(self.records):
            if displayed.id == record.id:
                return row
        return -1

    def replace_all(self, records: list[Project]) -> None:
        """
        Replace every displayed project at once, so the table never shows a
        mix of two pages.
        """
        self.beginResetModel()
        self.records = list(records)
        self.endResetModel()

    def append(self, record: Project) -> None:
        row = len(self.records)
        self.beginInsertRows(QModelIndex(), row, row)
        self.records.append(record)
        self.endInsertRows()

    def replace(self, record: Project) -> None:
        """
        Redisplay ``record`` after it was edited.  Does nothing if it is not
        displayed.
        """
        row = self.row_of(record)
        if row == -1:
            return
        self.records[row] = record
        self.dataChanged.emit(
            self.index(row, 0), self.index(row, len(self.HEADERS) - 1)
        )

    def remove(self, record: Project) -> None:
        """Stop displaying ``record``.  Does nothing if it is not displayed."""
        row = self.row_of(record)
        if row == -1:
            return
        self.beginRemoveRows(QModelIndex(), row, row)
        del self.records[row]
        self.endRemoveRows()
