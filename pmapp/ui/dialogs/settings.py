from __future__ import annotations

from typing import TYPE_CHECKING, Final

from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QDoubleSpinBox,
    QLabel,
    QVBoxLayout,
)

from pmapp.services.paging import PAGE_SIZES

if TYPE_CHECKING:
    from pmapp.ui.main_window import MainWindow


class SettingsDialog:
    """
    Preferences dialog.
    """

    #: Dialog width
    DIALOG_WIDTH: Final[int] = 400
    #: Dialog height
    DIALOG_HEIGHT: Final[int] = 200

    def __init__(self, main_window: MainWindow) -> None:
        """
        Initialize settings dialog.
        """
        self.main_window = main_window
        self.settings = main_window.settings_service

    def build(self) -> None:
        """
        Build the settings dialog.
        """
        self.dialog = QDialog(self.main_window)
        self.dialog.setWindowTitle("Preferences")
        self.dialog.setMinimumSize(self.DIALOG_WIDTH, self.DIALOG_HEIGHT)
        self.layout = QVBoxLayout(self.dialog)

        # Default page size
        page_size_label = QLabel("Projects per page at startup:")
        self.page_size_combo = QComboBox(self.dialog)
        for page_size in PAGE_SIZES:
            self.page_size_combo.addItem(str(page_size), page_size)
        self.page_size_combo.setCurrentIndex(
            PAGE_SIZES.index(self.settings.get_page_size())
        )
        self.layout.addWidget(page_size_label)
        self.layout.addWidget(self.page_size_combo)

        # Delete confirmation
        self.confirm_delete_check = QCheckBox(
            "Ask before deleting a project", self.dialog
        )
        self.confirm_delete_check.setChecked(self.settings.get_confirm_delete())
        self.layout.addWidget(self.confirm_delete_check)

        # Shutdown grace period
        grace_label = QLabel("Seconds to wait for background work on exit:")
        self.grace_spin = QDoubleSpinBox(self.dialog)
        self.grace_spin.setMinimum(0.5)
        self.grace_spin.setMaximum(60.0)
        self.grace_spin.setSingleStep(0.5)
        self.grace_spin.setValue(self.settings.get_shutdown_grace())
        self.layout.addWidget(grace_label)
        self.layout.addWidget(self.grace_spin)

        # Button box
        self.button_box = QDialogButtonBox(self.dialog)
        self.button_box.addButton(QDialogButtonBox.StandardButton.Ok)
        self.button_box.addButton(QDialogButtonBox.StandardButton.Cancel)
        self.button_box.accepted.connect(self.save_settings)
        self.button_box.rejected.connect(self.dialog.reject)
        self.layout.addWidget(self.button_box)

    def save_settings(self) -> None:
        """Save settings to QSettings."""
        self.settings.set_page_size(self.page_size_combo.currentData())
        self.settings.set_confirm_delete(self.confirm_delete_check.isChecked())
        self.settings.set_shutdown_grace(self.grace_spin.value())
        self.main_window.controller.worker.shutdown_grace = self.grace_spin.value()
        self.dialog.accept()

    def execute(self) -> None:
        """
        Execute the settings dialog.
        """
        self.build()
        self.dialog.exec()
