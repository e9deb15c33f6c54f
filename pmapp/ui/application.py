import logging
import sys

from PySide6.QtCore import QCoreApplication
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from pmapp import __version__
from pmapp.db import create_engine_with_path, init_db
from pmapp.services.gateway import ProjectGateway
from pmapp.services.settings import SettingsService

from .main_window import MainWindow

logger = logging.getLogger(__name__)


def create_application() -> tuple[QApplication, MainWindow]:
    """
    Create the application and its main window.

    Returns:
        The application and the shown main window

    """
    QCoreApplication.setOrganizationName("Project Manager")
    QCoreApplication.setApplicationName("Project Manager")

    app = QApplication(sys.argv)
    app.setApplicationVersion(__version__)
    QGuiApplication.setApplicationDisplayName("Project Manager")

    settings_service = SettingsService()
    engine = create_engine_with_path(settings_service.get_database_path())
    init_db(engine)

    window = MainWindow(ProjectGateway(engine), settings_service)
    window.show()
    logger.info(f"Project Manager {__version__} started")
    return app, window
