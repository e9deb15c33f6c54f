from .project_dialog import ProjectDialog
from .settings import SettingsDialog

__all__ = [
    "ProjectDialog",
    "SettingsDialog",
]
