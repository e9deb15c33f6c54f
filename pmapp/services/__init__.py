"""Services package initialization."""

from pmapp.services.controller import PageController, ProjectListView
from pmapp.services.forms import ProjectForm
from pmapp.services.gateway import ProjectGateway
from pmapp.services.paging import DEFAULT_PAGE_SIZE, PAGE_SIZES, Page, PageState, reload
from pmapp.services.settings import SettingsService
from pmapp.services.worker import ProjectWorker

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "PAGE_SIZES",
    "Page",
    "PageController",
    "PageState",
    "ProjectForm",
    "ProjectGateway",
    "ProjectListView",
    "ProjectWorker",
    "SettingsService",
    "reload",
]
