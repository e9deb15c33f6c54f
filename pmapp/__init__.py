"""Project Manager: a desktop application for managing project records."""

__version__ = "0.1.0"
