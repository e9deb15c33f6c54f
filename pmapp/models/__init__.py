"""Data models for Project Manager."""

from pmapp.models.project import Project

__all__ = ["Project"]
