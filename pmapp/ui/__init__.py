"""User interface for Project Manager."""
