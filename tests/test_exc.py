"""Unit tests for custom exceptions."""

import pytest

from pmapp.exc import PersistenceError, ValidationError, WorkerClosed


class TestPersistenceError:
    """Test cases for PersistenceError exception."""

    def test_details_without_cause(self):
        """Test details is just the message when there is no cause."""
        exc = PersistenceError("Database error while counting projects.")
        assert exc.details == "Database error while counting projects."

    def test_details_with_cause(self):
        """Test details includes the message of the chained cause."""
        with pytest.raises(PersistenceError) as excinfo:
            try:
                raise OSError("disk full")
            except OSError as e:
                raise PersistenceError("Database error while adding the project.") from e

        assert excinfo.value.details == (
            "Database error while adding the project.\ndisk full"
        )

    def test_inherits_from_exception(self):
        """Test exception inherits from Exception."""
        assert isinstance(PersistenceError("x"), Exception)


class TestValidationError:
    """Test cases for ValidationError exception."""

    def test_lists_missing_fields(self):
        """Test the message names every missing field."""
        exc = ValidationError(["Name", "Description"])
        assert exc.missing_fields == ["Name", "Description"]
        assert str(exc) == "Please fill in: Name, Description"

    def test_single_field(self):
        """Test the message with one missing field."""
        assert str(ValidationError(["Due date"])) == "Please fill in: Due date"


class TestWorkerClosed:
    """Test cases for WorkerClosed exception."""

    def test_inherits_from_runtime_error(self):
        """Test exception inherits from RuntimeError."""
        assert isinstance(WorkerClosed("closed"), RuntimeError)
