"""Unit tests for utility functions."""

from datetime import date, datetime

from pmapp.utils import format_date, format_datetime


class TestFormatDatetime:
    """Test cases for format_datetime()."""

    def test_formats_datetime(self):
        """Test a creation time is shown to the second."""
        assert format_datetime(datetime(2025, 1, 15, 10, 30, 45, 123)) == (
            "2025-01-15 10:30:45"
        )

    def test_returns_empty_for_none(self):
        """Test None formats as an empty string."""
        assert format_datetime(None) == ""


class TestFormatDate:
    """Test cases for format_date()."""

    def test_formats_date(self):
        """Test a due date is shown as year-month-day."""
        assert format_date(date(2025, 3, 7)) == "2025-03-07"

    def test_returns_empty_for_none(self):
        """Test None formats as an empty string."""
        assert format_date(None) == ""
