class PersistenceError(Exception):
    """
    Exception raised when a database operation fails.

    The underlying driver error is chained as ``__cause__``.
    """

    @property
    def details(self) -> str:
        """
        A human-readable description of the failure, combining this
        exception's message with the message of its cause, if any.
        """
        if self.__cause__ is not None:
            return f"{self!s}\n{self.__cause__!s}"
        return str(self)


class ValidationError(Exception):
    """Exception raised when required project fields are missing."""

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = missing_fields
        super().__init__(f"Please fill in: {', '.join(missing_fields)}")


class WorkerClosed(RuntimeError):
    """Exception raised when work is submitted after the worker was shut down."""
