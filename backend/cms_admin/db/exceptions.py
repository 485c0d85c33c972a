"""Database-specific exceptions for the CMS admin API."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class RecordNotFoundError(DatabaseError):
    """Raised when a required record is not found."""

    pass


class RecordValidationError(DatabaseError):
    """Raised when submitted values violate field constraints.

    ``errors`` holds one human-readable message per violated constraint.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Validation failed")


class ConstraintViolationError(RecordValidationError):
    """Raised when a database constraint is violated."""

    def __init__(self, message: str) -> None:
        super().__init__([message])


class DuplicateRecordError(ConstraintViolationError):
    """Raised when attempting to create a duplicate record."""

    pass


class ConnectionError(DatabaseError):
    """Raised when database connection fails."""

    pass
