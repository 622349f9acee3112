import re
from typing import Dict, Optional

from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError, TimeoutError as PoolTimeoutError

DATABASE_SETUP_REQUIRED = "DATABASE_SETUP_REQUIRED"
DATABASE_UNAVAILABLE = "DATABASE_UNAVAILABLE"
DATABASE_ERROR = "DATABASE_ERROR"

# SQLSTATE for "relation does not exist"
UNDEFINED_TABLE_SQLSTATE = "42P01"

# PostgreSQL, SQLite and MySQL wording for a missing table; database or role
# errors ("database \"x\" does not exist") must not match
_MISSING_TABLE_PATTERN = re.compile(
    r"relation \S+ does not exist|no such table|table \S+ doesn't exist",
    re.IGNORECASE,
)


class SchoolStoreError(Exception):
    """A failure reading from or writing to the schools table."""

    code = DATABASE_ERROR

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details or message


class SchoolTableMissingError(SchoolStoreError):
    """The schools table has never been created."""

    code = DATABASE_SETUP_REQUIRED


class StoreUnavailableError(SchoolStoreError):
    code = DATABASE_UNAVAILABLE


class ImageStorageError(Exception):
    """The uploaded image could not be written to the upload directory."""


class SchoolValidationError(Exception):
    def __init__(self, fields: Dict[str, str]):
        super().__init__("Validation failed")
        self.fields = fields


def is_missing_table_error(exc: BaseException) -> bool:
    orig = getattr(exc, "orig", None)
    if getattr(orig, "pgcode", None) == UNDEFINED_TABLE_SQLSTATE:
        return True
    if getattr(orig, "pgcode", None):
        return False
    text = str(orig if orig is not None else exc)
    return _MISSING_TABLE_PATTERN.search(text) is not None


def classify_store_error(exc: SQLAlchemyError) -> SchoolStoreError:
    """Map a SQLAlchemy error to the store error callers can act on."""
    details = str(getattr(exc, "orig", None) or exc)
    if is_missing_table_error(exc):
        return SchoolTableMissingError("The schools table does not exist", details)
    if isinstance(exc, PoolTimeoutError):
        return StoreUnavailableError("Timed out waiting for a database connection", details)
    if isinstance(exc, OperationalError) or (isinstance(exc, DBAPIError) and exc.connection_invalidated):
        return StoreUnavailableError("Could not connect to the database", details)
    return SchoolStoreError("Database query failed", details)
