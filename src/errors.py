"""Error types raised by the schema store."""

import re

from sqlalchemy.exc import IntegrityError

# PostgreSQL SQLSTATE codes
UNIQUE_VIOLATION = "23505"
NOT_NULL_VIOLATION = "23502"

_SQLITE_FAILURE = re.compile(r"(UNIQUE|NOT NULL) constraint failed: (\w+)\.(\w+)")


class StoreError(Exception):
    """Base class for all schema store errors."""


class ConstraintViolationError(StoreError):
    """A row was rejected by a table constraint."""

    def __init__(self, message: str, table: str | None = None, column: str | None = None):
        super().__init__(message)
        self.table = table
        self.column = column


class UniqueViolationError(ConstraintViolationError):
    """A row duplicated a value guarded by a unique index."""


class NotNullViolationError(ConstraintViolationError):
    """A required column was left empty."""


class MigrationError(StoreError):
    """A migration step failed and the run was aborted."""

    def __init__(self, message: str, revision: str | None = None):
        super().__init__(message)
        self.revision = revision


def _postgres_column(orig: object, table: str | None) -> str | None:
    diag = getattr(orig, "diag", None)
    column = getattr(diag, "column_name", None)
    if column:
        return column
    # Unique indexes are named index_<table>_on_<column>
    constraint = getattr(diag, "constraint_name", None)
    prefix = f"index_{table}_on_"
    if constraint and table and constraint.startswith(prefix):
        return constraint[len(prefix) :]
    return None


def translate_integrity_error(exc: IntegrityError) -> ConstraintViolationError:
    """Map a driver-level integrity failure onto the error taxonomy."""
    orig = exc.orig
    message = str(orig)

    match = _SQLITE_FAILURE.search(message)
    if match:
        kind, table, column = match.groups()
        error_class = UniqueViolationError if kind == "UNIQUE" else NotNullViolationError
        return error_class(message, table=table, column=column)

    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code in (UNIQUE_VIOLATION, NOT_NULL_VIOLATION):
        table = getattr(getattr(orig, "diag", None), "table_name", None)
        column = _postgres_column(orig, table)
        error_class = UniqueViolationError if code == UNIQUE_VIOLATION else NotNullViolationError
        return error_class(message, table=table, column=column)

    return ConstraintViolationError(message)
