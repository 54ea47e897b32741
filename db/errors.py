"""
db/errors.py
------------
Exception hierarchy for the coverage database layer, plus the classifier that
maps psycopg2 failures onto the three outcomes the executor cares about.

Not-found outcomes (an undefined relation, zero matching rows) are never
exceptions: they surface as ``None`` or an empty list.
"""

from enum import Enum
from typing import Optional

from psycopg2 import errorcodes, errors


class ErrorClass(Enum):
    """How the executor reacts to a failed statement."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    TRANSIENT = "transient"


class CoverageDbError(RuntimeError):
    """Base exception for coverage database failures."""


class QueryConflictError(CoverageDbError):
    """A statement hit a uniqueness constraint. Never retried."""

    def __init__(self, query: str, params: tuple):
        super().__init__(f"Uniqueness violation while running query with params {params!r}")
        self.query = query
        self.params = params


class DatabaseUnavailableError(CoverageDbError):
    """
    The database could not be reached for this call.

    Raised once the retry budget is exhausted, so callers can tell
    "database unavailable" apart from a legitimate empty result.
    """

    def __init__(self, message: str, query: Optional[str] = None,
                 params: tuple = (), retries: int = 0):
        super().__init__(message)
        self.query = query
        self.params = params
        self.retries = retries


class DatabaseReconnectError(DatabaseUnavailableError):
    """A forced reconnect could not reopen the connection."""


def classify(exc: BaseException) -> ErrorClass:
    """
    Map a driver exception onto the executor's error taxonomy.

    Checks the psycopg2 exception class first, then falls back to the
    SQLSTATE code for errors raised through a generic class.

    Args:
        exc: Any exception raised while executing a statement.

    Returns:
        NOT_FOUND for an undefined table/view, CONFLICT for a uniqueness
        violation, TRANSIENT for everything else.
    """
    if isinstance(exc, errors.UndefinedTable):
        return ErrorClass.NOT_FOUND
    if isinstance(exc, errors.UniqueViolation):
        return ErrorClass.CONFLICT

    pgcode = getattr(exc, "pgcode", None)
    if pgcode == errorcodes.UNDEFINED_TABLE:
        return ErrorClass.NOT_FOUND
    if pgcode == errorcodes.UNIQUE_VIOLATION:
        return ErrorClass.CONFLICT
    return ErrorClass.TRANSIENT
