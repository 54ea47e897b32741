"""
db/executor.py
--------------
The single choke point for every statement sent to the coverage database.

Each call takes the connection manager's lock for its whole lifetime: the
first attempt, every retry sleep and any forced reconnect. Concurrent callers
are therefore served strictly one at a time, in lock acquisition order.

Failure policy per call:
    - undefined table/view   -> no data (None), no retry
    - uniqueness violation   -> QueryConflictError, no retry
    - anything else          -> sleep and retry; reconnect from the
                                RECONNECT_AFTER-th retry on; give up with
                                DatabaseUnavailableError after MAX_RETRIES
"""

import time
from typing import Any, Callable, Optional

from psycopg2.extras import RealDictCursor

from config import MAX_RETRIES, RECONNECT_AFTER, RETRY_SLEEP_SECONDS
from db.connection import ConnectionManager
from db.errors import (
    DatabaseReconnectError,
    DatabaseUnavailableError,
    ErrorClass,
    QueryConflictError,
    classify,
)
from db.placeholders import to_pyformat
from utils.logger import get_logger

logger = get_logger(__name__)

# Returned by _run when there is no data shape to produce.
_MISSING = object()


def _fetch_all(cur) -> list:
    """All rows, or none for a statement that produced no result set."""
    if cur.description is None:
        return []
    return cur.fetchall()


class QueryExecutor:
    """Runs parameterized queries with retry, backoff and reconnect."""

    def __init__(
        self,
        manager: ConnectionManager,
        sleep_seconds: float = RETRY_SLEEP_SECONDS,
        max_retries: int = MAX_RETRIES,
        reconnect_after: int = RECONNECT_AFTER,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.manager = manager
        self.sleep_seconds = sleep_seconds
        self.max_retries = max_retries
        self.reconnect_after = reconnect_after
        self._sleep = sleep

    # ── READ ──────────────────────────────────────────────

    def select_first(self, query: str, *args: Any) -> Optional[tuple]:
        """
        Run a query and return its first row.

        Args:
            query: SQL template with ``$1..$n`` placeholders.
            *args: Values bound to the placeholders, in order.

        Returns:
            The first row as a tuple, or None if the query produced no rows,
            the relation does not exist, or no connection could be opened.

        Raises:
            QueryConflictError: On a uniqueness violation.
            DatabaseUnavailableError: When the retry budget is exhausted.
        """
        def fetch(cur):
            if cur.description is None:
                return None
            row = cur.fetchone()
            return tuple(row) if row is not None else None

        result = self._run(query, args, fetch)
        return None if result is _MISSING else result

    def select_all(self, query: str, *args: Any) -> Optional[list[tuple]]:
        """
        Run a query and return every row.

        Returns:
            A list of row tuples (empty when nothing matched), or None when the
            relation does not exist or no connection could be opened.

        Raises:
            QueryConflictError: On a uniqueness violation.
            DatabaseUnavailableError: When the retry budget is exhausted.
        """
        result = self._run(query, args, lambda cur: [tuple(r) for r in _fetch_all(cur)])
        return None if result is _MISSING else result

    def select_all_raw(self, query: str, *args: Any) -> Optional[list[dict]]:
        """Like select_all, but each row is a dict keyed by column name."""
        result = self._run(
            query, args,
            lambda cur: [dict(r) for r in _fetch_all(cur)],
            cursor_factory=RealDictCursor,
        )
        return None if result is _MISSING else result

    # ── WRITE ─────────────────────────────────────────────

    def execute(self, query: str, *args: Any) -> int:
        """
        Run a statement that returns no rows.

        Shares the retry policy of the select methods, but a statement has no
        "no data" shape: an undefined relation is re-raised and a missing
        connection raises DatabaseUnavailableError.

        Returns:
            The number of rows affected.
        """
        result = self._run(query, args, lambda cur: cur.rowcount, allow_missing=False)
        if result is _MISSING:
            raise DatabaseUnavailableError(
                f"No connection to {self.manager.describe()}", query, args
            )
        return result

    # ── CORE ──────────────────────────────────────────────

    def _run(
        self,
        query: str,
        args: tuple,
        fetch: Callable,
        cursor_factory=None,
        allow_missing: bool = True,
    ):
        sql, params = to_pyformat(query, args)
        cursor_kwargs = {"cursor_factory": cursor_factory} if cursor_factory else {}

        with self.manager.lock:
            conn = self.manager.current()
            if conn is None:
                conn = self.manager.open()
                if conn is None:
                    logger.error(f"No database connection, skipping query: {query.strip()} {args}")
                    return _MISSING

            retries = 0
            while True:
                executed = False
                try:
                    with conn.cursor(**cursor_kwargs) as cur:
                        cur.execute(sql, params)
                        executed = True
                        return fetch(cur)
                except Exception as e:
                    # The statement already ran; running it again could repeat a write.
                    if executed:
                        raise
                    kind = classify(e)

                    if kind is ErrorClass.NOT_FOUND and allow_missing:
                        logger.debug(f"Relation missing for query: {query.strip()} ({e})")
                        return _MISSING
                    if kind is ErrorClass.NOT_FOUND:
                        raise
                    if kind is ErrorClass.CONFLICT:
                        raise QueryConflictError(query, args) from e

                    logger.error(f"An error occurred for {query.strip()} {args}")
                    logger.error(f"Error is {type(e).__name__}: {e}")

                    if retries >= self.max_retries:
                        raise DatabaseUnavailableError(
                            f"Giving up after {retries} retries: {e}",
                            query, args, retries,
                        ) from e

                    retries += 1
                    logger.info(
                        f"Retry {retries}/{self.max_retries} in {self.sleep_seconds}s"
                    )
                    self._sleep(self.sleep_seconds)

                    if retries >= self.reconnect_after:
                        conn = self.manager.reconnect()
                        if conn is None:
                            raise DatabaseReconnectError(
                                f"Cannot reconnect to {self.manager.describe()}",
                                query, args, retries,
                            ) from e
