"""
db/connection.py
----------------
Owns the single PostgreSQL connection to the coverage database.

There is no pool: one ConnectionManager is built at process start and handed
to the QueryExecutor. Its re-entrant lock is the mutex that serializes every
statement, retry and reconnect in the process.
"""

import threading
from typing import Optional

import psycopg2
from psycopg2.extensions import connection as PgConnection

from config import DB_CONNECT_TIMEOUT, DB_HOST, DB_NAME, DB_PASS, DB_PORT, DB_USER
from utils.logger import get_logger

logger = get_logger(__name__)


class ConnectionManager:
    """
    Holds zero or one open connection.

    State machine: Closed -> open() succeeds -> Open -> close()/reconnect() -> Closed.
    A failed open() leaves the manager Closed without raising; callers check
    ``current()`` for a usable handle.
    """

    def __init__(
        self,
        host: str = DB_HOST,
        port: int = DB_PORT,
        database: str = DB_NAME,
        user: str = DB_USER,
        password: str = DB_PASS,
        connect_timeout: int = DB_CONNECT_TIMEOUT,
    ):
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self._password = password
        self.connect_timeout = connect_timeout
        self.lock = threading.RLock()
        self._conn: Optional[PgConnection] = None

    def __enter__(self) -> "ConnectionManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> Optional[PgConnection]:
        """
        Establish the connection.

        Returns:
            The open psycopg2 connection, or None if the server is unreachable.
        """
        with self.lock:
            try:
                conn = psycopg2.connect(
                    host=self.host,
                    port=self.port,
                    dbname=self.database,
                    user=self.user,
                    password=self._password,
                    connect_timeout=self.connect_timeout,
                )
            except psycopg2.Error as e:
                logger.error(f"Failed to open connection to {self.describe()}: {e}")
                self._conn = None
                return None

            # Read-only lookups; a failed statement must not leave the session aborted.
            conn.autocommit = True
            self._conn = conn
            logger.info(f"Connected to {self.describe()}")
            return conn

    def close(self) -> None:
        """Close the connection if one is open. Safe to call repeatedly."""
        with self.lock:
            if self._conn is None:
                return
            try:
                self._conn.close()
            except psycopg2.Error as e:
                logger.warning(f"Error while closing connection to {self.describe()}: {e}")
            finally:
                self._conn = None
            logger.info(f"Closed connection to {self.describe()}")

    def reconnect(self) -> Optional[PgConnection]:
        """Force-close and reopen. Returns the new handle or None."""
        with self.lock:
            logger.warning(f"Reconnecting to {self.describe()}")
            self.close()
            return self.open()

    def current(self) -> Optional[PgConnection]:
        """Return the live handle, or None when unset or closed."""
        with self.lock:
            conn = self._conn
            if conn is None or conn.closed:
                return None
            return conn

    def describe(self) -> str:
        """Connection target without credentials, for log lines."""
        return f"{self.user}@{self.host}:{self.port}/{self.database}"
