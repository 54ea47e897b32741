import sys
from pathlib import Path

import psycopg2
import pytest

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from db.connection import ConnectionManager  # noqa: E402
from db.executor import QueryExecutor  # noqa: E402


class FakeCursor:
    def __init__(self, conn, cursor_factory=None):
        self.conn = conn
        self.cursor_factory = cursor_factory
        self.rowcount = -1
        self.description = None
        self._rows = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, sql, params=None):
        self.conn.server.executed.append((sql, params))
        outcome = self.conn.server.next_outcome()
        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, int):
            self.rowcount = outcome
            self.description = None
            self._rows = []
        else:
            self._rows = list(outcome)
            self.rowcount = len(self._rows)
            self.description = [("column",)]

    def _check_fetch(self):
        if self.conn.server.fetch_error is not None:
            raise self.conn.server.fetch_error
        if self.description is None:
            raise psycopg2.ProgrammingError("no results to fetch")

    def fetchone(self):
        self._check_fetch()
        return self._rows[0] if self._rows else None

    def fetchall(self):
        self._check_fetch()
        return list(self._rows)


class FakeConnection:
    def __init__(self, server, kwargs):
        self.server = server
        self.kwargs = kwargs
        self.autocommit = False
        self.closed = 0

    def cursor(self, cursor_factory=None):
        self.server.cursor_factories.append(cursor_factory)
        return FakeCursor(self, cursor_factory)

    def close(self):
        self.closed = 1


class FakeServer:
    """
    Stands in for PostgreSQL behind psycopg2.connect.

    ``outcomes`` is consumed one entry per statement, across reconnects: a list
    of rows, an int rowcount, or an exception to raise. Once exhausted every
    statement returns no rows. ``fetch_error`` is raised by every fetch
    after a successful execute. ``accept_connections`` is the number of connects
    that succeed (None for unlimited).
    """

    def __init__(self):
        self.outcomes = []
        self.executed = []
        self.cursor_factories = []
        self.connections = []
        self.connect_attempts = 0
        self.accept_connections = None
        self.fetch_error = None

    def connect(self, **kwargs):
        self.connect_attempts += 1
        if self.accept_connections is not None and len(self.connections) >= self.accept_connections:
            raise psycopg2.OperationalError("could not connect to server: Connection refused")
        conn = FakeConnection(self, kwargs)
        self.connections.append(conn)
        return conn

    def next_outcome(self):
        return self.outcomes.pop(0) if self.outcomes else []


@pytest.fixture()
def server(monkeypatch):
    fake = FakeServer()
    monkeypatch.setattr(psycopg2, "connect", fake.connect)
    return fake


@pytest.fixture()
def manager(server):
    mgr = ConnectionManager(host="testhost", port=5433, database="covdb",
                            user="tester", password="secret", connect_timeout=3)
    yield mgr
    mgr.close()


@pytest.fixture()
def sleeps():
    return []


@pytest.fixture()
def executor(manager, sleeps):
    return QueryExecutor(manager, sleep_seconds=60, max_retries=10,
                         reconnect_after=5, sleep=sleeps.append)


class StubExecutor:
    """Records queries and answers from a canned list of results."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def _answer(self, mode, query, args):
        self.calls.append((mode, query, args))
        return self.results.pop(0) if self.results else None

    def select_first(self, query, *args):
        return self._answer("first", query, args)

    def select_all(self, query, *args):
        return self._answer("all", query, args)


@pytest.fixture()
def stub_executor():
    return StubExecutor
