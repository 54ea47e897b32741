import psycopg2

from db.connection import ConnectionManager


def test_open_then_current_yields_usable_handle(manager, server):
    conn = manager.open()
    assert conn is not None
    assert manager.current() is conn
    assert conn.autocommit is True
    assert conn.kwargs == {
        "host": "testhost",
        "port": 5433,
        "dbname": "covdb",
        "user": "tester",
        "password": "secret",
        "connect_timeout": 3,
    }


def test_close_then_current_is_absent(manager):
    conn = manager.open()
    manager.close()
    assert conn.closed
    assert manager.current() is None


def test_close_is_idempotent(manager):
    manager.close()
    manager.open()
    manager.close()
    manager.close()
    assert manager.current() is None


def test_failed_open_leaves_handle_unset_without_raising(manager, server):
    server.accept_connections = 0
    assert manager.open() is None
    assert manager.current() is None
    assert server.connect_attempts == 1


def test_current_ignores_connection_closed_by_server(manager):
    conn = manager.open()
    conn.closed = 2
    assert manager.current() is None


def test_reconnect_replaces_handle(manager, server):
    first = manager.open()
    second = manager.reconnect()
    assert second is not first
    assert first.closed
    assert manager.current() is second
    assert len(server.connections) == 2


def test_reconnect_failure_leaves_manager_closed(manager, server):
    manager.open()
    server.accept_connections = 1
    assert manager.reconnect() is None
    assert manager.current() is None


def test_close_clears_handle_even_if_close_fails(manager):
    conn = manager.open()

    def broken_close():
        raise psycopg2.InterfaceError("connection already closed")

    conn.close = broken_close
    manager.close()
    assert manager.current() is None


def test_context_manager_closes_on_exit(server):
    with ConnectionManager(host="h") as mgr:
        conn = mgr.open()
    assert conn.closed
    assert mgr.current() is None


def test_defaults_come_from_config(server):
    import config

    mgr = ConnectionManager()
    mgr.open()
    kwargs = server.connections[0].kwargs
    assert kwargs["host"] == config.DB_HOST
    assert kwargs["port"] == config.DB_PORT
    assert kwargs["dbname"] == config.DB_NAME
    assert kwargs["user"] == config.DB_USER
    assert "secret" not in mgr.describe()
    mgr.close()
