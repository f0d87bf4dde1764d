"""Shared fakes for the psycopg2 connection pool."""

import pytest


class FakeCursor:
    """
    Cursor stand-in. Each execute() consumes the next entry of `results`
    (a list of rows); statements are recorded in `executed`.
    """

    def __init__(self, results=None, error=None):
        self.results = list(results or [])
        self.error = error
        self.executed = []
        self._rows = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql, params=None):
        self.executed.append((sql, params))
        if self.error is not None:
            raise self.error
        self._rows = self.results.pop(0) if self.results else []

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.cursor_factories = []
        self.committed = False
        self.rolled_back = False

    def cursor(self, cursor_factory=None):
        self.cursor_factories.append(cursor_factory)
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True


@pytest.fixture
def fake_db(monkeypatch):
    """
    Install a fake connection into a module that imported
    get_connection/release_connection from db.connection.

    Usage: conn = fake_db(module, results=[[row, ...], ...])
    """
    def _install(module, results=None, error=None):
        cursor = FakeCursor(results, error)
        conn = FakeConnection(cursor)
        conn.released = 0

        def _release(c):
            assert c is conn
            conn.released += 1

        monkeypatch.setattr(module, "get_connection", lambda: conn)
        monkeypatch.setattr(module, "release_connection", _release)
        return conn

    return _install
