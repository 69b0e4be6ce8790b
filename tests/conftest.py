"""
conftest.py
Shared fixtures: an in-memory stand-in for a pooled psycopg2 connection.

Each scripted result is consumed by one `execute` call:
    - a list of row tuples (rowcount is its length),
    - an int (a write that touched that many rows and returned nothing),
    - an Exception instance (raised by `execute`).
"""
import pytest


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn
        self._rows = []
        self.rowcount = -1

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, sql, params=None):
        self.conn.executed.append((" ".join(sql.split()), params))
        result = self.conn.results.pop(0) if self.conn.results else []
        if isinstance(result, Exception):
            raise result
        if isinstance(result, int):
            self._rows, self.rowcount = [], result
        else:
            self._rows, self.rowcount = list(result), len(result)

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)


class FakeConnection:
    def __init__(self, results=None):
        self.results = list(results or [])
        self.executed = []
        self.commits = 0
        self.rollbacks = 0
        self.released = 0

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    @property
    def last_sql(self):
        return self.executed[-1][0]

    @property
    def last_params(self):
        return self.executed[-1][1]


_PATCHED_MODULES = (
    "repositories.customer_repo",
    "repositories.reservation_repo",
    "db.init_db",
)


@pytest.fixture
def fake_db(monkeypatch):
    """
    Route every repository to a single FakeConnection.
    Call the fixture with the scripted results and get the connection back.
    """
    def install(*results):
        conn = FakeConnection(results)

        def release(c):
            assert c is conn
            conn.released += 1

        for module in _PATCHED_MODULES:
            monkeypatch.setattr(f"{module}.get_connection", lambda: conn)
            monkeypatch.setattr(f"{module}.release_connection", release)
        return conn

    return install
