from datetime import datetime, timezone

import psycopg2
import pytest

from core.errors import PersistenceError
from database import postgres_logs
from database.postgres_logs import PostgresLogStorage
from models import LogRecord

DSN = "postgresql://dawn2dusk:secret@db:5432/dawn2dusk"


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn

    def execute(self, query, params=None):
        if self.conn.fail_next:
            self.conn.fail_next = False
            raise psycopg2.OperationalError("server closed the connection unexpectedly")
        self.conn.executed.append((" ".join(query.split()), params))

    def fetchall(self):
        return self.conn.rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self):
        self.executed = []
        self.rows = []
        self.fail_next = False
        self.closed = 0
        self.commits = 0
        self.rollbacks = 0

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = 1


@pytest.fixture
def connections(monkeypatch):
    opened = []

    def connect(dsn, cursor_factory=None):
        assert dsn == DSN
        conn = FakeConnection()
        opened.append(conn)
        return conn

    monkeypatch.setattr(postgres_logs.psycopg2, "connect", connect)
    return opened


def test_schema_is_created_on_open(connections):
    PostgresLogStorage(DSN)

    assert connections[0].executed[0][0].startswith("CREATE TABLE IF NOT EXISTS logs")


def test_append_inserts_record_fields(connections):
    storage = PostgresLogStorage(DSN)
    stamp = datetime(2024, 6, 21, 12, 0, tzinfo=timezone.utc)

    storage.append(LogRecord(user_location="Lima", similar_place="Colombo", timestamp=stamp))

    query, params = connections[0].executed[-1]
    assert query.startswith("INSERT INTO logs")
    assert params == ("Lima", "Colombo", stamp)


def test_list_all_maps_rows_to_records(connections):
    storage = PostgresLogStorage(DSN)
    stamp = datetime(2024, 6, 21, 12, 0, tzinfo=timezone.utc)
    connections[0].rows = [
        {"user_location": "Lima", "similar_place": "Colombo", "timestamp": stamp},
    ]

    assert storage.list_all() == [
        LogRecord(user_location="Lima", similar_place="Colombo", timestamp=stamp)
    ]
    assert connections[0].executed[-1][0].endswith("ORDER BY id")


def test_query_errors_roll_back_and_raise_persistence_error(connections):
    storage = PostgresLogStorage(DSN)
    connections[0].fail_next = True

    with pytest.raises(PersistenceError):
        storage.list_all()
    assert connections[0].rollbacks == 1


def test_connect_errors_raise_persistence_error(monkeypatch):
    def refuse(dsn, cursor_factory=None):
        raise psycopg2.OperationalError("could not connect to server")

    monkeypatch.setattr(postgres_logs.psycopg2, "connect", refuse)

    with pytest.raises(PersistenceError):
        PostgresLogStorage(DSN)


def test_closed_connection_is_replaced(connections):
    storage = PostgresLogStorage(DSN)
    connections[0].closed = 2

    storage.list_all()

    assert len(connections) == 2
    assert connections[1].executed[-1][0].startswith("SELECT")
