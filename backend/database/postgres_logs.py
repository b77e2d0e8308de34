import psycopg2
from psycopg2.extras import RealDictCursor
import threading
from typing import List
from contextlib import contextmanager

from core.errors import PersistenceError
from models import LogRecord


class PostgresLogStorage:
    """PostgreSQL storage for the lookup log"""

    def __init__(self, dsn: str, table: str = "logs"):
        self.dsn = dsn
        self.table = table
        self._local = threading.local()
        self._connections = []
        self._init_db()

    def _get_connection(self):
        # A dropped server connection stays closed; reconnect on the next call
        if getattr(self._local, 'connection', None) is not None and self._local.connection.closed:
            del self._local.connection
        if not hasattr(self._local, 'connection'):
            try:
                self._local.connection = psycopg2.connect(
                    self.dsn,
                    cursor_factory=RealDictCursor
                )
            except psycopg2.Error as e:
                raise PersistenceError(str(e)) from e
            self._connections.append(self._local.connection)
        return self._local.connection

    @contextmanager
    def _get_cursor(self):
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
        except psycopg2.Error as e:
            raise PersistenceError(str(e)) from e
        try:
            yield cursor
            conn.commit()
        except psycopg2.Error as e:
            if not conn.closed:
                conn.rollback()
            raise PersistenceError(str(e)) from e
        finally:
            cursor.close()

    def _init_db(self):
        with self._get_cursor() as cursor:
            cursor.execute(f"""
                CREATE TABLE IF NOT EXISTS {self.table} (
                    id BIGSERIAL PRIMARY KEY,
                    user_location TEXT NOT NULL,
                    similar_place TEXT NOT NULL,
                    timestamp TIMESTAMPTZ NOT NULL
                )
            """)

    def append(self, record: LogRecord) -> None:
        query = f"INSERT INTO {self.table} (user_location, similar_place, timestamp) VALUES (%s, %s, %s)"
        with self._get_cursor() as cursor:
            cursor.execute(query, (record.user_location, record.similar_place, record.timestamp))

    def list_all(self) -> List[LogRecord]:
        query = f"SELECT user_location, similar_place, timestamp FROM {self.table} ORDER BY id"
        with self._get_cursor() as cursor:
            cursor.execute(query)
            return [
                LogRecord(
                    user_location=row["user_location"],
                    similar_place=row["similar_place"],
                    timestamp=row["timestamp"]
                )
                for row in cursor.fetchall()
            ]

    def close(self) -> None:
        while self._connections:
            self._connections.pop().close()
        self._local = threading.local()
