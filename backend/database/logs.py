"""
Lookup log storage database layer using SQLite
"""
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import List, Protocol

from core.errors import PersistenceError
from models import LogRecord


class AppendOnlyLog(Protocol):
    """Capability the lookup pipeline needs from a log store"""

    def append(self, record: LogRecord) -> None:
        ...

    def list_all(self) -> List[LogRecord]:
        ...

    def close(self) -> None:
        ...


class LogStorage:
    """Append-only lookup log stored in SQLite"""

    def __init__(self, db_path: str = "dawn2dusk.db", table: str = "logs"):
        self.db_path = db_path
        self.table = table
        self._local = threading.local()
        self._connections: List[sqlite3.Connection] = []
        self._init_db()

    def _get_connection(self):
        """Get thread-local database connection"""
        if not hasattr(self._local, 'connection'):
            try:
                self._local.connection = sqlite3.connect(
                    self.db_path,
                    check_same_thread=False,
                    timeout=30.0
                )
            except sqlite3.Error as e:
                raise PersistenceError(str(e)) from e
            self._local.connection.row_factory = sqlite3.Row
            self._connections.append(self._local.connection)
        return self._local.connection

    @contextmanager
    def _get_cursor(self):
        """Context manager for database operations"""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
        except sqlite3.Error as e:
            raise PersistenceError(str(e)) from e
        try:
            yield cursor
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise PersistenceError(str(e)) from e
        finally:
            cursor.close()

    def _init_db(self):
        """Initialize the database schema"""
        with self._get_cursor() as cursor:
            cursor.execute(f"""
                CREATE TABLE IF NOT EXISTS {self.table} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_location TEXT NOT NULL,
                    similar_place TEXT NOT NULL,
                    timestamp TEXT NOT NULL
                )
            """)

    def append(self, record: LogRecord) -> None:
        """Insert one record; a single INSERT is atomic in SQLite"""
        with self._get_cursor() as cursor:
            cursor.execute(f"""
                INSERT INTO {self.table} (user_location, similar_place, timestamp)
                VALUES (?, ?, ?)
            """, (
                record.user_location,
                record.similar_place,
                record.timestamp.isoformat()
            ))

    def list_all(self) -> List[LogRecord]:
        """All records in insertion order"""
        with self._get_cursor() as cursor:
            cursor.execute(f"""
                SELECT user_location, similar_place, timestamp
                FROM {self.table} ORDER BY id
            """)
            return [
                LogRecord(
                    user_location=row['user_location'],
                    similar_place=row['similar_place'],
                    timestamp=datetime.fromisoformat(row['timestamp'])
                )
                for row in cursor.fetchall()
            ]

    def close(self) -> None:
        """Close every connection opened by any thread"""
        while self._connections:
            self._connections.pop().close()
        self._local = threading.local()
