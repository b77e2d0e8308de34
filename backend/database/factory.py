"""
Pick the log store implementation from a connection string
"""
from database.logs import AppendOnlyLog, LogStorage
from database.postgres_logs import PostgresLogStorage

SQLITE_PREFIX = "sqlite:///"


def open_log_storage(url: str, table: str = "logs") -> AppendOnlyLog:
    """
    postgres:// and postgresql:// URLs open the PostgreSQL store; sqlite:///<path>
    or a bare file path opens the SQLite store.
    """
    if url.startswith(("postgres://", "postgresql://")):
        return PostgresLogStorage(url, table=table)
    if url.startswith(SQLITE_PREFIX):
        url = url[len(SQLITE_PREFIX):]
    return LogStorage(url, table=table)
