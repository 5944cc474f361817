"""
Database module - single-file SQLite store.
"""
from app.db.sqlite import get_db_session, execute_raw_sql, init_db, test_sqlite_connection

__all__ = [
    "get_db_session",
    "execute_raw_sql",
    "init_db",
    "test_sqlite_connection"
]
