"""
db/connection.py
----------------
Opens and closes the single PostgreSQL connection used by the admin console.
Rows are returned as dicts through psycopg2's RealDictCursor.
"""

from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2 import extras

from config import DATABASE_URL
from utils.logger import get_logger

logger = get_logger(__name__)


def open_connection(dsn: str = DATABASE_URL):
    """
    Open a new database connection.

    Args:
        dsn: libpq connection string or URL.

    Returns:
        A psycopg2 connection whose cursors yield dict rows.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    try:
        conn = psycopg2.connect(dsn, cursor_factory=extras.RealDictCursor)
        logger.info("Database connection opened.")
        return conn
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to open database connection: {e}")
        raise


def close_connection(conn) -> None:
    """
    Close a connection if it is still open.

    Args:
        conn: The psycopg2 connection to close (None is ignored).
    """
    if conn is None or conn.closed:
        return
    try:
        conn.close()
        logger.info("Database connection closed.")
    except psycopg2.Error as e:
        logger.error(f"Failed to close database connection: {e}")


@contextmanager
def connection(dsn: str = DATABASE_URL) -> Iterator:
    """Yield an open connection and close it on exit, whatever happens."""
    conn = open_connection(dsn)
    try:
        yield conn
    finally:
        close_connection(conn)
