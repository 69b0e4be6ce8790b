"""
db/connection.py
----------------
Manages the PostgreSQL connection pool shared by every repository.
Uses psycopg2's SimpleConnectionPool for connection reuse.
"""

from typing import Optional

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None


def init_pool(
    min_conn: int = DB_POOL_MIN,
    max_conn: int = DB_POOL_MAX,
    dsn: Optional[str] = None,
) -> None:
    """
    Initialize the database connection pool. Calling it again is a no-op.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.
        dsn: Connection string; defaults to ``config.DATABASE_URL``.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, dsn or DATABASE_URL)
        logger.info(f"Database connection pool ready ({min_conn}-{max_conn} connections).")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def get_connection():
    """
    Borrow a connection from the pool.

    Raises:
        RuntimeError: If the pool has not been initialized.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn) -> None:
    """Return a borrowed connection to the pool."""
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")
