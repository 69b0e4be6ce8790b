"""
db/init_db.py
-------------
Creates the Lunchly schema (customers and reservations) if it does not exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Customers: people who may hold reservations
CREATE TABLE IF NOT EXISTS customers (
    id              SERIAL PRIMARY KEY,
    first_name      TEXT NOT NULL,
    last_name       TEXT NOT NULL,
    phone           TEXT,
    notes           TEXT NOT NULL DEFAULT ''
);

-- Reservations: each one belongs to exactly one customer
CREATE TABLE IF NOT EXISTS reservations (
    id              SERIAL PRIMARY KEY,
    customer_id     INTEGER NOT NULL REFERENCES customers(id),
    start_at        TIMESTAMP NOT NULL,
    num_guests      INTEGER NOT NULL CHECK (num_guests > 0),
    notes           TEXT NOT NULL DEFAULT ''
);

CREATE INDEX IF NOT EXISTS idx_reservations_customer ON reservations(customer_id);
"""

TRUNCATE_SQL = "TRUNCATE reservations, customers RESTART IDENTITY CASCADE;"


def _run(sql: str, action: str) -> None:
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(sql)
        conn.commit()
        logger.info(f"Database {action} completed.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Database {action} failed: {e}")
        raise
    finally:
        release_connection(conn)


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    _run(SCHEMA_SQL, "schema initialization")


def truncate_tables() -> None:
    """Remove every customer and reservation and reset the id sequences."""
    _run(TRUNCATE_SQL, "truncate")


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
