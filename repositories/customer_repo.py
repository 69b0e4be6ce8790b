"""
repositories/customer_repo.py
------------------------------
Data access layer for customers.
All SQL queries related to the `customers` table live here.
"""

from config import TOP_CUSTOMERS_LIMIT
from db.connection import get_connection, release_connection
from models.customer import Customer
from models.reservation import Reservation
from repositories.reservation_repo import ReservationRepository
from utils.errors import NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "customers.id, first_name, last_name, phone, customers.notes"


class CustomerRepository:
    """Repository for CRUD and search operations on the customers table."""

    def __init__(self, reservation_repo: ReservationRepository | None = None):
        self.reservation_repo = reservation_repo or ReservationRepository()

    # ── READ ──────────────────────────────────────────────

    def all(self) -> list[Customer]:
        """Every customer, ordered by last name then first name."""
        sql = f"SELECT {_COLUMNS} FROM customers ORDER BY last_name, first_name;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_customer(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get(self, customer_id: int) -> Customer:
        """
        Fetch a single customer by ID.

        Raises:
            NotFoundError: If no customer has this ID.
        """
        sql = f"SELECT {_COLUMNS} FROM customers WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (customer_id,))
                row = cur.fetchone()
        finally:
            release_connection(conn)

        if row is None:
            raise NotFoundError(f"No such customer: {customer_id}")
        return self._row_to_customer(row)

    def search(self, name: str) -> list[Customer]:
        """
        Find customers whose full name contains `name`, case-insensitively.

        An empty string matches every customer; no match gives an empty list.
        """
        sql = f"""
            SELECT {_COLUMNS}
            FROM customers
            WHERE concat(first_name, ' ', last_name) ILIKE %s
            ORDER BY last_name, first_name;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (f"%{name}%",))
                return [self._row_to_customer(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def top_ten(self, limit: int = TOP_CUSTOMERS_LIMIT) -> list[dict]:
        """
        Customers with the most reservations.

        Returns:
            At most `limit` dicts ``{'customer': Customer, 'reservation_count': int}``,
            ordered by reservation count descending.
        """
        sql = f"""
            SELECT {_COLUMNS}, COUNT(reservations.id) AS reservation_count
            FROM customers
                JOIN reservations ON reservations.customer_id = customers.id
            GROUP BY customers.id
            ORDER BY reservation_count DESC, last_name, first_name
            LIMIT %s;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (limit,))
                return [
                    {"customer": self._row_to_customer(r), "reservation_count": int(r[5])}
                    for r in cur.fetchall()
                ]
        finally:
            release_connection(conn)

    def get_reservations(self, customer: Customer) -> list[Reservation]:
        """All reservations of `customer`, fetched fresh on every call."""
        return self.reservation_repo.get_for_customer(customer.id)

    # ── CREATE / UPDATE ───────────────────────────────────

    def save(self, customer: Customer) -> Customer:
        """
        Insert the customer if it has no ID yet, otherwise update it.

        Returns:
            The same Customer, with `id` populated after an insert.

        Raises:
            NotFoundError: If updating an ID that no longer exists.
        """
        if customer.is_new():
            return self._insert(customer)
        return self._update(customer)

    def _insert(self, customer: Customer) -> Customer:
        sql = """
            INSERT INTO customers (first_name, last_name, phone, notes)
            VALUES (%s, %s, %s, %s)
            RETURNING id;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    customer.first_name, customer.last_name,
                    customer.phone, customer.notes,
                ))
                customer.id = cur.fetchone()[0]
            conn.commit()
            logger.info(f"Added customer #{customer.id}")
            return customer
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add customer: {e}")
            raise
        finally:
            release_connection(conn)

    def _update(self, customer: Customer) -> Customer:
        sql = """
            UPDATE customers
            SET first_name = %s, last_name = %s, phone = %s, notes = %s
            WHERE id = %s;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    customer.first_name, customer.last_name,
                    customer.phone, customer.notes, customer.id,
                ))
                updated = cur.rowcount > 0
            conn.commit()
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update customer #{customer.id}: {e}")
            raise
        finally:
            release_connection(conn)

        if not updated:
            raise NotFoundError(f"No such customer: {customer.id}")
        logger.info(f"Updated customer #{customer.id}")
        return customer

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_customer(row: tuple) -> Customer:
        """Convert a database row tuple to a Customer domain object."""
        return Customer(
            id=row[0],
            first_name=row[1],
            last_name=row[2],
            phone=row[3],
            notes=row[4],
        )
