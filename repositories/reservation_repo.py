"""
repositories/reservation_repo.py
---------------------------------
Data access layer for reservations.
All SQL queries related to the `reservations` table live here.
"""

from db.connection import get_connection, release_connection
from models.reservation import Reservation
from utils.errors import NotFoundError
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, customer_id, start_at, num_guests, notes"


class ReservationRepository:
    """Repository for CRUD operations on the reservations table."""

    # ── READ ──────────────────────────────────────────────

    def get_for_customer(self, customer_id: int) -> list[Reservation]:
        """
        Fetch every reservation of a customer.

        Returns:
            List of Reservation objects ordered by start time.
        """
        sql = f"SELECT {_COLUMNS} FROM reservations WHERE customer_id = %s ORDER BY start_at;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (customer_id,))
                return [self._row_to_reservation(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get(self, reservation_id: int) -> Reservation:
        """
        Fetch a single reservation by ID.

        Raises:
            NotFoundError: If no reservation has this ID.
        """
        sql = f"SELECT {_COLUMNS} FROM reservations WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (reservation_id,))
                row = cur.fetchone()
        finally:
            release_connection(conn)

        if row is None:
            raise NotFoundError(f"No such reservation: {reservation_id}")
        return self._row_to_reservation(row)

    # ── CREATE / UPDATE ───────────────────────────────────

    def save(self, reservation: Reservation) -> Reservation:
        """
        Insert the reservation if it has no ID yet, otherwise update it.

        Raises:
            NotFoundError: If updating an ID that no longer exists.
        """
        if reservation.is_new():
            return self._insert(reservation)
        return self._update(reservation)

    def _insert(self, reservation: Reservation) -> Reservation:
        sql = """
            INSERT INTO reservations (customer_id, start_at, num_guests, notes)
            VALUES (%s, %s, %s, %s)
            RETURNING id;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    reservation.customer_id, reservation.start_at,
                    reservation.num_guests, reservation.notes,
                ))
                reservation.id = cur.fetchone()[0]
            conn.commit()
            logger.info(
                f"Added reservation #{reservation.id} for customer {reservation.customer_id}"
            )
            return reservation
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add reservation: {e}")
            raise
        finally:
            release_connection(conn)

    def _update(self, reservation: Reservation) -> Reservation:
        sql = """
            UPDATE reservations
            SET customer_id = %s, start_at = %s, num_guests = %s, notes = %s
            WHERE id = %s;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    reservation.customer_id, reservation.start_at,
                    reservation.num_guests, reservation.notes, reservation.id,
                ))
                updated = cur.rowcount > 0
            conn.commit()
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update reservation #{reservation.id}: {e}")
            raise
        finally:
            release_connection(conn)

        if not updated:
            raise NotFoundError(f"No such reservation: {reservation.id}")
        logger.info(f"Updated reservation #{reservation.id}")
        return reservation

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_reservation(row: tuple) -> Reservation:
        """Convert a database row tuple to a Reservation domain object."""
        return Reservation(
            id=row[0],
            customer_id=row[1],
            start_at=row[2],
            num_guests=row[3],
            notes=row[4],
        )
