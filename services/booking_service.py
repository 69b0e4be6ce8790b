"""
services/booking_service.py
----------------------------
Business logic behind the customer and reservation pages:
looking customers up, registering and editing them, and taking bookings.
"""

from datetime import datetime
from typing import Optional

from models.customer import Customer
from models.reservation import Reservation
from repositories.customer_repo import CustomerRepository
from repositories.reservation_repo import ReservationRepository
from utils.logger import get_logger

logger = get_logger(__name__)

_EDITABLE_FIELDS = ("first_name", "last_name", "phone", "notes")


class BookingService:
    """
    Coordinates the customer and reservation repositories.

    Responsibilities:
        - Register and edit customers.
        - Take reservations for existing customers only.
        - Serve the search and top-customers listings.
    """

    def __init__(
        self,
        customer_repo: Optional[CustomerRepository] = None,
        reservation_repo: Optional[ReservationRepository] = None,
    ):
        self.reservation_repo = reservation_repo or ReservationRepository()
        self.customer_repo = customer_repo or CustomerRepository(self.reservation_repo)

    def customer_detail(self, customer_id: int) -> tuple[Customer, list[Reservation]]:
        """Load a customer together with their reservations."""
        customer = self.customer_repo.get(customer_id)
        return customer, self.customer_repo.get_reservations(customer)

    def add_customer(
        self,
        first_name: str,
        last_name: str,
        phone: Optional[str] = None,
        notes: str = "",
    ) -> Customer:
        customer = Customer(first_name=first_name, last_name=last_name, phone=phone, notes=notes)
        return self.customer_repo.save(customer)

    def update_customer(self, customer_id: int, **fields) -> Customer:
        """
        Change some of a customer's fields and persist them.

        Raises:
            NotFoundError: Unknown customer.
            ValueError: A field that cannot be edited was given.
        """
        unknown = set(fields) - set(_EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot edit customer field(s): {', '.join(sorted(unknown))}")

        customer = self.customer_repo.get(customer_id)
        for name, value in fields.items():
            setattr(customer, name, value)
        return self.customer_repo.save(customer)

    def book(
        self,
        customer_id: int,
        start_at: datetime,
        num_guests: int,
        notes: str = "",
    ) -> Reservation:
        """
        Create a reservation for an existing customer.

        Raises:
            NotFoundError: Unknown customer.
            ValueError: Fewer than one guest.
        """
        customer = self.customer_repo.get(customer_id)
        reservation = Reservation(
            customer_id=customer.id,
            start_at=start_at,
            num_guests=num_guests,
            notes=notes,
        )
        saved = self.reservation_repo.save(reservation)
        logger.info(f"Booked {num_guests} guest(s) for {customer.full_name()} at {start_at}")
        return saved

    def search(self, term: str) -> list[Customer]:
        return self.customer_repo.search(term.strip())

    def top_customers(self) -> list[dict]:
        return self.customer_repo.top_ten()
