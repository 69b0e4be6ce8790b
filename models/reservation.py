"""
models/reservation.py
---------------------
Domain model for table reservations.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Reservation:
    """
    A booking made by a customer.

    Attributes:
        id: Database primary key (None until first saved).
        customer_id: Owning customer.
        start_at: When the party is expected.
        num_guests: Party size, at least 1.
        notes: Free-form notes (allergies, occasion, ...).
    """
    customer_id: int
    start_at: datetime
    num_guests: int
    notes: str = ""
    id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.num_guests < 1:
            raise ValueError("A reservation needs at least one guest.")

    def formatted_start_at(self) -> str:
        """Start time for display, e.g. 'March 05 2024, 07:30 PM'."""
        return self.start_at.strftime("%B %d %Y, %I:%M %p")

    def is_new(self) -> bool:
        return self.id is None

    def __str__(self) -> str:
        return f"{self.formatted_start_at()} | {self.num_guests} guest(s)"
