"""
models/customer.py
------------------
Domain model for restaurant customers.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Customer:
    """
    A customer of the restaurant.

    Attributes:
        id: Database primary key (None until first saved).
        first_name: Given name.
        last_name: Family name.
        phone: Optional contact number.
        notes: Free-form notes kept by the staff.
    """
    first_name: str
    last_name: str
    phone: Optional[str] = None
    notes: str = ""
    id: Optional[int] = None

    def full_name(self) -> str:
        """First and last name joined by a single space."""
        return self.first_name + " " + self.last_name

    def is_new(self) -> bool:
        return self.id is None

    def __str__(self) -> str:
        return self.full_name()
