"""Domain entities: Contact and Task."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Contact:
    """
    A person in the address book.
    Phone numbers are unique across all contacts; the services enforce it.
    """

    id: str
    name: str
    email: str
    phone: str
    address: str
    created_at: datetime


@dataclass
class Task:
    """
    A to-do item owned by one Contact through contact_id.
    created_at is fixed at creation; updated_at moves on every mutation.
    """

    id: str
    contact_id: str
    title: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    due_date: str | None = None
    completed: bool = False
