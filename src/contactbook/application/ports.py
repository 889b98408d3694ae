"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Mapping
from typing import Any, Protocol

from contactbook.application.dto import ContactInput, TaskInput
from contactbook.domain import Contact, Task


class ContactRepository(Protocol):
    """Owns the contact collection and its durable copy."""

    def list_all(self) -> list[Contact]:
        """Return all contacts in insertion order."""
        ...

    def get_by_id(self, contact_id: str) -> Contact | None:
        ...

    def get_by_phone(self, phone: str) -> Contact | None:
        """Return the first contact with this phone, or None."""
        ...

    def add(self, data: ContactInput) -> Contact:
        """Assign id and created_at, store, persist, return the new contact."""
        ...

    def update(self, contact_id: str, changes: Mapping[str, Any]) -> Contact:
        """Apply the given fields. Raises NotFound if the id is unknown."""
        ...

    def delete(self, contact_id: str) -> bool:
        """Remove the contact. Returns False if it did not exist."""
        ...

    def count(self) -> int:
        ...

    def reset(self) -> None:
        """Drop every contact and persist the empty collection."""
        ...


class TaskRepository(Protocol):
    """Owns the task collection and its durable copy."""

    def list_all(self) -> list[Task]:
        ...

    def list_by_contact(self, contact_id: str) -> list[Task]:
        ...

    def get_by_id(self, task_id: str) -> Task | None:
        ...

    def add(self, data: TaskInput) -> Task:
        ...

    def update(self, task_id: str, changes: Mapping[str, Any]) -> Task:
        """Apply the given fields and refresh updated_at. Raises NotFound."""
        ...

    def toggle(self, task_id: str) -> Task:
        """Flip completed and refresh updated_at. Raises NotFound."""
        ...

    def delete(self, task_id: str) -> bool:
        ...

    def delete_by_contact(self, contact_id: str) -> int:
        """Remove every task of the contact; persist only if something was removed."""
        ...

    def count(self) -> int:
        ...

    def reset(self) -> None:
        ...
