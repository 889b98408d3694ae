"""Contact use cases: validation, phone uniqueness, search and sort.

The service knows nothing about tasks. Removing a contact's tasks when the
contact is deleted is done by whoever composes both services (the HTTP layer).
"""

import logging

from contactbook.application.dto import (
    ContactInput,
    ContactSortField,
    ContactUpdate,
    SortDirection,
)
from contactbook.application.errors import (
    InvalidArgument,
    NotFound,
    PersistenceFailure,
    ValidationFailed,
)
from contactbook.application.ports import ContactRepository
from contactbook.domain import (
    Contact,
    ValidationResult,
    validate_contact_create,
    validate_contact_update,
)

logger = logging.getLogger(__name__)

DUPLICATE_PHONE_MESSAGE = "Phone number already exists"

_SORT_KEYS = {
    "name": lambda c: c.name.lower(),
    "email": lambda c: c.email.lower(),
    "createdAt": lambda c: c.created_at,
}


class ContactService:
    """Create, read, update, delete, search and sort contacts."""

    def __init__(self, repository: ContactRepository) -> None:
        self._repo = repository

    def list_contacts(self) -> list[Contact]:
        try:
            return self._repo.list_all()
        except PersistenceFailure as exc:
            logger.error("Error fetching all contacts: %s", exc)
            raise PersistenceFailure("Failed to fetch contacts") from exc

    def get_contact(self, contact_id: str) -> Contact | None:
        """Return the contact, or None if no contact has this id."""
        if not contact_id or not contact_id.strip():
            raise InvalidArgument("Contact ID is required")
        return self._repo.get_by_id(contact_id)

    def create_contact(self, data: ContactInput) -> Contact:
        result = validate_contact_create(data.name, data.email, data.phone, data.address)
        if not result.is_valid:
            raise ValidationFailed(result.errors)
        if self._repo.get_by_phone(data.phone) is not None:
            raise ValidationFailed.for_field("phone", DUPLICATE_PHONE_MESSAGE)
        contact = self._repo.add(data)
        logger.info("Contact created: ID %s", contact.id)
        return contact

    def update_contact(self, contact_id: str, update: ContactUpdate) -> Contact:
        """Apply a partial update.

        Order matters for which failure wins: phone uniqueness against the
        other contacts first, then existence, then field validation.
        """
        changes = update.changes()
        if "phone" in changes:
            holder = self._repo.get_by_phone(changes["phone"])
            if holder is not None and holder.id != contact_id:
                raise ValidationFailed.for_field("phone", DUPLICATE_PHONE_MESSAGE)
        if self._repo.get_by_id(contact_id) is None:
            raise NotFound("Contact", contact_id)
        result = validate_contact_update(changes)
        if not result.is_valid:
            raise ValidationFailed(result.errors)
        contact = self._repo.update(contact_id, changes)
        logger.info("Contact updated: ID %s", contact_id)
        return contact

    def delete_contact(self, contact_id: str) -> bool:
        if self._repo.get_by_id(contact_id) is None:
            raise NotFound("Contact", contact_id)
        deleted = self._repo.delete(contact_id)
        logger.info("Contact deleted: ID %s", contact_id)
        return deleted

    def search_contacts(self, query: str | None) -> list[Contact]:
        """Case-insensitive substring match on name or email. Blank query lists all."""
        if not query or not query.strip():
            return self.list_contacts()
        needle = query.strip().lower()
        return [
            c
            for c in self.list_contacts()
            if needle in c.name.lower() or needle in c.email.lower()
        ]

    @staticmethod
    def sort_contacts(
        contacts: list[Contact],
        sort_by: ContactSortField = "name",
        direction: SortDirection = "asc",
    ) -> list[Contact]:
        """Return a new sorted list; the input list is left as it was."""
        key = _SORT_KEYS.get(sort_by)
        if key is None:
            raise InvalidArgument(f"Cannot sort contacts by {sort_by!r}")
        if direction not in ("asc", "desc"):
            raise InvalidArgument(f"Unknown sort direction {direction!r}")
        return sorted(contacts, key=key, reverse=direction == "desc")

    def count(self) -> int:
        return self._repo.count()

    @staticmethod
    def validate_input(data: ContactInput | ContactUpdate) -> ValidationResult:
        """Check a create or partial payload without touching storage."""
        if isinstance(data, ContactUpdate):
            return validate_contact_update(data.changes())
        return validate_contact_create(data.name, data.email, data.phone, data.address)
