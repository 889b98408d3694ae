"""Field validation for contacts and tasks.

Pure functions: nothing here touches storage or raises. Every field check
returns a FieldCheck; the whole-object checks run every field (no short
circuit) and collect one FieldError per failing field, in field order.

Field names in errors are the wire names ("contactId", "dueDate") because
they end up in the "Validation failed: field: message" string clients parse.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\d{3}-\d{4}$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100
PHONE_LENGTH = 8
ADDRESS_MIN_LENGTH = 5
ADDRESS_MAX_LENGTH = 200
TITLE_MIN_LENGTH = 2
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 500


@dataclass(frozen=True)
class FieldCheck:
    is_valid: bool
    error: str | None = None


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


_OK = FieldCheck(is_valid=True)


def _fail(message: str) -> FieldCheck:
    return FieldCheck(is_valid=False, error=message)


# --- contact fields ---


def validate_name(name: Any) -> FieldCheck:
    if not isinstance(name, str):
        return _fail("Name must be a string")
    trimmed = name.strip()
    if not NAME_MIN_LENGTH <= len(trimmed) <= NAME_MAX_LENGTH:
        return _fail(
            f"Name must be between {NAME_MIN_LENGTH}-{NAME_MAX_LENGTH} characters. "
            f"You provided {len(trimmed)}"
        )
    return _OK


def validate_email(email: Any) -> FieldCheck:
    if not isinstance(email, str):
        return _fail("Email must be a string")
    if not 1 <= len(email) <= EMAIL_MAX_LENGTH:
        return _fail(f"Email must be between 1-{EMAIL_MAX_LENGTH} characters")
    if not EMAIL_PATTERN.match(email):
        return _fail("Invalid email format")
    return _OK


def validate_phone(phone: Any) -> FieldCheck:
    if not isinstance(phone, str):
        return _fail("Phone must be a string")
    if len(phone) != PHONE_LENGTH:
        return _fail(
            f"Phone must be exactly {PHONE_LENGTH} characters long. "
            f"You provided {len(phone)} characters."
        )
    if not PHONE_PATTERN.match(phone):
        return _fail("Phone must be in format: 555-0001")
    return _OK


def validate_address(address: Any) -> FieldCheck:
    if not isinstance(address, str):
        return _fail("Address must be a string")
    trimmed = address.strip()
    if not ADDRESS_MIN_LENGTH <= len(trimmed) <= ADDRESS_MAX_LENGTH:
        return _fail(
            f"Address must be between {ADDRESS_MIN_LENGTH}-{ADDRESS_MAX_LENGTH} "
            f"characters. You provided {len(trimmed)}"
        )
    return _OK


# --- task fields ---


def validate_title(title: Any) -> FieldCheck:
    if not isinstance(title, str):
        return _fail("Title must be a string")
    trimmed = title.strip()
    if not TITLE_MIN_LENGTH <= len(trimmed) <= TITLE_MAX_LENGTH:
        return _fail(
            f"Title must be between {TITLE_MIN_LENGTH}-{TITLE_MAX_LENGTH} characters. "
            f"You provided {len(trimmed)}"
        )
    return _OK


def validate_description(description: Any) -> FieldCheck:
    """Optional: absent or empty is valid."""
    if not description:
        return _OK
    if not isinstance(description, str):
        return _fail("Description must be a string")
    trimmed = description.strip()
    if len(trimmed) > DESCRIPTION_MAX_LENGTH:
        return _fail(
            f"Description must be 0-{DESCRIPTION_MAX_LENGTH} characters. "
            f"You provided {len(trimmed)}"
        )
    return _OK


def validate_due_date(due_date: Any, today: date | None = None) -> FieldCheck:
    """Optional YYYY-MM-DD date that must be a real day, today or later.

    Only calendar dates are compared; today defaults to the local date.
    """
    if not due_date:
        return _OK
    if not isinstance(due_date, str):
        return _fail("Due date must be a string")
    if not DATE_PATTERN.match(due_date):
        return _fail("Due date must be in ISO format: YYYY-MM-DD")
    try:
        parsed = date.fromisoformat(due_date)
    except ValueError:
        return _fail("Due date is not a valid date")
    if parsed < (today or date.today()):
        return _fail("Due date cannot be less than current date")
    return _OK


def validate_contact_id(contact_id: Any) -> FieldCheck:
    if not isinstance(contact_id, str):
        return _fail("Contact ID must be a string")
    if not contact_id.strip():
        return _fail("Contact ID is required")
    return _OK


# --- whole objects ---

_CONTACT_FIELDS: list[tuple[str, Callable[[Any], FieldCheck]]] = [
    ("name", validate_name),
    ("email", validate_email),
    ("phone", validate_phone),
    ("address", validate_address),
]


def _collect(checks: list[tuple[str, FieldCheck]]) -> ValidationResult:
    return ValidationResult(
        errors=[
            FieldError(field=name, message=check.error or "")
            for name, check in checks
            if not check.is_valid
        ]
    )


def validate_contact_create(
    name: Any, email: Any, phone: Any, address: Any
) -> ValidationResult:
    values = {"name": name, "email": email, "phone": phone, "address": address}
    return _collect(
        [(key, check(values[key])) for key, check in _CONTACT_FIELDS]
    )


def validate_contact_update(changes: Mapping[str, Any]) -> ValidationResult:
    """Validate only the fields present in changes; absent fields are skipped."""
    return _collect(
        [
            (key, check(changes[key]))
            for key, check in _CONTACT_FIELDS
            if key in changes
        ]
    )


def validate_task_create(
    contact_id: Any,
    title: Any,
    description: Any = None,
    due_date: Any = None,
    *,
    today: date | None = None,
) -> ValidationResult:
    return _collect(
        [
            ("contactId", validate_contact_id(contact_id)),
            ("title", validate_title(title)),
            ("description", validate_description(description)),
            ("dueDate", validate_due_date(due_date, today)),
        ]
    )


def validate_task_update(
    changes: Mapping[str, Any], *, today: date | None = None
) -> ValidationResult:
    """Validate only title, description and due_date when present in changes."""
    checks = []
    if "title" in changes:
        checks.append(("title", validate_title(changes["title"])))
    if "description" in changes:
        checks.append(("description", validate_description(changes["description"])))
    if "due_date" in changes:
        checks.append(("dueDate", validate_due_date(changes["due_date"], today)))
    return _collect(checks)
