"""Failures raised by the services and stores.

The HTTP boundary is the only place these are mapped to status codes.
"""

from collections.abc import Iterable

from contactbook.domain import FieldError

VALIDATION_PREFIX = "Validation failed: "


class ContactBookError(Exception):
    """Base for every failure the application layer raises on purpose."""


class ValidationFailed(ContactBookError):
    """One or more field rules failed, or a uniqueness rule (phone) did."""

    def __init__(self, errors: Iterable[FieldError]) -> None:
        self.errors = list(errors)
        joined = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"{VALIDATION_PREFIX}{joined}")

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationFailed":
        return cls([FieldError(field=field, message=message)])


class NotFound(ContactBookError):
    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with ID {entity_id} not found")


class InvalidArgument(ContactBookError):
    """A required identifier or parameter was blank or malformed."""


class OwnershipMismatch(ContactBookError):
    def __init__(self, task_id: str, contact_id: str) -> None:
        self.task_id = task_id
        self.contact_id = contact_id
        super().__init__("Task does not belong to this contact")


class PersistenceFailure(ContactBookError):
    """Reading or writing a backing JSON file failed.

    After a failed write the in-memory collection may be ahead of the file.
    """


def parse_validation_errors(message: str) -> dict[str, str]:
    """Turn "Validation failed: a: x; b: y" back into {"a": "x", "b": "y"}.

    Anything that is not a validation message parses to an empty dict.
    """
    if not message or VALIDATION_PREFIX.strip() not in message:
        return {}
    body = message.replace(VALIDATION_PREFIX, "", 1).strip()
    out: dict[str, str] = {}
    for part in body.split("; "):
        field, sep, text = part.partition(":")
        field, text = field.strip(), text.strip()
        if sep and field and text:
            out[field] = text
    return out
