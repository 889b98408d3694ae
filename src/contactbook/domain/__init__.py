"""Domain layer: entities and field validation. No dependencies on outer layers."""

from contactbook.domain.entities import Contact, Task
from contactbook.domain.validation import (
    FieldCheck,
    FieldError,
    ValidationResult,
    validate_contact_create,
    validate_contact_update,
    validate_task_create,
    validate_task_update,
)

__all__ = [
    "Contact",
    "FieldCheck",
    "FieldError",
    "Task",
    "ValidationResult",
    "validate_contact_create",
    "validate_contact_update",
    "validate_task_create",
    "validate_task_update",
]
