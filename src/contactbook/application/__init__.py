"""Application layer: use cases, ports, DTOs and errors. Depends only on domain."""

from contactbook.application.contact_service import ContactService
from contactbook.application.dto import (
    UNSET,
    ContactInput,
    ContactUpdate,
    TaskInput,
    TaskUpdate,
)
from contactbook.application.errors import (
    ContactBookError,
    InvalidArgument,
    NotFound,
    OwnershipMismatch,
    PersistenceFailure,
    ValidationFailed,
    parse_validation_errors,
)
from contactbook.application.ports import ContactRepository, TaskRepository
from contactbook.application.task_service import TaskService

__all__ = [
    "UNSET",
    "ContactBookError",
    "ContactInput",
    "ContactRepository",
    "ContactService",
    "ContactUpdate",
    "InvalidArgument",
    "NotFound",
    "OwnershipMismatch",
    "PersistenceFailure",
    "TaskInput",
    "TaskRepository",
    "TaskService",
    "TaskUpdate",
    "ValidationFailed",
    "parse_validation_errors",
]
