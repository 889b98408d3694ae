"""
Contactbook core: clean-architecture layout.

- domain: entities (Contact, Task) and field validation. No outer dependencies.
- application: use cases (ContactService, TaskService), ports, DTOs, errors.
- infrastructure: adapters (JsonContactRepository, JsonTaskRepository).
"""

from contactbook.application import (
    ContactInput,
    ContactService,
    ContactUpdate,
    NotFound,
    TaskInput,
    TaskService,
    TaskUpdate,
    ValidationFailed,
)
from contactbook.domain import Contact, Task
from contactbook.infrastructure import JsonContactRepository, JsonTaskRepository

__all__ = [
    "Contact",
    "ContactInput",
    "ContactService",
    "ContactUpdate",
    "JsonContactRepository",
    "JsonTaskRepository",
    "NotFound",
    "Task",
    "TaskInput",
    "TaskService",
    "TaskUpdate",
    "ValidationFailed",
]
