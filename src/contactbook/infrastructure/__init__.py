"""Infrastructure layer: concrete implementations of application ports."""

from contactbook.infrastructure.json_file import JsonDocumentFile
from contactbook.infrastructure.json_repository import (
    JsonContactRepository,
    JsonTaskRepository,
)

__all__ = [
    "JsonContactRepository",
    "JsonDocumentFile",
    "JsonTaskRepository",
]
