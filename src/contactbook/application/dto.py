"""Inputs passed from the boundary into the services."""

from dataclasses import dataclass, fields
from typing import Any, Literal

ContactSortField = Literal["name", "email", "createdAt"]
SortDirection = Literal["asc", "desc"]


class _Unset:
    """Marks a field that is absent from a partial update."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def _present(update: object) -> dict[str, Any]:
    return {
        f.name: getattr(update, f.name)
        for f in fields(update)
        if getattr(update, f.name) is not UNSET
    }


@dataclass(frozen=True)
class ContactInput:
    """Data needed to create a contact; id and created_at are assigned by the store."""

    name: str
    email: str
    phone: str
    address: str


@dataclass(frozen=True)
class ContactUpdate:
    """Partial contact update. Fields left as UNSET are not touched."""

    name: str = UNSET
    email: str = UNSET
    phone: str = UNSET
    address: str = UNSET

    def changes(self) -> dict[str, Any]:
        return _present(self)


@dataclass(frozen=True)
class TaskInput:
    contact_id: str
    title: str
    description: str | None = None
    due_date: str | None = None


@dataclass(frozen=True)
class TaskUpdate:
    """Partial task update. None is a real value here (clears description/due_date)."""

    title: str = UNSET
    description: str | None = UNSET
    completed: bool = UNSET
    due_date: str | None = UNSET

    def changes(self) -> dict[str, Any]:
        return _present(self)
