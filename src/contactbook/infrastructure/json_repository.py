"""Contact and task stores: an in-memory list mirrored to a JSON file.

The file is loaded once, on first access. After that the in-memory list is
the source of truth for the process and the file is rewritten in full after
every mutation; refresh() re-reads it on demand. Callers get copies of the
stored entities, never the live objects.

There is no locking. Two stores (or two processes) writing the same file
overwrite each other: the last snapshot written wins.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Generic, TypeVar

from contactbook.application.dto import ContactInput, TaskInput
from contactbook.application.errors import NotFound, PersistenceFailure
from contactbook.domain import Contact, Task
from contactbook.infrastructure.json_file import JsonDocumentFile

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
E = TypeVar("E", Contact, Task)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _datetime_to_iso(dt: datetime) -> str:
    return dt.isoformat()


def _iso_to_datetime(s: str) -> datetime:
    """Parse a stored timestamp; values without an offset are taken as UTC."""
    dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _next_id(ids: Iterable[str]) -> str:
    """Highest numeric id plus one. Non-numeric ids are ignored."""
    numeric = [int(i) for i in ids if i.isdecimal()]
    return str(max(numeric, default=0) + 1)


class _JsonCollection(ABC, Generic[E]):
    """Lazy-loading list of entities persisted through a JsonDocumentFile."""

    label = "record"

    def __init__(self, path: Path | str, collection: str, clock: Clock = _utcnow) -> None:
        self._file = JsonDocumentFile(path, collection)
        self._clock = clock
        self._items: list[E] = []
        self._loaded = False

    @property
    def path(self) -> Path:
        return self._file.path

    @abstractmethod
    def _to_record(self, item: E) -> dict[str, Any]:
        ...

    @abstractmethod
    def _from_record(self, record: dict[str, Any]) -> E:
        ...

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.refresh()

    def refresh(self) -> None:
        """Replace the in-memory list with what the file currently holds."""
        records = self._file.read()
        try:
            items = [self._from_record(r) for r in records]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.error("Malformed %s record in %s: %s", self.label, self.path, exc)
            raise PersistenceFailure(f"Failed to load {self._file.collection}") from exc
        self._items = items
        self._loaded = True
        logger.info("Loaded %d %ss from %s", len(items), self.label, self.path)

    def _persist(self) -> None:
        self._file.write([self._to_record(i) for i in self._items])

    def _find(self, item_id: str) -> E | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def _new_id(self) -> str:
        return _next_id(i.id for i in self._items)

    def list_all(self) -> list[E]:
        self._ensure_loaded()
        return [replace(i) for i in self._items]

    def get_by_id(self, item_id: str) -> E | None:
        self._ensure_loaded()
        item = self._find(item_id)
        return replace(item) if item is not None else None

    def delete(self, item_id: str) -> bool:
        self._ensure_loaded()
        item = self._find(item_id)
        if item is None:
            return False
        self._items.remove(item)
        self._persist()
        return True

    def count(self) -> int:
        self._ensure_loaded()
        return len(self._items)

    def reset(self) -> None:
        """Drop everything and persist the empty collection. Testing/debug use."""
        self._items = []
        self._loaded = True
        self._persist()
        logger.warning("%s store reset: all %ss deleted", self.label.capitalize(), self.label)


class JsonContactRepository(_JsonCollection[Contact]):
    """Contacts in {"contacts": [...]}."""

    label = "contact"
    _FIELDS = ("name", "email", "phone", "address")

    def __init__(self, path: Path | str, clock: Clock = _utcnow) -> None:
        super().__init__(path, "contacts", clock)

    def _to_record(self, item: Contact) -> dict[str, Any]:
        return {
            "id": item.id,
            "name": item.name,
            "email": item.email,
            "phone": item.phone,
            "address": item.address,
            "createdAt": _datetime_to_iso(item.created_at),
        }

    def _from_record(self, record: dict[str, Any]) -> Contact:
        return Contact(
            id=str(record["id"]),
            name=record["name"],
            email=record["email"],
            phone=record["phone"],
            address=record["address"],
            created_at=_iso_to_datetime(record["createdAt"]),
        )

    def get_by_phone(self, phone: str) -> Contact | None:
        self._ensure_loaded()
        for contact in self._items:
            if contact.phone == phone:
                return replace(contact)
        return None

    def add(self, data: ContactInput) -> Contact:
        self._ensure_loaded()
        contact = Contact(
            id=self._new_id(),
            name=data.name,
            email=data.email,
            phone=data.phone,
            address=data.address,
            created_at=self._clock(),
        )
        self._items.append(contact)
        self._persist()
        return replace(contact)

    def update(self, contact_id: str, changes: Mapping[str, Any]) -> Contact:
        self._ensure_loaded()
        contact = self._find(contact_id)
        if contact is None:
            raise NotFound("Contact", contact_id)
        for attr in self._FIELDS:
            if attr in changes:
                setattr(contact, attr, changes[attr])
        self._persist()
        return replace(contact)


class JsonTaskRepository(_JsonCollection[Task]):
    """Tasks in {"tasks": [...]}; ids are numbered independently of contacts."""

    label = "task"
    _FIELDS = ("title", "description", "completed", "due_date")

    def __init__(self, path: Path | str, clock: Clock = _utcnow) -> None:
        super().__init__(path, "tasks", clock)

    def _to_record(self, item: Task) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": item.id,
            "contactId": item.contact_id,
            "title": item.title,
            "completed": item.completed,
            "createdAt": _datetime_to_iso(item.created_at),
            "updatedAt": _datetime_to_iso(item.updated_at),
        }
        if item.description is not None:
            record["description"] = item.description
        if item.due_date is not None:
            record["dueDate"] = item.due_date
        return record

    def _from_record(self, record: dict[str, Any]) -> Task:
        return Task(
            id=str(record["id"]),
            contact_id=record["contactId"],
            title=record["title"],
            description=record.get("description"),
            due_date=record.get("dueDate"),
            completed=bool(record.get("completed", False)),
            created_at=_iso_to_datetime(record["createdAt"]),
            updated_at=_iso_to_datetime(record["updatedAt"]),
        )

    def list_by_contact(self, contact_id: str) -> list[Task]:
        self._ensure_loaded()
        return [replace(t) for t in self._items if t.contact_id == contact_id]

    def add(self, data: TaskInput) -> Task:
        self._ensure_loaded()
        now = self._clock()
        task = Task(
            id=self._new_id(),
            contact_id=data.contact_id,
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            completed=False,
            created_at=now,
            updated_at=now,
        )
        self._items.append(task)
        self._persist()
        return replace(task)

    def update(self, task_id: str, changes: Mapping[str, Any]) -> Task:
        self._ensure_loaded()
        task = self._find(task_id)
        if task is None:
            raise NotFound("Task", task_id)
        for attr in self._FIELDS:
            if attr in changes:
                setattr(task, attr, changes[attr])
        task.updated_at = self._clock()
        self._persist()
        return replace(task)

    def toggle(self, task_id: str) -> Task:
        self._ensure_loaded()
        task = self._find(task_id)
        if task is None:
            raise NotFound("Task", task_id)
        task.completed = not task.completed
        task.updated_at = self._clock()
        self._persist()
        return replace(task)

    def delete_by_contact(self, contact_id: str) -> int:
        self._ensure_loaded()
        kept = [t for t in self._items if t.contact_id != contact_id]
        removed = len(self._items) - len(kept)
        if removed:
            self._items = kept
            self._persist()
        return removed
