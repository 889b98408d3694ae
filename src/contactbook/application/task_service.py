"""Task use cases. Tasks belong to a contact through contact_id."""

import logging
from collections.abc import Callable
from datetime import date

from contactbook.application.dto import TaskInput, TaskUpdate
from contactbook.application.errors import (
    InvalidArgument,
    NotFound,
    OwnershipMismatch,
    PersistenceFailure,
    ValidationFailed,
)
from contactbook.application.ports import TaskRepository
from contactbook.domain import (
    Task,
    ValidationResult,
    validate_task_create,
    validate_task_update,
)

logger = logging.getLogger(__name__)


class TaskService:
    """Per-contact tasks: create, update, toggle, delete, cascade delete.

    contact_exists, when given, is asked before a task is created; without it
    a task may reference a contact id that does not exist.
    """

    def __init__(
        self,
        repository: TaskRepository,
        *,
        contact_exists: Callable[[str], bool] | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._repo = repository
        self._contact_exists = contact_exists
        self._today = today

    def list_tasks(self) -> list[Task]:
        try:
            return self._repo.list_all()
        except PersistenceFailure as exc:
            logger.error("Error fetching all tasks: %s", exc)
            raise PersistenceFailure("Failed to fetch tasks") from exc

    def list_tasks_for_contact(self, contact_id: str) -> list[Task]:
        if not contact_id or not contact_id.strip():
            raise InvalidArgument("Contact ID is required")
        return self._repo.list_by_contact(contact_id)

    def get_task(self, task_id: str) -> Task | None:
        if not task_id or not task_id.strip():
            raise InvalidArgument("Task ID is required")
        return self._repo.get_by_id(task_id)

    def get_task_for_contact(self, contact_id: str, task_id: str) -> Task:
        """Return the task if it exists and belongs to contact_id."""
        task = self.get_task(task_id)
        if task is None:
            raise NotFound("Task", task_id)
        if task.contact_id != contact_id:
            raise OwnershipMismatch(task_id, contact_id)
        return task

    def create_task(self, data: TaskInput) -> Task:
        result = validate_task_create(
            data.contact_id,
            data.title,
            data.description,
            data.due_date,
            today=self._today(),
        )
        if not result.is_valid:
            raise ValidationFailed(result.errors)
        if self._contact_exists is not None and not self._contact_exists(data.contact_id):
            raise NotFound("Contact", data.contact_id)
        task = self._repo.add(data)
        logger.info("Task created: ID %s for contact %s", task.id, task.contact_id)
        return task

    def update_task(self, task_id: str, update: TaskUpdate) -> Task:
        if self._repo.get_by_id(task_id) is None:
            raise NotFound("Task", task_id)
        changes = update.changes()
        result = validate_task_update(changes, today=self._today())
        if not result.is_valid:
            raise ValidationFailed(result.errors)
        task = self._repo.update(task_id, changes)
        logger.info("Task updated: ID %s", task_id)
        return task

    def toggle_task(self, task_id: str) -> Task:
        if self._repo.get_by_id(task_id) is None:
            raise NotFound("Task", task_id)
        task = self._repo.toggle(task_id)
        logger.info(
            "Task toggled: ID %s, now %s",
            task_id,
            "completed" if task.completed else "pending",
        )
        return task

    def delete_task(self, task_id: str) -> bool:
        if self._repo.get_by_id(task_id) is None:
            raise NotFound("Task", task_id)
        deleted = self._repo.delete(task_id)
        logger.info("Task deleted: ID %s", task_id)
        return deleted

    def delete_tasks_for_contact(self, contact_id: str) -> int:
        """Cascade step run after a contact is deleted. Returns the number removed."""
        deleted = self._repo.delete_by_contact(contact_id)
        if deleted:
            logger.info("Deleted %d tasks for contact %s", deleted, contact_id)
        return deleted

    def count(self) -> int:
        return self._repo.count()

    def validate_input(self, data: TaskInput | TaskUpdate) -> ValidationResult:
        if isinstance(data, TaskUpdate):
            return validate_task_update(data.changes(), today=self._today())
        return validate_task_create(
            data.contact_id,
            data.title,
            data.description,
            data.due_date,
            today=self._today(),
        )
