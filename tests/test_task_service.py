"""Unit tests for TaskService, plus the contact/task scenario end to end."""

from datetime import date, datetime, timedelta, timezone

import pytest

from contactbook.application import (
    ContactInput,
    ContactService,
    InvalidArgument,
    NotFound,
    OwnershipMismatch,
    TaskInput,
    TaskService,
    TaskUpdate,
    ValidationFailed,
    parse_validation_errors,
)
from contactbook.infrastructure import JsonContactRepository, JsonTaskRepository

TODAY = date(2025, 6, 1)


class StepClock:
    def __init__(self) -> None:
        self.now = datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(milliseconds=5)
        return self.now


def _service(tmp_path, **kwargs) -> TaskService:
    repo = JsonTaskRepository(tmp_path / "tasks.json", clock=StepClock())
    return TaskService(repo, today=lambda: TODAY, **kwargs)


def test_create_defaults(tmp_path) -> None:
    service = _service(tmp_path)
    task = service.create_task(TaskInput(contact_id="1", title="Call back"))
    assert task.id == "1"
    assert task.completed is False
    assert task.description is None
    assert task.due_date is None


def test_create_invalid(tmp_path) -> None:
    service = _service(tmp_path)
    with pytest.raises(ValidationFailed) as exc_info:
        service.create_task(
            TaskInput(contact_id=" ", title="x", due_date="2025-01-01")
        )
    assert list(parse_validation_errors(str(exc_info.value))) == [
        "contactId",
        "title",
        "dueDate",
    ]
    assert service.count() == 0


def test_orphan_task_allowed_without_contact_check(tmp_path) -> None:
    service = _service(tmp_path)
    task = service.create_task(TaskInput(contact_id="does-not-exist", title="Orphan"))
    assert task.contact_id == "does-not-exist"


def test_contact_check_rejects_missing_contact(tmp_path) -> None:
    service = _service(tmp_path, contact_exists=lambda cid: cid == "1")
    assert service.create_task(TaskInput(contact_id="1", title="Fine")).id == "1"
    with pytest.raises(NotFound) as exc_info:
        service.create_task(TaskInput(contact_id="2", title="Orphan"))
    assert str(exc_info.value) == "Contact with ID 2 not found"


def test_list_for_contact(tmp_path) -> None:
    service = _service(tmp_path)
    service.create_task(TaskInput(contact_id="1", title="One"))
    service.create_task(TaskInput(contact_id="2", title="Two"))
    assert [t.title for t in service.list_tasks_for_contact("1")] == ["One"]
    assert len(service.list_tasks()) == 2
    with pytest.raises(InvalidArgument):
        service.list_tasks_for_contact("  ")


def test_get_task(tmp_path) -> None:
    service = _service(tmp_path)
    task = service.create_task(TaskInput(contact_id="1", title="One"))
    assert service.get_task(task.id) == task
    assert service.get_task("9") is None
    with pytest.raises(InvalidArgument):
        service.get_task("")


def test_get_task_for_contact_checks_ownership(tmp_path) -> None:
    service = _service(tmp_path)
    task = service.create_task(TaskInput(contact_id="1", title="One"))
    assert service.get_task_for_contact("1", task.id) == task
    with pytest.raises(OwnershipMismatch):
        service.get_task_for_contact("2", task.id)
    with pytest.raises(NotFound):
        service.get_task_for_contact("1", "77")


def test_update_refreshes_updated_at_even_when_empty(tmp_path) -> None:
    service = _service(tmp_path)
    task = service.create_task(TaskInput(contact_id="1", title="One"))
    same = service.update_task(task.id, TaskUpdate())
    assert same.title == "One"
    assert same.updated_at > task.updated_at


def test_update_fields(tmp_path) -> None:
    service = _service(tmp_path)
    task = service.create_task(
        TaskInput(contact_id="1", title="One", description="old", due_date="2025-07-01")
    )
    updated = service.update_task(
        task.id, TaskUpdate(title="Renamed", description=None, completed=True)
    )
    assert updated.title == "Renamed"
    assert updated.description is None
    assert updated.completed is True
    assert updated.due_date == "2025-07-01"


def test_update_not_found_then_validation(tmp_path) -> None:
    service = _service(tmp_path)
    with pytest.raises(NotFound):
        service.update_task("5", TaskUpdate(title="x"))
    task = service.create_task(TaskInput(contact_id="1", title="One"))
    with pytest.raises(ValidationFailed):
        service.update_task(task.id, TaskUpdate(due_date="2025-05-31"))
    assert service.get_task(task.id).due_date is None


def test_toggle_and_delete(tmp_path) -> None:
    service = _service(tmp_path)
    task = service.create_task(TaskInput(contact_id="1", title="One"))
    assert service.toggle_task(task.id).completed is True
    assert service.toggle_task(task.id).completed is False
    assert service.delete_task(task.id) is True
    with pytest.raises(NotFound):
        service.toggle_task(task.id)
    with pytest.raises(NotFound):
        service.delete_task(task.id)


def test_delete_tasks_for_contact_without_tasks_returns_zero(tmp_path) -> None:
    service = _service(tmp_path)
    assert service.delete_tasks_for_contact("1") == 0
    assert not (tmp_path / "tasks.json").exists()


def test_validate_input(tmp_path) -> None:
    service = _service(tmp_path)
    assert service.validate_input(TaskInput(contact_id="1", title="Ok")).is_valid
    assert not service.validate_input(TaskUpdate(title="")).is_valid
    assert service.count() == 0


def test_contact_and_task_scenario(tmp_path) -> None:
    contacts = ContactService(JsonContactRepository(tmp_path / "contacts.json"))
    tasks = _service(tmp_path)

    ann = contacts.create_contact(
        ContactInput(
            name="Ann Lee", email="a@b.com", phone="555-0001", address="1 Main Street"
        )
    )
    assert ann.id

    with pytest.raises(ValidationFailed) as exc_info:
        contacts.create_contact(
            ContactInput(
                name="Ann Other", email="o@b.com", phone="555-0001", address="2 Main Street"
            )
        )
    assert "phone" in parse_validation_errors(str(exc_info.value))

    task = tasks.create_task(TaskInput(contact_id=ann.id, title="Call back"))
    assert task.completed is False

    toggled = tasks.toggle_task(task.id)
    assert toggled.completed is True
    assert toggled.updated_at > toggled.created_at

    assert contacts.delete_contact(ann.id) is True
    assert tasks.delete_tasks_for_contact(ann.id) == 1
    assert all(t.id != task.id for t in tasks.list_tasks())
    assert tasks.list_tasks_for_contact(ann.id) == []
