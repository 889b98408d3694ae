"""
FastAPI backend: REST API for contacts and their tasks.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from contactbook.application import (
    ContactBookError,
    ContactInput,
    ContactService,
    ContactUpdate,
    InvalidArgument,
    NotFound,
    OwnershipMismatch,
    TaskInput,
    TaskService,
    TaskUpdate,
    ValidationFailed,
)
from contactbook.application.dto import ContactSortField, SortDirection
from contactbook.domain import Contact, FieldError, Task
from contactbook.infrastructure import JsonContactRepository, JsonTaskRepository

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=os.environ.get("CONTACTBOOK_LOG_LEVEL", "INFO").strip().upper() or "INFO",
)
logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


def _data_dir() -> Path:
    return Path(os.environ.get("CONTACTBOOK_DATA_DIR", "data").strip() or "data")


def _contacts_path(data_dir: Path) -> Path:
    override = os.environ.get("CONTACTBOOK_CONTACTS_FILE", "").strip()
    return Path(override) if override else data_dir / "contacts.json"


def _tasks_path(data_dir: Path) -> Path:
    override = os.environ.get("CONTACTBOOK_TASKS_FILE", "").strip()
    return Path(override) if override else data_dir / "tasks.json"


def _require_contact() -> bool:
    raw = os.environ.get("CONTACTBOOK_REQUIRE_CONTACT", "true").strip().lower()
    return raw not in ("0", "false", "no", "off")


# --- request / response bodies ---


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateContactBody(_CamelModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class UpdateContactBody(_CamelModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class CreateTaskBody(_CamelModel):
    title: str | None = None
    description: str | None = None
    due_date: str | None = None


class UpdateTaskBody(_CamelModel):
    title: str | None = None
    description: str | None = None
    completed: bool | None = None
    due_date: str | None = None


class ContactOut(_CamelModel):
    id: str
    name: str
    email: str
    phone: str
    address: str
    created_at: str

    @classmethod
    def from_contact(cls, c: Contact) -> "ContactOut":
        return cls(
            id=c.id,
            name=c.name,
            email=c.email,
            phone=c.phone,
            address=c.address,
            created_at=c.created_at.isoformat(),
        )


class TaskOut(_CamelModel):
    id: str
    contact_id: str
    title: str
    description: str | None = None
    completed: bool
    due_date: str | None = None
    created_at: str
    updated_at: str

    @classmethod
    def from_task(cls, t: Task) -> "TaskOut":
        return cls(
            id=t.id,
            contact_id=t.contact_id,
            title=t.title,
            description=t.description,
            completed=t.completed,
            due_date=t.due_date,
            created_at=t.created_at.isoformat(),
            updated_at=t.updated_at.isoformat(),
        )


def _envelope(
    data: Any = None,
    *,
    status_code: int = 200,
    total: int | None = None,
    message: str | None = None,
) -> JSONResponse:
    body: dict[str, Any] = {"success": True}
    if isinstance(data, BaseModel):
        body["data"] = data.model_dump(by_alias=True, exclude_none=True)
    elif isinstance(data, list):
        body["data"] = [
            d.model_dump(by_alias=True, exclude_none=True) for d in data
        ]
    elif data is not None:
        body["data"] = jsonable_encoder(data)
    if total is not None:
        body["total"] = total
    if message is not None:
        body["message"] = message
    return JSONResponse(content=body, status_code=status_code)


def _failure(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        content={"success": False, "error": error}, status_code=status_code
    )


_STATUS_BY_ERROR: list[tuple[type[ContactBookError], int]] = [
    (ValidationFailed, 400),
    (InvalidArgument, 400),
    (NotFound, 404),
    (OwnershipMismatch, 403),
]


def _status_for(exc: ContactBookError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


def _contacts(request: Request) -> ContactService:
    return request.app.state.contact_service


def _tasks(request: Request) -> TaskService:
    return request.app.state.task_service


def create_app(
    contacts_path: Path | None = None,
    tasks_path: Path | None = None,
    *,
    require_contact: bool | None = None,
) -> FastAPI:
    """Build the app with its stores. Paths default to the configured data dir."""
    data_dir = _data_dir()
    contact_repo = JsonContactRepository(contacts_path or _contacts_path(data_dir))
    task_repo = JsonTaskRepository(tasks_path or _tasks_path(data_dir))
    if require_contact is None:
        require_contact = _require_contact()

    contact_service = ContactService(contact_repo)
    task_service = TaskService(
        task_repo,
        contact_exists=(
            (lambda cid: contact_repo.get_by_id(cid) is not None)
            if require_contact
            else None
        ),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Contacts stored in %s, tasks in %s", contact_repo.path, task_repo.path
        )
        yield

    app = FastAPI(title="Contactbook API", lifespan=lifespan)
    app.state.contact_service = contact_service
    app.state.task_service = task_service

    @app.exception_handler(ContactBookError)
    async def handle_contactbook_error(request: Request, exc: ContactBookError):
        status_code = _status_for(exc)
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        else:
            logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
        return _failure(status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [
            FieldError(
                field=str(err["loc"][-1]) if err.get("loc") else "body",
                message=err.get("msg", "Invalid value"),
            )
            for err in exc.errors()
        ]
        logger.warning("%s %s: malformed request", request.method, request.url.path)
        return _failure(400, str(ValidationFailed(errors)))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("%s %s: unexpected error", request.method, request.url.path)
        return _failure(500, "Internal server error")

    _register_routes(app)
    return app


def _register_routes(app: FastAPI) -> None:
    # --- REST: health ---

    @app.get("/health")
    def health(request: Request):
        return {
            "status": "ok",
            "contacts": _contacts(request).count(),
            "tasks": _tasks(request).count(),
        }

    # --- REST: contacts ---

    @app.get("/contacts")
    def list_contacts(
        request: Request,
        search: str | None = None,
        sort_by: ContactSortField | None = Query(None, alias="sortBy"),
        order: SortDirection = "asc",
        page: int | None = Query(None, ge=1),
        limit: int | None = Query(None, ge=1, le=500),
    ):
        service = _contacts(request)
        contacts = service.search_contacts(search) if search else service.list_contacts()
        if sort_by:
            contacts = service.sort_contacts(contacts, sort_by, order)
        total = len(contacts)
        if page and not limit:
            limit = DEFAULT_PAGE_SIZE
        if limit:
            start = ((page or 1) - 1) * limit
            contacts = contacts[start : start + limit]
        return _envelope([ContactOut.from_contact(c) for c in contacts], total=total)

    @app.get("/contacts/{contact_id}")
    def get_contact(contact_id: str, request: Request):
        contact = _contacts(request).get_contact(contact_id)
        if contact is None:
            raise NotFound("Contact", contact_id)
        return _envelope(ContactOut.from_contact(contact))

    @app.post("/contacts")
    def create_contact(body: CreateContactBody, request: Request):
        contact = _contacts(request).create_contact(
            ContactInput(
                name=body.name,
                email=body.email,
                phone=body.phone,
                address=body.address,
            )
        )
        return _envelope(ContactOut.from_contact(contact), status_code=201)

    @app.put("/contacts/{contact_id}")
    def update_contact(contact_id: str, body: UpdateContactBody, request: Request):
        update = ContactUpdate(**body.model_dump(exclude_unset=True))
        contact = _contacts(request).update_contact(contact_id, update)
        return _envelope(ContactOut.from_contact(contact))

    @app.delete("/contacts/{contact_id}")
    def delete_contact(contact_id: str, request: Request):
        deleted = _contacts(request).delete_contact(contact_id)
        # Cascade: the contact service does not know about tasks.
        removed = _tasks(request).delete_tasks_for_contact(contact_id)
        return _envelope(
            deleted,
            message=f"Contact {contact_id} deleted successfully ({removed} tasks removed)",
        )

    # --- REST: tasks of a contact ---

    @app.get("/contacts/{contact_id}/tasks")
    def list_tasks(contact_id: str, request: Request):
        tasks = _tasks(request).list_tasks_for_contact(contact_id)
        return _envelope([TaskOut.from_task(t) for t in tasks], total=len(tasks))

    @app.post("/contacts/{contact_id}/tasks")
    def create_task(contact_id: str, body: CreateTaskBody, request: Request):
        task = _tasks(request).create_task(
            TaskInput(
                contact_id=contact_id,
                title=body.title,
                description=body.description,
                due_date=body.due_date,
            )
        )
        return _envelope(TaskOut.from_task(task), status_code=201)

    @app.put("/contacts/{contact_id}/tasks/{task_id}")
    def update_task(
        contact_id: str, task_id: str, body: UpdateTaskBody, request: Request
    ):
        service = _tasks(request)
        service.get_task_for_contact(contact_id, task_id)
        changes = body.model_dump(exclude_unset=True)
        if changes.get("completed", False) is None:
            del changes["completed"]
        task = service.update_task(task_id, TaskUpdate(**changes))
        return _envelope(TaskOut.from_task(task))

    @app.patch("/contacts/{contact_id}/tasks/{task_id}")
    def toggle_task(contact_id: str, task_id: str, request: Request):
        service = _tasks(request)
        service.get_task_for_contact(contact_id, task_id)
        return _envelope(TaskOut.from_task(service.toggle_task(task_id)))

    @app.delete("/contacts/{contact_id}/tasks/{task_id}")
    def delete_task(contact_id: str, task_id: str, request: Request):
        service = _tasks(request)
        service.get_task_for_contact(contact_id, task_id)
        deleted = service.delete_task(task_id)
        return _envelope(deleted, message=f"Task {task_id} deleted successfully")


app = create_app()
