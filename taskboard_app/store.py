"""
Accessor for the hosted ``tasks`` table.

The task board never touches a database directly.  All persistence goes
through the PostgREST interface a Supabase project exposes under
``/rest/v1/<table>``.  ``TaskTable`` wraps the four calls the board needs
(list, insert, update, delete), decodes returned rows into ``Task``
records, and turns every transport or server failure into one of the
typed errors below so that callers only ever handle ``TaskStoreError``.

Requests are sent one at a time with a per-call timeout.  Nothing is
retried, batched, or cached.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

import requests

from .models import Task, ValidationError

logger = logging.getLogger(__name__)

RETURN_REPRESENTATION = {"Prefer": "return=representation"}


class TaskStoreError(Exception):
    """Base class for failures reported by the data service."""

    default_message = "Task store request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class FetchError(TaskStoreError):
    """Loading the task list failed."""

    default_message = "Failed to load tasks"


class InsertError(TaskStoreError):
    """Creating a task failed or returned no row."""

    default_message = "Failed to add task"


class UpdateError(TaskStoreError):
    """Updating a task failed."""

    default_message = "Failed to update task"

    def __init__(self, task_id: int, message: str | None = None):
        self.task_id = task_id
        super().__init__(message)


class DeleteError(TaskStoreError):
    """Deleting a task failed."""

    default_message = "Failed to delete task"

    def __init__(self, task_id: int, message: str | None = None):
        self.task_id = task_id
        super().__init__(message)


def _response_error_message(response: requests.Response, default: str) -> str:
    """
    Extract an error message from a PostgREST error response if possible.

    PostgREST reports failures as ``{"message": ..., "code": ...}``; the
    Supabase gateway uses ``error``/``error_description`` for auth
    failures.  Falls back to *default* when the body is not JSON or no
    field carries a usable string.
    """
    try:
        payload = response.json()
    except ValueError:
        return default
    if not isinstance(payload, dict):
        return default
    for field in ("message", "error_description", "error"):
        message = payload.get(field)
        if isinstance(message, str) and message.strip():
            return message
    return default


class TaskTable:
    """
    Remote store accessor for one PostgREST table.

    Args:
        base_url: Root URL of the Supabase project.
        api_key: Project API key, sent both as ``apikey`` and as a bearer
            token.
        table: Table name, ``tasks`` by default.
        timeout: Per-request timeout in seconds.
    """

    def __init__(self, base_url: str, api_key: str, table: str = "tasks", timeout: float = 5):
        self.base_url = base_url
        self.api_key = api_key
        self.table = table
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: Any) -> "TaskTable":
        """Build an accessor from a Flask config mapping."""
        return cls(
            base_url=config["SUPABASE_URL"],
            api_key=config["SUPABASE_KEY"],
            table=config.get("TASKS_TABLE", "tasks"),
            timeout=config.get("TASK_STORE_TIMEOUT", 5),
        )

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/rest/v1/{self.table}"

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }

    def _request(self, method: str, error_cls, *error_args, **kwargs) -> Any:
        """
        Send one request to the table and return its decoded JSON body.

        Transport failures, non-2xx responses, and non-JSON bodies are all
        raised as ``error_cls(*error_args, message)``.
        """
        extra_headers = kwargs.pop("headers", {})
        headers = {**self._headers(), **extra_headers}
        try:
            response = requests.request(
                method=method,
                url=self.url,
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            raise error_cls(*error_args, "Task store timed out. Please try again.") from exc
        except requests.RequestException as exc:
            raise error_cls(*error_args, "Task store unavailable. Please try again later.") from exc

        if not 200 <= response.status_code < 300:
            message = _response_error_message(response, error_cls.default_message)
            logger.warning("%s %s returned %s: %s", method, self.table, response.status_code, message)
            raise error_cls(*error_args, message)

        try:
            return response.json()
        except ValueError as exc:
            raise error_cls(*error_args, "Invalid response from task store") from exc

    def list(self) -> list[Task]:
        """
        Fetch every task ordered by due date, undated tasks last.

        Raises:
            FetchError: On transport failure, server error, or a body that is
                not a list.  Malformed rows are skipped with a warning.
        """
        rows = self._request(
            "GET",
            FetchError,
            params={"select": "*", "order": "due_date.asc.nullslast"},
        )
        if not isinstance(rows, list):
            raise FetchError("Invalid response from task store")
        tasks = []
        for row in rows:
            try:
                tasks.append(Task.from_row(row))
            except ValidationError as exc:
                logger.warning("Skipping malformed row in %s: %s", self.table, exc)
        logger.info("Fetched %s tasks from %s", len(tasks), self.table)
        return tasks

    def insert(
        self,
        text: str,
        done: bool = False,
        category: str | None = None,
        due_date: date | None = None,
    ) -> Task:
        """
        Insert one row and return it with its server-assigned id.

        Raises:
            InsertError: If the row is rejected or no row comes back.
        """
        row = {
            "text": text,
            "done": done,
            "category": category or None,
            "due_date": due_date.isoformat() if due_date else None,
        }
        rows = self._request("POST", InsertError, json=[row], headers=RETURN_REPRESENTATION)
        if not rows or not isinstance(rows, list):
            raise InsertError("No data returned")
        try:
            task = Task.from_row(rows[0])
        except ValidationError as exc:
            raise InsertError(str(exc)) from exc
        logger.info("Inserted task %s", task.id)
        return task

    def update(self, task_id: int, fields: dict[str, Any]) -> None:
        """
        Apply a partial update to one row.

        Raises:
            UpdateError: If the request fails or no row matches *task_id*.
        """
        rows = self._request(
            "PATCH",
            UpdateError,
            task_id,
            params={"id": f"eq.{task_id}"},
            json=fields,
            headers=RETURN_REPRESENTATION,
        )
        if not rows:
            raise UpdateError(task_id, f"Task {task_id} not found")
        logger.info("Updated task %s: %s", task_id, sorted(fields))

    def delete(self, task_id: int) -> None:
        """
        Delete one row.

        Raises:
            DeleteError: If the request fails or no row matches *task_id*.
        """
        rows = self._request(
            "DELETE",
            DeleteError,
            task_id,
            params={"id": f"eq.{task_id}"},
            headers=RETURN_REPRESENTATION,
        )
        if not rows:
            raise DeleteError(task_id, f"Task {task_id} not found")
        logger.info("Deleted task %s", task_id)
