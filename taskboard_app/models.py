"""
Task board data models.

Defines the ``Task`` record decoded from rows of the hosted ``tasks``
table, the known category labels, and the ordering and overdue rules
shared by the controller and the templates.

Rows arrive from the data service as loosely typed JSON objects.  They
are decoded into ``Task`` instances at the accessor boundary so the rest
of the application works with explicit optional fields instead of raw
dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable

FILTER_ALL = "All"


class TaskCategory(str, Enum):
    """
    Known task categories.

    Used in Jinja templates to populate the category and filter
    ``<select>`` dropdowns.  Stored categories are free strings, so a
    row may carry a label outside this set; such labels are kept as-is.

    Attributes:
        GENERAL: Default category for new tasks.
        WORK: Work related.
        PERSONAL: Personal errands.
        URGENT: Needs attention first.
    """

    GENERAL = "General"
    WORK = "Work"
    PERSONAL = "Personal"
    URGENT = "Urgent"


DEFAULT_CATEGORY = TaskCategory.GENERAL.value


class ValidationError(ValueError):
    """Raised when user input or a stored row cannot be turned into a task."""


@dataclass(frozen=True)
class Task:
    """
    A single row of the ``tasks`` table.

    Attributes:
        id: Server-assigned primary key.
        text: Task description as typed by the user.
        done: Completion flag.
        category: Category label, or ``None`` when unset.
        due_date: Calendar day the task is due, or ``None``.
    """

    id: int
    text: str
    done: bool = False
    category: str | None = None
    due_date: date | None = None

    @classmethod
    def from_row(cls, row: Any) -> "Task":
        """
        Decode and validate a JSON row returned by the data service.

        Args:
            row: A mapping as returned by PostgREST.

        Returns:
            The decoded ``Task``.

        Raises:
            ValidationError: If a required column is missing or a column
                has the wrong type.
        """
        if not isinstance(row, dict):
            raise ValidationError("Task row must be an object")

        task_id = row.get("id")
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise ValidationError(f"Task row has invalid id: {task_id!r}")

        text = row.get("text")
        if not isinstance(text, str) or not text.strip():
            raise ValidationError(f"Task {task_id} has no text")

        done = row.get("done", False)
        if done is None:
            done = False
        if not isinstance(done, bool):
            raise ValidationError(f"Task {task_id} has invalid done flag: {done!r}")

        category = row.get("category")
        if category is not None and not isinstance(category, str):
            raise ValidationError(f"Task {task_id} has invalid category: {category!r}")

        due_date = row.get("due_date")
        if due_date is not None and not isinstance(due_date, str):
            raise ValidationError(f"Task {task_id} has invalid due date: {due_date!r}")

        return cls(
            id=task_id,
            text=text,
            done=done,
            category=category or None,
            due_date=parse_due_date(due_date),
        )

    def is_overdue(self, today: date | None = None) -> bool:
        """Return True when the task is open and its due date has passed."""
        if self.due_date is None or self.done:
            return False
        return self.due_date < (today or date.today())


@dataclass(frozen=True)
class TaskEntry:
    """A task as displayed in the list, with its overdue flag."""

    task: Task
    overdue: bool


def parse_due_date(value: str | date | None) -> date | None:
    """
    Parse a due date coming from a form field or a table row.

    Accepts a plain ``YYYY-MM-DD`` string or a full ISO-8601 datetime, of
    which only the calendar day is kept.  Blank values mean "no due date".

    Raises:
        ValidationError: If the value is not an ISO date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    value = value.strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise ValidationError("Invalid date format") from exc


def due_date_sort_key(task: Task) -> tuple[bool, date]:
    """Sort key placing earlier due dates first and undated tasks last."""
    return (task.due_date is None, task.due_date or date.min)


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Return tasks ordered by due date; the sort is stable for ties."""
    return sorted(tasks, key=due_date_sort_key)
