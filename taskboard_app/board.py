"""
Per-session view/state controller for the task board.

``TaskBoard`` owns the in-memory copy of the ``tasks`` table together with
the form drafts, the active category filter, and the last error message.
State changes only through the operations below, each of which makes at
most one call to the remote store and applies its result locally:

- ``initialize``  -- load the list until a load succeeds
- ``reload``      -- reset and load again on a fresh page visit
- ``add_task``    -- insert, then merge and re-sort
- ``toggle_done`` -- flip the completion flag in place
- ``delete_task`` -- remove the row
- ``set_filter``  -- local only

Remote failures never propagate to the caller.  They are logged and
stored as ``last_error``, replacing any earlier message, and the next
successful remote call clears it.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, field, replace
from datetime import date

from .models import (
    DEFAULT_CATEGORY,
    FILTER_ALL,
    Task,
    TaskEntry,
    ValidationError,
    parse_due_date,
    sort_tasks,
)
from .store import TaskStoreError, TaskTable, UpdateError

logger = logging.getLogger(__name__)


@dataclass
class BoardState:
    """Everything the task list page renders."""

    tasks: list[Task] = field(default_factory=list)
    draft_text: str = ""
    draft_category: str = DEFAULT_CATEGORY
    draft_due_date: str = ""
    filter_category: str = FILTER_ALL
    last_error: str | None = None


class TaskBoard:
    """
    View/state controller bound to one remote store.

    Args:
        store: The accessor used for every remote call.
    """

    def __init__(self, store: TaskTable):
        self.store = store
        self.state = BoardState()
        self.initialized = False

    def _fail(self, action: str, error: Exception) -> None:
        message = getattr(error, "message", None) or str(error)
        logger.error("%s error: %s", action, message)
        self.state.last_error = message

    def initialize(self) -> None:
        """
        Load the task list unless a load has already succeeded.

        A failed load leaves the board uninitialized, so the next page
        visit tries again.
        """
        if self.initialized:
            return

        try:
            tasks = self.store.list()
        except TaskStoreError as error:
            self._fail("Fetch", error)
            return

        self.initialized = True
        self.state.tasks = list(tasks)
        self.state.last_error = None

    def reload(self) -> None:
        """Start over with fresh state and load the list again, as on a new page visit."""
        self.state = BoardState()
        self.initialized = False
        self.initialize()

    def add_task(
        self,
        text: str,
        category: str | None = DEFAULT_CATEGORY,
        due_date: str | date | None = None,
    ) -> Task | None:
        """
        Create a task from the form values and merge it into the list.

        Whitespace-only text is declined without a network call.

        Returns:
            The created task, or ``None`` when nothing was added.
        """
        if not text.strip():
            logger.debug("Ignoring add with empty text")
            return None

        state = self.state
        state.draft_text = text
        state.draft_category = category or ""
        state.draft_due_date = due_date.isoformat() if isinstance(due_date, date) else (due_date or "")

        try:
            parsed_due_date = parse_due_date(due_date)
        except ValidationError as error:
            self._fail("Add task", error)
            return None

        try:
            task = self.store.insert(
                text,
                done=False,
                category=category or None,
                due_date=parsed_due_date,
            )
        except TaskStoreError as error:
            self._fail("Add task", error)
            return None

        others = [existing for existing in state.tasks if existing.id != task.id]
        state.tasks = sort_tasks([*others, task])
        state.draft_text = ""
        state.draft_due_date = ""
        state.draft_category = DEFAULT_CATEGORY
        state.last_error = None
        return task

    def toggle_done(self, task_id: int) -> None:
        """Flip ``done`` for *task_id* remotely, then locally."""
        index = self._index_of(task_id)
        if index is None:
            self._fail("Toggle", UpdateError(task_id, f"Task {task_id} not found"))
            return

        current = self.state.tasks[index]
        try:
            self.store.update(task_id, {"done": not current.done})
        except TaskStoreError as error:
            self._fail("Toggle", error)
            return

        # Re-resolve the index; the list may have changed while the call was out.
        index = self._index_of(task_id)
        if index is not None:
            self.state.tasks[index] = replace(self.state.tasks[index], done=not current.done)
        self.state.last_error = None

    def delete_task(self, task_id: int) -> None:
        """Delete *task_id* remotely, then drop it from the list."""
        try:
            self.store.delete(task_id)
        except TaskStoreError as error:
            self._fail("Delete", error)
            return

        self.state.tasks = [task for task in self.state.tasks if task.id != task_id]
        self.state.last_error = None

    def set_filter(self, category: str | None) -> None:
        self.state.filter_category = category or FILTER_ALL

    def filtered_tasks(self, today: date | None = None) -> list[TaskEntry]:
        """
        Return the tasks matching the active filter, flagged for overdue.

        ``All`` matches every task; any other value must equal the task's
        category exactly.
        """
        today = today or date.today()
        selected = self.state.filter_category
        return [
            TaskEntry(task=task, overdue=task.is_overdue(today))
            for task in self.state.tasks
            if selected == FILTER_ALL or task.category == selected
        ]

    def _index_of(self, task_id: int) -> int | None:
        for index, task in enumerate(self.state.tasks):
            if task.id == task_id:
                return index
        return None


class BoardRegistry:
    """
    Hands out one ``TaskBoard`` per browser session.

    Boards share the store.  At most *max_boards* are kept; the board
    used least recently is dropped first, and a session whose board was
    dropped simply gets a fresh one that loads the list again.
    """

    def __init__(self, store: TaskTable, max_boards: int = 1000):
        self.store = store
        self.max_boards = max_boards
        self._boards: OrderedDict[str, TaskBoard] = OrderedDict()

    def get(self, key: str) -> TaskBoard:
        board = self._boards.get(key)
        if board is not None:
            self._boards.move_to_end(key)
            return board

        board = TaskBoard(self.store)
        self._boards[key] = board
        logger.info("Created task board for session %s", key[:8])
        while len(self._boards) > self.max_boards:
            evicted, _ = self._boards.popitem(last=False)
            logger.info("Dropped idle task board for session %s", evicted[:8])
        return board

    def __contains__(self, key: str) -> bool:
        return key in self._boards

    def __len__(self) -> int:
        return len(self._boards)
