"""
HTML view routes for the task board.

Every browser session gets its own ``TaskBoard`` (see
:mod:`taskboard_app.board`), looked up through a random id kept in the
signed session cookie.  Form posts are translated into board operations
and answered with a redirect back to the list (post/redirect/get), so the
page is always rendered from the board's current state, including its
last error message.

Routes:
    GET  /health                - Liveness check
    GET  /                      - Task list page
    POST /tasks                 - Add a task
    POST /tasks/<id>/toggle     - Toggle completion
    POST /tasks/<id>/delete     - Delete a task
    POST /filter                - Change the category filter
"""

from __future__ import annotations

import logging
import uuid
from datetime import date

from flask import Blueprint, current_app, redirect, render_template, request, session, url_for

from ..board import TaskBoard
from ..models import DEFAULT_CATEGORY, FILTER_ALL, TaskCategory

logger = logging.getLogger(__name__)

views_bp = Blueprint("views", __name__)


def _current_board() -> TaskBoard:
    """
    Return the board for the current browser session.

    Assigns a fresh board id to sessions that do not carry one yet.
    """
    board_id = session.get("board_id")
    if not board_id:
        board_id = uuid.uuid4().hex
        session["board_id"] = board_id
    return current_app.extensions["task_boards"].get(board_id)


def _back_to_index():
    """
    Redirect to the task list after a form post.

    Marks the session so the following ``GET /`` renders the board's
    current state instead of starting a fresh page visit.
    """
    session["after_action"] = True
    return redirect(url_for("views.index"))


@views_bp.app_template_filter("due_date")
def format_due_date(value: date | None) -> str:
    """Render a due date for humans, e.g. ``Jan 5, 2024``."""
    if value is None:
        return "No due date"
    return f"{value:%b} {value.day}, {value.year}"


@views_bp.route("/health", methods=["GET"])
def health_check():
    """
    Return service health status.

    Does not touch the data service; intended for liveness checks.
    """
    return {"status": "healthy", "service": "taskboard"}, 200


@views_bp.route("/")
def index():
    """
    Render the task list page.

    A plain visit reloads the list from the data service, which is also
    how a failed load is retried.  The redirect after a form post keeps
    the board as the post left it, including any error message.
    """
    board = _current_board()
    if session.pop("after_action", False):
        board.initialize()
    else:
        board.reload()

    return render_template(
        "index.html",
        state=board.state,
        entries=board.filtered_tasks(),
        categories=TaskCategory,
        filter_all=FILTER_ALL,
    )


@views_bp.route("/tasks", methods=["POST"])
def create_task():
    """
    Handle the add-task form.

    Form Data:
        text: Task text (required, whitespace-only is ignored)
        category: Category label
        due_date: ``YYYY-MM-DD`` or blank
    """
    board = _current_board()
    task = board.add_task(
        request.form.get("text", ""),
        category=request.form.get("category", DEFAULT_CATEGORY),
        due_date=request.form.get("due_date", ""),
    )
    if task is not None:
        logger.info("Created task %s from form", task.id)
    return _back_to_index()


@views_bp.route("/tasks/<int:task_id>/toggle", methods=["POST"])
def toggle_task(task_id: int):
    """Toggle the completion flag of a task."""
    _current_board().toggle_done(task_id)
    return _back_to_index()


@views_bp.route("/tasks/<int:task_id>/delete", methods=["POST"])
def delete_task(task_id: int):
    """Delete a task."""
    _current_board().delete_task(task_id)
    return _back_to_index()


@views_bp.route("/filter", methods=["POST"])
def set_filter():
    """
    Change the category filter.

    Form Data:
        category: ``All`` or a category label; missing means ``All``
    """
    _current_board().set_filter(request.form.get("category", FILTER_ALL))
    return _back_to_index()
