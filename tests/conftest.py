"""
Shared pytest fixtures for the task board test suite.

Provides the Flask application and test client, an in-memory table that
stands in for the hosted data service, and a Faker-backed factory for
seeding rows.  Every test gets a fresh table and application, so board
state held in the application never leaks between tests.

Key Concepts Demonstrated:
- Fixture scopes and fixture dependencies
- Test data factories
- Swapping the remote store for an in-memory double
"""

from __future__ import annotations

import os
from datetime import date, timedelta
from typing import Any

import pytest
from faker import Faker

# Set testing environment before importing the app
os.environ["FLASK_ENV"] = "testing"

from taskboard_app import create_app
from taskboard_app.board import TaskBoard
from taskboard_app.models import Task, TaskCategory
from tests.fakes import InMemoryTaskTable

fake = Faker()


# -----------------------------------------------------------------------------
# Store Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def table() -> InMemoryTaskTable:
    """Provide an empty in-memory ``tasks`` table."""
    return InMemoryTaskTable()


@pytest.fixture
def task_factory(table):
    """
    Factory fixture for seeding rows into the in-memory table.

    Example:
        def test_something(task_factory):
            task = task_factory(text="My Task", category="Work")
            assert task.id is not None
    """

    def _create_task(
        text: str | None = None,
        done: bool = False,
        category: str | None = TaskCategory.GENERAL.value,
        due_date: date | None = None,
    ) -> Task:
        row: dict[str, Any] = {
            "text": text or fake.sentence(nb_words=4),
            "done": done,
            "category": category,
            "due_date": due_date.isoformat() if due_date else None,
        }
        return table.seed(**row)

    return _create_task


@pytest.fixture
def board(table) -> TaskBoard:
    """Provide a fresh, not yet initialized board over the in-memory table."""
    return TaskBoard(table)


@pytest.fixture
def yesterday() -> date:
    return date.today() - timedelta(days=1)


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def app(table):
    """
    Create the Flask application wired to the in-memory table.

    Function scoped because each application holds the per-session boards.
    """
    application = create_app("testing", store=table)
    yield application


@pytest.fixture
def client(app):
    """
    Provide a Flask test client scoped to a single test function.

    The client keeps its session cookie between requests, so consecutive
    calls in one test act on the same board.
    """
    with app.test_client() as test_client:
        yield test_client
