"""
Playwright fixtures for UI tests.

Starts the task board in a background thread against a session-wide
in-memory table and hands Playwright page objects to the tests.  Each
test gets a fresh browser context (so a fresh session cookie and board)
and an emptied table.

Key Concepts Demonstrated:
- Live server fixture for Playwright
- Browser context isolation
- Screenshot capture on failure
- Page object initialization
"""

import os
import threading
import time

import pytest
from playwright.sync_api import Page

os.environ["FLASK_ENV"] = "testing"

from taskboard_app import create_app
from tests.fakes import InMemoryTaskTable
from tests.ui.pages.task_board_page import TaskBoardPage


# -----------------------------------------------------------------------------
# Server Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def ui_table() -> InMemoryTaskTable:
    """Table shared by the live server for the whole UI session."""
    return InMemoryTaskTable()


@pytest.fixture(scope="session")
def app(ui_table):
    """Create the Flask application for UI tests."""
    return create_app("testing", store=ui_table)


@pytest.fixture(scope="session")
def live_server(app):
    """
    Start a live Flask server for Playwright tests.

    Yields:
        str: Base URL of the running server.
    """
    host = "127.0.0.1"
    port = int(os.environ.get("UI_TEST_PORT", "5051"))

    server_thread = threading.Thread(
        target=lambda: app.run(host=host, port=port, use_reloader=False, threaded=True)
    )
    server_thread.daemon = True
    server_thread.start()

    # Give server time to start
    time.sleep(1)

    yield f"http://{host}:{port}"


@pytest.fixture
def clean_table(ui_table):
    """Empty the shared table before and after each UI test."""
    ui_table.reset()
    yield ui_table
    ui_table.reset()


# -----------------------------------------------------------------------------
# Browser Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def browser_context_args(browser_context_args):
    """Fix the viewport so layouts are deterministic."""
    return {
        **browser_context_args,
        "viewport": {"width": 1280, "height": 720},
    }


@pytest.fixture
def task_board_page(page: Page, live_server: str, clean_table) -> TaskBoardPage:
    """Initialize TaskBoardPage (without navigating)."""
    return TaskBoardPage(page, live_server)


# -----------------------------------------------------------------------------
# Screenshot on Failure
# -----------------------------------------------------------------------------

@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Capture a screenshot when a UI test fails."""
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        page = item.funcargs.get("page")
        if page:
            screenshot_dir = "test-results/screenshots"
            os.makedirs(screenshot_dir, exist_ok=True)

            test_name = item.name.replace("/", "_").replace("::", "_")
            screenshot_path = f"{screenshot_dir}/{test_name}.png"

            try:
                page.screenshot(path=screenshot_path)
                print(f"\nScreenshot saved: {screenshot_path}")
            except Exception as e:
                print(f"\nFailed to capture screenshot: {e}")
