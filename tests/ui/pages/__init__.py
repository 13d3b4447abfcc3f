"""
Page Object Model (POM) classes for UI testing.

This package contains page objects that encapsulate page-specific
locators and interactions.
"""

from tests.ui.pages.base_page import BasePage
from tests.ui.pages.task_board_page import TaskBoardPage

__all__ = ["BasePage", "TaskBoardPage"]
