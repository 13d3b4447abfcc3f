"""
View test package for the task board.

Tests use the Flask test client with the in-memory table and cover:
- Rendering of the task list
- Form posts for add, toggle, delete, and filter
- Error messages from the data service
"""
