"""
Test suite for the task board.

This package contains:
- unit/: models, store accessor, and board controller tests
- integration/: HTML view tests through the Flask test client
- ui/: browser tests using Playwright (run with ``-m ui``)
"""
