"""
Routes package for the task board.

- views: HTML page and form routes for the web interface
"""
