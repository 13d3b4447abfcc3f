"""
Task board Flask application factory.

Provides the ``create_app`` factory that assembles the task board.  The
application is a stateless Backend-for-Frontend (BFF): it serves
server-rendered HTML through Jinja templates and keeps each browser
session's task list in memory, while every write goes to the hosted
``tasks`` table over HTTP.
"""

from __future__ import annotations

import logging

from flask import Flask

from config import get_config

from .board import BoardRegistry
from .store import TaskTable

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None, store: TaskTable | None = None) -> Flask:
    """
    Create and configure the task board application.

    Args:
        config_name: Optional configuration environment name
            (``"development"``, ``"testing"``, ``"production"``).  When
            *None*, the value is read from the ``FLASK_ENV`` environment
            variable, defaulting to ``"development"``.
        store: Accessor for the remote table.  Built from the
            ``SUPABASE_*`` settings when omitted.

    Returns:
        A configured :class:`~flask.Flask` application instance.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating task board app with config: %s", config_class.__name__)

    if store is None:
        store = TaskTable.from_config(app.config)
    app.extensions["task_store"] = store
    app.extensions["task_boards"] = BoardRegistry(store, max_boards=app.config["MAX_BOARDS"])

    # Imported here so the blueprint can use helpers from this package.
    from .routes.views import views_bp

    app.register_blueprint(views_bp)
    return app
