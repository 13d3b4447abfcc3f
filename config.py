"""
Configuration classes for the task board.

The task board is a stateless BFF (backend-for-frontend). It serves
server-rendered HTML and delegates persistence to a hosted PostgREST
table (Supabase) over HTTP. Configuration values are loaded from
environment variables with development defaults.
"""

from __future__ import annotations

import os


class Config:
    """Base configuration for all task board environments."""

    SECRET_KEY: str = os.environ.get("SECRET_KEY", "taskboard-dev-secret-change-in-production")

    SUPABASE_URL: str = os.environ.get("SUPABASE_URL", "http://localhost:54321")
    SUPABASE_KEY: str = os.environ.get("SUPABASE_KEY", "")
    TASKS_TABLE: str = os.environ.get("TASKS_TABLE", "tasks")
    TASK_STORE_TIMEOUT: int = int(os.environ.get("TASK_STORE_TIMEOUT", "5"))
    MAX_BOARDS: int = int(os.environ.get("MAX_BOARDS", "1000"))

    SESSION_COOKIE_HTTPONLY: bool = True
    SESSION_COOKIE_SAMESITE: str = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")
    SESSION_COOKIE_SECURE: bool = (
        os.environ.get("SESSION_COOKIE_SECURE", "false").strip().lower() == "true"
    )


class DevelopmentConfig(Config):
    """Configuration for local development."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Configuration for automated tests."""

    DEBUG: bool = True
    TESTING: bool = True

    SUPABASE_URL: str = os.environ.get("TEST_SUPABASE_URL", "http://supabase.test")
    SUPABASE_KEY: str = os.environ.get("TEST_SUPABASE_KEY", "test-anon-key")
    TASK_STORE_TIMEOUT: int = int(os.environ.get("TEST_TASK_STORE_TIMEOUT", "1"))


class ProductionConfig(Config):
    """Configuration for production deployments."""

    DEBUG: bool = False
    TESTING: bool = False
    SESSION_COOKIE_SECURE: bool = (
        os.environ.get("SESSION_COOKIE_SECURE", "true").strip().lower() == "true"
    )


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Look up and return the configuration class for the given environment.

    Args:
        env: Environment name. When None, falls back to FLASK_ENV.

    Returns:
        The selected configuration class.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
