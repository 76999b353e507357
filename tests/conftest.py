"""Shared fixtures."""

import pytest

DB_VARIABLES = ("DB_USERNAME", "DB_PASSWORD", "DB_NAME", "DB_HOST", "DB_PORT", "APP_ENV")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every database variable from the process environment."""
    for name in DB_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def production_env(clean_env):
    clean_env.setenv("DB_USERNAME", "artify")
    clean_env.setenv("DB_PASSWORD", "s3cret")
    clean_env.setenv("DB_NAME", "gallery")
    clean_env.setenv("DB_HOST", "db.internal")
    clean_env.setenv("DB_PORT", "6543")
    return clean_env
