"""Pytest configuration and fixtures."""

import asyncio

import pytest

from qr_codes_api.app.core.config import settings
from qr_codes_api.app.core.db import init_db
from qr_codes_api.app.core.security import RequestContext


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file with all migrations applied."""
    db_path = tmp_path / "qr_codes.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    init_db()
    return db_path


@pytest.fixture
def alice():
    return RequestContext.for_user("alice")


@pytest.fixture
def bob():
    return RequestContext.for_user("bob")


@pytest.fixture
def anonymous():
    return RequestContext()


@pytest.fixture
def run():
    """Run a service coroutine to completion."""
    return asyncio.run
