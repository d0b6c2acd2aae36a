"""
NoSQL test fixtures and configuration.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from bson import ObjectId

from docrest.db.nosql.settings import get_mongo_settings


@pytest.fixture
def stored_book():
    """A raw document the way the driver hands it back."""
    return {
        "_id": ObjectId("64b7f0c2a1b2c3d4e5f60718"),
        "title": "Dune",
        "author": "Frank Herbert",
        "publisher": "Chilton",
        "printed_at": datetime(1965, 8, 1, tzinfo=timezone.utc),
    }


@pytest.fixture(autouse=True)
def _mongo_env(monkeypatch):
    """Isolate MONGO_* settings from the host environment."""
    for name in (
        "MONGO_ADDRS",
        "MONGO_DATABASE",
        "MONGO_TIMEOUT",
        "MONGO_USERNAME",
        "MONGO_PASSWORD",
        "MONGO_AUTH_SOURCE",
        "MONGO_REPLICA_SET",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir("/")  # keep a stray .env out of the way
    get_mongo_settings.cache_clear()
    yield
    get_mongo_settings.cache_clear()
