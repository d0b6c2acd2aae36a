"""
Root conftest.py for docrest tests.

Provides an in-memory Mongo client, a shared session over it, and a FastAPI
app with a ``books`` resource mounted under ``/v1``.
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from docrest.api.fastapi import Library
from docrest.db.nosql import Document, MongoSession
from tests.unit.utils.fake_mongo import FakeMongoClient


class Book(Document):
    title: str = ""
    author: str = ""
    publisher: str = ""


@pytest.fixture
def book_type() -> type[Book]:
    return Book


@pytest.fixture
def fake_client() -> FakeMongoClient:
    return FakeMongoClient()


@pytest.fixture
def mongo_session(fake_client) -> MongoSession:
    return MongoSession(fake_client, "test_db")


@pytest.fixture
def books_collection(fake_client):
    return fake_client["test_db"]["books"]


@pytest.fixture
def app() -> FastAPI:
    return FastAPI()


@pytest.fixture
def library(app, mongo_session) -> Library:
    return Library(app, mongo_session, prefix="/v1")


@pytest.fixture
def books(library):
    res = library.resource("books", Book)
    res.create()
    res.read()
    res.update()
    res.delete()
    res.list()
    return res


@pytest.fixture
def client(app, books) -> TestClient:
    return TestClient(app)
