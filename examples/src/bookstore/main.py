"""
Bookstore example: a ``books`` collection served as a CRUD resource.

    POST   /v1/books/       create
    GET    /v1/books/{id}   read
    PUT    /v1/books/{id}   update
    DELETE /v1/books/{id}   delete
    GET    /v1/books/       list

Run against a local MongoDB:

    MONGO_DATABASE=my-store MONGO_TIMEOUT=2 uvicorn bookstore.main:create_app --factory
"""

from __future__ import annotations

from fastapi import FastAPI, Request

from docrest.api.fastapi import Library, ResourceSettings, attach_library
from docrest.api.fastapi.middleware import abort_with_error, must_get
from docrest.app import setup_logging
from docrest.db.nosql import MongoSession

from .models import Book


def require_title(library: Library):
    """Business rule hooked in as create/update middleware."""

    async def _check(request: Request) -> None:
        book: Book = must_get(request, library.request_key)
        if not book.title.strip():
            abort_with_error(request, ValueError("title must not be blank"), 422)

    return _check


def create_app(session: MongoSession | None = None) -> FastAPI:
    setup_logging()
    app = FastAPI(title="bookstore")

    if session is None:
        library = Library.from_settings(app, resources=ResourceSettings(prefix="/v1"))
    else:
        library = Library(app, session, prefix="/v1")

    books = library.resource("books", Book)
    books.create(require_title(library))
    books.read()
    books.update(require_title(library))
    books.delete()
    books.list()

    attach_library(app, library)
    return app
