"""
Tests for the per-resource middleware chain: body parsing, user middleware,
error recording and response serialization.
"""

from __future__ import annotations

import logging

import pytest
from fastapi import Depends, HTTPException, Request

from docrest.api.fastapi import Library
from docrest.api.fastapi.middleware import (
    INTERNAL_ERROR_DETAIL,
    abort_with_error,
    add_error,
    errors_exist,
    get_errors,
    must_get,
    set_value,
)
from docrest.exceptions import ContextValueMissing


class TestUserMiddleware:
    @pytest.mark.asyncio
    async def test_middleware_sees_parsed_body_and_can_change_it(self, app, library, book_type, api_client, books_collection):
        seen = []

        async def stamp_publisher(request: Request):
            doc = must_get(request, library.request_key)
            seen.append(doc.title)
            doc.publisher = "House"

        library.resource("books", book_type).create(stamp_publisher)

        r = await api_client.post("/v1/books/", json={"title": "Dune"})

        assert r.status_code == 200
        assert seen == ["Dune"]
        assert r.json()["publisher"] == "House"
        assert books_collection.docs[r.json()["id"]]["publisher"] == "House"

    @pytest.mark.asyncio
    async def test_middleware_runs_in_order(self, library, book_type, api_client):
        order = []

        def first():
            order.append("first")

        def second():
            order.append("second")

        library.resource("books", book_type).list(first, Depends(second))

        await api_client.get("/v1/books/")

        assert order == ["first", "second"]

    @pytest.mark.asyncio
    async def test_middleware_abort_stops_chain(self, library, book_type, api_client, books_collection):
        async def forbid(request: Request):
            abort_with_error(request, PermissionError("read only"), 403)

        library.resource("books", book_type).create(forbid)

        r = await api_client.post("/v1/books/", json={"title": "Dune"})

        assert r.status_code == 403
        assert r.json() == {"error": "PermissionError", "detail": "read only"}
        assert books_collection.calls == []

    @pytest.mark.asyncio
    async def test_middleware_does_not_run_after_bad_body(self, library, book_type, api_client):
        ran = []

        library.resource("books", book_type).create(lambda: ran.append(True))

        r = await api_client.post("/v1/books/", content=b"nope")

        assert r.status_code == 400
        assert ran == []

    @pytest.mark.asyncio
    async def test_recorded_error_without_abort_still_wins(self, library, book_type, api_client, books_collection):
        async def warn(request: Request):
            add_error(request, ValueError("quota exceeded"), 429)

        library.resource("books", book_type).create(warn)

        r = await api_client.post("/v1/books/", json={"title": "Dune"})

        # handler still ran, but the first error is what the client sees
        assert r.status_code == 429
        assert r.json()["detail"] == "quota exceeded"
        assert len(books_collection.docs) == 1

    @pytest.mark.asyncio
    async def test_first_recorded_error_is_emitted(self, library, book_type, api_client):
        async def two_errors(request: Request):
            add_error(request, ValueError("first"), 409)
            abort_with_error(request, ValueError("second"), 400)

        library.resource("books", book_type).read(two_errors)

        r = await api_client.get("/v1/books/b1")

        assert r.status_code == 409
        assert r.json()["detail"] == "first"

    @pytest.mark.asyncio
    async def test_http_exception_passes_through(self, library, book_type, api_client):
        async def unauthorized():
            raise HTTPException(status_code=401, detail="login required")

        library.resource("books", book_type).delete(unauthorized)

        r = await api_client.delete("/v1/books/b1")

        assert r.status_code == 401
        assert r.json() == {"detail": "login required"}

    @pytest.mark.asyncio
    async def test_internal_error_from_middleware_is_masked_and_logged(self, library, book_type, api_client, caplog):
        async def explode(request: Request):
            abort_with_error(request, RuntimeError("secret stack detail"), 500)

        library.resource("books", book_type).list(explode)

        with caplog.at_level(logging.ERROR, logger="docrest.api.fastapi.middleware.errors.handler"):
            r = await api_client.get("/v1/books/")

        assert r.status_code == 500
        assert r.json() == {"error": "RuntimeError", "detail": INTERNAL_ERROR_DETAIL}
        assert "secret stack detail" in caplog.text

    @pytest.mark.asyncio
    async def test_other_server_errors_keep_their_detail(self, library, book_type, api_client):
        async def upstream_down(request: Request):
            abort_with_error(request, RuntimeError("upstream down"), 503)

        library.resource("books", book_type).list(upstream_down)

        r = await api_client.get("/v1/books/")

        assert r.status_code == 503
        assert r.json() == {"error": "RuntimeError", "detail": "upstream down"}


class TestCustomKeys:
    @pytest.mark.asyncio
    async def test_custom_keys_are_used(self, app, mongo_session, book_type, api_client):
        lib = Library(app, mongo_session, prefix="/v2", request_key="body", response_key="payload")
        captured = {}

        async def grab(request: Request):
            captured["body"] = must_get(request, "body")
            captured["default"] = getattr(request.state, "request", None)

        lib.resource("books", book_type).create(grab)

        r = await api_client.post("/v2/books/", json={"title": "Dune"})

        assert r.status_code == 200
        assert captured["body"].title == "Dune"
        assert captured["default"] is None


class TestContextHelpers:
    @pytest.mark.asyncio
    async def test_helpers_on_plain_route(self, app, api_client):
        @app.get("/scratch")
        async def scratch(request: Request):
            before = errors_exist(request)
            set_value(request, "thing", 1)
            add_error(request, ValueError("x"))
            try:
                must_get(request, "missing")
            except ContextValueMissing as exc:
                missing = str(exc)
            return {
                "before": before,
                "after": errors_exist(request),
                "codes": [e.code for e in get_errors(request)],
                "thing": must_get(request, "thing"),
                "missing": missing,
            }

        r = await api_client.get("/scratch")

        assert r.json() == {
            "before": False,
            "after": True,
            "codes": [500],
            "thing": 1,
            "missing": "no value stored in request state under 'missing'",
        }

    def test_context_value_missing_is_a_key_error(self):
        with pytest.raises(KeyError):
            raise ContextValueMissing("request")
