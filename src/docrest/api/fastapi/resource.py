from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING, Any, Callable, Sequence

from bson.errors import BSONError
from fastapi import Depends, Request, status
from fastapi.params import Depends as DependsParam
from fastapi.routing import APIRoute
from pydantic import ValidationError
from pymongo.errors import PyMongoError
from starlette.responses import Response

from docrest.db.nosql.document import Document
from docrest.exceptions import DocumentNotFound

from .middleware import (
    AbortChain,
    CallNext,
    ErrorBody,
    Middleware,
    abort_with_error,
    handle_errors,
    must_get,
    parse_request,
    serialize_response,
    set_value,
)

if TYPE_CHECKING:
    from .library import Library

logger = logging.getLogger(__name__)

ID_PATH_PARAM = "id"

# Raised by the driver or while BSON-encoding a document.
DRIVER_ERRORS = (PyMongoError, BSONError)

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorBody},
}


def resource_route_class(middleware: Sequence[Middleware]) -> type[APIRoute]:
    """An APIRoute whose handler runs inside ``middleware`` (outermost first).

    A step that aborts the chain leaves the wrapping steps to decide the
    response from the errors it recorded.
    """

    class ResourceRoute(APIRoute):
        def get_route_handler(self) -> Callable[[Request], Any]:
            route_handler = super().get_route_handler()

            async def run_handler(request: Request) -> Response:
                try:
                    return await route_handler(request)
                except AbortChain:
                    return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

            chain: CallNext = run_handler
            for step in reversed(middleware):
                chain = _bind(step, chain)
            return chain

    return ResourceRoute


def _bind(step: Middleware, call_next: CallNext) -> CallNext:
    async def run_step(request: Request) -> Response:
        return await step(request, call_next)

    return run_step


def _as_dependencies(mw: Sequence[Any]) -> list[DependsParam]:
    return [m if isinstance(m, DependsParam) else Depends(m) for m in mw]


class Resource:
    """One document collection exposed as a CRUD endpoint set.

    Nothing is routed until an operation is enabled::

        books = library.resource("books", Book)
        books.create(require_editor)
        books.read()
        books.list()

    Each operation takes optional middleware: FastAPI dependencies (``Depends``
    objects or plain callables) that run in order before the database call.
    Operations with a body run them after the body has been parsed, so they can
    read or adjust the document through ``must_get(request, library.request_key)``.
    """

    def __init__(self, library: Library, name: str, doc_type: type[Document]):
        self.library = library
        self.name = name
        self.doc_type = doc_type
        self.path = f"{library.prefix.rstrip('/')}/{name.strip('/')}"
        self.route_class = resource_route_class(
            [
                handle_errors,
                partial(serialize_response, response_key=library.response_key),
            ]
        )

    @property
    def session(self):
        return self.library.session

    def _decode(self, request: Request, raw: Any) -> Document:
        """Stored documents that no longer fit ``doc_type`` abort with 500."""
        try:
            return self.doc_type.from_mongo(raw)
        except ValidationError as exc:
            abort_with_error(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR)

    def _add_route(
        self,
        op: str,
        method: str,
        path: str,
        endpoint: Callable[..., Any],
        mw: Sequence[Any],
        *,
        with_body: bool = False,
        model: Any = None,
        responses: dict[int | str, dict[str, Any]] | None = None,
    ) -> None:
        dependencies = _as_dependencies(mw)
        openapi_extra = None
        if with_body:
            dependencies.insert(0, Depends(parse_request(self.doc_type, self.library.request_key)))
            openapi_extra = {
                "requestBody": {
                    "required": True,
                    "content": {"application/json": {"schema": self.doc_type.model_json_schema()}},
                }
            }

        all_responses: dict[int | str, dict[str, Any]] = dict(_ERROR_RESPONSES)
        if with_body:
            all_responses[status.HTTP_400_BAD_REQUEST] = {"model": ErrorBody}
        if model is not None:
            all_responses[status.HTTP_200_OK] = {"model": model}
        all_responses.update(responses or {})

        self.library.router.add_api_route(
            self.path + path,
            endpoint,
            methods=[method],
            name=f"{self.name}_{op}",
            tags=[self.name],
            dependencies=dependencies,
            response_model=None,
            responses=all_responses,
            openapi_extra=openapi_extra,
            route_class_override=self.route_class,
        )
        logger.debug("Registered %s %s%s (%s, %d middleware)", method, self.path, path, op, len(mw))

    def create(self, *mw: Any) -> None:
        """POST / inserts the parsed document under a newly generated id."""

        async def create_document(request: Request) -> None:
            doc: Document = must_get(request, self.library.request_key)
            doc.id = Document.new_id()
            async with self.session.clone() as scope:
                try:
                    await scope.collection(self.name).insert_one(doc.to_mongo(), session=scope.session)
                except DRIVER_ERRORS as exc:
                    abort_with_error(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR)
            set_value(request, self.library.response_key, doc)

        self._add_route("create", "POST", "/", create_document, mw, with_body=True, model=self.doc_type)

    def read(self, *mw: Any) -> None:
        """GET /{id} returns one document."""

        async def read_document(request: Request, id: str) -> None:
            async with self.session.clone() as scope:
                try:
                    raw = await scope.collection(self.name).find_one({"_id": id}, session=scope.session)
                except DRIVER_ERRORS as exc:
                    abort_with_error(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR)
            if raw is None:
                abort_with_error(request, DocumentNotFound(self.name, id), status.HTTP_404_NOT_FOUND)
            set_value(request, self.library.response_key, self._decode(request, raw))

        self._add_route(
            "read", "GET", f"/{{{ID_PATH_PARAM}}}", read_document, mw,
            model=self.doc_type, responses={status.HTTP_404_NOT_FOUND: {"model": ErrorBody}},
        )

    def update(self, *mw: Any) -> None:
        """PUT /{id} sets every field of the parsed document on the stored one.

        The id in the path wins over any id in the body.
        """

        async def update_document(request: Request, id: str) -> None:
            doc: Document = must_get(request, self.library.request_key)
            doc.id = id
            async with self.session.clone() as scope:
                try:
                    result = await scope.collection(self.name).update_one(
                        {"_id": doc.id}, {"$set": doc.to_mongo()}, session=scope.session
                    )
                except DRIVER_ERRORS as exc:
                    abort_with_error(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR)
            if result.matched_count == 0:
                abort_with_error(request, DocumentNotFound(self.name, id), status.HTTP_404_NOT_FOUND)
            set_value(request, self.library.response_key, doc)

        self._add_route(
            "update", "PUT", f"/{{{ID_PATH_PARAM}}}", update_document, mw,
            with_body=True, model=self.doc_type,
            responses={status.HTTP_404_NOT_FOUND: {"model": ErrorBody}},
        )

    def delete(self, *mw: Any) -> None:
        """DELETE /{id} removes one document and answers 204."""

        async def delete_document(request: Request, id: str) -> None:
            async with self.session.clone() as scope:
                try:
                    result = await scope.collection(self.name).delete_one({"_id": id}, session=scope.session)
                except DRIVER_ERRORS as exc:
                    abort_with_error(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR)
            if result.deleted_count == 0:
                abort_with_error(request, DocumentNotFound(self.name, id), status.HTTP_404_NOT_FOUND)
            set_value(request, self.library.response_key, None)

        self._add_route(
            "delete", "DELETE", f"/{{{ID_PATH_PARAM}}}", delete_document, mw,
            responses={
                status.HTTP_204_NO_CONTENT: {"description": "Deleted"},
                status.HTTP_404_NOT_FOUND: {"model": ErrorBody},
            },
        )

    def list(self, *mw: Any) -> None:
        """GET / returns every document in the collection."""

        async def list_documents(request: Request) -> None:
            async with self.session.clone() as scope:
                try:
                    cursor = scope.collection(self.name).find({}, session=scope.session)
                    raws = await cursor.to_list(length=None)
                except DRIVER_ERRORS as exc:
                    abort_with_error(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR)
            set_value(request, self.library.response_key, [self._decode(request, r) for r in raws])

        self._add_route("list", "GET", "/", list_documents, mw, model=self.doc_type.list_type())
