from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, FastAPI

from docrest.db.nosql.document import Document
from docrest.db.nosql.session import DialInfo, MongoSession, dial_db
from docrest.db.nosql.settings import MongoSettings, get_mongo_settings

from .middleware import DEFAULT_REQUEST_KEY, DEFAULT_RESPONSE_KEY, ERRORS_STATE_KEY
from .resource import Resource
from .settings import ResourceSettings, get_resource_settings

logger = logging.getLogger(__name__)


def _state_key(key: Optional[str], default: str) -> str:
    key = key or default
    if key == ERRORS_STATE_KEY:
        raise ValueError(f"{key!r} is reserved for recorded errors")
    return key


class Library:
    """Settings and the database session shared by every resource.

    Routes are added straight onto ``router`` (pass ``app`` or ``app.router``
    to register live; an ``APIRouter`` must be included after its resources
    are configured, since FastAPI copies routes on include).
    """

    def __init__(
        self,
        router: APIRouter | FastAPI,
        session: MongoSession,
        *,
        prefix: str = "",
        request_key: Optional[str] = None,
        response_key: Optional[str] = None,
    ):
        self.router: APIRouter = router.router if isinstance(router, FastAPI) else router
        self.session = session
        self.prefix = prefix
        self.request_key = _state_key(request_key, DEFAULT_REQUEST_KEY)
        self.response_key = _state_key(response_key, DEFAULT_RESPONSE_KEY)
        self.resources: dict[str, Resource] = {}

    @classmethod
    def new(
        cls,
        router: APIRouter | FastAPI,
        dial_info: DialInfo,
        request_key: Optional[str] = None,
        response_key: Optional[str] = None,
        *,
        prefix: str = "",
    ) -> "Library":
        _state_key(request_key, DEFAULT_REQUEST_KEY)
        _state_key(response_key, DEFAULT_RESPONSE_KEY)
        return cls(
            router,
            dial_db(dial_info),
            prefix=prefix,
            request_key=request_key,
            response_key=response_key,
        )

    @classmethod
    def default(cls, router: APIRouter | FastAPI, dial_info: DialInfo, *, prefix: str = "") -> "Library":
        return cls.new(router, dial_info, DEFAULT_REQUEST_KEY, DEFAULT_RESPONSE_KEY, prefix=prefix)

    @classmethod
    def from_settings(
        cls,
        router: APIRouter | FastAPI,
        mongo: MongoSettings | None = None,
        resources: ResourceSettings | None = None,
    ) -> "Library":
        mongo = mongo or get_mongo_settings()
        resources = resources or get_resource_settings()
        return cls.new(
            router,
            mongo.to_dial_info(),
            resources.request_key,
            resources.response_key,
            prefix=resources.prefix,
        )

    def resource(self, name: str, doc_type: type[Document]) -> Resource:
        res = Resource(self, name, doc_type)
        self.resources[name] = res
        return res

    async def connect(self) -> None:
        await self.session.ping()
        logger.info("Library connected: database=%s resources=%s", self.session.database, sorted(self.resources))

    async def terminate(self) -> None:
        await self.session.close()
