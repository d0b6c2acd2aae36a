from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator

from pydantic import BaseModel, Field
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from docrest.exceptions import MongoDialError

logger = logging.getLogger(__name__)


class DialInfo(BaseModel):
    """Parameters used to reach a MongoDB server or cluster."""

    addrs: list[str] = Field(default_factory=lambda: ["localhost:27017"])
    database: str
    timeout: float = 10.0  # seconds
    username: str | None = None
    password: str | None = None
    auth_source: str | None = None
    replica_set: str | None = None
    direct: bool | None = None

    def client_kwargs(self) -> dict[str, Any]:
        timeout_ms = int(self.timeout * 1000)
        kwargs: dict[str, Any] = {
            "host": list(self.addrs),
            "connectTimeoutMS": timeout_ms,
            "serverSelectionTimeoutMS": timeout_ms,
        }
        optional = {
            "username": self.username,
            "password": self.password,
            "authSource": self.auth_source,
            "replicaSet": self.replica_set,
            "directConnection": self.direct,
        }
        kwargs.update({k: v for k, v in optional.items() if v is not None})
        return kwargs


@dataclass
class SessionScope:
    """A database handle bound to one driver session."""

    database: Any
    session: Any

    def collection(self, name: str) -> Any:
        return self.database[name]


class MongoSession:
    """The shared session every resource clones per request."""

    def __init__(self, client: Any, database: str):
        self.client = client
        self.database = database
        self._closed = False

    @asynccontextmanager
    async def clone(self) -> AsyncIterator[SessionScope]:
        async with self.client.start_session() as session:
            yield SessionScope(self.client[self.database], session)

    async def ping(self) -> None:
        try:
            await self.client.admin.command("ping")
        except PyMongoError as exc:
            raise MongoDialError(f"Failed to establish session with database: {exc}") from exc

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self.client.close()
        logger.info("Mongo session closed: database=%s", self.database)


def dial_db(info: DialInfo) -> MongoSession:
    client = AsyncMongoClient(**info.client_kwargs())
    logger.info(
        "Mongo session dialed: addrs=%s database=%s timeout=%ss",
        ",".join(info.addrs), info.database, info.timeout,
    )
    return MongoSession(client, info.database)
