from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from docrest.api.fastapi.library import Library

logger = logging.getLogger(__name__)


def attach_library(app: FastAPI, library: Library) -> Library:
    """Connect ``library`` on startup and terminate it on shutdown.

    An existing lifespan on ``app`` keeps running inside the new one. The
    session is closed even when the startup ping fails.
    """
    existing = getattr(app.router, "lifespan_context", None)

    @asynccontextmanager
    async def composed_lifespan(_app: FastAPI):
        _app.state.docrest_library = library
        try:
            await library.connect()
            if existing:
                async with existing(_app):
                    yield
            else:
                yield
        finally:
            await library.terminate()

    app.router.lifespan_context = composed_lifespan
    return library
