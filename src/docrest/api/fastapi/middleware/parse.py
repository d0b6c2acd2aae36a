from __future__ import annotations

from typing import Awaitable, Callable

from fastapi import Request, status
from pydantic import ValidationError

from docrest.db.nosql.document import Document

from .context import abort_with_error, set_value


def parse_request(doc_type: type[Document], request_key: str) -> Callable[[Request], Awaitable[None]]:
    """Build a dependency that decodes the JSON body into a fresh ``doc_type``
    and stores it under ``request_key``. Undecodable or invalid bodies abort
    the chain with 400."""

    async def _parse(request: Request) -> None:
        raw = await request.body()
        try:
            doc = doc_type.model_validate_json(raw)
        except ValidationError as exc:
            abort_with_error(request, _summarize(exc), status.HTTP_400_BAD_REQUEST)
        else:
            set_value(request, request_key, doc)

    return _parse


def _summarize(exc: ValidationError) -> ValueError:
    first = exc.errors(include_url=False)[0]
    if first["type"] == "json_invalid":
        return ValueError(f"invalid JSON body: {first['msg']}")
    loc = ".".join(str(p) for p in first["loc"]) or "body"
    return ValueError(f"{loc}: {first['msg']}")
