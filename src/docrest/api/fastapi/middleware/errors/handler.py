from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.responses import Response

from ..context import CallNext, get_errors

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAIL = "An unexpected internal error occurred. Please try again."


class ErrorBody(BaseModel):
    error: str
    detail: str


async def handle_errors(request: Request, call_next: CallNext) -> Response:
    """Emit the first error recorded by the rest of the chain, if any."""
    response = await call_next(request)

    errors = get_errors(request)
    if not errors:
        return response

    first = errors[0]
    code = first.code or status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = str(first.err)

    if code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        # The real error stays in the logs.
        logger.error(
            "%s on %s %s (%s): %s",
            type(first.err).__name__, request.method, request.url.path, code, first.err,
            exc_info=(type(first.err), first.err, first.err.__traceback__),
            extra={"http_method": request.method, "path": request.url.path, "status_code": code},
        )
        detail = INTERNAL_ERROR_DETAIL
    else:
        logger.debug("%s %s -> %s: %s", request.method, request.url.path, code, first.err)

    body = ErrorBody(error=type(first.err).__name__, detail=detail)
    return JSONResponse(status_code=code, content=body.model_dump())
