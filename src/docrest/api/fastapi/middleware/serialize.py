from __future__ import annotations

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.responses import Response

from .context import CallNext, errors_exist, get_value


async def serialize_response(request: Request, call_next: CallNext, *, response_key: str) -> Response:
    """Write whatever the handler stored under ``response_key`` as JSON.

    Nothing stored (or ``None``) becomes an empty 204. When errors were
    recorded the response is left to the error handler.
    """
    response = await call_next(request)

    if errors_exist(request):
        return response

    payload = get_value(request, response_key)
    if payload is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return JSONResponse(status_code=status.HTTP_200_OK, content=jsonable_encoder(payload))
