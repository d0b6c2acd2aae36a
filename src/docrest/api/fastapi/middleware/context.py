"""Request-scoped storage shared by the steps of a resource chain.

Values live on ``request.state`` under configurable names; recorded errors
live under ``ERRORS_STATE_KEY``. Starlette backs ``request.state`` with the
ASGI scope, so dependencies and the route wrapper see the same values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from starlette.requests import Request
from starlette.responses import Response

from docrest.exceptions import ContextValueMissing

ERRORS_STATE_KEY = "_docrest_errors"
# Request-state attribute holding the parsed request body.
DEFAULT_REQUEST_KEY = "request"
# Request-state attribute holding the value to serialize as the response.
DEFAULT_RESPONSE_KEY = "response"

CallNext = Callable[[Request], Awaitable[Response]]
Middleware = Callable[[Request, CallNext], Awaitable[Response]]


@dataclass
class ContextError:
    err: BaseException
    code: int = 500  # suggested HTTP status for the client


class AbortChain(Exception):
    """Stops the remaining steps of a chain; the wrapping steps still run."""


def get_errors(request: Request) -> list[ContextError]:
    errors = getattr(request.state, ERRORS_STATE_KEY, None)
    if errors is None:
        errors = []
        setattr(request.state, ERRORS_STATE_KEY, errors)
    return errors


def errors_exist(request: Request) -> bool:
    return bool(getattr(request.state, ERRORS_STATE_KEY, None))


def add_error(request: Request, err: BaseException, code: int = 500) -> ContextError:
    entry = ContextError(err=err, code=code)
    get_errors(request).append(entry)
    return entry


def abort_with_error(request: Request, err: BaseException, code: int) -> None:
    """Record ``err`` with status ``code`` and stop the chain."""
    add_error(request, err, code)
    raise AbortChain(str(err)) from err


def set_value(request: Request, key: str, value: Any) -> None:
    setattr(request.state, key, value)


def get_value(request: Request, key: str, default: Any = None) -> Any:
    return getattr(request.state, key, default)


def must_get(request: Request, key: str) -> Any:
    try:
        return getattr(request.state, key)
    except AttributeError:
        raise ContextValueMissing(key) from None
