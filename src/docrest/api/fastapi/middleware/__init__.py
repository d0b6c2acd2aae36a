from .context import (
    DEFAULT_REQUEST_KEY,
    DEFAULT_RESPONSE_KEY,
    ERRORS_STATE_KEY,
    AbortChain,
    CallNext,
    ContextError,
    Middleware,
    abort_with_error,
    add_error,
    errors_exist,
    get_errors,
    get_value,
    must_get,
    set_value,
)
from .errors import INTERNAL_ERROR_DETAIL, ErrorBody, handle_errors
from .parse import parse_request
from .serialize import serialize_response

__all__ = [
    "DEFAULT_REQUEST_KEY",
    "DEFAULT_RESPONSE_KEY",
    "ERRORS_STATE_KEY",
    "INTERNAL_ERROR_DETAIL",
    "AbortChain",
    "CallNext",
    "ContextError",
    "ErrorBody",
    "Middleware",
    "abort_with_error",
    "add_error",
    "errors_exist",
    "get_errors",
    "get_value",
    "handle_errors",
    "must_get",
    "parse_request",
    "serialize_response",
    "set_value",
]
