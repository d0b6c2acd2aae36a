from .handler import INTERNAL_ERROR_DETAIL, ErrorBody, handle_errors

__all__ = ["INTERNAL_ERROR_DETAIL", "ErrorBody", "handle_errors"]
