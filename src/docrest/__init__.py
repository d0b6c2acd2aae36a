from . import api, app
from .api.fastapi import DEFAULT_REQUEST_KEY, DEFAULT_RESPONSE_KEY, Library, Resource, attach_library
from .api.fastapi.middleware import abort_with_error, add_error, errors_exist, must_get
from .db.nosql import DialInfo, Document, MongoSession, MongoSettings
from .exceptions import ContextValueMissing, DocRestError, DocumentNotFound, MongoDialError

__all__ = [
    "api",
    "app",
    "DEFAULT_REQUEST_KEY",
    "DEFAULT_RESPONSE_KEY",
    "ContextValueMissing",
    "DialInfo",
    "DocRestError",
    "Document",
    "DocumentNotFound",
    "Library",
    "MongoDialError",
    "MongoSession",
    "MongoSettings",
    "Resource",
    "abort_with_error",
    "add_error",
    "attach_library",
    "errors_exist",
    "must_get",
]
