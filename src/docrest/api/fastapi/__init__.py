from .library import Library
from .middleware import DEFAULT_REQUEST_KEY, DEFAULT_RESPONSE_KEY
from .db import attach_library
from .resource import ID_PATH_PARAM, Resource, resource_route_class
from .settings import ResourceSettings, get_resource_settings

__all__ = [
    "DEFAULT_REQUEST_KEY",
    "DEFAULT_RESPONSE_KEY",
    "ID_PATH_PARAM",
    "Library",
    "Resource",
    "ResourceSettings",
    "attach_library",
    "get_resource_settings",
    "resource_route_class",
]
