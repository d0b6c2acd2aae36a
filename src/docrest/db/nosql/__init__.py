from .document import Document
from .session import DialInfo, MongoSession, SessionScope, dial_db
from .settings import MongoSettings, get_mongo_settings

__all__ = [
    "DialInfo",
    "Document",
    "MongoSession",
    "MongoSettings",
    "SessionScope",
    "dial_db",
    "get_mongo_settings",
]
