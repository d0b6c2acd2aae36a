from __future__ import annotations


class DocRestError(Exception):
    """Base class for errors raised by docrest."""


class MongoDialError(DocRestError):
    """The MongoDB server could not be reached with the configured dial info."""


class DocumentNotFound(DocRestError):
    def __init__(self, collection: str, doc_id: str):
        self.collection = collection
        self.doc_id = doc_id
        super().__init__(f"{collection} document {doc_id!r} not found")


class ContextValueMissing(DocRestError, KeyError):
    """A request-state key was read before anything stored a value under it."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"no value stored in request state under {self.key!r}"
