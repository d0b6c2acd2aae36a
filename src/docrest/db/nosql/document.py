from __future__ import annotations

from typing import Any, Mapping

from bson import ObjectId
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Document(BaseModel):
    """Base model for anything stored by a resource.

    The identifier is exposed to HTTP clients as ``id`` and stored in MongoDB as
    ``_id``. Subclasses add their own fields::

        class Book(Document):
            title: str = ""
            author: str = ""
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))

    @staticmethod
    def new_id() -> str:
        return str(ObjectId())

    @classmethod
    def list_type(cls) -> Any:
        return list[cls]  # type: ignore[valid-type]

    @classmethod
    def from_mongo(cls, raw: Mapping[str, Any]):
        data = dict(raw)
        if "_id" in data:
            data["_id"] = str(data["_id"])
        return cls.model_validate(data)

    def to_mongo(self) -> dict[str, Any]:
        return {"_id": self.id, **self.model_dump(exclude={"id"})}
