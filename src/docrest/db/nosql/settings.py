from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .session import DialInfo


class MongoSettings(BaseSettings):
    """
    MongoDB dial settings.

    Env:
      MONGO_ADDRS (comma separated host:port list), MONGO_DATABASE, MONGO_TIMEOUT,
      MONGO_USERNAME, MONGO_PASSWORD, MONGO_AUTH_SOURCE, MONGO_REPLICA_SET
    """

    addrs: str = Field(default="localhost:27017")
    database: str = Field(default="docrest")
    timeout: float = Field(default=10.0)
    username: Optional[str] = Field(default=None)
    password: Optional[str] = Field(default=None)
    auth_source: Optional[str] = Field(default=None)
    replica_set: Optional[str] = Field(default=None)

    model_config = SettingsConfigDict(
        env_prefix="MONGO_",
        env_file=".env",
        extra="ignore",
    )

    def to_dial_info(self) -> DialInfo:
        return DialInfo(
            addrs=[a.strip() for a in self.addrs.split(",") if a.strip()],
            database=self.database,
            timeout=self.timeout,
            username=self.username,
            password=self.password,
            auth_source=self.auth_source,
            replica_set=self.replica_set,
        )


@lru_cache
def get_mongo_settings(**kwargs) -> MongoSettings:
    # Only include kwargs that are not None, so defaults in MongoSettings are used
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return MongoSettings(**filtered)
