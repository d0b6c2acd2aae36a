from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .middleware.context import DEFAULT_REQUEST_KEY, DEFAULT_RESPONSE_KEY, ERRORS_STATE_KEY


class ResourceSettings(BaseSettings):
    # flat = easy env overrides
    request_key: str = Field(default=DEFAULT_REQUEST_KEY)
    response_key: str = Field(default=DEFAULT_RESPONSE_KEY)
    prefix: str = Field(default="")

    model_config = SettingsConfigDict(
        env_prefix="DOCREST_",  # DOCREST_REQUEST_KEY, DOCREST_PREFIX, ...
        extra="ignore",
    )

    @field_validator("request_key", "response_key")
    @classmethod
    def _not_reserved(cls, v: str) -> str:
        if v == ERRORS_STATE_KEY:
            raise ValueError(f"{v!r} is reserved for recorded errors")
        return v


@lru_cache
def get_resource_settings(**kwargs) -> ResourceSettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return ResourceSettings(**filtered)
