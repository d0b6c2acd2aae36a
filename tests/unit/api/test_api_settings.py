from __future__ import annotations

import pytest
from pydantic import ValidationError

from docrest.api.fastapi import DEFAULT_REQUEST_KEY, DEFAULT_RESPONSE_KEY, ResourceSettings, get_resource_settings
from docrest.api.fastapi.middleware import ERRORS_STATE_KEY


@pytest.fixture(autouse=True)
def _clean(monkeypatch):
    for name in ("DOCREST_REQUEST_KEY", "DOCREST_RESPONSE_KEY", "DOCREST_PREFIX"):
        monkeypatch.delenv(name, raising=False)
    get_resource_settings.cache_clear()
    yield
    get_resource_settings.cache_clear()


def test_defaults():
    s = ResourceSettings()

    assert (s.request_key, s.response_key, s.prefix) == (DEFAULT_REQUEST_KEY, DEFAULT_RESPONSE_KEY, "")


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DOCREST_REQUEST_KEY", "body")
    monkeypatch.setenv("DOCREST_PREFIX", "/v1")

    s = get_resource_settings()

    assert s.request_key == "body"
    assert s.response_key == "response"
    assert s.prefix == "/v1"


def test_errors_state_key_is_rejected(monkeypatch):
    monkeypatch.setenv("DOCREST_RESPONSE_KEY", ERRORS_STATE_KEY)

    with pytest.raises(ValidationError, match="reserved"):
        ResourceSettings()
