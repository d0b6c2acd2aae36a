from __future__ import annotations

import os
import warnings
from enum import StrEnum
from functools import cache


class Env(StrEnum):
    LOCAL = "local"
    DEV = "dev"
    TEST = "test"
    PROD = "prod"


ALIASES: dict[str, Env] = {
    "development": Env.DEV,
    "preview": Env.TEST,
    "staging": Env.TEST,
    "production": Env.PROD,
}


def parse_env(raw: str | None) -> Env | None:
    if not raw:
        return None
    val = raw.strip().lower()
    try:
        return Env(val)
    except ValueError:
        return ALIASES.get(val)


@cache
def get_env() -> Env:
    """
    Resolve the running environment from APP_ENV.

    Unknown values fall back to LOCAL with a one-time warning.
    """
    raw = os.getenv("APP_ENV")
    env = parse_env(raw)
    if env is None:
        if raw:
            warnings.warn(
                f"Unrecognized environment '{raw}', defaulting to 'local'.",
                RuntimeWarning,
                stacklevel=2,
            )
        env = Env.LOCAL
    return env


def pick(*, prod, nonprod, env: Env | None = None):
    """
    Choose a value for production vs. everything else.

    Example:
        level = pick(prod="INFO", nonprod="DEBUG")
    """
    return prod if (env or get_env()) is Env.PROD else nonprod
