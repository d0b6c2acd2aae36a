from .env import Env, get_env, pick
from .logging import JsonFormatter, setup_logging

__all__ = ["Env", "JsonFormatter", "get_env", "pick", "setup_logging"]
