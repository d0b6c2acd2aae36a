from .nosql import attach_library

__all__ = ["attach_library"]
