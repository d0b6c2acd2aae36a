from .mongo import attach_library

__all__ = ["attach_library"]
