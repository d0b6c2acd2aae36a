from .add import attach_library

__all__ = ["attach_library"]
