from .logging import Logger

__all__ = ["Logger"]
