from .generic import GenericRepository

__all__ = ["GenericRepository"]
