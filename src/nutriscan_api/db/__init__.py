"""Database layer with MongoDB connection and repositories."""

from .mongo import MongoDB
from .unit_of_work import UnitOfWork

__all__ = ["MongoDB", "UnitOfWork"]
