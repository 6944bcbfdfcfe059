"""
Repository pattern: data access abstraction, decouples service layer from database session.
"""

from .base import BaseRepository, IRepository
from .owned import IOwnedRepository, OwnedRepository
from .unit_of_work import UnitOfWork, get_uow

__all__ = ["BaseRepository", "IRepository", "IOwnedRepository", "OwnedRepository", "UnitOfWork", "get_uow"]
