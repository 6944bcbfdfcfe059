"""
Unit of Work: manages repositories and transaction boundaries.
"""

from typing import Optional
from fastapi import Depends
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.database.manager import get_db


class UnitOfWork:
    """Manages related repositories with a shared session and transaction commit/rollback."""

    def __init__(self, session: Optional[AsyncSession] = None):
        """Initialize UnitOfWork; session must be provided (e.g. UnitOfWork.from_session())."""
        if session is None:
            raise ValueError("Session must be provided. Use UnitOfWork.from_session() or pass session explicitly.")

        self.session = session
        self._repositories = {}

    @classmethod
    async def from_session(cls, session: AsyncSession) -> "UnitOfWork":
        """Create UnitOfWork from an existing session."""
        return cls(session=session)

    def get_repository(self, repo_class, model_class=None):
        """
        Get or create a repository instance (cached).

        Dedicated repositories take only the session; generic ones
        (e.g. OwnedRepository) are built with the model class as well.
        """
        model_name = model_class.__name__ if model_class is not None else ""
        cache_key = f"{repo_class.__name__}_{model_name}"
        if cache_key not in self._repositories:
            if model_class is None:
                self._repositories[cache_key] = repo_class(self.session)
            else:
                self._repositories[cache_key] = repo_class(self.session, model_class)
        return self._repositories[cache_key]

    async def commit(self) -> None:
        """Commit all changes."""
        await self.session.commit()

    async def rollback(self) -> None:
        """Rollback all changes."""
        await self.session.rollback()

    async def flush(self) -> None:
        """Flush session (e.g. to get auto-increment IDs)."""
        await self.session.flush()

    async def refresh(self, entity) -> None:
        """Reload entity state from the database."""
        await self.session.refresh(entity)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            await self.rollback()
        else:
            await self.commit()


def get_uow(db: AsyncSession = Depends(get_db)) -> UnitOfWork:
    """Dependency: create UnitOfWork."""
    return UnitOfWork(session=db)
