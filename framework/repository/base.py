"""
Repository abstract base class and generic implementation.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional, List, Type, Any
from sqlmodel import SQLModel, select, func
from sqlmodel.ext.asyncio.session import AsyncSession

T = TypeVar("T", bound=SQLModel)


def apply_filters(model, statement, filters: dict):
    """Add `column == value` clauses for the filter keys the model actually has."""
    for key, value in filters.items():
        if hasattr(model, key):
            statement = statement.where(getattr(model, key) == value)
    return statement


class IRepository(ABC, Generic[T]):
    """Repository interface; defines standard data access API."""

    @abstractmethod
    async def get_by_id(self, id: Any) -> Optional[T]:
        """Get entity by ID."""
        pass

    @abstractmethod
    async def get_all(self, limit: int = 100, offset: int = 0) -> List[T]:
        """Get all entities (paginated)."""
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Create entity."""
        pass

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Update entity."""
        pass

    @abstractmethod
    async def delete(self, id: Any) -> bool:
        """Delete entity."""
        pass


class BaseRepository(IRepository[T]):
    """Generic repository implementation with SQLModel CRUD; subclasses can add custom queries."""

    def __init__(self, session: AsyncSession, model: Type[T]):
        """Initialize repository with session and model."""
        self.session = session
        self.model = model

    def _filtered(self, statement, filters: dict):
        return apply_filters(self.model, statement, filters)

    async def get_by_id(self, id: Any) -> Optional[T]:
        """Get entity by ID."""
        statement = select(self.model).where(self.model.id == id)
        result = await self.session.exec(statement)
        return result.first()

    async def get_all(self, limit: int = 100, offset: int = 0) -> List[T]:
        """Get all entities (paginated)."""
        statement = select(self.model).limit(limit).offset(offset)
        result = await self.session.exec(statement)
        return list(result.all())

    async def create(self, entity: T) -> T:
        """Create entity."""
        self.session.add(entity)
        return entity

    async def add_all(self, entities: List[T]) -> List[T]:
        """Stage several entities in one go (bulk insert on flush)."""
        self.session.add_all(entities)
        return entities

    async def update(self, entity: T) -> T:
        """Update entity (SQLModel tracks changes)."""
        self.session.add(entity)
        return entity

    async def delete(self, id: Any) -> bool:
        """Delete entity."""
        entity = await self.get_by_id(id)
        if entity:
            await self.session.delete(entity)
            return True
        return False

    async def find_one(self, **filters) -> Optional[T]:
        """Find one entity by filters (e.g. email='admin@example.com')."""
        statement = self._filtered(select(self.model), filters)
        result = await self.session.exec(statement)
        return result.first()

    async def find_all(self, **filters) -> List[T]:
        """Find entities by filters."""
        statement = self._filtered(select(self.model), filters)
        result = await self.session.exec(statement)
        return list(result.all())

    async def count(self, **filters) -> int:
        """Count entities matching filters."""
        statement = self._filtered(select(func.count()).select_from(self.model), filters)
        result = await self.session.exec(statement)
        return result.one()
