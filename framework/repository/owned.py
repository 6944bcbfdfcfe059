"""
Owner-scoped repository: every query carries `user_id == owner_id`.

Tenant isolation lives here, at the query layer. Callers never get a way to
fetch, update or delete a row without naming the owner, so this class does
not extend BaseRepository and has no unscoped get_by_id/get_all/find_*/count.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, List, Optional, Sequence, Type
from sqlalchemy import update as sa_update
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession

from .base import T, apply_filters


class IOwnedRepository(ABC, Generic[T]):
    """Owned-resource data access API; all reads and deletes take the owner id first."""

    @abstractmethod
    async def list_owned(self, owner_id: int, order_by: Optional[Sequence[Any]] = None, **filters) -> List[T]:
        """List entities owned by owner_id (newest first unless order_by given)."""
        pass

    @abstractmethod
    async def get_owned(self, owner_id: int, id: Any) -> Optional[T]:
        """Get entity by id only if owned by owner_id."""
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Stage a new entity; the caller has already set its owner."""
        pass

    @abstractmethod
    async def update(self, entity: T) -> T:
        """Stage changes to an entity previously loaded through get_owned."""
        pass

    @abstractmethod
    async def delete_owned(self, owner_id: int, id: Any) -> bool:
        """Delete entity by id only if owned by owner_id."""
        pass


class OwnedRepository(IOwnedRepository[T]):
    """Generic owner-scoped repository; the model must define `user_id` and `created_at`."""

    def __init__(self, session: AsyncSession, model: Type[T]):
        self.session = session
        self.model = model

    def _owned(self, statement, owner_id: int):
        return statement.where(self.model.user_id == owner_id)

    async def create(self, entity: T) -> T:
        self.session.add(entity)
        return entity

    async def add_all(self, entities: List[T]) -> List[T]:
        """Stage several entities in one go (bulk insert on flush)."""
        self.session.add_all(entities)
        return entities

    async def update(self, entity: T) -> T:
        self.session.add(entity)
        return entity

    async def list_owned(self, owner_id: int, order_by: Optional[Sequence[Any]] = None, **filters) -> List[T]:
        statement = self._owned(select(self.model), owner_id)
        statement = apply_filters(self.model, statement, {k: v for k, v in filters.items() if v not in (None, "")})
        if order_by is None:
            order_by = (self.model.created_at.desc(),)
        statement = statement.order_by(*order_by)
        result = await self.session.exec(statement)
        return list(result.all())

    async def get_owned(self, owner_id: int, id: Any) -> Optional[T]:
        statement = self._owned(select(self.model).where(self.model.id == id), owner_id)
        result = await self.session.exec(statement)
        return result.first()

    async def get_many_owned(self, owner_id: int, ids: Iterable[Any]) -> List[T]:
        """Fetch the owner's rows among `ids`; ids of other owners are silently dropped."""
        ids = {id for id in ids if id}
        if not ids:
            return []
        statement = self._owned(select(self.model).where(self.model.id.in_(ids)), owner_id)
        result = await self.session.exec(statement)
        return list(result.all())

    async def delete_owned(self, owner_id: int, id: Any) -> bool:
        entity = await self.get_owned(owner_id, id)
        if entity is None:
            return False
        await self.session.delete(entity)
        return True

    async def count_owned(self, owner_id: int, **filters) -> int:
        statement = self._owned(select(func.count()).select_from(self.model), owner_id)
        statement = apply_filters(self.model, statement, filters)
        result = await self.session.exec(statement)
        return result.one()

    async def update_owned_where(self, owner_id: int, values: dict, exclude_id: Any = None) -> None:
        """Bulk-set columns on the owner's rows (optionally all but one id)."""
        statement = sa_update(self.model).where(self.model.user_id == owner_id)
        if exclude_id is not None:
            statement = statement.where(self.model.id != exclude_id)
        await self.session.execute(statement.values(**values))
