from typing import Dict
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.repository.owned import OwnedRepository
from .models import Item


class ItemRepository(OwnedRepository[Item]):
    def __init__(self, session: AsyncSession, model=Item):
        super().__init__(session, model)

    async def count_by_category(self, owner_id: int) -> Dict[str, int]:
        """Number of the owner's items per category name."""
        statement = (
            self._owned(select(Item.category, func.count()), owner_id)
            .group_by(Item.category)
        )
        result = await self.session.exec(statement)
        return {category: count for category, count in result.all()}
