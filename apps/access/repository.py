"""Access control repositories (roles and permissions are not owner-scoped)."""

from typing import List, Optional
from sqlmodel import select
from framework.repository.base import BaseRepository
from .models import Permission, Role


class PermissionRepository(BaseRepository[Permission]):
    def __init__(self, session):
        super().__init__(session, Permission)

    async def list_sorted(self) -> List[Permission]:
        statement = select(Permission).order_by(Permission.resource.asc(), Permission.action.asc())
        result = await self.session.exec(statement)
        return list(result.all())

    async def get_by_code(self, code: str) -> Optional[Permission]:
        return await self.find_one(code=code)


class RoleRepository(BaseRepository[Role]):
    def __init__(self, session):
        super().__init__(session, Role)

    async def list_sorted(self) -> List[Role]:
        statement = select(Role).order_by(Role.created_at.asc())
        result = await self.session.exec(statement)
        return list(result.all())

    async def get_by_code(self, code: str) -> Optional[Role]:
        return await self.find_one(code=code)
