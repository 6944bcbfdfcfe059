from typing import Any, Dict, List, Optional
from loguru import logger
from sqlalchemy.exc import IntegrityError
from framework.exceptions.handler import NotFoundError, ValidationError
from framework.repository.unit_of_work import UnitOfWork
from framework.resource.models import utcnow
from framework.security import CurrentUser
from apps.identity.repository import UserRepository
from .models import Permission, Role
from .repository import PermissionRepository, RoleRepository

DEFAULT_PERMISSIONS = [
    {"code": "invoices:read", "name": "View invoices", "resource": "invoices", "action": "read"},
    {"code": "invoices:create", "name": "Create invoices", "resource": "invoices", "action": "create"},
    {"code": "invoices:update", "name": "Edit invoices", "resource": "invoices", "action": "update"},
    {"code": "invoices:delete", "name": "Delete invoices", "resource": "invoices", "action": "delete"},
    {"code": "reports:read", "name": "View reports", "resource": "reports", "action": "read"},
    {"code": "accounting:read", "name": "View accounting", "resource": "accounting", "action": "read"},
    {"code": "accounting:post", "name": "Post to GL", "resource": "accounting", "action": "post"},
    {"code": "audit:read", "name": "View audit logs", "resource": "audit", "action": "read"},
    {"code": "employees:read", "name": "View employees", "resource": "employees", "action": "read"},
    {"code": "employees:update", "name": "Edit employees", "resource": "employees", "action": "update"},
    {"code": "settings:read", "name": "View settings", "resource": "settings", "action": "read"},
    {"code": "settings:update", "name": "Update settings", "resource": "settings", "action": "update"},
]


class AccessService:
    """Roles and permissions. Reads are open to any signed-in user; writes are gated at the router."""

    def __init__(self, uow: UnitOfWork, current_user: Optional[CurrentUser] = None):
        self.uow = uow
        self.current_user = current_user
        self.permissions = uow.get_repository(PermissionRepository)
        self.roles = uow.get_repository(RoleRepository)
        self.users = uow.get_repository(UserRepository)

    async def list_permissions(self) -> List[Permission]:
        return await self.permissions.list_sorted()

    async def list_roles(self) -> List[Dict[str, Any]]:
        """Roles with their permission ids expanded to permission summaries."""
        by_id = {p.id: p for p in await self.permissions.get_all(limit=10000)}
        roles = []
        for role in await self.roles.list_sorted():
            data = role.model_dump()
            data["permissions"] = [
                {"id": p.id, "code": p.code, "name": p.name, "resource": p.resource, "action": p.action}
                for p in (by_id.get(pid) for pid in role.permissions or [])
                if p is not None
            ]
            roles.append(data)
        return roles

    async def create_role(self, data: Dict[str, Any]) -> Role:
        name = (data.get("name") or "").strip()
        code = (data.get("code") or "").strip()
        if not name or not code:
            raise ValidationError("name and code are required")
        if await self.roles.get_by_code(code):
            raise ValidationError("Role code already exists")

        permissions = data.get("permissions")
        role = Role(
            name=name,
            code=code,
            description=(data.get("description") or "").strip(),
            permissions=permissions if isinstance(permissions, list) else [],
            created_by=self.current_user.id if self.current_user else None,
        )
        await self.roles.create(role)
        await self._commit_role()
        await self.uow.refresh(role)
        logger.info(f"Role {code} created by user {role.created_by}")
        return role

    async def update_role(self, role_id: str, changes: Dict[str, Any]) -> Role:
        role = await self.roles.get_by_id(role_id)
        if not role:
            raise NotFoundError("Role not found")

        if changes.get("name") is not None:
            role.name = changes["name"].strip()
        if changes.get("code") is not None:
            code = changes["code"].strip()
            existing = await self.roles.get_by_code(code)
            if existing and existing.id != role.id:
                raise ValidationError("Role code already exists")
            role.code = code
        if changes.get("description") is not None:
            role.description = changes["description"].strip()
        if isinstance(changes.get("permissions"), list):
            role.permissions = list(changes["permissions"])
        role.updated_at = utcnow()

        await self.roles.update(role)
        await self._commit_role()
        await self.uow.refresh(role)
        return role

    async def assign_roles(self, user_id: int, roles: Any) -> List[str]:
        if not isinstance(roles, list):
            raise ValidationError("roles must be an array")
        target = await self.users.get_by_id(user_id)
        if not target:
            raise NotFoundError("User not found")

        target.role_ids = [str(r) for r in roles]
        await self.users.update(target)
        await self.uow.commit()
        logger.info(f"Roles {target.role_ids} assigned to user {user_id}")
        return target.role_ids

    async def seed_default_permissions(self) -> int:
        """Insert the default permission catalog; existing codes are left untouched."""
        created = 0
        for entry in DEFAULT_PERMISSIONS:
            if await self.permissions.get_by_code(entry["code"]):
                continue
            await self.permissions.create(Permission(**entry, is_system=True))
            created += 1
        await self.uow.commit()
        return created

    async def _commit_role(self) -> None:
        # roles.code is unique; a concurrent insert of the same code lands here
        try:
            await self.uow.commit()
        except IntegrityError:
            await self.uow.rollback()
            raise ValidationError("Role code already exists")
