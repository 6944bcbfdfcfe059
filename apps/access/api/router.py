from typing import Any, List, Optional
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from framework.repository.unit_of_work import UnitOfWork, get_uow
from framework.security import CurrentUser, get_current_user, require_roles
from ..service import AccessService

router = APIRouter()

admin_only = require_roles("owner", "admin")

class RoleCreateSchema(BaseModel):
    name: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    permissions: Optional[List[str]] = None

class RoleUpdateSchema(RoleCreateSchema):
    pass

class AssignRolesSchema(BaseModel):
    roles: Any = None

def get_access_service(
    uow: UnitOfWork = Depends(get_uow),
    current_user: CurrentUser = Depends(get_current_user)
) -> AccessService:
    """Dependency: create AccessService."""
    return AccessService(uow, current_user)

@router.get("/permissions")
async def list_permissions(service: AccessService = Depends(get_access_service)):
    """All permissions, sorted by resource then action."""
    return await service.list_permissions()

@router.get("/roles")
async def list_roles(service: AccessService = Depends(get_access_service)):
    return await service.list_roles()

@router.post("/roles", status_code=status.HTTP_201_CREATED, dependencies=[Depends(admin_only)])
async def create_role(data: RoleCreateSchema, service: AccessService = Depends(get_access_service)):
    return await service.create_role(data.model_dump(exclude_unset=True))

@router.put("/roles/{role_id}", dependencies=[Depends(admin_only)])
async def update_role(role_id: str, data: RoleUpdateSchema, service: AccessService = Depends(get_access_service)):
    return await service.update_role(role_id, data.model_dump(exclude_unset=True))

@router.put("/users/{user_id}/roles", dependencies=[Depends(admin_only)])
async def assign_roles(user_id: int, data: AssignRolesSchema, service: AccessService = Depends(get_access_service)):
    """Replace the access roles assigned to a user."""
    roles = await service.assign_roles(user_id, data.roles)
    return {"roles": roles}
