"""
Router factory for owned resources.

build_owned_router(...) binds the five REST operations of an
OwnedResourceService subclass:

    GET    ""        list (200, array, newest first)
    GET    "/{id}"   get (200 / 404)
    POST   ""        create (201 / 400)
    PUT    "/{id}"   partial update (200 / 400 / 404)
    DELETE "/{id}"   delete (200 {"message"} / 404)

Every route requires an authenticated user; the owner is always the caller.
`operation_dependencies` adds per-operation guards, e.g.
{"list": [Depends(require_permissions("invoices:read"))]}.
"""

from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Type
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from framework.repository.unit_of_work import UnitOfWork, get_uow
from framework.response import ResponseModel
from framework.security import CurrentUser, get_current_user
from .service import OwnedResourceService

ALL_OPERATIONS = ("list", "get", "create", "update", "delete")


def no_filters() -> dict:
    return {}


def service_dependency(service_class: Type[OwnedResourceService]) -> Callable[..., OwnedResourceService]:
    """Dependency factory: build the service for the current user and request session."""
    def _get_service(
        uow: UnitOfWork = Depends(get_uow),
        current_user: CurrentUser = Depends(get_current_user),
    ) -> OwnedResourceService:
        return service_class(uow, current_user)

    return _get_service


def build_owned_router(
    service_class: Type[OwnedResourceService],
    create_schema: Type[BaseModel],
    update_schema: Optional[Type[BaseModel]] = None,
    filters: Callable[..., dict] = no_filters,
    operations: Iterable[str] = ALL_OPERATIONS,
    router: Optional[APIRouter] = None,
    operation_dependencies: Optional[Dict[str, Sequence[Any]]] = None,
) -> APIRouter:
    """Create (or extend) an APIRouter exposing the owned-resource operations of `service_class`."""
    router = router or APIRouter()
    operations = set(operations)
    extra = operation_dependencies or {}
    name = service_class.resource_name
    get_service = service_dependency(service_class)
    update_schema = update_schema or create_schema

    if "list" in operations:
        @router.get("", summary=f"List {name} records", dependencies=list(extra.get("list", ())))
        async def list_resources(
            filter_values: dict = Depends(filters),
            service: OwnedResourceService = Depends(get_service),
        ):
            """Records owned by the caller, newest first."""
            return await service.list(**filter_values)

    if "create" in operations:
        @router.post("", status_code=status.HTTP_201_CREATED, summary=f"Create {name}", dependencies=list(extra.get("create", ())))
        async def create_resource(
            payload: create_schema,
            service: OwnedResourceService = Depends(get_service),
        ):
            return await service.create(payload)

    if "get" in operations:
        @router.get("/{item_id}", summary=f"Get {name}", dependencies=list(extra.get("get", ())))
        async def get_resource(
            item_id: str,
            service: OwnedResourceService = Depends(get_service),
        ):
            return await service.read(item_id)

    if "update" in operations:
        @router.put("/{item_id}", summary=f"Update {name}", dependencies=list(extra.get("update", ())))
        async def update_resource(
            item_id: str,
            payload: update_schema,
            service: OwnedResourceService = Depends(get_service),
        ):
            """Partial update: only keys present in the body are written."""
            return await service.update(item_id, payload)

    if "delete" in operations:
        @router.delete(
            "/{item_id}", response_model=ResponseModel, summary=f"Delete {name}",
            dependencies=list(extra.get("delete", ())),
        )
        async def delete_resource(
            item_id: str,
            service: OwnedResourceService = Depends(get_service),
        ):
            message = await service.delete(item_id)
            return ResponseModel.success(message)

    return router
