"""
Generic owned-resource service.

One class carries the whole list/get/create/update/delete contract; each
business resource subclasses it and supplies only its model, its messages,
its validation rules and (optionally) create/update hooks.
"""

from typing import Any, Dict, Generic, List, NamedTuple, Optional, Sequence, Tuple, Type
from loguru import logger
from pydantic import BaseModel
from pydantic_core import PydanticUndefined
from sqlalchemy.exc import SQLAlchemyError

from framework.exceptions.handler import NotFoundError, ValidationError
from framework.repository.base import T
from framework.repository.owned import OwnedRepository
from framework.repository.unit_of_work import UnitOfWork
from framework.security import CurrentUser
from .models import utcnow

# Columns the client can never write
PROTECTED_FIELDS = frozenset({"id", "user_id", "created_at", "updated_at"})


class Related(NamedTuple):
    """Reference embedded on reads: `key` gets the referenced row's `columns` (or None)."""
    field: str
    model: Type[Any]
    key: str
    columns: Tuple[str, ...] = ("name",)


class OwnedResourceService(Generic[T]):
    """Owner-scoped CRUD for one model; `current_user.id` is the owner of everything it touches."""

    model: Type[T]
    resource_name: str = "Resource"
    # field -> message returned when the field is missing or blank
    required_fields: Dict[str, str] = {}
    trimmed_fields: Tuple[str, ...] = ()
    lowercase_fields: Tuple[str, ...] = ()
    # field -> allowed values
    choices: Dict[str, Tuple[str, ...]] = {}
    # references resolved on list/read, always within the caller's own rows
    related: Tuple[Related, ...] = ()
    repository_class = OwnedRepository

    def __init__(self, uow: UnitOfWork, current_user: CurrentUser):
        self.uow = uow
        self.current_user = current_user
        self.repo = uow.get_repository(self.repository_class, self.model)

    @property
    def owner_id(self) -> int:
        return self.current_user.id

    @property
    def not_found_message(self) -> str:
        return f"{self.resource_name} not found"

    @property
    def deleted_message(self) -> str:
        return f"{self.resource_name} deleted"

    # --- field policy ---

    def default_for(self, field: str) -> Any:
        info = self.model.model_fields[field]
        default = info.get_default(call_default_factory=True)
        return None if default is PydanticUndefined else default

    def clean(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Drop unknown/protected keys, turn null into the column default, trim and lowercase strings."""
        cleaned = {}
        for field, value in values.items():
            if field in PROTECTED_FIELDS or field not in self.model.model_fields:
                continue
            if value is None and field not in self.required_fields:
                value = self.default_for(field)
            if isinstance(value, str):
                if field in self.trimmed_fields or field in self.required_fields:
                    value = value.strip()
                if field in self.lowercase_fields:
                    value = value.lower()
            cleaned[field] = value
        return cleaned

    def validate(self, values: Dict[str, Any], partial: bool = False) -> None:
        for field, message in self.required_fields.items():
            if partial and field not in values:
                continue
            value = values.get(field)
            if not isinstance(value, str) or not value:
                raise ValidationError(message)

        for field, allowed in self.choices.items():
            if field in values and values[field] not in allowed:
                raise ValidationError(
                    f"Invalid {field}: must be one of {', '.join(allowed)}",
                    detail={"field": field, "allowed": list(allowed)}
                )

    # --- hooks for specializations ---

    def list_order(self) -> Optional[Sequence[Any]]:
        """Columns to order the list by; None means newest first."""
        return None

    async def before_create(self, values: Dict[str, Any]) -> Dict[str, Any]:
        return values

    async def before_update(self, entity: T, values: Dict[str, Any]) -> Dict[str, Any]:
        return values

    async def after_save(self, entity: T) -> None:
        """Runs inside the transaction, after flush and before commit."""
        return None

    async def present(self, entities: List[T]) -> List[Any]:
        """Shape records for list/read responses; embeds `related` references when declared."""
        if not self.related:
            return entities

        lookups = {}
        for relation in self.related:
            repo = self.uow.get_repository(OwnedRepository, relation.model)
            rows = await repo.get_many_owned(self.owner_id, (getattr(e, relation.field) for e in entities))
            lookups[relation.key] = {row.id: row for row in rows}

        presented = []
        for entity in entities:
            data = entity.model_dump()
            for relation in self.related:
                target = lookups[relation.key].get(getattr(entity, relation.field))
                data[relation.key] = None if target is None else {
                    "id": target.id, **{column: getattr(target, column) for column in relation.columns}
                }
            presented.append(data)
        return presented

    # --- operations ---

    async def list(self, **filters) -> List[Any]:
        entities = await self.repo.list_owned(self.owner_id, order_by=self.list_order(), **filters)
        return await self.present(entities)

    async def get(self, id: str) -> T:
        entity = await self.repo.get_owned(self.owner_id, id)
        if entity is None:
            raise NotFoundError(self.not_found_message)
        return entity

    async def read(self, id: str) -> Any:
        """get() as returned by the API."""
        return (await self.present([await self.get(id)]))[0]

    async def create(self, payload: BaseModel) -> T:
        values = self.clean(payload.model_dump(exclude_unset=True))
        self.validate(values)
        values = await self.before_create(values)

        entity = self.model(**values, user_id=self.owner_id)
        await self.repo.create(entity)
        await self._commit(entity)
        logger.info(f"{self.resource_name} created | id={entity.id} | owner={self.owner_id}")
        return entity

    async def update(self, id: str, payload: BaseModel) -> T:
        entity = await self.get(id)
        values = self.clean(payload.model_dump(exclude_unset=True))
        self.validate(values, partial=True)
        values = await self.before_update(entity, values)

        for field, value in values.items():
            setattr(entity, field, value)
        entity.updated_at = utcnow()
        await self.repo.update(entity)
        await self._commit(entity)
        logger.info(f"{self.resource_name} updated | id={entity.id} | fields={sorted(values)}")
        return entity

    async def delete(self, id: str) -> str:
        deleted = await self.repo.delete_owned(self.owner_id, id)
        if not deleted:
            raise NotFoundError(self.not_found_message)
        await self._commit()
        logger.info(f"{self.resource_name} deleted | id={id} | owner={self.owner_id}")
        return self.deleted_message

    async def _commit(self, entity: Optional[T] = None) -> None:
        try:
            await self.uow.flush()
            if entity is not None:
                await self.after_save(entity)
            await self.uow.commit()
        except SQLAlchemyError:
            await self.uow.rollback()
            raise
        if entity is not None:
            await self.uow.refresh(entity)
