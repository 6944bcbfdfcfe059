import uuid
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


class OwnedModel(SQLModel):
    """Common columns of every owned resource table (inherit with table=True)."""

    id: str = Field(
        default_factory=new_id,
        primary_key=True,
        max_length=32,
        description="Opaque record id (32-char hex)"
    )
    user_id: int = Field(foreign_key="users.id", index=True, description="Owner")
    created_at: datetime = Field(default_factory=utcnow, index=True, description="Created at")
    updated_at: datetime = Field(default_factory=utcnow, description="Updated at")
