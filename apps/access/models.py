from sqlmodel import SQLModel, Field, JSON, Column
from typing import List, Optional
from datetime import datetime
from framework.resource.models import new_id, utcnow

PERMISSION_SCOPES = ("own", "branch", "all")

class Permission(SQLModel, table=True):
    """Fine-grained permission, code format resource:action (e.g. invoices:create)."""
    __tablename__ = "permissions"
    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    code: str = Field(unique=True, index=True, max_length=100)
    name: str = Field(max_length=255)
    description: str = Field(default="")
    resource: str = Field(index=True, max_length=100)
    action: str = Field(max_length=50)
    scope: str = Field(default="all", max_length=10)  # own, branch, all
    is_system: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utcnow)

class Role(SQLModel, table=True):
    """Named role grouping permission ids; shared across the installation."""
    __tablename__ = "roles"
    id: str = Field(default_factory=new_id, primary_key=True, max_length=32)
    name: str = Field(max_length=255)
    code: str = Field(unique=True, index=True, max_length=100)
    description: str = Field(default="")
    permissions: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    is_system: bool = Field(default=False)
    created_by: Optional[int] = Field(default=None, foreign_key="users.id")
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
