from sqlmodel import SQLModel, Field, JSON, Column
from typing import Optional, List
from datetime import datetime
from framework.resource.models import utcnow

USER_ROLES = ("owner", "admin", "staff", "viewer")

class User(SQLModel, table=True):
    """Account; its id is the owner id of every resource the user creates."""
    __tablename__ = "users"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=320)
    hashed_password: str
    business_name: str = Field(default="")
    phone: str = Field(default="")
    address: str = Field(default="")
    currency: str = Field(default="GHS", max_length=8)
    role: str = Field(default="owner", max_length=20)  # owner, admin, staff, viewer
    # Assigned access roles (ids of apps.access.models.Role)
    role_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utcnow)
