from sqlmodel import Field
from framework.resource.models import OwnedModel

BRANCH_STATUSES = ("active", "inactive")

class Branch(OwnedModel, table=True):
    """Business location; at most one branch per owner is the default."""
    __tablename__ = "branches"
    name: str = Field(max_length=255)
    address: str = Field(default="")
    phone: str = Field(default="")
    email: str = Field(default="")
    tin: str = Field(default="", max_length=50)  # tax identification number
    is_default: bool = Field(default=False)
    status: str = Field(default="active", max_length=10)
