from sqlmodel import Field
from framework.resource.models import OwnedModel

DEFAULT_COLOR = "#3B82F6"

class Category(OwnedModel, table=True):
    """Item grouping; items reference it by name."""
    __tablename__ = "categories"
    name: str = Field(max_length=255)
    description: str = Field(default="")
    color: str = Field(default=DEFAULT_COLOR, max_length=20)

class Item(OwnedModel, table=True):
    """Product or service that can be put on an invoice."""
    __tablename__ = "items"
    name: str = Field(max_length=255)
    description: str = Field(default="")
    category: str = Field(default="", index=True, max_length=255)
    category_color: str = Field(default=DEFAULT_COLOR, max_length=20)
    price: float = Field(default=0)
    unit: str = Field(default="unit", max_length=50)
    sku: str = Field(default="", max_length=100)
    tax_rate: float = Field(default=0)
    usage_count: int = Field(default=0)
