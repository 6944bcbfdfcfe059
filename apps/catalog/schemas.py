from pydantic import BaseModel
from typing import Optional

class CategorySchema(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None

class ItemSchema(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    category_color: Optional[str] = None
    price: Optional[float] = None
    unit: Optional[str] = None
    sku: Optional[str] = None
    tax_rate: Optional[float] = None
