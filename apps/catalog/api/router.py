from typing import Optional
from framework.resource import build_owned_router
from ..schemas import CategorySchema, ItemSchema
from ..service import CategoryService, ItemService

def item_filters(category: Optional[str] = None) -> dict:
    return {"category": category}

items_router = build_owned_router(ItemService, ItemSchema, filters=item_filters)
categories_router = build_owned_router(CategoryService, CategorySchema)
