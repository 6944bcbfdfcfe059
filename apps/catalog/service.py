from typing import Any, Dict, List
from framework.exceptions.handler import ValidationError
from framework.resource import OwnedResourceService
from .models import Category, Item
from .repository import ItemRepository


class CategoryService(OwnedResourceService[Category]):
    model = Category
    resource_name = "Category"
    required_fields = {"name": "Category name is required"}
    trimmed_fields = ("description", "color")

    @property
    def deleted_message(self) -> str:
        return "Category removed"

    async def present(self, entities: List[Category]) -> List[Dict[str, Any]]:
        """Adds `item_count`: the caller's items filed under the category's name."""
        items = self.uow.get_repository(ItemRepository, Item)
        counts = await items.count_by_category(self.owner_id)
        return [{**category.model_dump(), "item_count": counts.get(category.name, 0)} for category in entities]


class ItemService(OwnedResourceService[Item]):
    model = Item
    resource_name = "Item"
    required_fields = {"name": "Item name is required"}
    trimmed_fields = ("description", "category", "category_color", "unit", "sku")
    repository_class = ItemRepository

    @property
    def deleted_message(self) -> str:
        return "Item removed"

    def validate(self, values: Dict[str, Any], partial: bool = False) -> None:
        super().validate(values, partial)
        if "price" in values and values["price"] < 0:
            raise ValidationError("Item price cannot be negative")
        if "tax_rate" in values and values["tax_rate"] < 0:
            raise ValidationError("Tax rate cannot be negative")
