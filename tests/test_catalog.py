"""Item and category API test cases."""
import pytest
from httpx import AsyncClient

ITEMS = "/api/items"
CATEGORIES = "/api/categories"


class TestItems:

    @pytest.mark.asyncio
    async def test_create_defaults(self, client: AsyncClient, headers_a):
        response = await client.post(ITEMS, json={"name": " Printer paper ", "price": 45}, headers=headers_a)

        assert response.status_code == 201
        item = response.json()
        assert item["name"] == "Printer paper"
        assert item["unit"] == "unit"
        assert item["category_color"] == "#3B82F6"
        assert item["tax_rate"] == 0
        assert item["usage_count"] == 0

    @pytest.mark.asyncio
    async def test_name_required(self, client: AsyncClient, headers_a):
        response = await client.post(ITEMS, json={"price": 10}, headers=headers_a)

        assert response.status_code == 400
        assert response.json() == {"message": "Item name is required"}

    @pytest.mark.asyncio
    async def test_negative_price(self, client: AsyncClient, headers_a):
        response = await client.post(ITEMS, json={"name": "Paper", "price": -1}, headers=headers_a)

        assert response.status_code == 400
        assert response.json() == {"message": "Item price cannot be negative"}

    @pytest.mark.asyncio
    async def test_usage_count_not_writable(self, client: AsyncClient, headers_a):
        response = await client.post(ITEMS, json={"name": "Paper", "usage_count": 99}, headers=headers_a)

        assert response.json()["usage_count"] == 0

    @pytest.mark.asyncio
    async def test_filter_by_category_and_delete(self, client: AsyncClient, headers_a):
        paper = (await client.post(ITEMS, json={"name": "Paper", "category": "Stationery"}, headers=headers_a)).json()
        await client.post(ITEMS, json={"name": "Laptop", "category": "Hardware"}, headers=headers_a)

        response = await client.get(ITEMS, params={"category": "Stationery"}, headers=headers_a)
        assert [i["name"] for i in response.json()] == ["Paper"]

        response = await client.delete(f"{ITEMS}/{paper['id']}", headers=headers_a)
        assert response.json() == {"message": "Item removed"}


class TestCategories:

    @pytest.mark.asyncio
    async def test_item_count_by_name(self, client: AsyncClient, headers_a, headers_b):
        category = (await client.post(CATEGORIES, json={"name": "Stationery"}, headers=headers_a)).json()
        await client.post(CATEGORIES, json={"name": "Hardware"}, headers=headers_a)
        for name in ("Paper", "Pens"):
            await client.post(ITEMS, json={"name": name, "category": "Stationery"}, headers=headers_a)
        # Another owner's items never count
        await client.post(ITEMS, json={"name": "Paper", "category": "Stationery"}, headers=headers_b)

        listed = {c["name"]: c["item_count"] for c in (await client.get(CATEGORIES, headers=headers_a)).json()}
        single = (await client.get(f"{CATEGORIES}/{category['id']}", headers=headers_a)).json()

        assert listed == {"Stationery": 2, "Hardware": 0}
        assert single["item_count"] == 2
        assert single["color"] == "#3B82F6"

    @pytest.mark.asyncio
    async def test_name_required(self, client: AsyncClient, headers_a):
        response = await client.post(CATEGORIES, json={"color": "#000000"}, headers=headers_a)

        assert response.status_code == 400
        assert response.json() == {"message": "Category name is required"}

    @pytest.mark.asyncio
    async def test_update_and_remove(self, client: AsyncClient, headers_a):
        category = (await client.post(CATEGORIES, json={"name": "Misc"}, headers=headers_a)).json()

        response = await client.put(f"{CATEGORIES}/{category['id']}", json={"color": "#10B981"}, headers=headers_a)
        assert response.json()["color"] == "#10B981"
        assert response.json()["name"] == "Misc"

        response = await client.delete(f"{CATEGORIES}/{category['id']}", headers=headers_a)
        assert response.json() == {"message": "Category removed"}

    @pytest.mark.asyncio
    async def test_update_missing(self, client: AsyncClient, headers_a):
        response = await client.put(f"{CATEGORIES}/{'0' * 32}", json={"name": "X"}, headers=headers_a)

        assert response.status_code == 404
        assert response.json() == {"message": "Category not found"}
