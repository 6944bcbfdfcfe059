"""Company API test cases: full lifecycle and tenant isolation."""
import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from apps.crm.models import Company

BASE = "/api/crm/companies"


class TestCompanyLifecycle:
    """Create, update, delete then get."""

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, client: AsyncClient, headers_a, user_a):
        response = await client.post(BASE, json={"name": " Acme "}, headers=headers_a)
        assert response.status_code == 201
        company = response.json()
        assert company["name"] == "Acme"
        assert company["website"] == ""
        assert company["notes"] == ""
        assert company["user_id"] == user_a.id
        assert len(company["id"]) == 32

        response = await client.put(f"{BASE}/{company['id']}", json={"website": "acme.com"}, headers=headers_a)
        assert response.status_code == 200
        updated = response.json()
        assert updated["website"] == "acme.com"
        assert updated["name"] == "Acme"

        response = await client.delete(f"{BASE}/{company['id']}", headers=headers_a)
        assert response.status_code == 200
        assert response.json() == {"message": "Company deleted"}

        response = await client.get(f"{BASE}/{company['id']}", headers=headers_a)
        assert response.status_code == 404
        assert response.json() == {"message": "Company not found"}

    @pytest.mark.asyncio
    async def test_list_newest_first(self, client: AsyncClient, headers_a):
        for name in ("First", "Second", "Third"):
            await client.post(BASE, json={"name": name}, headers=headers_a)

        response = await client.get(BASE, headers=headers_a)

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Third", "Second", "First"]

    @pytest.mark.asyncio
    async def test_update_touches_only_supplied_keys(self, client: AsyncClient, headers_a):
        created = (await client.post(
            BASE, json={"name": "Acme", "phone": "0201234567", "industry": "Retail"}, headers=headers_a
        )).json()

        response = await client.put(f"{BASE}/{created['id']}", json={"industry": " Logistics "}, headers=headers_a)

        body = response.json()
        assert body["industry"] == "Logistics"
        assert body["phone"] == "0201234567"
        assert body["name"] == "Acme"

    @pytest.mark.asyncio
    async def test_update_null_resets_to_default(self, client: AsyncClient, headers_a):
        created = (await client.post(BASE, json={"name": "Acme", "website": "acme.com"}, headers=headers_a)).json()

        response = await client.put(f"{BASE}/{created['id']}", json={"website": None}, headers=headers_a)

        assert response.status_code == 200
        assert response.json()["website"] == ""

    @pytest.mark.asyncio
    async def test_unknown_and_protected_keys_ignored(self, client: AsyncClient, headers_a, user_a):
        response = await client.post(
            BASE, json={"name": "Acme", "user_id": 999, "id": "x" * 32, "color": "red"}, headers=headers_a
        )

        assert response.status_code == 201
        body = response.json()
        assert body["user_id"] == user_a.id
        assert body["id"] != "x" * 32
        assert "color" not in body


class TestCompanyValidation:
    """Required name."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"name": ""}, {"name": "   "}, {"name": None}])
    async def test_create_without_name(self, client: AsyncClient, async_session: AsyncSession, headers_a, payload):
        response = await client.post(BASE, json=payload, headers=headers_a)

        assert response.status_code == 400
        assert response.json() == {"message": "Company name is required"}
        result = await async_session.exec(select(Company))
        assert result.all() == []

    @pytest.mark.asyncio
    async def test_update_with_blank_name(self, client: AsyncClient, headers_a):
        created = (await client.post(BASE, json={"name": "Acme"}, headers=headers_a)).json()

        response = await client.put(f"{BASE}/{created['id']}", json={"name": "  "}, headers=headers_a)

        assert response.status_code == 400
        assert response.json() == {"message": "Company name is required"}

    @pytest.mark.asyncio
    async def test_wrong_type_is_400(self, client: AsyncClient, headers_a):
        response = await client.post(BASE, json={"name": ["not", "a", "string"]}, headers=headers_a)

        assert response.status_code == 400
        assert "errors" in response.json()


class TestCompanyIsolation:
    """Another user's company behaves as if it does not exist."""

    @pytest.fixture
    async def company_of_a(self, client: AsyncClient, headers_a) -> dict:
        response = await client.post(BASE, json={"name": "Acme"}, headers=headers_a)
        return response.json()

    @pytest.mark.asyncio
    async def test_list_hides_foreign(self, client: AsyncClient, headers_b, company_of_a):
        response = await client.get(BASE, headers=headers_b)

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_get_foreign_is_404(self, client: AsyncClient, headers_b, company_of_a):
        response = await client.get(f"{BASE}/{company_of_a['id']}", headers=headers_b)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_foreign_is_404_and_unchanged(self, client: AsyncClient, headers_a, headers_b, company_of_a):
        response = await client.put(f"{BASE}/{company_of_a['id']}", json={"name": "Hijacked"}, headers=headers_b)
        assert response.status_code == 404

        response = await client.get(f"{BASE}/{company_of_a['id']}", headers=headers_a)
        assert response.json()["name"] == "Acme"

    @pytest.mark.asyncio
    async def test_delete_foreign_is_404_and_kept(self, client: AsyncClient, headers_a, headers_b, company_of_a):
        response = await client.delete(f"{BASE}/{company_of_a['id']}", headers=headers_b)
        assert response.status_code == 404

        response = await client.get(f"{BASE}/{company_of_a['id']}", headers=headers_a)
        assert response.status_code == 200
