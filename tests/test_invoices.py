"""Invoice API test cases: totals, validation and permission checks."""
import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.repository.unit_of_work import UnitOfWork
from apps.access.service import AccessService

BASE = "/api/invoices"

LINES = [
    {"description": "Consulting", "quantity": 2, "unit_price": 150},
    {"description": " Travel ", "quantity": 1, "unit_price": 80.5},
]


async def _create(client: AsyncClient, headers, **overrides) -> dict:
    payload = {"items": LINES, "bill_to": {"client_name": "Acme"}, **overrides}
    response = await client.post(BASE, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestInvoiceTotals:

    @pytest.mark.asyncio
    async def test_create_computes_totals(self, client: AsyncClient, headers_a, user_a):
        invoice = await _create(client, headers_a)

        assert invoice["user_id"] == user_a.id
        assert invoice["invoice_number"].startswith("INV-")
        assert invoice["status"] == "Unpaid"
        assert invoice["payment_terms"] == "Net 15"
        assert [line["sn"] for line in invoice["items"]] == [1, 2]
        assert invoice["items"][1]["description"] == "Travel"
        assert invoice["items"][1]["amount"] == 80.5
        assert invoice["subtotal"] == 380.5
        assert invoice["grand_total"] == 380.5
        assert invoice["balance_due"] == 380.5
        assert invoice["bill_to"]["client_name"] == "Acme"
        assert invoice["bill_from"] == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("paid, status, balance", [(100, "Partially Paid", 180.0), (280, "Fully Paid", 0.0), (500, "Fully Paid", 0.0)])
    async def test_status_follows_payment(self, client: AsyncClient, headers_a, paid, status, balance):
        invoice = await _create(client, headers_a, items=[LINES[0]], discount_amount=20, amount_paid=paid)

        assert invoice["grand_total"] == 280.0
        assert invoice["status"] == status
        assert invoice["balance_due"] == balance

    @pytest.mark.asyncio
    async def test_payment_update_recomputes(self, client: AsyncClient, headers_a):
        invoice = await _create(client, headers_a, items=[LINES[0]])

        response = await client.put(f"{BASE}/{invoice['id']}", json={"amount_paid": 300}, headers=headers_a)

        body = response.json()
        assert response.status_code == 200
        assert body["status"] == "Fully Paid"
        assert body["balance_due"] == 0
        assert body["invoice_number"] == invoice["invoice_number"]

    @pytest.mark.asyncio
    async def test_explicit_status_alias(self, client: AsyncClient, headers_a):
        invoice = await _create(client, headers_a)

        response = await client.put(f"{BASE}/{invoice['id']}", json={"status": "paid"}, headers=headers_a)
        assert response.json()["status"] == "Fully Paid"

        response = await client.put(f"{BASE}/{invoice['id']}", json={"notes": "Thanks"}, headers=headers_a)
        assert response.json()["status"] == "Fully Paid"

    @pytest.mark.asyncio
    async def test_filter_by_status(self, client: AsyncClient, headers_a):
        await _create(client, headers_a)
        await _create(client, headers_a, items=[LINES[0]], amount_paid=300)

        response = await client.get(BASE, params={"status": "Fully Paid"}, headers=headers_a)

        assert [i["grand_total"] for i in response.json()] == [300.0]


class TestInvoiceValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "items, message",
        [
            ([], "Invoice must contain at least one item"),
            ([{"description": " ", "quantity": 1, "unit_price": 1}], "Item description is required"),
            ([{"description": "X", "quantity": 0, "unit_price": 1}], "Item quantity must be greater than 0"),
            ([{"description": "X", "quantity": 1, "unit_price": -1}], "Item unit price must be greater than or equal to 0"),
        ],
    )
    async def test_line_items(self, client: AsyncClient, headers_a, items, message):
        response = await client.post(BASE, json={"items": items}, headers=headers_a)

        assert response.status_code == 400
        assert response.json() == {"message": message}

    @pytest.mark.asyncio
    async def test_items_required(self, client: AsyncClient, headers_a):
        response = await client.post(BASE, json={"notes": "No lines"}, headers=headers_a)

        assert response.status_code == 400
        assert response.json() == {"message": "Invoice must contain at least one item"}

    @pytest.mark.asyncio
    async def test_invalid_date(self, client: AsyncClient, headers_a):
        response = await client.post(BASE, json={"items": LINES, "invoice_date": "someday"}, headers=headers_a)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_status(self, client: AsyncClient, headers_a):
        response = await client.post(BASE, json={"items": LINES, "status": "Written off"}, headers=headers_a)

        assert response.status_code == 400
        assert response.json()["allowed"] == ["Unpaid", "Partially Paid", "Fully Paid"]

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, headers_a):
        invoice = await _create(client, headers_a)

        response = await client.delete(f"{BASE}/{invoice['id']}", headers=headers_a)

        assert response.json() == {"message": "Invoice deleted"}
        assert (await client.get(f"{BASE}/{invoice['id']}", headers=headers_a)).status_code == 404


class TestInvoicePermissions:

    @pytest.fixture
    async def reader_role_id(self, async_session: AsyncSession) -> str:
        service = AccessService(UnitOfWork(session=async_session))
        await service.seed_default_permissions()
        read = next(p for p in await service.list_permissions() if p.code == "invoices:read")
        role = await service.create_role({"name": "Invoice reader", "code": "invoice-reader", "permissions": [read.id]})
        return role.id

    @pytest.mark.asyncio
    async def test_staff_without_role_is_forbidden(self, client: AsyncClient, staff_user, auth_headers):
        response = await client.get(BASE, headers=auth_headers(staff_user))

        assert response.status_code == 403
        assert response.json() == {"message": "Insufficient permissions", "required": ["invoices:read"]}

    @pytest.mark.asyncio
    async def test_granting_role_allows_only_its_codes(
        self, client: AsyncClient, headers_a, staff_user, auth_headers, reader_role_id
    ):
        response = await client.put(f"/api/erp/users/{staff_user.id}/roles", json={"roles": [reader_role_id]}, headers=headers_a)
        assert response.status_code == 200
        staff_headers = auth_headers(staff_user)

        listed = await client.get(BASE, headers=staff_headers)
        created = await client.post(BASE, json={"items": LINES}, headers=staff_headers)

        assert listed.status_code == 200
        assert listed.json() == []
        assert created.status_code == 403
        assert created.json() == {"message": "Insufficient permissions", "required": ["invoices:create"]}

    @pytest.mark.asyncio
    async def test_revoking_role_takes_effect_immediately(
        self, client: AsyncClient, headers_a, staff_user, auth_headers, reader_role_id
    ):
        await client.put(f"/api/erp/users/{staff_user.id}/roles", json={"roles": [reader_role_id]}, headers=headers_a)
        staff_headers = auth_headers(staff_user)
        assert (await client.get(BASE, headers=staff_headers)).status_code == 200

        await client.put(f"/api/erp/users/{staff_user.id}/roles", json={"roles": []}, headers=headers_a)

        assert (await client.get(BASE, headers=staff_headers)).status_code == 403

    @pytest.mark.asyncio
    async def test_owner_bypasses_permission_check(self, client: AsyncClient, headers_a):
        assert (await client.get(BASE, headers=headers_a)).status_code == 200
