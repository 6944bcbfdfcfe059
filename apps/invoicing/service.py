import time
from typing import Any, Dict, Optional
from framework.exceptions.handler import ValidationError
from framework.resource import OwnedResourceService
from .models import Invoice, INVOICE_STATUSES

# Spellings clients send for the three statuses
STATUS_ALIASES = {
    "paid": "Fully Paid",
    "fully paid": "Fully Paid",
    "partially paid": "Partially Paid",
    "partial": "Partially Paid",
    "unpaid": "Unpaid",
    "pending": "Unpaid",
    "overdue": "Unpaid",
}

# Changing any of these recomputes the payment status
TOTALS_INPUTS = ("items", "discount_amount", "amount_paid")


def money(value: float) -> float:
    return round(float(value), 2)


def next_invoice_number() -> str:
    return f"INV-{int(time.time() * 1000)}"


def payment_status(amount_paid: float, grand_total: float) -> str:
    if amount_paid <= 0:
        return "Unpaid"
    if amount_paid >= grand_total:
        return "Fully Paid"
    return "Partially Paid"


class InvoiceService(OwnedResourceService[Invoice]):
    """Invoices with server-side totals: subtotal, discount, grand total and balance (no tax)."""

    model = Invoice
    resource_name = "Invoice"
    trimmed_fields = ("notes", "payment_terms")
    choices = {"status": INVOICE_STATUSES}

    def clean(self, values: Dict[str, Any]) -> Dict[str, Any]:
        values = super().clean(values)
        if isinstance(values.get("status"), str):
            status = values["status"].strip()
            values["status"] = STATUS_ALIASES.get(status.lower(), status)
        return values

    def validate(self, values: Dict[str, Any], partial: bool = False) -> None:
        super().validate(values, partial)
        if not partial or "items" in values:
            lines = values.get("items") or []
            if not lines:
                raise ValidationError("Invoice must contain at least one item")
            for line in lines:
                if not (line.get("description") or "").strip():
                    raise ValidationError("Item description is required")
                if line.get("quantity", 0) <= 0:
                    raise ValidationError("Item quantity must be greater than 0")
                if line.get("unit_price", 0) < 0:
                    raise ValidationError("Item unit price must be greater than or equal to 0")
        if values.get("amount_paid", 0) < 0:
            raise ValidationError("Amount paid cannot be negative")
        if values.get("discount_amount", 0) < 0:
            raise ValidationError("Discount cannot be negative")

    def with_totals(self, values: Dict[str, Any], entity: Optional[Invoice] = None) -> Dict[str, Any]:
        def current(field):
            if field in values:
                return values[field]
            return getattr(entity, field) if entity is not None else self.default_for(field)

        recompute_status = entity is None or any(field in values for field in TOTALS_INPUTS)
        lines = [
            {
                "sn": sn,
                "description": line["description"].strip(),
                "quantity": line["quantity"],
                "unit_price": line["unit_price"],
                "amount": money(line["quantity"] * line["unit_price"]),
            }
            for sn, line in enumerate(current("items"), start=1)
        ]
        subtotal = money(sum(line["amount"] for line in lines))
        grand_total = money(max(subtotal - current("discount_amount"), 0))
        amount_paid = money(current("amount_paid"))

        values.update(
            items=lines,
            subtotal=subtotal,
            grand_total=grand_total,
            amount_paid=amount_paid,
            balance_due=money(max(grand_total - amount_paid, 0)),
        )
        # An explicit status wins over the one implied by the payment
        if "status" not in values and recompute_status:
            values["status"] = payment_status(amount_paid, grand_total)
        return values

    async def before_create(self, values: Dict[str, Any]) -> Dict[str, Any]:
        values["invoice_number"] = next_invoice_number()
        return self.with_totals(values)

    async def before_update(self, entity: Invoice, values: Dict[str, Any]) -> Dict[str, Any]:
        return self.with_totals(values, entity)
