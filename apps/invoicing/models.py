from sqlmodel import Field, JSON, Column
from typing import Any, Dict, List, Optional
from datetime import date
from framework.resource.models import OwnedModel

INVOICE_STATUSES = ("Unpaid", "Partially Paid", "Fully Paid")

class Invoice(OwnedModel, table=True):
    """
    Sales invoice. `items` holds the line items
    ({sn, description, quantity, unit_price, amount}); totals are derived
    from them on every write and never taken from the client.
    """
    __tablename__ = "invoices"
    invoice_number: str = Field(index=True, max_length=50)
    invoice_date: date = Field(default_factory=date.today)
    due_date: Optional[date] = Field(default=None)
    bill_from: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    bill_to: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    items: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    notes: str = Field(default="")
    payment_terms: str = Field(default="Net 15", max_length=50)
    status: str = Field(default="Unpaid", index=True, max_length=20)
    subtotal: float = Field(default=0)
    discount_amount: float = Field(default=0)
    grand_total: float = Field(default=0)
    amount_paid: float = Field(default=0)
    balance_due: float = Field(default=0)
