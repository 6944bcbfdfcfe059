from pydantic import BaseModel
from typing import List, Optional
from datetime import date

class BillFrom(BaseModel):
    business_name: str = ""
    tin: str = ""
    email: str = ""
    address: str = ""
    phone: str = ""

class BillTo(BaseModel):
    client_name: str = ""
    email: str = ""
    address: str = ""
    phone: str = ""

class InvoiceLine(BaseModel):
    description: str = ""
    quantity: float = 0
    unit_price: float = 0

class InvoiceSchema(BaseModel):
    invoice_date: Optional[date] = None
    due_date: Optional[date] = None
    bill_from: Optional[BillFrom] = None
    bill_to: Optional[BillTo] = None
    items: Optional[List[InvoiceLine]] = None
    notes: Optional[str] = None
    payment_terms: Optional[str] = None
    status: Optional[str] = None
    discount_amount: Optional[float] = None
    amount_paid: Optional[float] = None
