from typing import Optional
from fastapi import Depends
from framework.resource import build_owned_router
from framework.security import require_permissions
from ..schemas import InvoiceSchema
from ..service import InvoiceService

def invoice_filters(status: Optional[str] = None) -> dict:
    return {"status": status}

# Staff need a role granting the matching invoices:* permission; owners and admins always pass
router = build_owned_router(
    InvoiceService,
    InvoiceSchema,
    filters=invoice_filters,
    operation_dependencies={
        "list": [Depends(require_permissions("invoices:read"))],
        "get": [Depends(require_permissions("invoices:read"))],
        "create": [Depends(require_permissions("invoices:create"))],
        "update": [Depends(require_permissions("invoices:update"))],
        "delete": [Depends(require_permissions("invoices:delete"))],
    },
)
