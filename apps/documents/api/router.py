from typing import Optional
from framework.resource import build_owned_router
from ..schemas import DocumentSchema
from ..service import DocumentService

def document_filters(entity_type: Optional[str] = None, entity_id: Optional[str] = None) -> dict:
    return {"entity_type": entity_type, "entity_id": entity_id}

# Documents are immutable once uploaded: no update route
router = build_owned_router(
    DocumentService,
    DocumentSchema,
    filters=document_filters,
    operations=("list", "create", "get", "delete"),
)
