from pydantic import BaseModel
from typing import Optional

class DocumentSchema(BaseModel):
    name: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    mime_type: Optional[str] = None
    content: Optional[str] = None
    storage_ref: Optional[str] = None
