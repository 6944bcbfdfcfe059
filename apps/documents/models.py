from sqlmodel import Field, Column, Text
from typing import Optional
from framework.resource.models import OwnedModel

class Document(OwnedModel, table=True):
    """File attached to another record, identified by (entity_type, entity_id); content is stored inline."""
    __tablename__ = "documents"
    name: str = Field(max_length=255)
    entity_type: str = Field(index=True, max_length=50)
    entity_id: str = Field(index=True, max_length=64)
    mime_type: str = Field(default="application/octet-stream", max_length=255)
    size: int = Field(default=0)  # bytes (UTF-8) of content
    content: str = Field(default="", sa_column=Column(Text))
    storage_ref: str = Field(default="")
    uploaded_by: Optional[int] = Field(default=None, foreign_key="users.id")
