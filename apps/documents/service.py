from typing import Any, Dict, List
from pydantic import BaseModel
from framework.resource import OwnedResourceService
from .models import Document

REQUIRED_MESSAGE = "name, entity_type, and entity_id are required"

# Columns returned by list and create; content is only returned by get
SUMMARY_FIELDS = ("id", "name", "entity_type", "entity_id", "mime_type", "size", "uploaded_by", "created_at")


class DocumentService(OwnedResourceService[Document]):
    model = Document
    resource_name = "Document"
    required_fields = {
        "name": REQUIRED_MESSAGE,
        "entity_type": REQUIRED_MESSAGE,
        "entity_id": REQUIRED_MESSAGE,
    }
    trimmed_fields = ("mime_type", "storage_ref")

    @staticmethod
    def summary(document: Document) -> Dict[str, Any]:
        return {field: getattr(document, field) for field in SUMMARY_FIELDS}

    async def before_create(self, values: Dict[str, Any]) -> Dict[str, Any]:
        if not values.get("mime_type"):
            values["mime_type"] = self.default_for("mime_type")
        values["size"] = len((values.get("content") or "").encode("utf-8"))
        values["uploaded_by"] = self.owner_id
        return values

    async def list(self, **filters) -> List[Dict[str, Any]]:
        return [self.summary(document) for document in await super().list(**filters)]

    async def create(self, payload: BaseModel) -> Dict[str, Any]:
        return self.summary(await super().create(payload))
