from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

class EmailTemplateSchema(BaseModel):
    name: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None

class MarketingListSchema(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    conditions: Optional[Dict[str, Any]] = None

class MarketingListUpdateSchema(MarketingListSchema):
    # Set on update only; new lists start empty
    contact_count: Optional[int] = Field(default=None, ge=0)

class WorkflowAction(BaseModel):
    type: str
    config: Dict[str, Any] = Field(default_factory=dict)

class WorkflowSchema(BaseModel):
    name: Optional[str] = None
    trigger_type: Optional[str] = None
    trigger_config: Optional[Dict[str, Any]] = None
    actions: Optional[List[WorkflowAction]] = None
    is_active: Optional[bool] = None
