from sqlmodel import Field, JSON, Column
from typing import Dict, List
from framework.resource.models import OwnedModel

LIST_TYPES = ("static", "dynamic")
TRIGGER_TYPES = ("manual", "signup", "invoice_sent", "invoice_paid")
ACTION_TYPES = ("send_email", "add_tag", "notify")

class EmailTemplate(OwnedModel, table=True):
    __tablename__ = "email_templates"
    name: str = Field(max_length=255)
    subject: str = Field(default="")
    body: str = Field(default="")

class MarketingList(OwnedModel, table=True):
    """Audience list; dynamic lists keep their membership rules in `conditions`."""
    __tablename__ = "marketing_lists"
    name: str = Field(max_length=255)
    type: str = Field(default="static", max_length=10)  # static, dynamic
    description: str = Field(default="")
    conditions: Dict = Field(default_factory=dict, sa_column=Column(JSON))
    contact_count: int = Field(default=0)

class Workflow(OwnedModel, table=True):
    """Automation: a trigger plus an ordered list of {type, config} actions."""
    __tablename__ = "marketing_workflows"
    name: str = Field(max_length=255)
    trigger_type: str = Field(default="manual", max_length=20)
    trigger_config: Dict = Field(default_factory=dict, sa_column=Column(JSON))
    actions: List[Dict] = Field(default_factory=list, sa_column=Column(JSON))
    is_active: bool = Field(default=True)
