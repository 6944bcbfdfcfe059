from sqlmodel import Field, JSON, Column
from typing import Optional, List
from datetime import date, datetime
from framework.resource.models import OwnedModel

LEAD_STATUSES = ("new", "contacted", "qualified", "converted", "lost")
DEAL_STAGES = ("qualification", "proposal", "negotiation", "won", "lost")
ACTIVITY_TYPES = ("email", "call", "meeting", "note", "task")

class Company(OwnedModel, table=True):
    """Organization a user does business with."""
    __tablename__ = "crm_companies"
    name: str = Field(max_length=255)
    website: str = Field(default="")
    phone: str = Field(default="")
    address: str = Field(default="")
    industry: str = Field(default="")
    notes: str = Field(default="")

class Contact(OwnedModel, table=True):
    """Person, optionally linked to a company."""
    __tablename__ = "crm_contacts"
    company_id: Optional[str] = Field(default=None, index=True, max_length=32)
    first_name: str = Field(max_length=255)
    last_name: str = Field(default="")
    email: str = Field(default="")
    phone: str = Field(default="")
    job_title: str = Field(default="")
    source: str = Field(default="")
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    notes: str = Field(default="")

class Lead(OwnedModel, table=True):
    """Sales lead moving new -> contacted -> qualified -> converted (or lost)."""
    __tablename__ = "crm_leads"
    name: str = Field(max_length=255)
    contact_id: Optional[str] = Field(default=None, max_length=32)
    company_id: Optional[str] = Field(default=None, max_length=32)
    email: str = Field(default="")
    phone: str = Field(default="")
    status: str = Field(default="new", index=True, max_length=20)
    score: int = Field(default=0)  # 0-100
    source: str = Field(default="")
    campaign_id: Optional[str] = Field(default=None, max_length=32)
    notes: str = Field(default="")

class Deal(OwnedModel, table=True):
    """Sales opportunity with a value and a pipeline stage."""
    __tablename__ = "crm_deals"
    name: str = Field(max_length=255)
    contact_id: Optional[str] = Field(default=None, max_length=32)
    lead_id: Optional[str] = Field(default=None, max_length=32)
    company_id: Optional[str] = Field(default=None, max_length=32)
    value: float = Field(default=0)
    currency: str = Field(default="GHS", max_length=8)
    stage: str = Field(default="qualification", index=True, max_length=20)
    expected_close_date: Optional[date] = Field(default=None)
    notes: str = Field(default="")

class Activity(OwnedModel, table=True):
    """Email, call, meeting, note or task logged against a contact, lead or deal."""
    __tablename__ = "crm_activities"
    contact_id: Optional[str] = Field(default=None, index=True, max_length=32)
    lead_id: Optional[str] = Field(default=None, index=True, max_length=32)
    deal_id: Optional[str] = Field(default=None, index=True, max_length=32)
    type: str = Field(max_length=20)
    title: str = Field(default="")
    description: str = Field(default="")
    due_date: Optional[datetime] = Field(default=None)
    end_date: Optional[datetime] = Field(default=None)
    location: str = Field(default="")
    completed_at: Optional[datetime] = Field(default=None)
