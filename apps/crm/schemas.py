from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime

# Every field is optional at the schema level; required fields are checked by the
# services so a missing name yields the resource's own message.

class CompanySchema(BaseModel):
    name: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    industry: Optional[str] = None
    notes: Optional[str] = None

class ContactSchema(BaseModel):
    company_id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None
    source: Optional[str] = None
    tags: Optional[List[str]] = None
    notes: Optional[str] = None

class LeadSchema(BaseModel):
    name: Optional[str] = None
    contact_id: Optional[str] = None
    company_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[str] = None
    score: Optional[int] = None
    source: Optional[str] = None
    campaign_id: Optional[str] = None
    notes: Optional[str] = None

class DealSchema(BaseModel):
    name: Optional[str] = None
    contact_id: Optional[str] = None
    lead_id: Optional[str] = None
    company_id: Optional[str] = None
    value: Optional[float] = None
    currency: Optional[str] = None
    stage: Optional[str] = None
    expected_close_date: Optional[date] = None
    notes: Optional[str] = None

class ActivitySchema(BaseModel):
    contact_id: Optional[str] = None
    lead_id: Optional[str] = None
    deal_id: Optional[str] = None
    type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    completed_at: Optional[datetime] = None
