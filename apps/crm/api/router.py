from typing import Optional
from fastapi import APIRouter
from framework.resource import build_owned_router
from ..schemas import ActivitySchema, CompanySchema, ContactSchema, DealSchema, LeadSchema
from ..service import ActivityService, CompanyService, ContactService, DealService, LeadService

def contact_filters(company_id: Optional[str] = None) -> dict:
    return {"company_id": company_id}

def lead_filters(status: Optional[str] = None) -> dict:
    return {"status": status}

def deal_filters(stage: Optional[str] = None) -> dict:
    return {"stage": stage}

def activity_filters(
    contact_id: Optional[str] = None,
    lead_id: Optional[str] = None,
    deal_id: Optional[str] = None,
) -> dict:
    return {"contact_id": contact_id, "lead_id": lead_id, "deal_id": deal_id}

router = APIRouter()
router.include_router(build_owned_router(CompanyService, CompanySchema), prefix="/companies", tags=["crm: companies"])
router.include_router(build_owned_router(ContactService, ContactSchema, filters=contact_filters), prefix="/contacts", tags=["crm: contacts"])
router.include_router(build_owned_router(LeadService, LeadSchema, filters=lead_filters), prefix="/leads", tags=["crm: leads"])
router.include_router(build_owned_router(DealService, DealSchema, filters=deal_filters), prefix="/deals", tags=["crm: deals"])
router.include_router(build_owned_router(ActivityService, ActivitySchema, filters=activity_filters), prefix="/activities", tags=["crm: activities"])
