from typing import Any, Dict
from framework.exceptions.handler import ValidationError
from framework.resource import OwnedResourceService, Related
from .models import Activity, Company, Contact, Deal, Lead, ACTIVITY_TYPES, DEAL_STAGES, LEAD_STATUSES

# Reference summaries embedded on reads
COMPANY = Related("company_id", Company, "company")
CONTACT = Related("contact_id", Contact, "contact", ("first_name", "last_name", "email"))
LEAD = Related("lead_id", Lead, "lead", ("name", "email"))
DEAL = Related("deal_id", Deal, "deal", ("name", "value", "stage"))


class CompanyService(OwnedResourceService[Company]):
    model = Company
    resource_name = "Company"
    required_fields = {"name": "Company name is required"}
    trimmed_fields = ("website", "phone", "address", "industry")


class ContactService(OwnedResourceService[Contact]):
    model = Contact
    resource_name = "Contact"
    required_fields = {"first_name": "First name is required"}
    trimmed_fields = ("last_name", "email", "phone", "job_title", "source")
    lowercase_fields = ("email",)
    related = (COMPANY,)

    def clean(self, values: Dict[str, Any]) -> Dict[str, Any]:
        values = super().clean(values)
        if values.get("tags"):
            values["tags"] = [t.strip() for t in values["tags"] if t and t.strip()]
        return values


class LeadService(OwnedResourceService[Lead]):
    model = Lead
    resource_name = "Lead"
    required_fields = {"name": "Lead name is required"}
    trimmed_fields = ("email", "phone", "source")
    lowercase_fields = ("email",)
    choices = {"status": LEAD_STATUSES}
    related = (CONTACT, COMPANY)

    def validate(self, values: Dict[str, Any], partial: bool = False) -> None:
        super().validate(values, partial)
        if "score" in values and not 0 <= values["score"] <= 100:
            raise ValidationError("Score must be between 0 and 100")


class DealService(OwnedResourceService[Deal]):
    model = Deal
    resource_name = "Deal"
    required_fields = {"name": "Deal name is required"}
    trimmed_fields = ("currency",)
    choices = {"stage": DEAL_STAGES}
    related = (CONTACT, LEAD, COMPANY)

    def validate(self, values: Dict[str, Any], partial: bool = False) -> None:
        super().validate(values, partial)
        if "value" in values and values["value"] < 0:
            raise ValidationError("Deal value cannot be negative")


class ActivityService(OwnedResourceService[Activity]):
    model = Activity
    resource_name = "Activity"
    required_fields = {"type": "Activity type is required"}
    trimmed_fields = ("title", "location")
    choices = {"type": ACTIVITY_TYPES}
    related = (CONTACT, LEAD, DEAL)
