"""
Model registration for migrations: import all models that should be migrated by Alembic here.
When adding/removing apps, add/remove the corresponding imports here; no need to change alembic/env.py.
"""
from apps.identity.models import User
from apps.access.models import Permission, Role
from apps.crm.models import Activity, Company, Contact, Deal, Lead
from apps.marketing.models import EmailTemplate, MarketingList, Workflow
from apps.documents.models import Document
from apps.organization.models import Branch
from apps.catalog.models import Category, Item
from apps.invoicing.models import Invoice

__all__ = [
    "User",
    "Permission",
    "Role",
    "Company",
    "Contact",
    "Lead",
    "Deal",
    "Activity",
    "EmailTemplate",
    "MarketingList",
    "Workflow",
    "Document",
    "Branch",
    "Category",
    "Item",
    "Invoice",
]
