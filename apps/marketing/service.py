from typing import Any, Dict
from loguru import logger
from framework.exceptions.handler import ValidationError
from framework.resource import OwnedResourceService
from .defaults import DEFAULT_TEMPLATES
from .models import EmailTemplate, MarketingList, Workflow, ACTION_TYPES, LIST_TYPES, TRIGGER_TYPES


class EmailTemplateService(OwnedResourceService[EmailTemplate]):
    model = EmailTemplate
    resource_name = "Template"
    required_fields = {"name": "Template name is required"}

    async def seed_defaults(self) -> int:
        """Copy the starter templates into the caller's account; returns 0 if they already have any."""
        if await self.repo.count_owned(self.owner_id) > 0:
            return 0
        templates = [EmailTemplate(**template, user_id=self.owner_id) for template in DEFAULT_TEMPLATES]
        await self.repo.add_all(templates)
        await self._commit()
        logger.info(f"Seeded {len(templates)} default templates | owner={self.owner_id}")
        return len(templates)


class MarketingListService(OwnedResourceService[MarketingList]):
    model = MarketingList
    resource_name = "List"
    required_fields = {"name": "List name is required"}
    trimmed_fields = ("description",)
    choices = {"type": LIST_TYPES}


class WorkflowService(OwnedResourceService[Workflow]):
    model = Workflow
    resource_name = "Workflow"
    required_fields = {"name": "Workflow name is required"}
    choices = {"trigger_type": TRIGGER_TYPES}

    def validate(self, values: Dict[str, Any], partial: bool = False) -> None:
        super().validate(values, partial)
        for action in values.get("actions") or []:
            if action.get("type") not in ACTION_TYPES:
                raise ValidationError(
                    f"Invalid action type: must be one of {', '.join(ACTION_TYPES)}",
                    detail={"field": "actions", "allowed": list(ACTION_TYPES)}
                )
