from framework.resource import OwnedResourceService
from .models import Branch, BRANCH_STATUSES


class BranchService(OwnedResourceService[Branch]):
    model = Branch
    resource_name = "Branch"
    required_fields = {"name": "Branch name is required"}
    trimmed_fields = ("address", "phone", "email", "tin")
    lowercase_fields = ("email",)
    choices = {"status": BRANCH_STATUSES}

    def list_order(self):
        """Default branch first, then oldest first."""
        return (Branch.is_default.desc(), Branch.created_at.asc())

    async def after_save(self, entity: Branch) -> None:
        if entity.is_default:
            await self.repo.update_owned_where(self.owner_id, {"is_default": False}, exclude_id=entity.id)
