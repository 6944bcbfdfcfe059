from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from framework.resource import build_owned_router, service_dependency
from ..schemas import EmailTemplateSchema, MarketingListSchema, MarketingListUpdateSchema, WorkflowSchema
from ..service import EmailTemplateService, MarketingListService, WorkflowService

templates_router = APIRouter()

@templates_router.post("/seed-defaults", summary="Seed default templates")
async def seed_default_templates(service: EmailTemplateService = Depends(service_dependency(EmailTemplateService))):
    """Insert the starter templates once per user; later calls are a no-op."""
    count = await service.seed_defaults()
    if count == 0:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"message": "Templates already exist for this user, skipping seed."}
        )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "Default templates seeded", "count": count}
    )

build_owned_router(EmailTemplateService, EmailTemplateSchema, router=templates_router)

router = APIRouter()
router.include_router(templates_router, prefix="/templates", tags=["marketing: templates"])
router.include_router(build_owned_router(MarketingListService, MarketingListSchema, MarketingListUpdateSchema), prefix="/lists", tags=["marketing: lists"])
router.include_router(build_owned_router(WorkflowService, WorkflowSchema), prefix="/workflows", tags=["marketing: workflows"])
