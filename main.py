from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from framework.config import settings
from framework.database.manager import DatabaseManager
from framework.middleware.logging_md import LoggingMiddleware
from framework.middleware.rate_limit import RateLimitMiddleware
from framework.logging.logger import LogConfig
from framework.exceptions.handler import BusinessException, global_exception_handler
from framework.resource.models import utcnow
from apps.identity.api.router import router as identity_router
from apps.access.api.router import router as access_router
from apps.crm.api.router import router as crm_router
from apps.marketing.api.router import router as marketing_router
from apps.documents.api.router import router as documents_router
from apps.organization.api.router import router as organization_router
from apps.catalog.api.router import items_router, categories_router
from apps.invoicing.api.router import router as invoicing_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Release pooled connections on shutdown
    manager = DatabaseManager.get_instance()
    await manager.redis.disconnect()
    await manager.sql.disconnect()


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Initialize logging configuration
LogConfig.setup_logging()

# Register global exception handlers
app.add_exception_handler(BusinessException, global_exception_handler)
app.add_exception_handler(RequestValidationError, global_exception_handler)
app.add_exception_handler(StarletteHTTPException, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# Last added runs first: logging wraps rate limiting so 429s get a trace id too
app.add_middleware(RateLimitMiddleware)
app.add_middleware(LoggingMiddleware)

# Mount routers (prefix from config for easy override in private projects)
app.include_router(identity_router, prefix=settings.API_AUTH_PREFIX, tags=["Identity"])
app.include_router(access_router, prefix=settings.API_ACCESS_PREFIX, tags=["Roles & Permissions"])
app.include_router(crm_router, prefix=settings.API_CRM_PREFIX)
app.include_router(marketing_router, prefix=settings.API_MARKETING_PREFIX)
app.include_router(documents_router, prefix=settings.API_DOCUMENTS_PREFIX, tags=["Documents"])
app.include_router(organization_router, prefix=settings.API_BRANCHES_PREFIX, tags=["Branches"])
app.include_router(items_router, prefix=settings.API_ITEMS_PREFIX, tags=["Items"])
app.include_router(categories_router, prefix=settings.API_CATEGORIES_PREFIX, tags=["Categories"])
app.include_router(invoicing_router, prefix=settings.API_INVOICES_PREFIX, tags=["Invoices"])


@app.get(f"{settings.API_PREFIX}/health", tags=["Health"])
async def health():
    return {
        "success": True,
        "message": "Server is running",
        "timestamp": utcnow().isoformat(),
        "environment": settings.APP_ENV,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
