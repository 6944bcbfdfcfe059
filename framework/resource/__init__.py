"""
Owned resources: records tagged with an owning user and only reachable through owner-scoped queries.
"""

from .models import OwnedModel, new_id, utcnow
from .router import build_owned_router, service_dependency
from .service import OwnedResourceService, Related

__all__ = ["OwnedModel", "OwnedResourceService", "Related", "build_owned_router", "service_dependency", "new_id", "utcnow"]
