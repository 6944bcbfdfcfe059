from framework.resource import build_owned_router
from ..schemas import BranchSchema
from ..service import BranchService

router = build_owned_router(BranchService, BranchSchema)
