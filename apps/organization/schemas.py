from pydantic import BaseModel
from typing import Optional

class BranchSchema(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    tin: Optional[str] = None
    is_default: Optional[bool] = None
    status: Optional[str] = None
