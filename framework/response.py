from typing import Any, Optional
from pydantic import BaseModel

class ResponseModel(BaseModel):
    """Plain message body used for confirmations and errors."""
    message: str

    @staticmethod
    def success(message: str, **extra: Any):
        return {"message": message, **extra}

    @staticmethod
    def fail(message: str = "error", data: Optional[dict] = None):
        body = {"message": message}
        if data:
            body.update(data)
        return body
