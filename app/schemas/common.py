from typing import Any, Dict
from pydantic import BaseModel


# Error responses: every DomainError is rendered with this shape
class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Dict[str, Any] = {}
