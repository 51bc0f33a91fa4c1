from typing import Any, Dict, Optional
from pydantic import BaseModel

from .base import CamelModel

class ErrorResponse(BaseModel):
    success: bool = False
    error_code: str
    message: str
    details: Optional[Dict[str, Any]] = None

class MessageResponse(CamelModel):
    message: str
