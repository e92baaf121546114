from pydantic import BaseModel
from typing import Any, Optional


class APIResponse(BaseModel):
    """Standard read envelope"""
    data: Optional[Any] = None
    cached: bool = False
    timestamp: str


class ErrorResponse(BaseModel):
    """Envelope returned when a read fails"""
    error: str
    data: Optional[Any] = None
    cached: bool = False
    timestamp: str
