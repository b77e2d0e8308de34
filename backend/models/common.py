"""
Common/Base models used across multiple domains
"""
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    timestamp: str


class MessageResponse(BaseModel):
    """Error body returned by every failing endpoint"""
    message: str
