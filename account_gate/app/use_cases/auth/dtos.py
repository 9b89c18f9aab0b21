"""
Authentication Use Case DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str
