from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain confirmation message"""
    message: str


class ErrorResponse(BaseModel):
    """Error response model"""
    error: str


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
