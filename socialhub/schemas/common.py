"""Response envelopes shared by several endpoints."""
from pydantic import BaseModel


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class StatusResponse(BaseModel):
    status: str = "success"
