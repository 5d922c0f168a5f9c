"""Response models used only by the HTTP layer."""

from pydantic import BaseModel


class MarkAllReadResponse(BaseModel):
    """Response for bulk mark-as-read."""
    updated: int


class ErrorResponse(BaseModel):
    """Body returned for handled errors."""
    detail: str
    error_code: str


class HealthResponse(BaseModel):
    status: str = "ok"
