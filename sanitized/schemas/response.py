"""
Error response schemas for sanitize pipeline failures.
"""
from typing import Literal

from pydantic import BaseModel, Field


class ResponseMetadata(BaseModel):
    """Metadata included in error responses."""
    request_id: str = Field(..., alias="requestId", description="Request ID for tracing")

    class Config:
        populate_by_name = True


class ErrorDetail(BaseModel):
    """Error details for rejected requests."""
    code: Literal[
        "MISSING_BODY",
        "VALIDATION_REJECTED",
        "CONSTRUCTION_REJECTED",
        "NOT_FOUND",
    ] = Field(
        ...,
        description="Error code"
    )
    message: str = Field(..., description="Client-safe error message")
    retryable: bool = Field(default=False, description="Whether the request can be retried unchanged")


class ErrorResponse(BaseModel):
    """Error response."""
    success: Literal[False] = False
    error: ErrorDetail = Field(..., description="Error details")
    metadata: ResponseMetadata = Field(..., description="Response metadata")

    class Config:
        populate_by_name = True
