"""Common output schemas for API responses.

This module contains shared Pydantic models for common API responses
like error messages and status information.
"""

from pydantic import BaseModel
from typing import Optional, Any


class ErrorResponse(BaseModel):
    """Schema for error responses across all REST endpoints.

    Attributes:
        detail (str): Detailed error message.
        error_code (str, optional): Specific error code for categorization.

    Example:
        >>> error_response = ErrorResponse(
        ...     detail="Resource not found",
        ...     error_code="NOT_FOUND"
        ... )
    """
    detail: str
    error_code: Optional[str] = None


class UploadErrorResponse(BaseModel):
    """Schema for errors returned by the upload function.

    Attributes:
        error (str): Human-readable error message.
        details (Any, optional): Underlying provider or validation detail.

    Example:
        >>> UploadErrorResponse(error="File size must be less than 50MB")
    """
    error: str
    details: Optional[Any] = None


class HealthResponse(BaseModel):
    """Schema for health check responses.

    Attributes:
        status (str): Service health status.
        service (str): Service name identifier.

    Example:
        >>> health_response = HealthResponse(
        ...     status="healthy",
        ...     service="ideabase-notes-service"
        ... )
    """
    status: str
    service: str
