"""
Error response schemas for API documentation.
Every failure is returned as {success: false, message, errors?}.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Human-readable error message")
    errors: Optional[List[str]] = Field(
        None,
        description="Per-field messages for validation errors",
        examples=[["fare: Fare must be non-negative"]],
    )


_ERROR_EXAMPLES = {
    400: ("Bad Request - Invalid request parameters", "Validation Error"),
    401: ("Unauthorized - Authentication required", "Unauthorized: Missing or invalid token"),
    403: ("Forbidden - Insufficient permissions", "Forbidden: Insufficient permissions"),
    404: ("Not Found - Resource does not exist", "Room not found"),
    409: ("Conflict - Duplicate unique field", "Email address is already in use"),
    429: ("Too Many Requests - Rate limit exceeded", "Rate limit exceeded"),
    500: ("Internal Server Error", "Internal Server Error"),
}

COMMON_ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    code: {
        "description": description,
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "example": {"success": False, "message": message}
            }
        },
    }
    for code, (description, message) in _ERROR_EXAMPLES.items()
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_auth_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get authentication and authorization error response schemas."""
    return get_error_responses(401, 403)


def get_crud_error_responses() -> Dict[int, Dict[str, Any]]:
    """Get error response schemas for CRUD operations."""
    return get_error_responses(400, 401, 403, 404, 409, 500)
