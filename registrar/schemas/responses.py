"""Standardized API Response Envelopes"""

from typing import Generic, TypeVar
from pydantic import BaseModel, Field


T = TypeVar('T')


class SuccessResponse(BaseModel, Generic[T]):
    """
    Standard success response envelope.

    Example:
        {
            "success": true,
            "data": {"student_number": "2024-BEED-48213", ...},
            "message": "Student number allocated"
        }
    """
    success: bool = True
    data: T
    message: str = "Operation successful"


class ErrorDetail(BaseModel):
    """Error details structure"""
    code: str
    message: str


class ErrorResponse(BaseModel):
    """
    Standard error response envelope.

    Example:
        {
            "success": false,
            "error": {
                "code": "STUDENT_NUMBER_ALLOCATION_FAILED",
                "message": "Failed to generate student number"
            }
        }
    """
    success: bool = False
    error: ErrorDetail

    @classmethod
    def build(cls, code: str, message: str) -> "ErrorResponse":
        return cls(error=ErrorDetail(code=code, message=message))


class PaginationMeta(BaseModel):
    """Pagination metadata"""
    page: int = Field(..., ge=1, description="Current page number")
    page_size: int = Field(..., ge=1, le=100, description="Items per page")
    total: int = Field(..., ge=0, description="Total number of items")
    total_pages: int = Field(..., ge=0, description="Total number of pages")


class PaginatedResponse(BaseModel, Generic[T]):
    """Paginated list with metadata under "meta"."""
    success: bool = True
    data: list[T]
    meta: PaginationMeta
    message: str = "Operation successful"
