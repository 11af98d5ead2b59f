from typing import Generic, TypeVar, Optional, List, Any, Dict
from pydantic import BaseModel

# Generic type for response data
T = TypeVar('T')


class BaseResponse(BaseModel):
    """Base response model with success flag."""
    success: bool


class ErrorResponse(BaseResponse):
    """Error response model with error details."""
    success: bool = False
    error: str
    error_code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class SuccessResponse(BaseResponse, Generic[T]):
    """Success response model with data."""
    success: bool = True
    message: Optional[str] = None
    data: T


class ListResponse(BaseResponse, Generic[T]):
    """List response model with the number of returned items."""
    success: bool = True
    count: int
    data: List[T]
