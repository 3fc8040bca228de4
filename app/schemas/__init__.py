"""
Pydantic schemas package.

Request and response bodies for the task and auth endpoints.
"""

from app.schemas.base import ApiResponse, CamelModel, FieldError
from app.schemas.task import (
    BulkUpdateRequest,
    TaskCreate,
    TaskListResponse,
    TaskRead,
    TaskUpdate,
)
from app.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserInfo

__all__ = [
    "ApiResponse",
    "CamelModel",
    "FieldError",
    "BulkUpdateRequest",
    "TaskCreate",
    "TaskListResponse",
    "TaskRead",
    "TaskUpdate",
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
    "UserInfo",
]
