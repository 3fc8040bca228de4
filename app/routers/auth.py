"""
Authentication router for registration, login and the current user.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_current_user, get_db
from app.errors import BadRequest, operation_guard
from app.schemas.base import ApiResponse
from app.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserInfo
from app.services.auth_service import AuthService
from app.services.validators import ensure_valid, validate_login, validate_register

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=ApiResponse[AuthResponse])
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Authenticate user and return a bearer token.

    Unknown email and wrong password fail the same way.
    """
    with operation_guard("An error occurred during login"):
        ensure_valid(validate_login(credentials))
        auth_service = AuthService(db)
        result = await auth_service.login(credentials)

    if not result:
        raise BadRequest("Invalid email or password")

    return ApiResponse.ok(result, "Login successful")


@router.post("/register", response_model=ApiResponse[AuthResponse], status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
):
    """Create a new account and return a bearer token for it."""
    with operation_guard("An error occurred during registration"):
        ensure_valid(validate_register(data))
        auth_service = AuthService(db)
        result = await auth_service.register(data)
        if result:
            await db.commit()

    if not result:
        raise BadRequest("A user with this email already exists")

    return ApiResponse.ok(result, "Registration successful")


@router.get("/me", response_model=ApiResponse[UserInfo])
async def get_current_user_info(
    current_user: UserInfo = Depends(get_current_user),
):
    """
    Get information about the currently authenticated user.
    """
    return ApiResponse.ok(current_user)
