from fastapi import APIRouter, Depends, status

from school_admin.core.dependencies import get_auth_service
from school_admin.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from school_admin.services import AuthService

router = APIRouter(tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """Exchange email and password for a bearer token"""
    return await auth_service.login(request.email, request.password)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> RegisterResponse:
    """
    Create an account. Teachers and students join an existing school;
    an admin may create a new school in the same request.
    """
    user = await auth_service.register(request)
    return RegisterResponse(user=user)
