from fastapi import APIRouter, Depends

from school_admin.core.dependencies import get_current_claims, get_profile_service
from school_admin.schemas import ProfileResponse, ProfileUpdateRequest, SessionClaims
from school_admin.services import ProfileService

router = APIRouter(tags=["Users"])


@router.get("/me", response_model=ProfileResponse)
async def get_current_user_info(
    claims: SessionClaims = Depends(get_current_claims),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Get details of currently authenticated user."""
    return await profile_service.get_profile(claims)

@router.put("/me", response_model=ProfileResponse)
async def update_current_user(
    request: ProfileUpdateRequest,
    claims: SessionClaims = Depends(get_current_claims),
    profile_service: ProfileService = Depends(get_profile_service)
):
    return await profile_service.update_profile(claims, request)
