from fastapi import APIRouter, Depends

from spendwise.models.api import UserProfileResponse
from spendwise.core.deps import get_current_user
from spendwise.models.user import UserDB

router = APIRouter()


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_profile(
    current_user: UserDB = Depends(get_current_user)
):
    """Get current user profile"""
    return UserProfileResponse.model_validate(current_user)
