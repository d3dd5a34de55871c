from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.users.schemas import ProfileUpdate, UserResponse
from app.modules.users.service import UserService
from app.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Dict = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    """Get the current user's profile"""
    return service.get_profile(current_user["id"])


@router.put("/me", response_model=UserResponse)
async def update_me(
    profile_data: ProfileUpdate,
    current_user: Dict = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    """Update the current user's display name"""
    return service.update_profile(current_user["id"], profile_data)
