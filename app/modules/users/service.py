import logging
from datetime import datetime, timezone
from supabase import Client
from app.modules.users.schemas import ProfileUpdate, UserResponse, UserSummary
from typing import Any, Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def ensure_profile(self, user: Dict[str, Any]) -> UserResponse:
        """Mirror an auth user into the users table on first sign-in"""
        try:
            existing = self.supabase.table("users")\
                .select("*")\
                .eq("id", user["id"])\
                .limit(1)\
                .execute()
            if existing.data:
                return UserResponse(**existing.data[0])

            metadata = user.get("user_metadata") or {}
            result = self.supabase.table("users").insert({
                "id": user["id"],
                "email": user.get("email"),
                "full_name": metadata.get("full_name"),
                "onboard_success": False
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create user profile")

            logger.info("Created profile for user %s", user["id"])
            return UserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error mirroring profile for {user.get('id')}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_profile(self, user_id: str) -> UserResponse:
        """Get user profile by ID"""
        try:
            result = self.supabase.table("users")\
                .select("*")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            return UserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> UserResponse:
        """Update the user's display name"""
        full_name = profile_data.full_name.strip()
        if not full_name:
            raise HTTPException(status_code=400, detail="Name cannot be empty")
        return self._update(user_id, {"full_name": full_name})

    def mark_onboarded(self, user_id: str) -> UserResponse:
        return self._update(user_id, {"onboard_success": True})

    def _update(self, user_id: str, update_data: Dict[str, Any]) -> UserResponse:
        try:
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
            result = self.supabase.table("users")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="User not found")

            return UserResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating user {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_profiles(self, user_ids: List[str]) -> Dict[str, UserSummary]:
        """Batch lookup of id, full_name, email keyed by user id"""
        ids = list({uid for uid in user_ids if uid})
        if not ids:
            return {}
        try:
            result = self.supabase.table("users")\
                .select("id, full_name, email")\
                .in_("id", ids)\
                .execute()
            return {row["id"]: UserSummary(**row) for row in (result.data or [])}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_profile_or_none(self, user_id: str) -> Optional[UserResponse]:
        try:
            return self.get_profile(user_id)
        except HTTPException as e:
            if e.status_code == 404:
                return None
            raise
