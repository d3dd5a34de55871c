import logging
from datetime import datetime, timezone
from supabase import Client
from app.modules.households.schemas import (
    HouseholdUpdate, HouseholdResponse, MembershipResponse, HouseholdMemberResponse
)
from app.modules.users.service import UserService
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

OWNER = "owner"
MEMBER = "member"


class HouseholdService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_membership(self, user_id: str) -> Optional[MembershipResponse]:
        """Resolve the household and role for a user; None if the user has no household yet"""
        try:
            result = self.supabase.table("household_members")\
                .select("household_id, user_id, role")\
                .eq("user_id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching membership for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            return None
        return MembershipResponse(**result.data[0])

    def get_household(self, household_id: str) -> HouseholdResponse:
        """Get household by ID"""
        try:
            result = self.supabase.table("households")\
                .select("*")\
                .eq("id", household_id)\
                .limit(1)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Household not found")

            return HouseholdResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_household(self, name: str, user_id: str) -> HouseholdResponse:
        """Create a household and make the creator its owner"""
        try:
            result = self.supabase.table("households").insert({
                "name": name,
                "created_by": user_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create household")

            household = result.data[0]
            membership = self.supabase.table("household_members").insert({
                "household_id": household["id"],
                "user_id": user_id,
                "role": OWNER
            }).execute()

            if not membership.data:
                # every household keeps an owner membership
                self.supabase.table("households").delete().eq("id", household["id"]).execute()
                raise HTTPException(status_code=500, detail="Failed to add household owner")

            logger.info("Created household %s for user %s", household["id"], user_id)
            return HouseholdResponse(**household)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Household setup error for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_household(self, household_id: str, household_data: HouseholdUpdate) -> HouseholdResponse:
        """Rename household"""
        name = household_data.name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Household name cannot be empty")
        try:
            result = self.supabase.table("households")\
                .update({"name": name, "updated_at": datetime.now(timezone.utc).isoformat()})\
                .eq("id", household_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Household not found")

            return HouseholdResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_member_ids(self, household_id: str) -> List[str]:
        try:
            result = self.supabase.table("household_members")\
                .select("user_id")\
                .eq("household_id", household_id)\
                .execute()
            return [m["user_id"] for m in (result.data or [])]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def is_member(self, household_id: str, user_id: str) -> bool:
        return user_id in self.list_member_ids(household_id)

    def list_members(self, household_id: str) -> List[HouseholdMemberResponse]:
        """List members of a household with their names and emails"""
        try:
            result = self.supabase.table("household_members")\
                .select("user_id, role")\
                .eq("household_id", household_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching household members: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        memberships = result.data or []
        profiles = UserService(self.supabase).get_profiles([m["user_id"] for m in memberships])
        members = []
        for m in memberships:
            profile = profiles.get(m["user_id"])
            members.append(HouseholdMemberResponse(
                user_id=m["user_id"],
                role=m["role"],
                full_name=profile.full_name if profile else None,
                email=profile.email if profile else None
            ))
        return members

    def add_member(self, household_id: str, user_id: str, role: str = MEMBER) -> MembershipResponse:
        """Add a user to the household"""
        try:
            existing = self.supabase.table("household_members")\
                .select("id")\
                .eq("household_id", household_id)\
                .eq("user_id", user_id)\
                .execute()

            if existing.data:
                raise HTTPException(status_code=400, detail="User already a member of this household")

            result = self.supabase.table("household_members").insert({
                "household_id": household_id,
                "user_id": user_id,
                "role": role
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add member")

            return MembershipResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def remove_member(self, household_id: str, user_id: str, acting_user_id: str) -> bool:
        """Remove a member from the household"""
        if user_id == acting_user_id:
            raise HTTPException(status_code=400, detail="Owners cannot remove themselves")
        try:
            result = self.supabase.table("household_members")\
                .delete()\
                .eq("household_id", household_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error removing member {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            raise HTTPException(status_code=404, detail="Member not found")
        logger.info("Removed user %s from household %s", user_id, household_id)
        return True
