import logging
from supabase import Client
from app.modules.invitations.schemas import InvitationResponse
from app.modules.households.service import HouseholdService
from typing import Any, Dict, List
from fastapi import HTTPException

logger = logging.getLogger(__name__)

PENDING = "pending"
ACCEPTED = "accepted"
DECLINED = "declined"


class InvitationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _check_not_pending(self, household_id: str, emails: List[str]):
        """400 if any of the emails already has a pending invitation to the household"""
        try:
            existing = self.supabase.table("invitations")\
                .select("invitee_email")\
                .eq("household_id", household_id)\
                .in_("invitee_email", emails)\
                .eq("status", PENDING)\
                .execute()
        except Exception as e:
            logger.error(f"Error checking pending invitations: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        if existing.data:
            taken = ", ".join(sorted({row["invitee_email"] for row in existing.data}))
            raise HTTPException(status_code=400, detail=f"{taken} already has a pending invitation")

    def _insert(self, household_id: str, inviter_id: str, emails: List[str]) -> List[InvitationResponse]:
        try:
            result = self.supabase.table("invitations").insert([
                {
                    "household_id": household_id,
                    "invitee_email": email,
                    "inviter_id": inviter_id,
                    "status": PENDING
                }
                for email in emails
            ]).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to send invitation")

            logger.info("Invitations sent to %s for household %s", ", ".join(emails), household_id)
            return [InvitationResponse(**i) for i in result.data]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error sending invitation: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def create_invitation(self, household_id: str, inviter_id: str, invitee_email: str) -> InvitationResponse:
        """Invite someone to the household by email"""
        email = invitee_email.strip().lower()
        if not email:
            raise HTTPException(status_code=400, detail="Please enter an email address")
        self._check_not_pending(household_id, [email])
        return self._insert(household_id, inviter_id, [email])[0]

    def create_many(self, household_id: str, inviter_id: str, emails: List[str]) -> List[InvitationResponse]:
        """
        Invite each distinct non-blank email in one insert.

        Emails are compared case-insensitively; nothing is written if any of
        them already has a pending invitation.
        """
        normalized = []
        for email in emails:
            email = (email or "").strip().lower()
            if email and email not in normalized:
                normalized.append(email)
        if not normalized:
            return []
        self._check_not_pending(household_id, normalized)
        return self._insert(household_id, inviter_id, normalized)

    def list_sent(self, household_id: str, inviter_id: str) -> List[InvitationResponse]:
        """Invitations this user sent for the household"""
        try:
            result = self.supabase.table("invitations")\
                .select("*")\
                .eq("household_id", household_id)\
                .eq("inviter_id", inviter_id)\
                .order("created_at", desc=True)\
                .execute()
            return [InvitationResponse(**i) for i in (result.data or [])]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_received(self, email: str) -> List[InvitationResponse]:
        """Pending invitations addressed to an email"""
        try:
            result = self.supabase.table("invitations")\
                .select("*")\
                .eq("invitee_email", (email or "").lower())\
                .eq("status", PENDING)\
                .order("created_at", desc=True)\
                .execute()
            return [InvitationResponse(**i) for i in (result.data or [])]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _get_for_invitee(self, invitation_id: str, user: Dict[str, Any]) -> InvitationResponse:
        try:
            result = self.supabase.table("invitations")\
                .select("*")\
                .eq("id", invitation_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=404, detail="Invitation not found")
        invitation = InvitationResponse(**result.data[0])
        if invitation.invitee_email.lower() != (user.get("email") or "").lower():
            raise HTTPException(status_code=403, detail="This invitation is addressed to someone else")
        if invitation.status != PENDING:
            raise HTTPException(status_code=400, detail=f"Invitation already {invitation.status}")
        return invitation

    def _set_status(self, invitation_id: str, status: str) -> InvitationResponse:
        try:
            result = self.supabase.table("invitations")\
                .update({"status": status})\
                .eq("id", invitation_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Invitation not found")
            return InvitationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def accept(self, invitation_id: str, user: Dict[str, Any]) -> InvitationResponse:
        """Join the inviting household as a member"""
        invitation = self._get_for_invitee(invitation_id, user)
        households = HouseholdService(self.supabase)
        if households.get_membership(user["id"]) is not None:
            raise HTTPException(status_code=400, detail="You already belong to a household")
        households.add_member(invitation.household_id, user["id"])
        logger.info("User %s joined household %s", user["id"], invitation.household_id)
        return self._set_status(invitation_id, ACCEPTED)

    def decline(self, invitation_id: str, user: Dict[str, Any]) -> InvitationResponse:
        self._get_for_invitee(invitation_id, user)
        return self._set_status(invitation_id, DECLINED)
