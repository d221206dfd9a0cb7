"""Member self-service: profile, tier and account deletion."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, update, or_

from ministry_hub.core.config import settings
from ministry_hub.core.database import get_db
from ministry_hub.core.logging_config import logger
from ministry_hub.models import (
    Member,
    JournalEntry,
    TeachingProgress,
    TeachingBookmark,
    WatchlistItem,
    FamilyMember,
    Donation,
    Message,
    PersonalProphecy,
    ProphecyPrayerRequest,
    ServiceAttendance,
)
from ministry_hub.modules.auth.dependencies import get_current_member
from ministry_hub.schemas.auth import MemberResponse
from ministry_hub.schemas.member import MemberUpdate, TierResponse, DeleteAccountRequest
from ministry_hub.services.tiers import tier_info

router = APIRouter()

DELETED_DONOR_NAME = "Deleted User"


@router.get("/me", response_model=MemberResponse)
async def get_profile(current_member: Member = Depends(get_current_member)):
    return current_member


@router.patch("/me", response_model=MemberResponse)
async def update_profile(
    updates: MemberUpdate,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Update own profile and notification preferences"""
    for field, value in updates.model_dump(exclude_unset=True).items():
        setattr(current_member, field, value)
    await db.commit()
    await db.refresh(current_member)
    return current_member


@router.get("/tier", response_model=TierResponse)
async def get_tier(current_member: Member = Depends(get_current_member)):
    info = tier_info(current_member.tier)
    info["all_benefits"] = settings.get_tier_benefits()
    return info


@router.delete("/me")
async def delete_account(
    body: DeleteAccountRequest,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """
    Permanently delete the caller's account.

    Personal data is removed; donations are kept for the ministry's records
    with the member link and donor details cleared.
    """
    if body.confirm != "DELETE":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Send {"confirm": "DELETE"} to delete your account'
        )

    member_id = str(current_member.id)
    for model in (JournalEntry, TeachingProgress, TeachingBookmark, WatchlistItem,
                  FamilyMember, PersonalProphecy, ProphecyPrayerRequest, ServiceAttendance):
        await db.execute(delete(model).where(model.member_id == member_id))
    await db.execute(
        delete(Message).where(or_(Message.sender_id == member_id, Message.recipient_id == member_id))
    )
    await db.execute(
        update(Donation)
        .where(Donation.member_id == member_id)
        .values(member_id=None, donor_email=None, donor_name=DELETED_DONOR_NAME)
    )

    await db.delete(current_member)
    await db.commit()

    logger.info(f"Member account deleted: {member_id}", extra={"event_type": "account_deleted"})
    return {"success": True, "message": "Account deleted"}
