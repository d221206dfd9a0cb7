from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from datetime import datetime
from typing import List, Optional

from ministry_hub.core.database import get_db
from ministry_hub.core.exceptions import MemberNotFoundError
from ministry_hub.models import (
    Member,
    PersonalProphecy,
    PublicProphecy,
    ProphecyPrayerRequest,
    FulfillmentStatus,
    PublicProphecyStatus,
)
from ministry_hub.modules.auth.dependencies import get_current_staff
from ministry_hub.schemas.prophecy import (
    ProphecyAssign,
    ProphecyUpload,
    PersonalProphecyResponse,
    PublicProphecyResponse,
    PrayerRequestUpdate,
    AdminPrayerRequestResponse,
)
from ministry_hub.services.audit_service import log_admin_action
from ministry_hub.services.tiers import normalize_tier
from ministry_hub.utils.helpers import split_tags, to_naive_utc

router = APIRouter()


def title_from_transcript(transcript: str) -> str:
    """First sentence, at most 100 characters"""
    first = transcript.strip().split(".")[0].strip()
    return first[:100] or "Prophetic Word"


def excerpt_from_transcript(transcript: str) -> str:
    return transcript[:200] + "..."


@router.post("/assign", response_model=PersonalProphecyResponse, status_code=status.HTTP_201_CREATED)
async def assign_prophecy(
    body: ProphecyAssign,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    """Give a personal prophetic word to a member"""
    themes = split_tags(body.themes)
    if not body.member_id or not (body.transcript or "").strip() or not themes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="member_id, transcript and themes are required"
        )

    member = await db.get(Member, body.member_id)
    if not member:
        raise MemberNotFoundError(body.member_id)

    prophecy = PersonalProphecy(
        member_id=member.id,
        given_by=current_staff.full_name or "Ministry Team",
        date=datetime.utcnow(),
        delivery_method=body.delivery_method or "in-person",
        title=(body.title or "").strip() or title_from_transcript(body.transcript),
        themes=themes,
        transcript=body.transcript,
        audio_url=body.audio_url,
        video_url=body.video_url,
        duration=body.duration,
        admin_notes=body.admin_notes,
        fulfillment_status=FulfillmentStatus.UNFOLDING.value,
        member_tags=[],
    )
    db.add(prophecy)
    await db.commit()
    await db.refresh(prophecy)

    await log_admin_action(
        db, current_staff.id, "prophecy_assigned", "personal_prophecy", prophecy.id,
        {"member_id": member.id, "themes": themes}, request
    )
    return prophecy


@router.post("/upload", response_model=PublicProphecyResponse, status_code=status.HTTP_201_CREATED)
async def upload_public_prophecy(
    body: ProphecyUpload,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    """Publish (or schedule) a public prophetic word"""
    if not (body.title or "").strip() or not (body.transcript or "").strip() or not (body.theme or "").strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="title, transcript and theme are required"
        )

    now = datetime.utcnow()
    publish_date = to_naive_utc(body.date) or now
    prophecy_status = (
        PublicProphecyStatus.PUBLISHED.value if publish_date <= now
        else PublicProphecyStatus.SCHEDULED.value
    )

    prophecy = PublicProphecy(
        title=body.title.strip(),
        theme=body.theme.strip(),
        date=publish_date,
        duration=body.duration,
        audio_url=body.audio_url,
        video_url=body.video_url,
        thumbnail_url=body.thumbnail_url,
        transcript=body.transcript,
        excerpt=body.excerpt or excerpt_from_transcript(body.transcript),
        scriptures=body.scriptures or [],
        is_featured=body.is_featured,
        tier_required=normalize_tier(body.tier_required),
        status=prophecy_status,
    )
    db.add(prophecy)
    await db.commit()
    await db.refresh(prophecy)

    await log_admin_action(
        db, current_staff.id, "prophecy_uploaded", "public_prophecy", prophecy.id,
        {"status": prophecy_status}, request
    )
    return prophecy


def prayer_request_view(prayer_request: ProphecyPrayerRequest, member: Optional[Member]) -> AdminPrayerRequestResponse:
    view = AdminPrayerRequestResponse.model_validate(prayer_request)
    if member:
        view.member_name = member.full_name or "Unknown"
        view.member_email = member.email or "Unknown"
    return view


@router.get("/prayer-requests", response_model=List[AdminPrayerRequestResponse])
async def list_prayer_requests(
    status_filter: Optional[str] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    """All members' prayer requests, newest first"""
    query = (
        select(ProphecyPrayerRequest, Member)
        .outerjoin(Member, Member.id == ProphecyPrayerRequest.member_id)
        .order_by(ProphecyPrayerRequest.created_at.desc())
    )
    if status_filter:
        query = query.where(ProphecyPrayerRequest.status == status_filter)
    rows = (await db.execute(query)).all()
    return [prayer_request_view(prayer_request, member) for prayer_request, member in rows]


@router.patch("/prayer-requests/{request_id}", response_model=AdminPrayerRequestResponse)
async def respond_to_prayer_request(
    request_id: str,
    body: PrayerRequestUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    prayer_request = await db.get(ProphecyPrayerRequest, request_id)
    if not prayer_request:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Prayer request not found")

    updates = body.model_dump(exclude_unset=True)
    if updates.get("status") is not None:
        prayer_request.status = updates["status"].value
    if "admin_response" in updates:
        prayer_request.admin_response = updates["admin_response"]
    prayer_request.updated_at = datetime.utcnow()
    await db.commit()
    await db.refresh(prayer_request)

    await log_admin_action(db, current_staff.id, "prayer_request_updated", "prayer_request", prayer_request.id,
                           {"status": prayer_request.status}, request)
    member = await db.get(Member, prayer_request.member_id)
    return prayer_request_view(prayer_request, member)
