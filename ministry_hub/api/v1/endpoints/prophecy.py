from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, and_, func
from datetime import datetime
from typing import Optional

from ministry_hub.core.database import get_db
from ministry_hub.core.exceptions import ProphecyNotFoundError, InvalidChoiceError
from ministry_hub.models import (
    Member,
    PersonalProphecy,
    PublicProphecy,
    ProphecyPrayerRequest,
    FulfillmentStatus,
    PublicProphecyStatus,
    PrayerRequestStatus,
)
from ministry_hub.modules.auth.dependencies import get_current_member
from ministry_hub.schemas.prophecy import (
    ProphecyTrackingUpdate,
    PersonalProphecyResponse,
    PersonalProphecyListResponse,
    PublicProphecyListResponse,
    PrayerRequestCreate,
    PrayerRequestResponse,
)
from ministry_hub.utils.helpers import split_tags, to_naive_utc

router = APIRouter()

FULFILLMENT_STATUSES = [s.value for s in FulfillmentStatus]


@router.get("/member", response_model=PersonalProphecyListResponse)
async def list_member_prophecies(
    theme: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = None,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Prophetic words given to the current member, newest first"""
    query = select(PersonalProphecy).where(PersonalProphecy.member_id == current_member.id)
    if status_filter and status_filter != "all":
        query = query.where(PersonalProphecy.fulfillment_status == status_filter)
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(
            PersonalProphecy.title.ilike(pattern),
            PersonalProphecy.transcript.ilike(pattern),
        ))
    query = query.order_by(PersonalProphecy.date.desc())
    prophecies = (await db.execute(query)).scalars().all()

    if theme and theme != "all":
        prophecies = [p for p in prophecies if theme in (p.themes or [])]
    return {"prophecies": prophecies}


@router.put("/tracking", response_model=PersonalProphecyResponse)
async def update_tracking(
    body: ProphecyTrackingUpdate,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Member journaling and fulfillment tracking on their own prophecy"""
    if not body.prophecy_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="prophecy_id is required")

    prophecy = await db.get(PersonalProphecy, body.prophecy_id)
    if not prophecy:
        raise ProphecyNotFoundError(body.prophecy_id)
    if str(prophecy.member_id) != str(current_member.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not your prophecy")

    provided = body.model_dump(exclude_unset=True)
    provided.pop("prophecy_id", None)

    if "fulfillment_status" in provided:
        if provided["fulfillment_status"] not in FULFILLMENT_STATUSES:
            raise InvalidChoiceError("fulfillment_status", provided["fulfillment_status"], FULFILLMENT_STATUSES)
    if "member_tags" in provided:
        provided["member_tags"] = split_tags(provided["member_tags"])

    for field, value in provided.items():
        if field == "manifested_date":
            value = to_naive_utc(value)
        setattr(prophecy, field, value)
    prophecy.updated_at = datetime.utcnow()

    await db.commit()
    await db.refresh(prophecy)
    return prophecy


def published_filter(now: datetime):
    """Published, or scheduled with a date that has passed"""
    return or_(
        PublicProphecy.status == PublicProphecyStatus.PUBLISHED.value,
        and_(
            PublicProphecy.status == PublicProphecyStatus.SCHEDULED.value,
            PublicProphecy.date <= now,
        ),
    )


@router.get("/public", response_model=PublicProphecyListResponse)
async def list_public_prophecies(
    theme: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db)
):
    """Public prophetic words (no auth)"""
    conditions = [published_filter(datetime.utcnow())]
    if theme and theme != "all":
        conditions.append(PublicProphecy.theme == theme)
    if search:
        pattern = f"%{search}%"
        conditions.append(or_(
            PublicProphecy.title.ilike(pattern),
            PublicProphecy.excerpt.ilike(pattern),
        ))

    total = (await db.execute(
        select(func.count()).select_from(PublicProphecy).where(*conditions)
    )).scalar() or 0
    rows = (await db.execute(
        select(PublicProphecy)
        .where(*conditions)
        .order_by(PublicProphecy.date.desc())
        .offset(offset)
        .limit(limit)
    )).scalars().all()

    return {"prophecies": rows, "total": total, "limit": limit, "offset": offset}


@router.post("/prayer-request", status_code=status.HTTP_201_CREATED)
async def create_prayer_request(
    body: PrayerRequestCreate,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Ask the prophetic team to pray over something"""
    if not (body.category or "").strip() or not (body.request_text or "").strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="category and request_text are required")

    prayer_request = ProphecyPrayerRequest(
        member_id=current_member.id,
        category=body.category.strip(),
        request_text=body.request_text.strip(),
        status=PrayerRequestStatus.PENDING.value,
    )
    db.add(prayer_request)
    await db.commit()
    await db.refresh(prayer_request)

    return {
        "message": "Prayer request submitted successfully",
        "data": PrayerRequestResponse.model_validate(prayer_request),
    }


@router.get("/prayer-request")
async def list_prayer_requests(
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(
        select(ProphecyPrayerRequest)
        .where(ProphecyPrayerRequest.member_id == current_member.id)
        .order_by(ProphecyPrayerRequest.created_at.desc())
    )
    return {"requests": [PrayerRequestResponse.model_validate(r) for r in result.scalars().all()]}
