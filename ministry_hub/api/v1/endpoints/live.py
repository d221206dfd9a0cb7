from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, update
from datetime import datetime
from typing import Optional

from ministry_hub.core.database import get_db, dialect_insert
from ministry_hub.core.exceptions import LiveServiceNotFoundError
from ministry_hub.core.types import generate_uuid
from ministry_hub.models import Member, LiveService, ServiceAttendance, ServicePoll, LiveServiceStatus
from ministry_hub.modules.auth.dependencies import get_current_member, get_optional_member
from ministry_hub.schemas.live import LiveServiceAction, LiveServiceResponse, PollResponse

router = APIRouter()


async def current_or_next_service(db: AsyncSession, now: Optional[datetime] = None) -> Optional[LiveService]:
    """The live service, or the next scheduled one"""
    now = now or datetime.utcnow()
    live = (await db.execute(
        select(LiveService)
        .where(LiveService.status == LiveServiceStatus.LIVE.value)
        .order_by(LiveService.scheduled_start)
        .limit(1)
    )).scalar_one_or_none()
    if live:
        return live

    return (await db.execute(
        select(LiveService)
        .where(
            LiveService.status == LiveServiceStatus.SCHEDULED.value,
            LiveService.scheduled_start >= now,
        )
        .order_by(LiveService.scheduled_start)
        .limit(1)
    )).scalar_one_or_none()


@router.get("/service")
async def get_service(
    id: Optional[str] = None,
    current_member: Optional[Member] = Depends(get_optional_member),
    db: AsyncSession = Depends(get_db)
):
    if id:
        service = await db.get(LiveService, id)
        if not service:
            raise LiveServiceNotFoundError(id)
    else:
        service = await current_or_next_service(db)

    if not service:
        return {"service": None, "message": "No upcoming services"}

    response = {"service": LiveServiceResponse.model_validate(service)}

    if service.status == LiveServiceStatus.LIVE.value:
        response["current_attendees"] = (await db.execute(
            select(func.count()).select_from(ServiceAttendance).where(
                ServiceAttendance.service_id == service.id,
                ServiceAttendance.left_at.is_(None),
            )
        )).scalar() or 0

    if current_member:
        attendance = (await db.execute(
            select(ServiceAttendance).where(
                ServiceAttendance.service_id == service.id,
                ServiceAttendance.member_id == current_member.id,
            )
        )).scalar_one_or_none()
        response["user_attending"] = bool(attendance and attendance.left_at is None)
        response["user_joined_at"] = attendance.joined_at if attendance else None

    if service.poll_enabled:
        poll = (await db.execute(
            select(ServicePoll)
            .where(ServicePoll.service_id == service.id, ServicePoll.is_active.is_(True))
            .order_by(ServicePoll.created_at.desc())
            .limit(1)
        )).scalar_one_or_none()
        response["active_poll"] = PollResponse.model_validate(poll) if poll else None

    return response


@router.post("/service")
async def service_action(
    body: LiveServiceAction,
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Join or leave a service"""
    if not body.service_id or not body.action:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="service_id and action are required")
    if body.action not in ("join", "leave"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="action must be 'join' or 'leave'")

    service = await db.get(LiveService, body.service_id)
    if not service:
        raise LiveServiceNotFoundError(body.service_id)

    now = datetime.utcnow()
    service_id = str(service.id)
    member_id = str(current_member.id)

    if body.action == "join":
        await record_join(db, service_id, member_id, body.device_type, now)
        await db.commit()
        attendee_count = (await db.execute(
            select(LiveService.attendee_count).where(LiveService.id == service_id)
        )).scalar()
        return {"success": True, "action": "joined", "attendee_count": attendee_count}

    await db.execute(
        update(ServiceAttendance)
        .where(
            ServiceAttendance.service_id == service_id,
            ServiceAttendance.member_id == member_id,
            ServiceAttendance.left_at.is_(None),
        )
        .values(left_at=now)
    )
    await db.commit()
    return {"success": True, "action": "left"}


async def record_join(
    db: AsyncSession,
    service_id: str,
    member_id: str,
    device_type: Optional[str],
    now: datetime,
) -> bool:
    """
    Upsert the member's attendance row in one statement.

    Returns True when the row is new. Only a new row increments the
    service's attendee_count.
    """
    inserted = await db.execute(
        dialect_insert(db, ServiceAttendance.__table__)
        .values(
            id=generate_uuid(),
            service_id=service_id,
            member_id=member_id,
            joined_at=now,
            left_at=None,
            device_type=device_type or "web",
        )
        .on_conflict_do_nothing(index_elements=["service_id", "member_id"])
    )
    if inserted.rowcount:
        await db.execute(
            update(LiveService)
            .where(LiveService.id == service_id)
            .values(attendee_count=LiveService.attendee_count + 1)
        )
        return True

    rejoin = {"joined_at": now, "left_at": None}
    if device_type:
        rejoin["device_type"] = device_type
    await db.execute(
        update(ServiceAttendance)
        .where(ServiceAttendance.service_id == service_id, ServiceAttendance.member_id == member_id)
        .values(**rejoin)
    )
    return False
