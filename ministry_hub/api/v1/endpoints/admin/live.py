from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from datetime import datetime
from typing import List

from ministry_hub.core.database import get_db
from ministry_hub.core.exceptions import LiveServiceNotFoundError
from ministry_hub.models import Member, LiveService, ServiceAttendance, ServicePoll, LiveServiceStatus
from ministry_hub.modules.auth.dependencies import get_current_staff
from ministry_hub.schemas.live import (
    LiveServiceCreate,
    LiveServiceUpdate,
    LiveServiceResponse,
    AttendanceResponse,
    PollCreate,
    PollResponse,
)
from ministry_hub.services.audit_service import log_admin_action
from ministry_hub.utils.helpers import to_naive_utc

router = APIRouter()


@router.post("", response_model=LiveServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_service(
    body: LiveServiceCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    data = body.model_dump()
    data["scheduled_start"] = to_naive_utc(data["scheduled_start"])
    service = LiveService(**data, status=LiveServiceStatus.SCHEDULED.value)
    db.add(service)
    await db.commit()
    await db.refresh(service)

    await log_admin_action(db, current_staff.id, "live_service_created", "live_service", service.id,
                           {"title": service.title}, request)
    return service


@router.patch("/{service_id}", response_model=LiveServiceResponse)
async def update_service(
    service_id: str,
    body: LiveServiceUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    """Update a service. Going live or ending stamps the actual times."""
    service = await db.get(LiveService, service_id)
    if not service:
        raise LiveServiceNotFoundError(service_id)

    updates = body.model_dump(exclude_unset=True)
    new_status = updates.pop("status", None)
    if "scheduled_start" in updates:
        updates["scheduled_start"] = to_naive_utc(updates["scheduled_start"])
    for field, value in updates.items():
        setattr(service, field, value)

    if new_status is not None and new_status.value != service.status:
        now = datetime.utcnow()
        service.status = new_status.value
        if new_status == LiveServiceStatus.LIVE:
            service.actual_start = now
        elif new_status == LiveServiceStatus.ENDED:
            service.actual_end = now

    await db.commit()
    await db.refresh(service)

    await log_admin_action(db, current_staff.id, "live_service_updated", "live_service", service.id,
                           {"status": service.status}, request)
    return service


@router.get("/{service_id}/attendance", response_model=List[AttendanceResponse])
async def service_attendance(
    service_id: str,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    service = await db.get(LiveService, service_id)
    if not service:
        raise LiveServiceNotFoundError(service_id)

    result = await db.execute(
        select(ServiceAttendance)
        .where(ServiceAttendance.service_id == service_id)
        .order_by(ServiceAttendance.joined_at)
    )
    return result.scalars().all()


@router.post("/{service_id}/polls", response_model=PollResponse, status_code=status.HTTP_201_CREATED)
async def open_poll(
    service_id: str,
    body: PollCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    """Open a poll. Any poll already running on the service is closed."""
    service = await db.get(LiveService, service_id)
    if not service:
        raise LiveServiceNotFoundError(service_id)

    now = datetime.utcnow()
    await db.execute(
        update(ServicePoll)
        .where(ServicePoll.service_id == service_id, ServicePoll.is_active.is_(True))
        .values(is_active=False, closed_at=now)
    )
    poll = ServicePoll(
        service_id=service_id,
        question=body.question.strip(),
        options=[option.strip() for option in body.options if option.strip()],
        is_active=True,
    )
    db.add(poll)
    service.poll_enabled = True
    await db.commit()
    await db.refresh(poll)

    await log_admin_action(db, current_staff.id, "poll_opened", "live_service", service_id,
                           {"poll_id": poll.id}, request)
    return poll


@router.post("/{service_id}/polls/{poll_id}/close", response_model=PollResponse)
async def close_poll(
    service_id: str,
    poll_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    poll = await db.get(ServicePoll, poll_id)
    if not poll or str(poll.service_id) != service_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Poll not found")

    if poll.is_active:
        poll.is_active = False
        poll.closed_at = datetime.utcnow()
        await db.commit()
        await db.refresh(poll)
        await log_admin_action(db, current_staff.id, "poll_closed", "live_service", service_id,
                               {"poll_id": poll.id}, request)
    return poll
