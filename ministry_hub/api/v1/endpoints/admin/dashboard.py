"""
Admin Dashboard endpoints - ministry KPIs.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, and_
from datetime import datetime, timedelta

from ministry_hub.core.database import get_db
from ministry_hub.models import (
    Member,
    MemberTier,
    Lead,
    LeadStatus,
    Message,
    ParticipantType,
    Donation,
    DonationStatus,
    Teaching,
    Sermon,
    Resource,
)
from ministry_hub.modules.auth.dependencies import get_current_staff
from ministry_hub.schemas.live import LiveServiceResponse
from ministry_hub.api.v1.endpoints.live import current_or_next_service

router = APIRouter()


async def _count_by(db: AsyncSession, column) -> dict:
    rows = (await db.execute(select(column, func.count()).group_by(column))).all()
    return {value: count for value, count in rows}


@router.get("/stats")
async def get_dashboard_stats(
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    """Get dashboard KPI statistics"""
    now = datetime.utcnow()
    today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week_start = today_start - timedelta(days=7)
    month_start = today_start.replace(day=1)

    # Member stats
    total_members = await db.scalar(select(func.count(Member.id)))
    active_members = await db.scalar(select(func.count(Member.id)).where(Member.is_active == True))
    new_members_month = await db.scalar(
        select(func.count(Member.id)).where(Member.created_at >= month_start)
    )
    tier_counts = await _count_by(db, Member.tier)
    by_tier = {tier.value: tier_counts.get(tier.value, 0) for tier in MemberTier}

    # Lead pipeline
    status_counts = await _count_by(db, Lead.status)
    by_status = {s.value: status_counts.get(s.value, 0) for s in LeadStatus}
    new_leads_week = await db.scalar(
        select(func.count(Lead.id)).where(Lead.created_at >= week_start)
    )

    unread_messages = await db.scalar(
        select(func.count(Message.id)).where(
            and_(
                Message.recipient_type == ParticipantType.ADMIN.value,
                Message.is_read == False
            )
        )
    )

    # Giving (cents)
    completed_total = await db.scalar(
        select(func.coalesce(func.sum(Donation.amount_cents), 0)).where(
            Donation.status == DonationStatus.COMPLETED.value
        )
    )
    completed_month = await db.scalar(
        select(func.coalesce(func.sum(Donation.amount_cents), 0)).where(
            and_(
                Donation.status == DonationStatus.COMPLETED.value,
                func.coalesce(Donation.completed_at, Donation.created_at) >= month_start
            )
        )
    )

    # Published content
    teachings = await db.scalar(select(func.count(Teaching.id)).where(Teaching.is_published == True))
    sermons = await db.scalar(select(func.count(Sermon.id)).where(Sermon.is_published == True))
    resources = await db.scalar(select(func.count(Resource.id)).where(Resource.published == True))

    service = await current_or_next_service(db, now)

    return {
        "members": {
            "total": total_members or 0,
            "active": active_members or 0,
            "new_this_month": new_members_month or 0,
            "by_tier": by_tier,
        },
        "leads": {
            "by_status": by_status,
            "new_this_week": new_leads_week or 0,
        },
        "unread_messages": unread_messages or 0,
        "donations": {
            "completed_total": float(completed_total or 0) / 100,
            "month_to_date": float(completed_month or 0) / 100,
        },
        "content": {
            "teachings": teachings or 0,
            "sermons": sermons or 0,
            "resources": resources or 0,
        },
        "upcoming_service": LiveServiceResponse.model_validate(service) if service else None,
        "generated_at": now,
    }
