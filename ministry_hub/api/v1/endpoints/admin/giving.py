from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional

from ministry_hub.core.database import get_db
from ministry_hub.models import Member, Donation, DonationStatus
from ministry_hub.modules.auth.dependencies import get_current_staff
from ministry_hub.schemas.giving import DonationResponse
from ministry_hub.services.giving_service import summarize_donations
from ministry_hub.utils.pagination import paginate

router = APIRouter()


@router.get("")
async def list_donations(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    status: Optional[str] = None,
    donation_type: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_staff: Member = Depends(get_current_staff)
):
    """Donations with completed totals"""
    query = select(Donation)
    if status:
        query = query.where(Donation.status == status)
    if donation_type:
        query = query.where(Donation.donation_type == donation_type)
    query = query.order_by(Donation.created_at.desc())

    result = await paginate(db, query, page, page_size, serializer=DonationResponse.model_validate)

    completed = (await db.execute(
        select(Donation).where(Donation.status == DonationStatus.COMPLETED.value)
    )).scalars().all()
    summary = summarize_donations(completed)
    result["totals"] = {
        "completed_total": summary["lifetime_total"],
        "month_to_date": summary["month_to_date"],
        "by_type": summary["by_type"],
        "count": summary["count"],
    }
    return result
