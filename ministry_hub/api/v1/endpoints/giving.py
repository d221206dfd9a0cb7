"""
Giving: donation intents, provider webhooks and giving history.

Checkout happens on the payment provider's side. This router records the
intent, hands back a reference and consumes the provider's signed callback.
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from datetime import datetime
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from ministry_hub.core.config import settings
from ministry_hub.core.database import get_db
from ministry_hub.core.exceptions import DonationNotFoundError, ValidationError
from ministry_hub.core.logging_config import logger
from ministry_hub.core.security import generate_reference
from ministry_hub.models import Member, Donation, DonationType, DonationFrequency, DonationStatus
from ministry_hub.modules.auth.dependencies import get_current_member, get_optional_member
from ministry_hub.schemas.giving import DonationCreate, DonationResponse, GivingWebhook
from ministry_hub.services.giving_service import dollars_to_cents, verify_webhook, summarize_donations

router = APIRouter()

DONATION_TYPES = [t.value for t in DonationType]
FREQUENCIES = [f.value for f in DonationFrequency]


@router.post("/donations", response_model=DonationResponse, status_code=status.HTTP_201_CREATED)
async def create_donation(
    body: DonationCreate,
    current_member: Optional[Member] = Depends(get_optional_member),
    db: AsyncSession = Depends(get_db)
):
    """Record a pending donation intent"""
    amount_cents = dollars_to_cents(body.amount)
    if body.donation_type not in DONATION_TYPES:
        raise ValidationError(f"donation_type must be one of: {', '.join(DONATION_TYPES)}", field="donation_type")
    if body.frequency not in FREQUENCIES:
        raise ValidationError(f"frequency must be one of: {', '.join(FREQUENCIES)}", field="frequency")

    donor_email = body.donor_email or (current_member.email if current_member else None)
    if not current_member and not donor_email:
        raise ValidationError("donor_email is required for guest donations", field="donor_email")

    donation = Donation(
        member_id=current_member.id if current_member else None,
        donor_email=donor_email,
        donor_name=body.donor_name or (current_member.full_name if current_member else None),
        amount_cents=amount_cents,
        currency=settings.GIVING_CURRENCY,
        donation_type=body.donation_type,
        frequency=body.frequency,
        status=DonationStatus.PENDING.value,
        reference=generate_reference("gift"),
    )
    db.add(donation)
    await db.commit()
    await db.refresh(donation)

    logger.info(
        f"Donation intent {donation.reference}: {amount_cents} cents ({donation.donation_type}, {donation.frequency})",
        extra={"event_type": "donation_created", "reference": donation.reference}
    )
    return donation


@router.post("/webhook")
async def giving_webhook(
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """Provider callback, signed with X-Giving-Signature (hex HMAC-SHA256 of the body)"""
    payload = await request.body()
    verify_webhook(payload, request.headers.get("X-Giving-Signature"))

    try:
        event = GivingWebhook.model_validate_json(payload)
    except PydanticValidationError:
        raise ValidationError("Malformed webhook payload")

    result = await db.execute(select(Donation).where(Donation.reference == event.reference))
    donation = result.scalar_one_or_none()
    if not donation:
        raise DonationNotFoundError(event.reference)

    if donation.status == event.status:
        return {"success": True, "status": donation.status, "changed": False}

    donation.status = event.status
    if event.provider_payment_id:
        donation.provider_payment_id = event.provider_payment_id
    if event.status == DonationStatus.COMPLETED.value and not donation.completed_at:
        donation.completed_at = datetime.utcnow()
    await db.commit()

    logger.info(
        f"Donation {donation.reference} -> {donation.status}",
        extra={"event_type": "donation_status", "reference": donation.reference, "status": donation.status}
    )
    return {"success": True, "status": donation.status, "changed": True}


@router.get("/history")
async def giving_history(
    current_member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    donations = (await db.execute(
        select(Donation)
        .where(Donation.member_id == current_member.id)
        .order_by(Donation.created_at.desc())
    )).scalars().all()

    summary = summarize_donations(donations)
    summary.pop("month_to_date", None)
    return {
        "donations": [DonationResponse.model_validate(d) for d in donations],
        "summary": summary,
    }
