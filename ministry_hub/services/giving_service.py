"""Donation amounts, webhook verification and giving summaries."""

from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Optional

from ministry_hub.core.config import settings
from ministry_hub.core.exceptions import ValidationError, InvalidSignatureError
from ministry_hub.core.security import verify_signature
from ministry_hub.models.donation import DonationStatus, DonationType


def dollars_to_cents(amount: Any) -> int:
    """Validate a dollar amount and convert it to integer cents"""
    if isinstance(amount, bool):
        raise ValidationError("Amount must be a number", field="amount")
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise ValidationError("Amount must be a number", field="amount")
    if not value.is_finite():
        raise ValidationError("Amount must be a number", field="amount")
    if value < Decimal(str(settings.MIN_DONATION_AMOUNT)):
        raise ValidationError(
            f"Minimum donation is ${settings.MIN_DONATION_AMOUNT:.2f}", field="amount"
        )
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def verify_webhook(payload: bytes, signature: Optional[str]) -> None:
    if not verify_signature(payload, signature, settings.GIVING_WEBHOOK_SECRET):
        raise InvalidSignatureError()


def summarize_donations(donations: Iterable, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Totals over completed donations only"""
    now = now or datetime.utcnow()
    year_start = datetime(now.year, 1, 1)
    month_start = datetime(now.year, now.month, 1)

    lifetime = year_to_date = month_to_date = 0
    count = 0
    by_type = {t.value: 0 for t in DonationType}

    for donation in donations:
        if donation.status != DonationStatus.COMPLETED.value:
            continue
        cents = donation.amount_cents or 0
        when = donation.completed_at or donation.created_at
        count += 1
        lifetime += cents
        by_type[donation.donation_type] = by_type.get(donation.donation_type, 0) + cents
        if when and when >= year_start:
            year_to_date += cents
        if when and when >= month_start:
            month_to_date += cents

    return {
        "lifetime_total": lifetime / 100,
        "year_to_date": year_to_date / 100,
        "month_to_date": month_to_date / 100,
        "by_type": {k: v / 100 for k, v in by_type.items()},
        "count": count,
    }
