from pydantic import BaseModel, Field
from typing import Any, Optional
from datetime import datetime


class DonationCreate(BaseModel):
    # Validated by the giving service so bad input answers 400
    amount: Any = None
    donation_type: str = "general"
    frequency: str = "once"
    donor_email: Optional[str] = Field(None, max_length=255)
    donor_name: Optional[str] = Field(None, max_length=255)


class DonationResponse(BaseModel):
    id: str
    reference: str
    amount: float
    amount_cents: int
    currency: str
    donation_type: str
    type_label: str
    frequency: str
    status: str
    donor_email: Optional[str] = None
    donor_name: Optional[str] = None
    created_at: datetime
    completed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class GivingWebhook(BaseModel):
    reference: str
    status: str = Field(..., pattern="^(completed|failed|refunded)$")
    provider_payment_id: Optional[str] = None
