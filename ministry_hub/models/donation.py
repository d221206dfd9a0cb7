from sqlalchemy import Column, String, DateTime, Integer, ForeignKey
from datetime import datetime
import enum

from ministry_hub.core.database import Base
from ministry_hub.core.types import GUID, generate_uuid


class DonationType(str, enum.Enum):
    GENERAL = "general"
    MISSIONS = "missions"
    LEADERSHIP = "leadership"


class DonationFrequency(str, enum.Enum):
    ONCE = "once"
    MONTHLY = "monthly"


class DonationStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


DONATION_TYPE_LABELS = {
    DonationType.GENERAL.value: "General Fund",
    DonationType.MISSIONS.value: "Missions",
    DonationType.LEADERSHIP.value: "Leadership Development",
}


class Donation(Base):
    """Gift intent, completed through a signed provider webhook"""
    __tablename__ = "donations"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    # Kept (anonymised) when the member deletes their account
    member_id = Column(GUID, ForeignKey("members.id", ondelete="SET NULL"), nullable=True, index=True)
    donor_email = Column(String(255), nullable=True)
    donor_name = Column(String(255), nullable=True)

    amount_cents = Column(Integer, nullable=False)
    currency = Column(String(3), default="usd", nullable=False)
    donation_type = Column(String(20), default=DonationType.GENERAL.value, nullable=False)
    frequency = Column(String(20), default=DonationFrequency.ONCE.value, nullable=False)
    status = Column(String(20), default=DonationStatus.PENDING.value, nullable=False, index=True)

    reference = Column(String(64), unique=True, index=True, nullable=False)
    provider_payment_id = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    completed_at = Column(DateTime, nullable=True)

    @property
    def amount(self) -> float:
        return (self.amount_cents or 0) / 100

    @property
    def type_label(self) -> str:
        return DONATION_TYPE_LABELS.get(self.donation_type, self.donation_type)

    def __repr__(self):
        return f"<Donation {self.reference} {self.amount_cents} {self.status}>"
