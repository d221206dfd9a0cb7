from sqlalchemy import Column, String, DateTime, Integer, Text, ForeignKey
from datetime import datetime
import enum

from ministry_hub.core.database import Base
from ministry_hub.core.types import GUID, JSONType, generate_uuid


class LeadStatus(str, enum.Enum):
    """Lead pipeline"""
    NEW = "new"
    CONTACTED = "contacted"
    NURTURING = "nurturing"
    CONVERTED = "converted"
    INACTIVE = "inactive"


class LeadPriority(str, enum.Enum):
    HOT = "hot"
    WARM = "warm"
    COLD = "cold"


class Lead(Base):
    """Prospective member captured from a form or by staff"""
    __tablename__ = "leads"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True, index=True)
    phone = Column(String(30), nullable=True)
    source = Column(String(50), default="website", nullable=False, index=True)
    interest_level = Column(String(20), nullable=True)  # hot, warm, cold
    interests = Column(JSONType, default=list)
    notes = Column(Text, nullable=True)

    status = Column(String(20), default=LeadStatus.NEW.value, nullable=False, index=True)
    last_contacted_at = Column(DateTime, nullable=True)

    # AI scoring
    ai_score = Column(Integer, nullable=True)
    ai_priority = Column(String(10), nullable=True)
    ai_summary = Column(Text, nullable=True)
    ai_scored_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Lead {self.name} ({self.status})>"


class LeadActivity(Base):
    __tablename__ = "lead_activities"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    lead_id = Column(GUID, ForeignKey("leads.id", ondelete="CASCADE"), nullable=False, index=True)
    activity_type = Column(String(50), nullable=False)  # note, call, email, contacted, status_change
    description = Column(Text, nullable=True)
    created_by = Column(GUID, ForeignKey("members.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
