from sqlalchemy import Column, String, Boolean, DateTime, Integer, Text, ForeignKey, UniqueConstraint
from datetime import datetime
import enum

from ministry_hub.core.database import Base
from ministry_hub.core.types import GUID, JSONType, generate_uuid


class LiveServiceStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    LIVE = "live"
    ENDED = "ended"


class LiveService(Base):
    __tablename__ = "live_services"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    stream_url = Column(Text, nullable=True)
    status = Column(String(20), default=LiveServiceStatus.SCHEDULED.value, nullable=False, index=True)

    scheduled_start = Column(DateTime, nullable=False, index=True)
    actual_start = Column(DateTime, nullable=True)
    actual_end = Column(DateTime, nullable=True)

    poll_enabled = Column(Boolean, default=False, nullable=False)
    attendee_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class ServiceAttendance(Base):
    __tablename__ = "service_attendance"
    __table_args__ = (
        UniqueConstraint("service_id", "member_id", name="uq_attendance_service_member"),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    service_id = Column(GUID, ForeignKey("live_services.id", ondelete="CASCADE"), nullable=False, index=True)
    member_id = Column(GUID, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    left_at = Column(DateTime, nullable=True)
    device_type = Column(String(20), default="web")


class ServicePoll(Base):
    """Question put to the congregation during a live service"""
    __tablename__ = "service_polls"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    service_id = Column(GUID, ForeignKey("live_services.id", ondelete="CASCADE"), nullable=False, index=True)
    question = Column(Text, nullable=False)
    options = Column(JSONType, default=list)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    closed_at = Column(DateTime, nullable=True)
