from sqlalchemy import Column, String, Boolean, DateTime, Integer, Text, ForeignKey
from datetime import datetime
import enum

from ministry_hub.core.database import Base
from ministry_hub.core.types import GUID, JSONType, generate_uuid


class FulfillmentStatus(str, enum.Enum):
    UNFOLDING = "unfolding"
    PARTIALLY_FULFILLED = "partially_fulfilled"
    FULFILLED = "fulfilled"
    AWAITING = "awaiting"


class PublicProphecyStatus(str, enum.Enum):
    PUBLISHED = "published"
    SCHEDULED = "scheduled"
    DRAFT = "draft"


class PersonalProphecy(Base):
    """Prophetic word given to one member, tracked by that member"""
    __tablename__ = "personal_prophecies"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    member_id = Column(GUID, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)

    given_by = Column(String(255), nullable=True)
    date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    delivery_method = Column(String(50), default="in-person")
    title = Column(String(255), nullable=False)
    themes = Column(JSONType, default=list)
    transcript = Column(Text, nullable=False)
    audio_url = Column(Text, nullable=True)
    video_url = Column(Text, nullable=True)
    duration = Column(String(20), nullable=True)
    admin_notes = Column(Text, nullable=True)

    # Member-maintained tracking
    member_journal = Column(Text, nullable=True)
    fulfillment_status = Column(String(30), default=FulfillmentStatus.UNFOLDING.value, nullable=False)
    manifested_date = Column(DateTime, nullable=True)
    manifested_testimony = Column(Text, nullable=True)
    member_tags = Column(JSONType, default=list)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class PublicProphecy(Base):
    """Published prophetic word for the whole congregation"""
    __tablename__ = "public_prophecies"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    theme = Column(String(100), nullable=False, index=True)
    date = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    duration = Column(String(20), nullable=True)
    audio_url = Column(Text, nullable=True)
    video_url = Column(Text, nullable=True)
    thumbnail_url = Column(Text, nullable=True)
    transcript = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=True)
    scriptures = Column(JSONType, default=list)
    is_featured = Column(Boolean, default=False, nullable=False)
    tier_required = Column(String(20), default="free", nullable=False)
    status = Column(String(20), default=PublicProphecyStatus.DRAFT.value, nullable=False, index=True)
    view_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class PrayerRequestStatus(str, enum.Enum):
    PENDING = "pending"
    PRAYING = "praying"
    ANSWERED = "answered"


class ProphecyPrayerRequest(Base):
    """Member request for prophetic prayer, answered by staff"""
    __tablename__ = "prophecy_prayer_requests"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    member_id = Column(GUID, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(String(100), nullable=False)
    request_text = Column(Text, nullable=False)
    status = Column(String(20), default=PrayerRequestStatus.PENDING.value, nullable=False, index=True)
    admin_response = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
